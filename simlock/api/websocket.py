"""WebSocket notifier for thing property and action updates.

Clients receive Web Thing messages:
``{"messageType": "propertyStatus", "data": {name: value}}`` and
``{"messageType": "actionStatus", "data": {action_name: description}}``.
"""

import asyncio
import json
import logging
from typing import Any

from fastapi import WebSocket

from simlock.models.action import ActionRecord

logger = logging.getLogger(__name__)

PROPERTY_STATUS = "propertyStatus"
ACTION_STATUS = "actionStatus"


def thing_message(message_type: str, data: dict[str, Any]) -> str:
    return json.dumps({"messageType": message_type, "data": data})


class ThingNotifier:
    """Holds the subscribed sockets of one thing."""

    def __init__(self):
        self._sockets: set[WebSocket] = set()
        self._lock = asyncio.Lock()

    @property
    def connection_count(self) -> int:
        return len(self._sockets)

    async def connect(self, websocket: WebSocket, properties: dict[str, Any]) -> None:
        """Accept *websocket* and send it the current *properties*."""
        await websocket.accept()
        await websocket.send_text(thing_message(PROPERTY_STATUS, properties))
        async with self._lock:
            self._sockets.add(websocket)
        logger.info(f"Thing subscriber joined ({self.connection_count} connected)")

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self._sockets.discard(websocket)
        logger.info(f"Thing subscriber left ({self.connection_count} connected)")

    async def push_property_status(self, name: str, value: Any) -> None:
        await self._push(thing_message(PROPERTY_STATUS, {name: value}))

    async def push_action_status(self, record: ActionRecord) -> None:
        await self._push(thing_message(ACTION_STATUS, record.to_description()))

    async def _push(self, text: str) -> None:
        async with self._lock:
            sockets = list(self._sockets)

        failed = []
        for websocket in sockets:
            try:
                await websocket.send_text(text)
            except Exception as e:
                logger.debug(f"Dropping thing subscriber: {e}")
                failed.append(websocket)

        if failed:
            async with self._lock:
                self._sockets.difference_update(failed)
