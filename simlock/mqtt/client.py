"""Async MQTT client used by the device host."""

import asyncio
import json
import logging
from typing import Any, Callable, Coroutine

import aiomqtt

from config import settings

logger = logging.getLogger(__name__)

MessageHandler = Callable[[str, dict[str, Any]], Coroutine[Any, Any, None]]


class MQTTClient:
    """Thin aiomqtt wrapper: JSON publish plus per-topic handlers."""

    def __init__(self, hostname: str | None = None, port: int | None = None):
        self._hostname = hostname or settings.mqtt_host
        self._port = port or settings.mqtt_port
        self._client: aiomqtt.Client | None = None
        self._handlers: dict[str, MessageHandler] = {}
        self._connected = False
        self._listen_task: asyncio.Task | None = None

    @property
    def is_connected(self) -> bool:
        return self._connected

    async def connect(self) -> None:
        self._client = aiomqtt.Client(hostname=self._hostname, port=self._port)
        try:
            await self._client.__aenter__()
        except (aiomqtt.MqttError, OSError) as e:
            logger.error(f"Failed to connect to MQTT broker: {e}")
            self._client = None
            raise
        self._connected = True
        logger.info(f"Connected to MQTT broker at {self._hostname}:{self._port}")

        for topic in self._handlers:
            await self._client.subscribe(topic)
        self._listen_task = asyncio.create_task(self._listen())

    async def disconnect(self) -> None:
        if self._listen_task:
            self._listen_task.cancel()
            try:
                await self._listen_task
            except asyncio.CancelledError:
                pass
            self._listen_task = None

        if self._client and self._connected:
            await self._client.__aexit__(None, None, None)
            self._connected = False
            logger.info("Disconnected from MQTT broker")

    async def publish(self, topic: str, payload: Any, retain: bool = False) -> None:
        """Publish *payload* as JSON; dropped with a warning when offline."""
        if not self._client or not self._connected:
            logger.warning(f"Not connected, cannot publish to {topic}")
            return
        message = json.dumps(payload)
        await self._client.publish(topic, message.encode(), retain=retain)
        logger.debug(f"Published to {topic}: {message[:200]}")

    async def subscribe(self, topic: str, handler: MessageHandler) -> None:
        self._handlers[topic] = handler
        if self._client and self._connected:
            await self._client.subscribe(topic)
            logger.info(f"Subscribed to {topic}")

    async def unsubscribe(self, topic: str) -> None:
        if self._handlers.pop(topic, None) and self._client and self._connected:
            await self._client.unsubscribe(topic)
            logger.info(f"Unsubscribed from {topic}")

    async def _listen(self) -> None:
        try:
            async for message in self._client.messages:
                topic = str(message.topic)
                handler = self._handlers.get(topic)
                if handler is None:
                    continue
                try:
                    payload = json.loads(message.payload.decode())
                except (json.JSONDecodeError, UnicodeDecodeError):
                    logger.warning(f"Invalid message on {topic}")
                    continue
                try:
                    await handler(topic, payload)
                except Exception as e:
                    logger.error(f"Handler error for {topic}: {e}", exc_info=True)
        except asyncio.CancelledError:
            pass
        except aiomqtt.MqttError as e:
            self._connected = False
            logger.error(f"MQTT listener error: {e}")


# Singleton instance
mqtt_client = MQTTClient()
