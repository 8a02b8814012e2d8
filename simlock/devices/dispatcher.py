"""Action dispatcher: the entry point for remote action requests.

Validates each payload against the action's input model, runs the action on
the lock one request at a time, and tracks the request as an ActionRecord
through created -> pending -> completed.
"""

import asyncio
import logging
from typing import Any, Callable, Coroutine

from pydantic import BaseModel, ValidationError

from config import settings
from simlock.devices.errors import InvalidActionInput, UnknownAction
from simlock.devices.lock import LockDevice
from simlock.models.action import ActionRecord
from simlock.models.user import AddUserInput, RemoveUserInput, SetPinCodeInput

logger = logging.getLogger(__name__)

ActionObserver = Callable[[ActionRecord], Coroutine[Any, Any, None]]


class ActionDispatcher:
    """Routes named actions to a LockDevice."""

    def __init__(
        self,
        device: LockDevice,
        href_prefix: str = "",
        history_limit: int | None = None,
    ):
        self.device = device
        self.href_prefix = href_prefix
        if history_limit is None:
            history_limit = settings.action_history_limit
        self._history_limit = history_limit
        self._handlers: dict[str, tuple[type[BaseModel], Callable[[Any], None]]] = {
            "addUser": (AddUserInput, device.add_user),
            "removeUser": (RemoveUserInput, device.remove_user),
            "setPinCode": (SetPinCodeInput, device.set_pin_code),
        }
        self._actions: list[ActionRecord] = []
        self._observers: list[ActionObserver] = []
        self._lock = asyncio.Lock()

    @property
    def action_names(self) -> list[str]:
        return list(self._handlers)

    def add_observer(self, observer: ActionObserver) -> None:
        self._observers.append(observer)

    def validate(self, name: str, payload: Any) -> BaseModel:
        """Parse *payload* into the input model for action *name*."""
        entry = self._handlers.get(name) if isinstance(name, str) else None
        if entry is None:
            raise UnknownAction(str(name))
        model, _ = entry
        try:
            return model.model_validate({} if payload is None else payload)
        except ValidationError as e:
            raise InvalidActionInput(
                name, e.errors(include_url=False, include_context=False)
            ) from e

    async def perform(self, name: str, payload: Any = None) -> ActionRecord:
        """Validate and run one action; resolves once the lock has applied it."""
        action_input = self.validate(name, payload)
        _, handler = self._handlers[name]

        record = ActionRecord(
            name=name,
            input=payload if isinstance(payload, dict) else {},
            href_prefix=self.href_prefix,
        )
        self._remember(record)
        await self._notify(record)

        async with self._lock:
            record.start()
            await self._notify(record)
            handler(action_input)
            record.finish()

        logger.info(f"Action {name} ({record.id}) completed")
        await self._notify(record)
        await self.device.notify_property("users")
        return record

    def list_actions(self, name: str | None = None) -> list[ActionRecord]:
        if name is None:
            return list(self._actions)
        return [a for a in self._actions if a.name == name]

    def get_action(self, name: str, action_id: str) -> ActionRecord | None:
        for record in self._actions:
            if record.name == name and record.id == action_id:
                return record
        return None

    def _remember(self, record: ActionRecord) -> None:
        self._actions.append(record)
        overflow = len(self._actions) - self._history_limit
        if overflow > 0:
            del self._actions[:overflow]

    async def _notify(self, record: ActionRecord) -> None:
        for observer in list(self._observers):
            try:
                await observer(record)
            except Exception as e:
                logger.error(f"Action observer error for {record.name}: {e}", exc_info=True)
