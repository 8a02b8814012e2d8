"""PIN-entry door lock simulator."""

import logging
from typing import Any

from pydantic import TypeAdapter

from simlock.devices.base import BaseDevice, DeviceProperty
from simlock.devices.registry import UserRegistry
from simlock.models.device import DeviceConfig
from simlock.models.user import AddUserInput, RemoveUserInput, SetPinCodeInput, User

logger = logging.getLogger(__name__)

_locked_adapter = TypeAdapter(bool)


class LockDevice(BaseDevice):
    """Simulated PIN-entry lock.

    ``locked`` starts out True and only changes through a host property
    write; none of the user actions touch it.  ``users`` is re-read from the
    registry on every query.
    """

    def __init__(self, config: DeviceConfig | None = None):
        super().__init__(config or DeviceConfig())
        self._locked = True
        self.registry = UserRegistry()
        for user in self.config.users:
            self.registry.upsert(user)

        self._add_property(DeviceProperty("locked", lambda: self._locked, self._set_locked))
        self._add_property(DeviceProperty("users", self.get_users))

    @property
    def locked(self) -> bool:
        return self._locked

    def _set_locked(self, value: Any) -> None:
        self._locked = _locked_adapter.validate_python(value, strict=True)

    def get_users(self) -> list[dict[str, Any]]:
        return [user.to_property() for user in self.registry.snapshot()]

    def add_user(self, action_input: AddUserInput) -> None:
        user: User = action_input.to_user()
        self.registry.upsert(user)
        logger.info(f"Lock {self.device_id}: user slot {user.slot_id} saved")

    def remove_user(self, action_input: RemoveUserInput) -> None:
        if action_input.user_id is None:
            logger.info(f"Lock {self.device_id}: remove requested without a slot, nothing to do")
            return
        self.registry.remove(action_input.user_id)
        logger.info(f"Lock {self.device_id}: user slot {action_input.user_id} cleared")

    def set_pin_code(self, action_input: SetPinCodeInput) -> None:
        self.registry.set_pin(action_input.user_id, action_input.pin)
        logger.info(f"Lock {self.device_id}: PIN set for slot {action_input.user_id}")
