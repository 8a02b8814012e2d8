import pytest

from simlock.devices.dispatcher import ActionDispatcher
from simlock.devices.lock import LockDevice
from simlock.devices.registry import UserRegistry


@pytest.fixture
def registry() -> UserRegistry:
    return UserRegistry()


@pytest.fixture
def device() -> LockDevice:
    return LockDevice()


@pytest.fixture
def dispatcher(device: LockDevice) -> ActionDispatcher:
    return ActionDispatcher(device)
