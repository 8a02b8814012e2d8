import pytest

from simlock.devices.errors import PropertyError
from simlock.devices.lock import LockDevice
from simlock.models.device import DeviceConfig
from simlock.models.user import AddUserInput, RemoveUserInput, SetPinCodeInput, User


def test_defaults(device: LockDevice) -> None:
    assert device.device_id == "urn:dev:SimDoorLock"
    assert device.locked is True
    assert device.get_properties() == {"locked": True, "users": []}


def test_user_scenario(device: LockDevice) -> None:
    device.add_user(AddUserInput(userId=3, pin="1234"))
    assert device.get_property("users") == [{"userId": 3, "pin": "1234"}]

    device.add_user(AddUserInput(userId=3, pin="9999", userName="Bob"))
    assert device.get_property("users") == [{"userId": 3, "pin": "9999", "userName": "Bob"}]

    device.set_pin_code(SetPinCodeInput(userId=3, pin="0000"))
    assert device.get_property("users") == [{"userId": 3, "pin": "0000", "userName": "Bob"}]

    device.remove_user(RemoveUserInput(userId=3))
    assert device.get_property("users") == []
    assert device.locked is True


def test_remove_on_empty_registry(device: LockDevice) -> None:
    device.remove_user(RemoveUserInput(userId=7))
    assert device.get_property("users") == []


def test_users_property_is_live(device: LockDevice) -> None:
    device.add_user(AddUserInput(userId=1, pin="1111"))
    first = device.get_property("users")
    device.add_user(AddUserInput(userId=2, pin="2222"))
    assert len(first) == 1
    assert len(device.get_property("users")) == 2


def test_user_serialization_uses_wire_names(device: LockDevice) -> None:
    device.add_user(
        AddUserInput(
            userId=0,
            pin="1234",
            userName="Admin",
            status="Enabled",
            startDate="2024-01-01",
            endDate="2024-02-01",
        )
    )
    assert device.get_property("users") == [
        {
            "userId": 0,
            "userName": "Admin",
            "pin": "1234",
            "status": "Enabled",
            "startDate": "2024-01-01",
            "endDate": "2024-02-01",
        }
    ]


def test_seed_users_from_config() -> None:
    config = DeviceConfig(
        users=[User(slot_id=2, pin="2222"), User(slot_id=2, pin="3333"), User(slot_id=0, pin="0")]
    )
    device = LockDevice(config)
    assert [u["userId"] for u in device.get_property("users")] == [2, 0]
    assert device.registry.find(2).pin == "3333"


@pytest.mark.asyncio
async def test_set_locked_notifies_observers(device: LockDevice) -> None:
    seen = []

    async def observer(name, value):
        seen.append((name, value))

    device.add_observer(observer)
    await device.set_property("locked", False)

    assert device.locked is False
    assert seen == [("locked", False)]


@pytest.mark.asyncio
async def test_failing_observer_does_not_block_others(device: LockDevice) -> None:
    seen = []

    async def broken(name, value):
        raise RuntimeError("boom")

    async def observer(name, value):
        seen.append(name)

    device.add_observer(broken)
    device.add_observer(observer)
    await device.notify_property("users")
    assert seen == ["users"]


@pytest.mark.asyncio
async def test_removed_observer_is_not_called(device: LockDevice) -> None:
    seen = []

    async def observer(name, value):
        seen.append(name)

    device.add_observer(observer)
    device.remove_observer(observer)
    await device.notify_property("locked")
    assert seen == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name, value",
    [("users", []), ("battery", 50), ("locked", "no"), ("locked", 0)],
)
async def test_rejected_property_writes(device: LockDevice, name, value) -> None:
    with pytest.raises(PropertyError):
        await device.set_property(name, value)
    assert device.locked is True


def test_get_unknown_property(device: LockDevice) -> None:
    with pytest.raises(PropertyError):
        device.get_property("battery")


def test_thing_description(device: LockDevice) -> None:
    td = device.get_thing_description("/things/lock")
    assert td["id"] == "urn:dev:SimDoorLock"
    assert td["title"] == "Sim Door Lock"
    assert td["@type"] == ["Lock"]
    assert td["description"] == "A pin-entry lock."
    assert set(td["properties"]) == {"locked", "users"}
    assert set(td["actions"]) == {"addUser", "removeUser", "setPinCode"}
    assert td["actions"]["addUser"]["input"]["required"] == ["userId", "pin"]
    assert td["actions"]["addUser"]["input"]["properties"]["status"]["enum"] == ["Enabled", "Disabled"]
    assert td["properties"]["locked"]["links"][0]["href"] == "/things/lock/properties/locked"


def test_remove_user_schema_requires_nothing(device: LockDevice) -> None:
    schema = device.get_thing_description()["actions"]["removeUser"]["input"]
    assert "required" not in schema
    assert set(schema["properties"]) == {"userId"}


def test_remove_user_without_slot_is_noop(device: LockDevice) -> None:
    device.add_user(AddUserInput(userId=2, pin="2222"))
    device.remove_user(RemoveUserInput())
    assert device.get_property("users") == [{"userId": 2, "pin": "2222"}]
