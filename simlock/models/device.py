"""Pydantic models for device identity plus the lock's property/action schema.

LOCK_PROPERTIES and LOCK_ACTIONS are the schemas advertised to remote callers
in the thing description.  The action input models in ``simlock.models.user``
enforce the same shape at the dispatcher.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel

from simlock.models.user import MAX_SLOT_ID, MIN_SLOT_ID, User, UserStatus


class DeviceType(str, Enum):
    LOCK = "Lock"


_USER_ID_SCHEMA: dict[str, Any] = {
    "title": "User Id",
    "description": f"User entry to set {MIN_SLOT_ID} - {MAX_SLOT_ID}",
    "type": "integer",
    "minimum": MIN_SLOT_ID,
    "maximum": MAX_SLOT_ID,
}

_PIN_SCHEMA: dict[str, Any] = {
    "title": "PIN Code",
    "description": "Numerical PIN Code to set",
    "type": "string",
}


LOCK_PROPERTIES: dict[str, dict[str, Any]] = {
    "locked": {
        "@type": "BooleanProperty",
        "title": "Locked",
        "type": "boolean",
    },
    "users": {
        "title": "Users",
        "type": "array",
        "readOnly": True,
    },
}

LOCK_ACTIONS: dict[str, dict[str, Any]] = {
    "addUser": {
        "title": "Add User",
        "description": "Add a user to a door lock.",
        "input": {
            "type": "object",
            "required": ["userId", "pin"],
            "properties": {
                "userName": {
                    "title": "User Name",
                    "description": "Name of the User",
                    "type": "string",
                },
                "userId": _USER_ID_SCHEMA,
                "status": {
                    "title": "Status",
                    "description": "Enabled or Disabled",
                    "enum": [s.value for s in UserStatus],
                },
                "pin": _PIN_SCHEMA,
                "startDate": {
                    "title": "Start Date/Time",
                    "description": "Start Date and Time for the schedule",
                    "type": "string",
                },
                "endDate": {
                    "title": "End Date/Time",
                    "description": "End Date and Time for the schedule",
                    "type": "string",
                },
            },
        },
    },
    "removeUser": {
        "title": "Remove User",
        "description": "Removes a user",
        "input": {
            "type": "object",
            "properties": {"userId": _USER_ID_SCHEMA},
        },
    },
    "setPinCode": {
        "title": "Set User PIN Code",
        "description": "Set the PIN code for a specific user",
        "input": {
            "type": "object",
            "required": ["userId", "pin"],
            "properties": {"userId": _USER_ID_SCHEMA, "pin": _PIN_SCHEMA},
        },
    },
}


class DeviceConfig(BaseModel):
    """Lock identity and seed users loaded from YAML."""
    id: str = "urn:dev:SimDoorLock"
    title: str = "Sim Door Lock"
    description: str = "A pin-entry lock."
    type: DeviceType = DeviceType.LOCK
    users: list[User] = []


def build_thing_description(config: DeviceConfig, href_prefix: str = "") -> dict[str, Any]:
    """Build the thing description advertised by the host."""
    properties = {}
    for name, schema in LOCK_PROPERTIES.items():
        properties[name] = {
            **schema,
            "links": [{"rel": "property", "href": f"{href_prefix}/properties/{name}"}],
        }

    actions = {}
    for name, schema in LOCK_ACTIONS.items():
        actions[name] = {
            **schema,
            "links": [{"rel": "action", "href": f"{href_prefix}/actions/{name}"}],
        }

    return {
        "id": config.id,
        "title": config.title,
        "@context": "https://webthings.io/schemas",
        "@type": [config.type.value],
        "description": config.description,
        "properties": properties,
        "actions": actions,
        "links": [
            {"rel": "properties", "href": f"{href_prefix}/properties"},
            {"rel": "actions", "href": f"{href_prefix}/actions"},
            {"rel": "alternate", "href": "/ws"},
        ],
    }
