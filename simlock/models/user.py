"""Pydantic models for lock users and the action payloads that manage them."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MIN_SLOT_ID = 0
MAX_SLOT_ID = 9


class UserStatus(str, Enum):
    ENABLED = "Enabled"
    DISABLED = "Disabled"


class User(BaseModel):
    """One PIN-code slot in the lock.  Frozen; the registry swaps whole records."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    slot_id: int = Field(alias="userId", ge=MIN_SLOT_ID, le=MAX_SLOT_ID)
    name: str | None = Field(default=None, alias="userName")
    pin: str
    status: UserStatus | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")

    def to_property(self) -> dict[str, Any]:
        """Serialize for the ``users`` property; unset fields are left out."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class _ActionInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class AddUserInput(_ActionInput):
    user_id: int = Field(alias="userId", ge=MIN_SLOT_ID, le=MAX_SLOT_ID)
    pin: str
    user_name: str | None = Field(default=None, alias="userName")
    status: UserStatus | None = None
    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")

    def to_user(self) -> User:
        return User(
            slot_id=self.user_id,
            name=self.user_name,
            pin=self.pin,
            status=self.status,
            start_date=self.start_date,
            end_date=self.end_date,
        )


class RemoveUserInput(_ActionInput):
    user_id: int | None = Field(default=None, alias="userId", ge=MIN_SLOT_ID, le=MAX_SLOT_ID)


class SetPinCodeInput(_ActionInput):
    user_id: int = Field(alias="userId", ge=MIN_SLOT_ID, le=MAX_SLOT_ID)
    pin: str
