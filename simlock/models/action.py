"""Pydantic models for action requests and their status."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ActionStatus(str, Enum):
    CREATED = "created"
    PENDING = "pending"
    COMPLETED = "completed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActionRecord(BaseModel):
    """A single action request and its progress."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    input: dict[str, Any] = {}
    href_prefix: str = ""
    status: ActionStatus = ActionStatus.CREATED
    time_requested: datetime = Field(default_factory=_utcnow)
    time_completed: datetime | None = None

    @property
    def href(self) -> str:
        return f"{self.href_prefix}/actions/{self.name}/{self.id}"

    def start(self) -> None:
        self.status = ActionStatus.PENDING

    def finish(self) -> None:
        self.status = ActionStatus.COMPLETED
        self.time_completed = _utcnow()

    def to_description(self) -> dict[str, Any]:
        """Wire form: ``{name: {href, input, status, timeRequested, ...}}``."""
        description: dict[str, Any] = {
            "href": self.href,
            "input": self.input,
            "status": self.status.value,
            "timeRequested": self.time_requested.isoformat(),
        }
        if self.time_completed is not None:
            description["timeCompleted"] = self.time_completed.isoformat()
        return {self.name: description}
