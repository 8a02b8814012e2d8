"""Exceptions raised at the lock's boundaries.

A missing user is never an error; these only cover malformed requests.
"""

from typing import Any


class SlotOutOfRange(ValueError):
    """A slot id that is not an integer in the supported range."""

    def __init__(self, slot_id: Any, low: int, high: int):
        self.slot_id = slot_id
        super().__init__(f"Slot id must be an integer in [{low}, {high}], got {slot_id!r}")


class UnknownAction(LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown action: {name}")


class InvalidActionInput(ValueError):
    """Action payload failed validation."""

    def __init__(self, name: str, errors: list[dict[str, Any]]):
        self.name = name
        self.errors = errors
        fields = ", ".join(".".join(str(p) for p in e.get("loc", ())) or "input" for e in errors)
        super().__init__(f"Invalid input for {name}: {fields}")


class PropertyError(ValueError):
    """Unknown property, or a write to a read-only one."""

    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__(f"Property {name}: {reason}")
