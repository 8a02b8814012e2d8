"""User registry: the lock's PIN-code slots.

Entries keep insertion order.  The slot id is the key, so an upsert for a
known slot replaces that entry where it stands rather than moving it to the
end.  Lookups are linear scans; there are at most ten slots.
"""

import logging
import threading

from simlock.devices.errors import SlotOutOfRange
from simlock.models.user import MAX_SLOT_ID, MIN_SLOT_ID, User

logger = logging.getLogger(__name__)


def check_slot_id(slot_id: int) -> int:
    """Return *slot_id* if it is a valid slot, else raise SlotOutOfRange."""
    # bool is an int subclass but never a slot
    if isinstance(slot_id, bool) or not isinstance(slot_id, int):
        raise SlotOutOfRange(slot_id, MIN_SLOT_ID, MAX_SLOT_ID)
    if not MIN_SLOT_ID <= slot_id <= MAX_SLOT_ID:
        raise SlotOutOfRange(slot_id, MIN_SLOT_ID, MAX_SLOT_ID)
    return slot_id


class UserRegistry:
    """Ordered set of lock users keyed by slot id."""

    def __init__(self):
        self._users: list[User] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, slot_id: object) -> bool:
        if isinstance(slot_id, bool) or not isinstance(slot_id, int):
            return False
        with self._lock:
            return self._index_of(slot_id) is not None

    def _index_of(self, slot_id: int) -> int | None:
        for i, user in enumerate(self._users):
            if user.slot_id == slot_id:
                return i
        return None

    def upsert(self, user: User) -> None:
        """Insert *user*, or replace the entry already holding its slot."""
        check_slot_id(user.slot_id)
        with self._lock:
            index = self._index_of(user.slot_id)
            if index is None:
                self._users.append(user)
                logger.debug(f"Added user in slot {user.slot_id}")
            else:
                self._users[index] = user
                logger.debug(f"Replaced user in slot {user.slot_id}")

    def remove(self, slot_id: int) -> None:
        check_slot_id(slot_id)
        with self._lock:
            index = self._index_of(slot_id)
            if index is not None:
                del self._users[index]
                logger.debug(f"Removed user in slot {slot_id}")

    def set_pin(self, slot_id: int, pin: str) -> None:
        """Change the PIN of the user in *slot_id*; nothing happens if the slot is empty."""
        check_slot_id(slot_id)
        with self._lock:
            index = self._index_of(slot_id)
            if index is not None:
                self._users[index] = self._users[index].model_copy(update={"pin": pin})
                logger.debug(f"Changed PIN for slot {slot_id}")

    def find(self, slot_id: int) -> User | None:
        check_slot_id(slot_id)
        with self._lock:
            index = self._index_of(slot_id)
            return None if index is None else self._users[index]

    def snapshot(self) -> tuple[User, ...]:
        with self._lock:
            return tuple(self._users)
