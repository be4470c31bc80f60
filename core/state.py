# =============================================================================
# core/state.py  —  Session-scoped shared state
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Keeps one key-value record per session id.  Memory tools, the profile
#   bootstrap and the prompt builder all read and write through the same
#   SharedStateService instance, which is constructed once at startup and
#   passed to every component that needs it.
#
# CONCURRENCY:
#   ADK may run several tool calls while a single turn is in flight, so the
#   store is thread-safe on its own:
#     - a short registry lock guards creating a session's record
#     - every session has its own RLock, held by update() for
#       read-modify-write sequences
#   Different sessions never wait on each other.  Within one session the
#   last write wins per key.
#
# WHAT IT DOES NOT DO:
#   No eviction, expiry, persistence or validation.  A record lives until
#   clear() is called.  For production, back this with a shared data store
#   (e.g., Redis) and keep the same interface.
# =============================================================================

import threading
from typing import Any, Callable, TypeVar, Union

# The value shapes a state record holds.  Callers inspect the variant with
# isinstance() rather than assuming a type.
StateValue = Union[str, bool, int, float, list[str], dict[str, Any]]
StateRecord = dict[str, StateValue]

T = TypeVar("T")


class SharedStateService:
    """An in-memory, session-scoped key-value store."""

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._records: dict[str, StateRecord] = {}
        self._locks: dict[str, threading.RLock] = {}

    def _entry(self, session_id: str) -> tuple[StateRecord, threading.RLock]:
        with self._registry_lock:
            record = self._records.get(session_id)
            if record is None:
                record = {}
                self._records[session_id] = record
                self._locks[session_id] = threading.RLock()
            return record, self._locks[session_id]

    def get_or_init(self, session_id: str) -> StateRecord:
        """Return the session's record, creating an empty one if needed.

        Repeated calls return the same dict object until clear() is called.
        """
        record, _ = self._entry(session_id)
        return record

    def put(self, session_id: str, key: str, value: StateValue) -> None:
        record, lock = self._entry(session_id)
        with lock:
            record[key] = value

    def get(self, session_id: str, key: str, default: Any = None) -> Any:
        """Return the value at key, or default.

        No type checking happens here; asking for the wrong shape is the
        caller's mistake.
        """
        record, lock = self._entry(session_id)
        with lock:
            return record.get(key, default)

    def update(self, session_id: str, fn: Callable[[StateRecord], T]) -> T:
        """Run fn(record) while holding the session's lock and return its result."""
        record, lock = self._entry(session_id)
        with lock:
            return fn(record)

    def snapshot(self, session_id: str) -> StateRecord:
        """Shallow copy of the session's record, taken under its lock."""
        return self.update(session_id, dict)

    def clear(self, session_id: str) -> None:
        """Drop the session's record.

        A put() or update() already in flight for the session keeps writing
        to the dropped record, so that write is lost.
        """
        with self._registry_lock:
            self._records.pop(session_id, None)
            self._locks.pop(session_id, None)

    def session_ids(self) -> list[str]:
        with self._registry_lock:
            return list(self._records)
