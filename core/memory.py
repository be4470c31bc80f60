# =============================================================================
# core/memory.py  —  Memory tools over session-scoped state
# =============================================================================
#
# Three operations the agent uses to remember things about the traveler:
#
#   memorize       → store a single string value at a key
#   memorize_list  → add a value to a list at a key (no duplicates)
#   forget         → remove a value from a list at a key
#
# Every operation takes the session id explicitly.  The agent/ layer
# resolves it from the ADK tool context, so the LLM never sees it.
#
# Each operation returns {"status": "..."}: a short confirmation the LLM
# can repeat back to the user.
# =============================================================================

import logging

from core.state import SharedStateService, StateRecord

logger = logging.getLogger(__name__)


class MemoryTools:
    """Read/write helpers for session-scoped memory."""

    def __init__(self, state_service: SharedStateService):
        self.state_service = state_service

    def memorize(self, session_id: str, key: str, value: str) -> dict:
        """Store value at key, replacing whatever was there."""
        self.state_service.put(session_id, key, value)
        logger.debug("memorize session=%s key=%s", session_id, key)
        return {"status": f'Stored "{key}": "{value}"'}

    def memorize_list(self, session_id: str, key: str, value: str) -> dict:
        """Append value to the list at key unless it is already there.

        A missing key starts a new list.  A key holding anything other than
        a list is overwritten with a new single-element list: the old value
        is lost.
        """

        def _append(record: StateRecord) -> None:
            existing = record.get(key)
            if isinstance(existing, list):
                items = existing
            else:
                if existing is not None:
                    logger.warning(
                        "Overwriting non-list state for key=%s (was %s) with a new list",
                        key, type(existing).__name__,
                    )
                items = []
                record[key] = items
            if value not in items:
                items.append(value)

        self.state_service.update(session_id, _append)
        logger.debug("memorize_list session=%s key=%s", session_id, key)
        return {"status": f'Stored "{key}": "{value}"'}

    def forget(self, session_id: str, key: str, value: str) -> dict:
        """Remove the first occurrence of value from the list at key.

        Missing keys and non-list values are left alone.  The confirmation
        is returned either way.
        """

        def _remove(record: StateRecord) -> bool:
            existing = record.get(key)
            if isinstance(existing, list) and value in existing:
                existing.remove(value)
                return True
            return False

        removed = self.state_service.update(session_id, _remove)
        logger.debug("forget session=%s key=%s removed=%s", session_id, key, removed)
        return {"status": f'Removed "{key}": "{value}"'}
