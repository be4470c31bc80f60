# =============================================================================
# core/bootstrap.py  —  Seed session state from a profile document
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The first time a session is seen, its state record is filled from a
#   JSON profile document:
#
#     {"state": {"user_profile": {...}, "itinerary": {...}, ...}}
#
#   Everything under "state" is merged into the session record, and the
#   itinerary's start/end dates are copied to top-level keys so the prompt
#   and the LLM can find them without digging.
#
# WHERE THE PROFILE COMES FROM:
#   1. TRAVEL_CONCIERGE_SCENARIO (a filesystem path), if set and the file
#      exists
#   2. the bundled default, core/profiles/itinerary_empty_default.json
#   3. an empty state, if neither can be read
#
#   Every failure along the way is logged and the next source is tried.
#   Bootstrap itself never raises for a bad profile.
#
# IDEMPOTENCY:
#   The _itin_initialized flag guards the merge.  Once it is True for a
#   session, bootstrap() returns immediately.  _time is only written when
#   absent, so the first bootstrap's timestamp sticks.
# =============================================================================

import copy
import json
import logging
import os
from datetime import datetime
from importlib import resources
from pathlib import Path
from typing import Any

from core import constants
from core.state import SharedStateService, StateRecord

logger = logging.getLogger(__name__)

SCENARIO_ENV = "TRAVEL_CONCIERGE_SCENARIO"
DEFAULT_RESOURCE = "profiles/itinerary_empty_default.json"


class ProfileError(ValueError):
    """The profile document is not shaped like {"state": {...}}."""


def parse_profile(text: str) -> dict[str, Any]:
    """Parse a profile document and return its "state" object."""
    root = json.loads(text)
    if not isinstance(root, dict) or "state" not in root:
        raise ProfileError("state object missing")
    state = root["state"]
    if not isinstance(state, dict):
        raise ProfileError(f"state must be an object, got {type(state).__name__}")
    return state


class MemoryBootstrap:
    """One-time seeding of a session's state from a profile document."""

    def __init__(self, state_service: SharedStateService, scenario_path: str | None = None):
        self.state_service = state_service
        # None means "read TRAVEL_CONCIERGE_SCENARIO at load time".
        self.scenario_path = scenario_path
        self._cache: dict[str, dict[str, Any]] = {}

    def bootstrap(self, session_id: str) -> None:
        """Initialize per-session state once.  Safe to call repeatedly."""
        if self.state_service.get(session_id, constants.ITIN_INITIALIZED) is True:
            return

        source = self.load_profile_state()
        merged = self.state_service.update(
            session_id, lambda record: _set_initial_states(source, record)
        )
        if merged:
            logger.info("Bootstrapped session %s with %d profile keys", session_id, len(source))

    # -------------------------------------------------------------------------
    # Profile loading
    # -------------------------------------------------------------------------
    def load_profile_state(self) -> dict[str, Any]:
        """Return a fresh copy of the profile's "state" object.

        Parsed documents are cached per source, so each file is read at most
        once unless the override path changes.
        """
        override = self.scenario_path
        if override is None:
            override = os.environ.get(SCENARIO_ENV)

        if override and override.strip():
            state = self._load_override(override.strip())
            if state is not None:
                return copy.deepcopy(state)

        state = self._load_default()
        return copy.deepcopy(state) if state is not None else {}

    def _load_override(self, override: str) -> dict[str, Any] | None:
        cache_key = f"file:{override}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        path = Path(override)
        if not path.exists():
            logger.warning(
                "%s path does not exist: %s. Falling back to default resource.",
                SCENARIO_ENV, override,
            )
            return None
        try:
            state = parse_profile(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning(
                "Failed to load scenario from env path: %s, falling back to default resource.",
                override, exc_info=True,
            )
            return None

        logger.debug("Loaded scenario from %s", override)
        self._cache[cache_key] = state
        return state

    def _load_default(self) -> dict[str, Any] | None:
        cache_key = f"resource:{DEFAULT_RESOURCE}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        try:
            text = resources.files("core").joinpath(DEFAULT_RESOURCE).read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning("Default profile resource not found: %s. Using empty state.", DEFAULT_RESOURCE)
            return None
        except (OSError, ValueError):
            logger.warning("Failed to read default profile resource. Using empty state.", exc_info=True)
            return None
        try:
            state = parse_profile(text)
        except ValueError:
            logger.warning("Failed to load default profile resource. Using empty state.", exc_info=True)
            return None

        self._cache[cache_key] = state
        return state


def _set_initial_states(source: dict[str, Any], target: StateRecord) -> bool:
    """Merge source into target.  Returns False if another caller got there first."""
    target.setdefault(constants.SYSTEM_TIME, datetime.now().isoformat())

    if target.get(constants.ITIN_INITIALIZED) is True:
        return False
    target[constants.ITIN_INITIALIZED] = True
    target.update(source)

    itinerary = source.get(constants.ITIN_KEY)
    if isinstance(itinerary, dict):
        start = itinerary.get(constants.START_DATE)
        end = itinerary.get(constants.END_DATE)
        if start is not None:
            target[constants.ITIN_START_DATE] = start
            target[constants.ITIN_DATETIME] = start
        if end is not None:
            target[constants.ITIN_END_DATE] = end
    return True
