# =============================================================================
# core/constants.py  —  Keys into session-scoped state
# =============================================================================
# Keys starting with an underscore are system bookkeeping written by the
# bootstrap.  The rest come from (or mirror) the profile document.
# =============================================================================

SYSTEM_TIME = "_time"
ITIN_INITIALIZED = "_itin_initialized"

ITIN_KEY = "itinerary"
PROF_KEY = "user_profile"

ITIN_START_DATE = "itinerary_start_date"
ITIN_END_DATE = "itinerary_end_date"
ITIN_DATETIME = "itinerary_datetime"

START_DATE = "start_date"
END_DATE = "end_date"
