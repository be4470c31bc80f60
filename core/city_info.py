# =============================================================================
# core/city_info.py  —  Demo city tools: current time and weather
# =============================================================================
#
# get_current_time(city)
#   Best-effort match of a city name to an IANA time zone by its last path
#   component ("New York" → "new_york" → America/New_York).  This is NOT a
#   geocoder: cities without their own zone id ("Austin", "Kyoto") are not
#   found.
#
#   Zone ids come from zoneinfo.available_timezones(), which reads the
#   system tz database or the tzdata package.  That set differs between
#   machines, so a city that resolves on one may not resolve on another.
#   When several zones share a leaf name the first one in sorted order wins.
#
# get_weather(city)
#   Canned data.  Only New York is "supported".
#
# Both return {"status": "success" | "error", "report": "..."}.  Errors are
# values the LLM can relay, not exceptions.
# =============================================================================

import logging
import re
import unicodedata
from datetime import datetime
from functools import lru_cache
from zoneinfo import ZoneInfo, available_timezones

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_city(city: str) -> str:
    """Fold a city name into zone-id form: "São Paulo" → "sao_paulo"."""
    decomposed = unicodedata.normalize("NFD", city).strip().lower()
    kept = "".join(
        ch for ch in decomposed
        if not unicodedata.category(ch).startswith(("M", "P"))
    )
    return _WHITESPACE.sub("_", kept)


@lru_cache(maxsize=1)
def _zone_ids() -> tuple[str, ...]:
    return tuple(sorted(available_timezones()))


def find_timezone(city: str) -> str | None:
    """Return the first zone id whose last component matches city, if any."""
    normalized = normalize_city(city)
    if not normalized:
        return None
    suffix = "/" + normalized
    for zone_id in _zone_ids():
        if zone_id.lower().endswith(suffix):
            return zone_id
    return None


def get_current_time(city: str) -> dict:
    """Return the current 24-hour time (HH:MM) in the given city."""
    logger.debug("get_current_time called with city=%r", city)
    zone_id = find_timezone(city)
    if zone_id is None:
        logger.warning(
            "No timezone information found for city=%r (normalized=%r)",
            city, normalize_city(city),
        )
        return {
            "status": "error",
            "report": f"Sorry, I don't have timezone information for {city}.",
        }

    now = datetime.now(ZoneInfo(zone_id)).strftime("%H:%M")
    logger.info("Matched zone %s for city=%r, time=%s", zone_id, city, now)
    return {
        "status": "success",
        "report": f"The current time in {city} is {now}.",
    }


def get_weather(city: str) -> dict:
    """Return a weather report for the given city (New York only)."""
    logger.debug("get_weather called with city=%r", city)
    if city.lower() == "new york":
        return {
            "status": "success",
            "report": (
                "The weather in New York is sunny with a temperature of 25 degrees"
                " Celsius (77 degrees Fahrenheit)."
            ),
        }

    logger.warning("Weather information not available for city=%r", city)
    return {
        "status": "error",
        "report": f"Weather information for {city} is not available.",
    }
