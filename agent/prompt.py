# =============================================================================
# agent/prompt.py  —  The concierge's system prompt
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Holds the instruction text that tells the LLM how to behave, and builds
#   the per-session version of it: the base instruction, today's date, and
#   a JSON snapshot of what the session has memorized so far.
#
# OVERRIDING THE PROMPT:
#   Point the TRAVEL_CONCIERGE_PROMPT environment variable at a text file to
#   replace the built-in prompt without touching code.  If the file can't be read, the built-in
#   prompt is used and a warning is logged.
# =============================================================================

import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

PROMPT_ENV = "TRAVEL_CONCIERGE_PROMPT"

DESCRIPTION = "Agent to answer questions about the time and weather in a city."

FALLBACK_INSTRUCTION = (
    "You are a helpful agent who can answer user questions about the time"
    " and weather in a city."
)

TRAVEL_CONCIERGE_PROMPT = """You are a friendly travel concierge. You help the traveler
with quick questions about the cities on their trip and you remember what
they tell you about themselves.

TOOLS
━━━━━
  • get_current_time(city): the current local time in a city.
  • get_weather(city): the current weather in a city.
  • memorize(key, value): remember a single fact, e.g. the destination
    ("destination", "Paris") or the seat preference ("seat_preference", "aisle").
  • memorize_list(key, value): add an item to a list, e.g. a new like
    ("likes", "museums") or an allergy ("allergies", "peanuts").
  • forget(key, value): remove an item from a list the traveler no longer wants.

RULES
━━━━━
  • When a tool returns status "error", tell the traveler politely that the
    information is not available. Do not invent times or weather.
  • When the traveler states a preference, a plan, or a change to either,
    store it with the memory tools before answering.
  • Use the memory below to personalize your answers. Mention the trip dates
    when they are known.
  • Keep answers short and conversational.
"""


def load_instruction() -> str:
    """Return the base instruction, honouring TRAVEL_CONCIERGE_PROMPT."""
    override = os.environ.get(PROMPT_ENV, "").strip()
    if not override:
        return TRAVEL_CONCIERGE_PROMPT.strip()

    try:
        instruction = Path(override).read_text(encoding="utf-8").strip()
    except OSError:
        logger.warning(
            "Failed to load instruction prompt from %s. Using fallback instruction.",
            override, exc_info=True,
        )
        return FALLBACK_INSTRUCTION
    if not instruction:
        logger.warning("Instruction prompt at %s is empty. Using fallback instruction.", override)
        return FALLBACK_INSTRUCTION

    logger.debug("Loaded instruction from %s. Length=%d", override, len(instruction))
    return instruction


def build_instruction(base: str, state: Mapping[str, Any]) -> str:
    """Append today's date and the session memory to the base instruction."""
    memory = json.dumps(dict(state), indent=2, sort_keys=True, default=str)
    return (
        f"{base}\n\n"
        f"TODAY'S DATE: {date.today().isoformat()}\n\n"
        f"TRAVELER MEMORY (session state):\n{memory}\n"
    )
