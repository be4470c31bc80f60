# =============================================================================
# tools/mcp_server.py  —  FastMCP server for the city tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes get_current_time and get_weather over MCP.  Each tool is a thin
#   wrapper around core/city_info.py.
#
# HOW IT IS USED:
#   agent/concierge_agent.py starts this module as a subprocess and talks to
#   it over stdio.  It can also be run on its own:
#
#     python -m tools.mcp_server
# =============================================================================

import json
import logging
import sys

from fastmcp import FastMCP

from core import city_info

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: STDOUT carries the MCP JSON messages, and anything else
# written there would corrupt the stream.
#
# ANSI colours:
#   CYAN for requests, YELLOW for status, GREEN for responses.
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    logging.info(f"{_GREEN}  ← {tool_name} response: {json.dumps(result, separators=(',', ':'))}{_RESET}")
    return result


mcp = FastMCP("travel-concierge")


# =============================================================================
# TOOL 1: get_current_time
# =============================================================================
@mcp.tool()
def get_current_time(city: str) -> dict:
    """Get the current local time in a city.

    Args:
        city: The name of the city for which to retrieve the current time
              (e.g., "New York", "Paris", "Tokyo").

    Returns:
        A dict with:
          - status: "success" or "error"
          - report: "The current time in <city> is HH:MM." on success, or an
            explanation that no timezone is known for the city.
    """
    _log_request("get_current_time", city=city)
    zone_id = city_info.find_timezone(city)
    _log_status(f"Matched zone: {zone_id}" if zone_id else "No matching zone")
    return _log_response("get_current_time", city_info.get_current_time(city))


# =============================================================================
# TOOL 2: get_weather
# =============================================================================
@mcp.tool()
def get_weather(city: str) -> dict:
    """Get the current weather report for a city.

    Args:
        city: The name of the city for which to retrieve the weather report.

    Returns:
        A dict with:
          - status: "success" or "error"
          - report: The weather report, or an explanation that no weather
            information is available for the city.
    """
    _log_request("get_weather", city=city)
    return _log_response("get_weather", city_info.get_weather(city))


if __name__ == "__main__":
    mcp.run()
