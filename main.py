# =============================================================================
# main.py  —  Entry Point for the Travel Concierge Agent
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Creates the shared state store and the ADK agent (agent/concierge_agent.py)
#   2. Creates a session and bootstraps its memory from the profile document
#   3. Reads a line from stdin, sends it to the agent
#   4. Prints the agent's text as events stream back
#   5. Repeats until "quit" or end of input
#
# GOOGLE ADK CONCEPTS USED:
#   - Runner: Manages the agent's execution lifecycle
#   - SessionService: Issues session ids and keeps conversation history
#   - Content/Part: ADK's message format
#   - Event stream: text, tool calls and tool results as they happen
# =============================================================================

import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import Callable

from dotenv import load_dotenv

# Load environment variables from .env (API keys, TRAVEL_CONCIERGE_*).
# This must happen BEFORE creating the agent, because LiteLlm reads the
# provider key from the environment when it initializes.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.concierge_agent import AGENT_NAME, create_agent
from core.bootstrap import MemoryBootstrap
from core.state import SharedStateService

logger = logging.getLogger("travel_concierge")

USER_ID = "student"
QUIT_COMMAND = "quit"


@dataclass
class TurnResult:
    """What happened during one user turn (for diagnostics only)."""

    texts: list[str] = field(default_factory=list)
    tool_called: bool = False
    tool_errored: bool = False


def _response_failed(response: dict | None) -> bool:
    if not response:
        return False
    if "error" in response:
        return True
    return str(response.get("status", "")).lower() == "error"


async def run_turn(
    runner: Runner,
    user_id: str,
    session_id: str,
    text: str,
    write: Callable[[str], None] = print,
) -> TurnResult:
    """Send one user message to the agent and print what comes back."""
    result = TurnResult()
    user_message = types.Content(role="user", parts=[types.Part(text=text)])
    logger.debug("Dispatching user input to agent. length=%d", len(text))

    async for event in runner.run_async(
        user_id=user_id,
        session_id=session_id,
        new_message=user_message,
    ):
        if event.content and event.content.parts:
            for part in event.content.parts:
                if part.text and not part.thought:
                    result.texts.append(part.text)
                    write(part.text)
                if part.function_call:
                    result.tool_called = True
                    logger.debug("Tool called: %s", part.function_call.name)
                if part.function_response and _response_failed(part.function_response.response):
                    result.tool_errored = True

        if event.error_code or event.error_message:
            result.tool_errored = True
            logger.warning(
                "Agent event contained an error: code=%s, message=%s",
                event.error_code, event.error_message,
            )

    if result.tool_called and not result.tool_errored:
        logger.debug("A tool was used successfully in this turn.")
    if result.tool_errored:
        logger.warning("An error occurred during tool execution or in the agent's response processing.")
    return result


async def chat_loop(
    runner: Runner,
    user_id: str,
    session_id: str,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """Read lines until "quit" or end of input.  Returns the number of turns run."""
    turns = 0
    while True:
        try:
            user_input = read_line("\nYou > ")
        except (EOFError, KeyboardInterrupt):
            logger.info("End of input. Exiting.")
            break

        if user_input.strip().lower() == QUIT_COMMAND:
            logger.info("User requested to quit.")
            break
        if not user_input.strip():
            logger.debug("Ignoring empty user input.")
            continue

        write("\nAgent > ")
        await run_turn(runner, user_id, session_id, user_input, write=write)
        turns += 1
    return turns


async def run_agent():
    """Set up the agent and session, then run the command loop."""
    state_service = SharedStateService()
    bootstrap = MemoryBootstrap(state_service)
    agent = create_agent(state_service, bootstrap=bootstrap)

    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=AGENT_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(app_name=AGENT_NAME, user_id=USER_ID)
    logger.info("Session created for user=%s, session_id=%s", USER_ID, session.id)

    # The before_agent_callback bootstraps too; doing it here means the
    # first prompt already sees the profile.
    try:
        bootstrap.bootstrap(session.id)
    except Exception:
        logger.warning("Memory bootstrap failed; continuing with empty state.", exc_info=True)

    await chat_loop(runner, USER_ID, session.id)


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    asyncio.run(run_agent())
