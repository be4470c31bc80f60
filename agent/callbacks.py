# =============================================================================
# agent/callbacks.py  —  Hooks ADK calls around each agent run
# =============================================================================
#
#   before_agent_callback  → bootstrap the session's memory on first use
#   instruction provider   → render the prompt with the session's memory
#
# Both resolve the session from the context ADK passes in, so one agent
# instance serves any number of sessions.
# =============================================================================

import logging
from typing import Callable

from google.adk.agents.callback_context import CallbackContext
from google.adk.agents.readonly_context import ReadonlyContext

from agent.memory_tools import session_id_of
from agent.prompt import build_instruction
from core.bootstrap import MemoryBootstrap
from core.state import SharedStateService

logger = logging.getLogger(__name__)


def make_bootstrap_callback(bootstrap: MemoryBootstrap) -> Callable[[CallbackContext], None]:
    def bootstrap_session(callback_context: CallbackContext) -> None:
        session_id = session_id_of(callback_context)
        try:
            bootstrap.bootstrap(session_id)
        except Exception:
            logger.warning(
                "Memory bootstrap failed for session %s; continuing with current state.",
                session_id, exc_info=True,
            )
        # Returning None lets the agent run normally.
        return None

    return bootstrap_session


def make_instruction_provider(
    state_service: SharedStateService, base_instruction: str
) -> Callable[[ReadonlyContext], str]:
    def provide_instruction(context: ReadonlyContext) -> str:
        state = state_service.snapshot(session_id_of(context))
        return build_instruction(base_instruction, state)

    return provide_instruction
