# =============================================================================
# agent/concierge_agent.py  —  Google ADK agent configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the ADK agent: model, instruction, callbacks and tools.
#
#   ┌────────────────────────────────────────────────────────────────┐
#   │                      Google ADK Agent                          │
#   │                                                                │
#   │  instruction provider ── prompt + session memory               │
#   │  before_agent_callback ─ bootstrap session memory              │
#   │  model ───────────────── LiteLlm (TRAVEL_CONCIERGE_MODEL)      │
#   │  tools:                                                        │
#   │    memorize / memorize_list / forget   (in-process)            │
#   │    get_current_time / get_weather      (MCP over stdio)        │
#   └────────────────────────────────────────────────────────────────┘
#
# MCP CONNECTION:
#   The city tools live in tools/mcp_server.py.  ADK starts it as a
#   subprocess with the current interpreter and discovers its tools.
#   Set TRAVEL_CONCIERGE_USE_MCP=false to call core/city_info.py directly
#   instead (no subprocess).
#
# MODEL:
#   Any LiteLLM model string works, e.g.:
#     - "openrouter/google/gemini-2.5-flash"  (default)
#     - "gemini/gemini-2.5-flash"
#     - "openai/gpt-4o-mini"
#   LiteLLM reads the matching provider key (OPENROUTER_API_KEY, ...) from
#   the environment.
# =============================================================================

import logging
import os
import sys

from google.adk.agents import Agent
from google.adk.models.base_llm import BaseLlm
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from google.adk.tools.mcp_tool.mcp_session_manager import StdioConnectionParams
from mcp import StdioServerParameters

from agent.callbacks import make_bootstrap_callback, make_instruction_provider
from agent.memory_tools import build_memory_tools
from agent.prompt import DESCRIPTION, load_instruction
from core import city_info
from core.bootstrap import MemoryBootstrap
from core.memory import MemoryTools
from core.state import SharedStateService

logger = logging.getLogger(__name__)

# Kept stable so the ADK Dev UI finds the same app between runs.
AGENT_NAME = "multi_tool_agent"
DEFAULT_MODEL = "openrouter/google/gemini-2.5-flash"

MODEL_ENV = "TRAVEL_CONCIERGE_MODEL"
USE_MCP_ENV = "TRAVEL_CONCIERGE_USE_MCP"


def use_mcp_from_env() -> bool:
    return os.environ.get(USE_MCP_ENV, "true").strip().lower() not in ("0", "false", "no", "off")


def _city_toolset() -> MCPToolset:
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return MCPToolset(
        connection_params=StdioConnectionParams(
            server_params=StdioServerParameters(
                command=sys.executable,
                args=["-m", "tools.mcp_server"],
                cwd=project_root,
            ),
        ),
    )


def create_agent(
    state_service: SharedStateService,
    model: str | BaseLlm | None = None,
    use_mcp: bool | None = None,
    bootstrap: MemoryBootstrap | None = None,
) -> Agent:
    """Create the travel concierge agent.

    Args:
        state_service: The store backing the memory tools and the prompt.
        model: LiteLLM model string, or a ready BaseLlm.  Defaults to
            TRAVEL_CONCIERGE_MODEL, then DEFAULT_MODEL.
        use_mcp: Serve the city tools through the MCP server.  Defaults to
            TRAVEL_CONCIERGE_USE_MCP (true).
        bootstrap: The bootstrap run before each agent turn.  A new one over
            state_service is made if not given.

    Returns:
        A configured Google ADK Agent.
    """
    model = model or os.environ.get(MODEL_ENV) or DEFAULT_MODEL
    llm = model if isinstance(model, BaseLlm) else LiteLlm(model=model)
    if use_mcp is None:
        use_mcp = use_mcp_from_env()
    bootstrap = bootstrap or MemoryBootstrap(state_service)

    if use_mcp:
        city_tools = [_city_toolset()]
    else:
        city_tools = [city_info.get_current_time, city_info.get_weather]

    logger.info("Initializing agent %s with model=%s, mcp=%s", AGENT_NAME, llm.model, use_mcp)
    agent = Agent(
        name=AGENT_NAME,
        model=llm,
        description=DESCRIPTION,
        instruction=make_instruction_provider(state_service, load_instruction()),
        before_agent_callback=make_bootstrap_callback(bootstrap),
        tools=[*city_tools, *build_memory_tools(MemoryTools(state_service))],
    )
    logger.info(
        "Agent initialized. Tools registered: get_current_time, get_weather, "
        "memorize, memorize_list, forget"
    )
    return agent
