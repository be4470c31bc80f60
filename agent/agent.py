# =============================================================================
# agent/agent.py  —  Entry point for the ADK Dev UI
# =============================================================================
# `adk web` (run from the project root) imports agent.agent and looks for a
# module-level root_agent.  It gets its own state store; sessions created in
# the Dev UI are bootstrapped by the agent's before_agent_callback.
# =============================================================================

from agent.concierge_agent import create_agent
from core.state import SharedStateService

root_agent = create_agent(SharedStateService())
