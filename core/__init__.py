# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the logic behind the travel concierge tools:
# the session state store, the memory tools that write to it, the profile
# bootstrap that seeds it, and the two demo city tools.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports Google ADK, FastMCP, or any orchestration
#   framework.  Every module here can be imported and tested in a bare
#   Python REPL.  The agent/ and tools/ layers wrap these functions for the
#   LLM runtime.
# =============================================================================
