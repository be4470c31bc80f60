# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool server.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP and the core/ logic.
#   tools/mcp_server.py:
#     1. Imports pure functions from core/
#     2. Wraps them in FastMCP tool decorators
#     3. Logs each call to stderr
#
#   Only the stateless city tools live here.  The memory tools need the
#   in-process SharedStateService, so they are registered directly on the
#   ADK agent (see agent/memory_tools.py).
# =============================================================================
