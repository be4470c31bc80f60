# =============================================================================
# agent/memory_tools.py  —  ADK-facing memory tools
# =============================================================================
#
# core/memory.py takes the session id as an argument.  The LLM should never
# have to know (or guess) that id, so the functions built here take ADK's
# ToolContext instead and resolve the session from it.
#
# ADK reads each function's name, typed parameters and docstring to build
# the tool schema it shows the LLM.  The tool_context parameter is filled
# in by ADK and left out of that schema.
# =============================================================================

from typing import Any, Callable

from google.adk.tools.tool_context import ToolContext

from core.memory import MemoryTools


def session_id_of(context: Any) -> str:
    """Return the id of the session an ADK tool/callback context belongs to."""
    return context.session.id


def build_memory_tools(memory: MemoryTools) -> list[Callable[..., dict]]:
    """Return memorize, memorize_list and forget bound to the given MemoryTools."""

    def memorize(key: str, value: str, tool_context: ToolContext) -> dict:
        """Memorize a single piece of information about the traveler.

        Args:
            key: The label indexing the memory, e.g. "destination".
            value: The information to store.

        Returns:
            A status message confirming what was stored.
        """
        return memory.memorize(session_id_of(tool_context), key, value)

    def memorize_list(key: str, value: str, tool_context: ToolContext) -> dict:
        """Add a value to a list of memories, unless it is already there.

        Args:
            key: The label indexing the list, e.g. "likes".
            value: The item to add.

        Returns:
            A status message confirming what was stored.
        """
        return memory.memorize_list(session_id_of(tool_context), key, value)

    def forget(key: str, value: str, tool_context: ToolContext) -> dict:
        """Remove a value from a list of memories.

        Args:
            key: The label indexing the list, e.g. "likes".
            value: The item to remove.

        Returns:
            A status message confirming the removal.
        """
        return memory.forget(session_id_of(tool_context), key, value)

    return [memorize, memorize_list, forget]
