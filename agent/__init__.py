# =============================================================================
# agent/__init__.py
# =============================================================================
# This package wires the core/ logic into Google ADK.
#
#   prompt.py           → the instruction text and its per-session rendering
#   memory_tools.py     → memory tools that take an ADK ToolContext
#   callbacks.py        → bootstrap callback and instruction provider
#   concierge_agent.py  → create_agent(), the ADK Agent factory
#
# There is no business logic here: every decision about state lives in
# core/, every decision about what to say lives in the LLM.
# =============================================================================
