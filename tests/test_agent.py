"""Tests for the ADK wiring: memory tool wrappers, callbacks, prompt, agent."""

import json
from types import SimpleNamespace

import pytest
from google.adk.models.base_llm import BaseLlm
from google.adk.models.llm_response import LlmResponse
from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types
from pydantic import Field

import main
from agent import prompt
from agent.callbacks import make_bootstrap_callback, make_instruction_provider
from agent.concierge_agent import AGENT_NAME, create_agent, use_mcp_from_env
from agent.memory_tools import build_memory_tools, session_id_of
from core import constants
from core.bootstrap import MemoryBootstrap
from core.memory import MemoryTools


def _context(session_id):
    return SimpleNamespace(session=SimpleNamespace(id=session_id))


@pytest.fixture
def tools(state_service):
    return {fn.__name__: fn for fn in build_memory_tools(MemoryTools(state_service))}


def test_session_id_of():
    assert session_id_of(_context("abc")) == "abc"


def test_memory_tool_names(tools):
    assert set(tools) == {"memorize", "memorize_list", "forget"}
    for fn in tools.values():
        assert fn.__doc__


def test_memory_tools_route_to_context_session(tools, state_service):
    tools["memorize"]("destination", "Paris", tool_context=_context("s1"))
    tools["memorize_list"]("likes", "food", tool_context=_context("s1"))
    tools["memorize_list"]("likes", "art", tool_context=_context("s2"))
    result = tools["forget"]("likes", "food", tool_context=_context("s1"))

    assert result == {"status": 'Removed "likes": "food"'}
    assert state_service.get("s1", "destination") == "Paris"
    assert state_service.get("s1", "likes") == []
    assert state_service.get("s2", "likes") == ["art"]
    assert state_service.get("s2", "destination") is None


def test_bootstrap_callback_seeds_session(state_service):
    callback = make_bootstrap_callback(MemoryBootstrap(state_service))
    assert callback(_context("s1")) is None
    assert state_service.get("s1", constants.ITIN_INITIALIZED) is True


def test_bootstrap_callback_swallows_failures(state_service, caplog):
    class Exploding:
        def bootstrap(self, session_id):
            raise RuntimeError("boom")

    callback = make_bootstrap_callback(Exploding())
    with caplog.at_level("WARNING", logger="agent.callbacks"):
        assert callback(_context("s1")) is None
    assert "Memory bootstrap failed for session s1" in caplog.text


def test_instruction_provider_renders_session_memory(state_service):
    state_service.put("s1", "destination", "Paris")
    provider = make_instruction_provider(state_service, "BASE")

    text = provider(_context("s1"))
    assert text.startswith("BASE\n")
    assert "TODAY'S DATE:" in text
    memory = json.loads(text.split("TRAVELER MEMORY (session state):\n", 1)[1])
    assert memory == {"destination": "Paris"}


def test_load_instruction_default(monkeypatch):
    monkeypatch.delenv(prompt.PROMPT_ENV, raising=False)
    assert prompt.load_instruction() == prompt.TRAVEL_CONCIERGE_PROMPT.strip()


def test_load_instruction_from_file(monkeypatch, tmp_path):
    path = tmp_path / "prompt.txt"
    path.write_text("  Be brief.\n", encoding="utf-8")
    monkeypatch.setenv(prompt.PROMPT_ENV, str(path))
    assert prompt.load_instruction() == "Be brief."


def test_load_instruction_missing_file_falls_back(monkeypatch, tmp_path, caplog):
    monkeypatch.setenv(prompt.PROMPT_ENV, str(tmp_path / "missing.txt"))
    with caplog.at_level("WARNING", logger="agent.prompt"):
        assert prompt.load_instruction() == prompt.FALLBACK_INSTRUCTION
    assert "Using fallback instruction" in caplog.text


@pytest.mark.parametrize("value, expected", [
    (None, True), ("true", True), ("1", True), ("false", False), ("OFF", False), ("no", False),
])
def test_use_mcp_from_env(monkeypatch, value, expected):
    if value is None:
        monkeypatch.delenv("TRAVEL_CONCIERGE_USE_MCP", raising=False)
    else:
        monkeypatch.setenv("TRAVEL_CONCIERGE_USE_MCP", value)
    assert use_mcp_from_env() is expected


def test_create_agent_in_process_tools(state_service):
    agent = create_agent(state_service, model="openai/gpt-4o-mini", use_mcp=False)

    assert agent.name == AGENT_NAME
    assert agent.description == prompt.DESCRIPTION
    names = [tool.__name__ for tool in agent.tools]
    assert names == ["get_current_time", "get_weather", "memorize", "memorize_list", "forget"]
    assert callable(agent.instruction)


class ScriptedLlm(BaseLlm):
    """A model that replays canned responses, one per LLM call."""

    responses: list[LlmResponse] = Field(default_factory=list)

    @classmethod
    def supported_models(cls) -> list[str]:
        return [r"scripted"]

    async def generate_content_async(self, llm_request, stream=False):
        yield self.responses.pop(0)


def _model_says(*parts):
    return LlmResponse(content=types.Content(role="model", parts=list(parts)))


@pytest.mark.anyio
async def test_runner_memory_tool_uses_real_adk_context(state_service):
    llm = ScriptedLlm(model="scripted", responses=[
        _model_says(types.Part(function_call=types.FunctionCall(
            name="memorize_list", args={"key": "likes", "value": "museums"},
        ))),
        _model_says(types.Part(text="Noted, you like museums.")),
    ])
    agent = create_agent(state_service, model=llm, use_mcp=False)
    session_service = InMemorySessionService()
    runner = Runner(agent=agent, app_name=AGENT_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=AGENT_NAME, user_id="u")

    result = await main.run_turn(runner, "u", session.id, "I love museums", write=lambda _: None)

    assert result.tool_called
    assert not result.tool_errored
    assert result.texts == ["Noted, you like museums."]
    assert state_service.get(session.id, "likes") == ["museums"]
    assert state_service.get(session.id, constants.ITIN_INITIALIZED) is True


def test_dev_ui_root_agent():
    from agent.agent import root_agent

    assert root_agent.name == AGENT_NAME
    assert callable(root_agent.before_agent_callback)
