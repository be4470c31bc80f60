"""
Pytest configuration for the travel concierge tests.

Async tests run on asyncio through the anyio pytest plugin.
"""

import json
import logging

import pytest

from core.bootstrap import SCENARIO_ENV
from core.state import SharedStateService


@pytest.fixture
def anyio_backend():
    """Use asyncio as the backend for anyio tests."""
    return "asyncio"


def pytest_configure(config):
    config.addinivalue_line("markers", "anyio: mark test as an anyio test (async)")
    logging.getLogger("LiteLLM").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def no_scenario_override(monkeypatch):
    """Tests start without a profile override unless they set one."""
    monkeypatch.delenv(SCENARIO_ENV, raising=False)


@pytest.fixture
def state_service():
    return SharedStateService()


@pytest.fixture
def write_profile(tmp_path):
    """Write a profile document to a temp file and return its path."""

    def _write(document, name="profile.json"):
        path = tmp_path / name
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(json.dumps(document), encoding="utf-8")
        return str(path)

    return _write
