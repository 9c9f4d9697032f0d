"""
Shared test setup.

Logfire is configured locally (no export, no console output) so pipeline spans
are cheap no-ops in tests.
"""

import logfire
import pytest

logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def api_keys(monkeypatch):
    """Both upstream API keys present in the environment."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-key")
    monkeypatch.setenv("OPENAI_API_KEY", "test-openai-key")
