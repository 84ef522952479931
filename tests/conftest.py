import os

# keep test runs from writing daily log files into the checkout
os.environ.setdefault("RESUME_AGENT_LOG_FILE", "false")

import pytest
from unittest.mock import MagicMock

from resume_agent.config import Settings
from resume_agent.models import CallResult
from resume_agent.providers.base import SearchProvider


@pytest.fixture
def settings():
    return Settings(
        tavily_api_key="tvly-test",
        tavily_api_url="https://search.test/api",
        groq_api_key="",
        request_timeout=5,
        chat_result_count=10,
    )


@pytest.fixture
def provider():
    """Search provider double; set ``provider.search.return_value`` per test."""
    p = MagicMock(spec=SearchProvider)
    p.search.return_value = CallResult.success([])
    return p


@pytest.fixture(autouse=True)
def _no_backoff(monkeypatch):
    monkeypatch.setattr("resume_agent.retry.time.sleep", lambda _s: None)
