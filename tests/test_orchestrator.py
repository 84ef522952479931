import pytest
from unittest.mock import MagicMock, patch

from resume_agent.models import TRANSPORT, CallResult, Preferences
from resume_agent.orchestrator import (
    JobSearchOrchestrator,
    auto_suggest_message,
    build_orchestrator,
    fallback_intent,
    is_job_search_request,
)
from resume_agent.phrasing import QueryPhraser
from resume_agent.providers import MockSearchProvider, TavilySearchProvider
from resume_agent.report import ERROR_MESSAGE, HELP_MESSAGE, NO_RESULTS_MESSAGE

SITES = " site:linkedin.com OR site:indeed.com"


def _phraser(result):
    p = MagicMock(spec=QueryPhraser)
    p.phrase.return_value = result
    return p


# ──────────────────────────────────────────────
# Trigger policy
# ──────────────────────────────────────────────

class TestTriggers:
    @pytest.mark.parametrize("msg", [
        "Find me something",
        "any JOBS around?",
        "search please",
        "what opportunities are there",
        "open POSITIONS in Berlin",
        "Based on my resume, what fits?",
    ])
    def test_search_messages(self, msg):
        assert is_job_search_request(msg) is True

    @pytest.mark.parametrize("msg", ["hello", "", "how do I write a cover letter?"])
    def test_other_messages(self, msg):
        assert is_job_search_request(msg) is False

    def test_hello_returns_help_without_searching(self, settings, provider):
        orch = JobSearchOrchestrator(settings, provider)
        assert orch.decide_and_search("hello", ["Java"], Preferences()) == HELP_MESSAGE
        provider.search.assert_not_called()

    def test_search_message_without_skills_returns_help(self, settings, provider):
        orch = JobSearchOrchestrator(settings, provider)
        assert orch.decide_and_search("find jobs", [], Preferences()) == HELP_MESSAGE
        provider.search.assert_not_called()


# ──────────────────────────────────────────────
# Intent resolution
# ──────────────────────────────────────────────

class TestIntent:
    def test_title_used_verbatim(self, settings, provider):
        phraser = _phraser(CallResult.success("Ignored jobs"))
        orch = JobSearchOrchestrator(settings, provider, phraser)
        assert orch.resolve_intent(["Python"], Preferences(title="Staff Engineer")) == "Staff Engineer"
        phraser.phrase.assert_not_called()

    def test_phrasing_service_used_when_no_title(self, settings, provider):
        phraser = _phraser(CallResult.success("Backend Python developer jobs"))
        orch = JobSearchOrchestrator(settings, provider, phraser)
        skills = ["Python", "Django", "PostgreSQL", "Docker"]
        assert orch.resolve_intent(skills, Preferences()) == "Backend Python developer jobs"
        phraser.phrase.assert_called_once_with(skills)

    def test_phrasing_failure_falls_back_to_skills(self, settings, provider):
        phraser = _phraser(CallResult.failure(TRANSPORT, "timeout"))
        orch = JobSearchOrchestrator(settings, provider, phraser)
        intent = orch.resolve_intent(["Python", "SQL", "Docker", "AWS"], Preferences())
        assert intent == "Python SQL Docker developer jobs"

    def test_phrasing_exception_falls_back_to_skills(self, settings, provider):
        phraser = MagicMock(spec=QueryPhraser)
        phraser.phrase.side_effect = RuntimeError("boom")
        orch = JobSearchOrchestrator(settings, provider, phraser)
        assert orch.resolve_intent(["Go"], Preferences()) == "Go developer jobs"

    def test_no_phraser(self, settings, provider):
        orch = JobSearchOrchestrator(settings, provider)
        assert orch.resolve_intent(["React", "TypeScript"], Preferences()) == "React TypeScript developer jobs"

    def test_fallback_with_no_skills(self):
        assert fallback_intent([]) == "developer jobs"


# ──────────────────────────────────────────────
# Search path
# ──────────────────────────────────────────────

class TestSearch:
    def test_end_to_end_ranking(self, settings, provider):
        provider.search.return_value = CallResult.success([
            {"title": "Role C", "content": "Great team, free lunch", "url": "https://c.example/3"},
            {"title": "Role B", "content": "Ship containers with docker", "url": "https://b.example/2"},
            {"title": "Role A", "content": "We use python and sql", "url": "https://a.example/1"},
        ])
        orch = JobSearchOrchestrator(settings, provider)
        prefs = Preferences(location="any", remote=False)

        results = orch.search("Python developer jobs", ["Python", "SQL", "Docker"], prefs, desired_count=3)

        assert [r.title for r in results] == ["Role A", "Role B", "Role C"]
        assert [r.match_score for r in results] == [2, 1, 0]
        provider.search.assert_called_once_with("Python developer jobs" + SITES, max_results=6)

    def test_requests_twice_the_desired_count(self, settings, provider):
        orch = JobSearchOrchestrator(settings, provider)
        orch.search("Java jobs", ["Java"], Preferences(location="Paris", remote=True), desired_count=4)
        provider.search.assert_called_once_with("Java jobs Paris remote" + SITES, max_results=8)

    def test_result_count_bounded_by_desired(self, settings, provider):
        provider.search.return_value = CallResult.success([{"title": f"Job {i}"} for i in range(10)])
        orch = JobSearchOrchestrator(settings, provider)
        assert len(orch.search("x", ["Python"], Preferences(), desired_count=5)) == 5

    def test_empty_results(self, settings, provider):
        provider.search.return_value = CallResult.success([])
        orch = JobSearchOrchestrator(settings, provider)
        assert orch.search("x", ["Python"], Preferences(), 5) == []
        assert orch.decide_and_search("find jobs", ["Python"], Preferences()) == NO_RESULTS_MESSAGE

    def test_provider_failure_yields_empty(self, settings, provider):
        provider.search.return_value = CallResult.failure(TRANSPORT, "connection refused")
        orch = JobSearchOrchestrator(settings, provider)
        assert orch.search("x", ["Python"], Preferences(), 5) == []
        assert orch.decide_and_search("search", ["Python"], Preferences()) == NO_RESULTS_MESSAGE

    def test_provider_exception_yields_empty(self, settings, provider):
        provider.search.side_effect = ConnectionError("down")
        orch = JobSearchOrchestrator(settings, provider)
        assert orch.search("x", ["Python"], Preferences(), 5) == []

    def test_non_positive_count_skips_provider(self, settings, provider):
        orch = JobSearchOrchestrator(settings, provider)
        assert orch.search("x", ["Python"], Preferences(), 0) == []
        provider.search.assert_not_called()

    def test_chat_search_uses_configured_count(self, settings, provider):
        provider.search.return_value = CallResult.success([{"title": "Python Developer"}])
        orch = JobSearchOrchestrator(settings, provider)
        results = orch.decide_and_search("find jobs", ["Python"], Preferences(title="Python Developer"))
        assert [r.title for r in results] == ["Python Developer"]
        provider.search.assert_called_once_with("Python Developer" + SITES, max_results=20)


# ──────────────────────────────────────────────
# Chat reply
# ──────────────────────────────────────────────

class TestReply:
    def test_formats_results(self, settings, provider):
        provider.search.return_value = CallResult.success([
            {"title": "React Developer", "url": "https://www.linkedin.com/jobs/1", "content": "React and Redux"},
        ])
        orch = JobSearchOrchestrator(settings, provider)
        text = orch.reply("find jobs", ["React", "Python"], Preferences())
        assert text.startswith("I found 1 job opportunities")
        assert "Match Score: 1/2 skills matched" in text
        assert "Company/Source: www.linkedin.com" in text

    def test_auto_suggest_rewrites_message(self, settings, provider):
        orch = JobSearchOrchestrator(settings, provider)
        text = orch.reply("hi", ["Python"], Preferences(), auto_suggest=True)
        assert text == NO_RESULTS_MESSAGE
        provider.search.assert_called_once()

    def test_auto_suggest_needs_skills(self, settings, provider):
        orch = JobSearchOrchestrator(settings, provider)
        assert orch.reply("hi", [], auto_suggest=True) == HELP_MESSAGE
        provider.search.assert_not_called()

    def test_auto_suggest_message_triggers_search(self):
        assert is_job_search_request(auto_suggest_message(["Python", "SQL"]))

    def test_unexpected_error_becomes_apology(self, settings, provider):
        orch = JobSearchOrchestrator(settings, provider)
        with patch.object(orch, "decide_and_search", side_effect=RuntimeError("bug")):
            assert orch.reply("find jobs", ["Python"]) == ERROR_MESSAGE

    def test_defaults_when_called_bare(self, settings, provider):
        orch = JobSearchOrchestrator(settings, provider)
        assert orch.reply("hello") == HELP_MESSAGE


def test_build_orchestrator_wiring(settings):
    orch = build_orchestrator(settings)
    assert isinstance(orch.provider, TavilySearchProvider)
    assert orch.phraser is None


def test_build_orchestrator_without_keys():
    from resume_agent.config import Settings

    orch = build_orchestrator(Settings())
    assert isinstance(orch.provider, MockSearchProvider)
