"""
Job search orchestration for the chat assistant.

Flow: intent (title → phrasing service → skill fallback) → query → search
provider → rank → reply. Every failure path returns a value.
"""
from __future__ import annotations

from resume_agent.config import Settings, load_settings
from resume_agent.log import get_logger
from resume_agent.models import JobResult, Preferences
from resume_agent.phrasing import QueryPhraser, get_query_phraser
from resume_agent.providers import SearchProvider, get_search_provider
from resume_agent.query_builder import SEMANTIC_TARGET_LEN, build_query, semantic_part
from resume_agent.ranker import rank_hits
from resume_agent.report import ERROR_MESSAGE, HELP_MESSAGE, NO_RESULTS_MESSAGE, format_job_reply

log = get_logger(__name__)

SEARCH_TRIGGERS: tuple[str, ...] = (
    "job",
    "search",
    "find",
    "opportunities",
    "position",
    "based on my resume",
)
FALLBACK_SKILL_COUNT = 3
FALLBACK_SUFFIX = "developer jobs"
# Raw hits requested per wanted result, so ranking has something to choose from.
OVERFETCH_FACTOR = 2


def is_job_search_request(message: str) -> bool:
    low = (message or "").lower()
    return any(trigger in low for trigger in SEARCH_TRIGGERS)


def fallback_intent(skills: list[str]) -> str:
    top = " ".join(str(s).strip() for s in skills[:FALLBACK_SKILL_COUNT] if str(s).strip())
    return f"{top} {FALLBACK_SUFFIX}".strip()


def auto_suggest_message(skills: list[str]) -> str:
    return (
        f"Based on my resume with skills: {', '.join(skills)}, "
        "find and suggest relevant job opportunities for me."
    )


class JobSearchOrchestrator:
    def __init__(
        self,
        settings: Settings,
        provider: SearchProvider,
        phraser: QueryPhraser | None = None,
    ) -> None:
        self.settings = settings
        self.provider = provider
        self.phraser = phraser

    def resolve_intent(self, skills: list[str], preferences: Preferences) -> str:
        if preferences.title:
            log.info("Intent from preferred title: %r", preferences.title)
            return preferences.title

        if self.phraser is not None and skills:
            try:
                result = self.phraser.phrase(list(skills))
            except Exception as exc:
                log.warning("Phrasing raised (%s), using skill fallback", exc)
            else:
                if result.ok and result.value:
                    log.info("Intent from phrasing service: %r", result.value)
                    return result.value
                log.warning("Phrasing unavailable (%s: %s), using skill fallback", result.error, result.detail)

        intent = fallback_intent(skills)
        log.info("Intent from top skills: %r", intent)
        return intent

    def search(
        self,
        intent: str,
        skills: list[str],
        preferences: Preferences,
        desired_count: int,
    ) -> list[JobResult]:
        if desired_count <= 0:
            return []

        semantic = semantic_part(intent, preferences)
        if len(semantic) > SEMANTIC_TARGET_LEN:
            log.debug("Semantic query is %d chars (target %d): %r", len(semantic), SEMANTIC_TARGET_LEN, semantic)
        query = build_query(intent, preferences)

        try:
            outcome = self.provider.search(query, max_results=desired_count * OVERFETCH_FACTOR)
        except Exception as exc:
            log.error("[%s] FAILED: %s", self.provider.__class__.__name__, exc)
            return []

        if not outcome.ok:
            log.warning("Search failed (%s): %s", outcome.error, outcome.detail)
            return []
        if not outcome.value:
            log.info("Search returned no hits for %r", query)
            return []

        return rank_hits(outcome.value, skills, limit=desired_count)

    def decide_and_search(
        self,
        message: str,
        skills: list[str],
        preferences: Preferences,
    ) -> str | list[JobResult]:
        """Return ranked jobs for a search request, or a text reply otherwise.

        Only messages containing a search trigger, sent with a non-empty
        skill list, reach the search provider.
        """
        skills = list(skills or [])
        if not (is_job_search_request(message) and skills):
            log.info("Not a job search request (skills=%d) — replying with help", len(skills))
            return HELP_MESSAGE

        log.info("Detected job search request, proceeding to search")
        intent = self.resolve_intent(skills, preferences)
        results = self.search(intent, skills, preferences, self.settings.chat_result_count)
        if not results:
            return NO_RESULTS_MESSAGE
        return results

    def reply(
        self,
        message: str,
        skills: list[str] | None = None,
        preferences: Preferences | None = None,
        *,
        auto_suggest: bool = False,
    ) -> str:
        """Chat entry point: always returns display text."""
        skills = [str(s) for s in (skills or [])]
        preferences = preferences or Preferences()
        try:
            if auto_suggest and skills:
                message = auto_suggest_message(skills)
            outcome = self.decide_and_search(message, skills, preferences)
            if isinstance(outcome, str):
                return outcome
            return format_job_reply(outcome, skills)
        except Exception:
            log.exception("Chat reply failed")
            return ERROR_MESSAGE


def build_orchestrator(settings: Settings | None = None) -> JobSearchOrchestrator:
    settings = settings or load_settings()
    return JobSearchOrchestrator(
        settings,
        provider=get_search_provider(settings),
        phraser=get_query_phraser(settings),
    )
