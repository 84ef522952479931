"""Turn a skill list into a short job-search phrase with Groq."""
from __future__ import annotations

from abc import ABC, abstractmethod

from resume_agent.config import GROQ_BASE_URL, Settings
from resume_agent.log import get_logger
from resume_agent.models import MALFORMED, TRANSPORT, CallResult
from resume_agent.retry import retry

log = get_logger(__name__)

MAX_PHRASE_LEN = 100
_QUOTE_CHARS = "\"'`“”‘’"

_PHRASE_PROMPT = """\
You write search queries for a job board.
Candidate skills, most relevant first: {skills}

Reply with ONE short job-search phrase (2-5 words) naming the best-fitting
role, ending with the word "jobs", for example: React developer jobs.
No quotes, no explanation, no punctuation at the end."""


def clean_phrase(text: str) -> str:
    """Strip quote characters and whitespace; cap the length."""
    stripped = "".join(c for c in (text or "") if c not in _QUOTE_CHARS)
    stripped = " ".join(stripped.split())
    return stripped[:MAX_PHRASE_LEN].strip()


class QueryPhraser(ABC):
    @abstractmethod
    def phrase(self, skills: list[str]) -> CallResult[str]:
        """Return a short role phrase for *skills*, or a failure."""


@retry(max_attempts=2, base_delay=1.0, retryable=(Exception,))
def _call_groq(api_key: str, model: str, prompt: str, timeout: int) -> str:
    from openai import OpenAI

    client = OpenAI(api_key=api_key, base_url=GROQ_BASE_URL, timeout=timeout)
    r = client.chat.completions.create(
        model=model,
        messages=[{"role": "user", "content": prompt}],
        max_tokens=30,
        temperature=0.2,
    )
    return (r.choices[0].message.content or "").strip()


class GroqQueryPhraser(QueryPhraser):
    def __init__(self, settings: Settings) -> None:
        self.api_key = settings.groq_api_key
        self.model = settings.groq_model
        self.timeout = settings.request_timeout

    def phrase(self, skills: list[str]) -> CallResult[str]:
        prompt = _PHRASE_PROMPT.format(skills=", ".join(skills))
        try:
            raw = _call_groq(self.api_key, self.model, prompt, self.timeout)
        except Exception as exc:
            log.warning("Query phrasing failed (%s)", exc)
            return CallResult.failure(TRANSPORT, str(exc)[:200])

        phrase = clean_phrase(raw)
        if not phrase:
            return CallResult.failure(MALFORMED, "empty phrase")
        log.info("Query phrasing (%s) → %r", self.model, phrase)
        return CallResult.success(phrase)


def get_query_phraser(settings: Settings) -> QueryPhraser | None:
    if not settings.groq_api_key:
        log.debug("No GROQ_API_KEY — query phrasing disabled")
        return None
    return GroqQueryPhraser(settings)
