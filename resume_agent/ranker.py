"""Score raw search hits against a skill list and order them."""
from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, Iterable
from urllib.parse import urlparse

from resume_agent.log import get_logger
from resume_agent.models import JobResult

log = get_logger(__name__)

DEFAULT_TITLE = "Job Opening"
DEFAULT_SNIPPET = "No description available"
FALLBACK_SOURCE = "example.com"

# Skill tokens this short ("c", "ui", "go") are too noisy to match on alone.
_MIN_TOKEN_LEN = 3
_TOKEN_SPLIT_RE = re.compile(r"[\W_]+")

KEYWORD_BONUSES: tuple[tuple[str, int], ...] = (
    ("developer", 10),
    ("engineer", 10),
)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _skill_tokens(skill: str) -> list[str]:
    """Punctuation/whitespace-delimited parts of a folded skill ("react.js" → react, js)."""
    return [t for t in _TOKEN_SPLIT_RE.split(skill) if len(t) >= _MIN_TOKEN_LEN]


def match_skills(text: str, skills: Iterable[str]) -> list[str]:
    """Return the skills found in *text* (already case-folded), in input order.

    A skill matches on its full folded form or on any of its longer tokens,
    so "React.js" matches a posting that only says "react".
    """
    matched: list[str] = []
    for skill in skills:
        folded = _text(skill).strip().lower()
        if not folded:
            continue
        if folded in text or any(tok in text for tok in _skill_tokens(folded)):
            matched.append(skill)
    return matched


def relevance_score(match_count: int, skill_count: int, text: str) -> int:
    ratio = match_count / max(skill_count, 1)
    bonus = sum(points for word, points in KEYWORD_BONUSES if word in text)
    # halves round up: 12.5 -> 13
    return int(math.floor(min(100.0, ratio * 100 + bonus) + 0.5))


def extract_source(url: str) -> str:
    if not url:
        return FALLBACK_SOURCE
    try:
        host = urlparse(url).hostname
    except ValueError:
        host = None
    return host or FALLBACK_SOURCE


def score_hit(hit: Mapping[str, Any], skills: list[str]) -> JobResult:
    title = _text(hit.get("title"))
    content = _text(hit.get("content"))
    snippet = _text(hit.get("snippet"))
    url = _text(hit.get("url"))

    folded = f"{title} {content} {snippet}".lower()
    matched = match_skills(folded, skills)

    return JobResult(
        title=title or DEFAULT_TITLE,
        url=url,
        snippet=content or snippet or DEFAULT_SNIPPET,
        source=extract_source(url),
        matched_skills=matched,
        match_score=len(matched),
        relevance_score=relevance_score(len(matched), len(skills), folded),
        published=_text(hit.get("published_date")),
    )


def rank_hits(raw_hits: Iterable[Any] | None, skills: list[str], limit: int) -> list[JobResult]:
    """Score the first *limit* provider hits and sort them best-first.

    The provider's order decides which hits survive the cut; only that
    prefix is re-sorted. Ties keep provider order.
    """
    prefix = list(raw_hits or [])[: max(limit, 0)]
    skills = list(skills or [])

    results: list[JobResult] = []
    for idx, hit in enumerate(prefix):
        if not isinstance(hit, Mapping):
            log.debug("Skipping hit #%d: expected a mapping, got %s", idx, type(hit).__name__)
            continue
        results.append(score_hit(hit, skills))

    ranked = sorted(results, key=lambda r: (-r.match_score, -r.relevance_score))
    log.info(
        "Ranked %d of %d hit(s) against %d skill(s)",
        len(ranked), len(prefix), len(skills),
    )
    return ranked
