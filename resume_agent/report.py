"""Render ranked jobs as chat replies."""
from __future__ import annotations

from resume_agent.log import get_logger
from resume_agent.models import JobResult

log = get_logger(__name__)

HELP_MESSAGE = (
    "Hello! I'm your Job Hunter assistant. I can help you find job opportunities "
    "based on your resume skills. Just ask me to 'find jobs' or 'search for "
    "positions' and I'll suggest relevant opportunities!"
)
NO_RESULTS_MESSAGE = (
    "I couldn't find any job openings matching your criteria. Try adjusting your "
    "search preferences or check back later."
)
ERROR_MESSAGE = "I'm having trouble processing your request. Please try again."

SNIPPET_PREVIEW_LEN = 150


def _preview(text: str, limit: int = SNIPPET_PREVIEW_LEN) -> str:
    return text[:limit] + "..." if len(text) > limit else text


def format_job_reply(results: list[JobResult], skills: list[str]) -> str:
    lines: list[str] = [
        f"I found {len(results)} job opportunities that match your skills:",
        "",
    ]
    for idx, job in enumerate(results, 1):
        lines.append(f"**{idx}. {job.title}**")
        lines.append(f"Company/Source: {job.source}")
        lines.append(f"Match Score: {job.match_score}/{len(skills)} skills matched")
        if job.matched_skills:
            lines.append(f"Matched Skills: {', '.join(job.matched_skills)}")
        lines.append(f"Relevance: {job.relevance_score}%")
        if job.published:
            lines.append(f"Published: {job.published}")
        lines.append(f"Description: {_preview(job.snippet)}")
        if job.url:
            lines.append(f"\U0001f517 [Apply Here]({job.url})")
        lines.append("")

    lines.append("Would you like me to search for more specific roles or adjust the criteria?")
    log.debug("Formatted reply for %d job(s)", len(results))
    return "\n".join(lines)
