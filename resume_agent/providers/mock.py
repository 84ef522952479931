"""Offline search provider returning sample postings, for demos without a Tavily key."""
from __future__ import annotations

from resume_agent.log import get_logger
from resume_agent.models import CallResult, RawHit
from resume_agent.providers.base import SearchProvider

log = get_logger(__name__)

SAMPLE_HITS: list[RawHit] = [
    {
        "title": "Senior Python Developer",
        "url": "https://www.linkedin.com/jobs/view/sample-1",
        "content": "Build APIs with Python, Django and PostgreSQL. Docker and AWS a plus.",
        "published_date": "2024-05-02",
    },
    {
        "title": "Full Stack Engineer (React / Node.js)",
        "url": "https://www.indeed.com/viewjob?jk=sample2",
        "content": "React, TypeScript and Node.js on a product team. Remote friendly.",
    },
    {
        "title": "Data Engineer",
        "url": "https://www.linkedin.com/jobs/view/sample-3",
        "snippet": "SQL, Spark and Airflow pipelines for analytics.",
    },
    {
        "title": "Java Backend Developer",
        "url": "https://www.indeed.com/viewjob?jk=sample4",
        "content": "Spring Boot microservices, Kafka, Kubernetes.",
    },
    {
        "title": "Machine Learning Engineer",
        "url": "https://www.linkedin.com/jobs/view/sample-5",
        "content": "PyTorch, Python and MLOps tooling for recommendation models.",
    },
]


class MockSearchProvider(SearchProvider):
    def __init__(self, hits: list[RawHit] | None = None) -> None:
        self.hits = list(SAMPLE_HITS if hits is None else hits)

    def search(self, query: str, max_results: int) -> CallResult[list[RawHit]]:
        log.info("MockSearchProvider serving sample postings for %r", query)
        return CallResult.success(self.hits[:max_results])
