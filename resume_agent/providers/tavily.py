"""Tavily web search, used as the job-posting search provider.

Docs: https://docs.tavily.com/documentation/api-reference/endpoint/search
"""
from __future__ import annotations

from typing import Any

import requests

from resume_agent.config import Settings
from resume_agent.log import get_logger
from resume_agent.models import HTTP, MALFORMED, TRANSPORT, UNAVAILABLE, CallResult, RawHit
from resume_agent.providers.base import SearchProvider
from resume_agent.retry import retry

log = get_logger(__name__)


class TavilySearchProvider(SearchProvider):
    def __init__(self, settings: Settings) -> None:
        self.api_url = settings.tavily_api_url
        self.api_key = settings.tavily_api_key
        self.timeout = settings.request_timeout

    def _payload(self, query: str, max_results: int) -> dict[str, Any]:
        return {
            "api_key": self.api_key,
            "query": query,
            "search_depth": "basic",
            "include_images": False,
            "include_answer": False,
            "max_results": max_results,
        }

    @retry(max_attempts=2, base_delay=1.0, retryable=(requests.ConnectionError, requests.Timeout))
    def _post(self, payload: dict[str, Any]) -> requests.Response:
        return requests.post(
            self.api_url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout,
        )

    def search(self, query: str, max_results: int) -> CallResult[list[RawHit]]:
        if not self.api_key:
            return CallResult.failure(UNAVAILABLE, "TAVILY_API_KEY not configured")

        log.info("Tavily query (%d chars, max_results=%d): %s", len(query), max_results, query)
        try:
            r = self._post(self._payload(query, max_results))
        except requests.RequestException as exc:
            log.warning("Tavily request failed: %s", exc)
            return CallResult.failure(TRANSPORT, str(exc))

        if not r.ok:
            log.warning("Tavily returned HTTP %d: %s", r.status_code, r.text[:200])
            return CallResult.failure(HTTP, f"HTTP {r.status_code}")

        try:
            data = r.json()
        except ValueError as exc:
            log.warning("Tavily returned non-JSON body: %s", exc)
            return CallResult.failure(MALFORMED, "response is not JSON")

        if not isinstance(data, dict):
            return CallResult.failure(MALFORMED, "response is not a JSON object")
        results = data.get("results") or []
        if not isinstance(results, list):
            return CallResult.failure(MALFORMED, "'results' is not a list")

        log.debug("Tavily returned %d hit(s)", len(results))
        return CallResult.success(results)
