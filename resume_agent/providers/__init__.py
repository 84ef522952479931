from .base import SearchProvider
from .mock import MockSearchProvider
from .tavily import TavilySearchProvider

from resume_agent.config import Settings
from resume_agent.log import get_logger

log = get_logger(__name__)

__all__ = [
    "SearchProvider", "MockSearchProvider", "TavilySearchProvider",
    "get_search_provider",
]


def get_search_provider(settings: Settings) -> SearchProvider:
    if settings.search_provider == "mock":
        log.info("Search provider: mock (SEARCH_PROVIDER=mock)")
        return MockSearchProvider()

    if settings.tavily_api_key:
        log.info("Search provider: Tavily")
        return TavilySearchProvider(settings)

    log.info("No TAVILY_API_KEY — using MockSearchProvider")
    return MockSearchProvider()
