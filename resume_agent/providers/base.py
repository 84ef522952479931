from abc import ABC, abstractmethod

from resume_agent.models import CallResult, RawHit


class SearchProvider(ABC):
    @abstractmethod
    def search(self, query: str, max_results: int) -> CallResult[list[RawHit]]:
        """Return raw hits in provider order, or a failure; never raise."""
