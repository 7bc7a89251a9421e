"""Base class for place-data providers."""
from typing import Any, Iterable, List, Optional

from ...models import SearchCandidate
from ...utils.logger import logger
from ..http_client import HTTPClient

# Category or name fragments that mark a fitness venue
FITNESS_KEYWORDS = ("헬스", "피트니스", "체육", "운동", "스포츠", "짐", "gym", "fitness")


def looks_like_fitness_venue(*texts: Optional[str]) -> bool:
    """Check whether any of the given strings mentions a fitness keyword."""
    haystack = " ".join(t for t in texts if t).lower()
    return any(keyword in haystack for keyword in FITNESS_KEYWORDS)


class PlaceProvider:
    """Base class for one external source of gym candidates.

    Subclasses implement ``_search`` and may raise freely; ``search`` is the
    isolation boundary and always returns a list.
    """

    source: str = "unknown"
    confidence: float = 0.5

    def __init__(self, http: HTTPClient):
        """Initialize the provider.

        Args:
            http: Open HTTP client shared across the cycle
        """
        self.http = http

    @property
    def is_configured(self) -> bool:
        """Whether the provider has the credentials it needs."""
        return True

    async def search(self, query: str, timeout: Optional[float] = None) -> List[SearchCandidate]:
        """Search this source for fitness venues matching ``query``.

        Args:
            query: Search string
            timeout: Per-request timeout in seconds

        Returns:
            Candidates passing the domain filter; empty on any failure
        """
        try:
            return list(await self._search(query, timeout))
        except Exception as e:
            logger.error(f"{self.source} search failed for '{query}': {e}")
            return []

    async def _search(self, query: str, timeout: Optional[float]) -> Iterable[SearchCandidate]:
        raise NotImplementedError

    def _candidate(self, **fields: Any) -> SearchCandidate:
        return SearchCandidate(source=self.source, confidence=self.confidence, **fields)
