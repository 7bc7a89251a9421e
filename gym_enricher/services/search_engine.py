"""Multi-source search across place-data providers."""
import asyncio
from typing import List, Optional, Sequence

from ..config import settings
from ..models import SearchCandidate
from ..utils.logger import logger
from .merger import CandidateMerger
from .providers import PlaceProvider
from .query_planner import QueryPlanner, query_planner
from .rate_limiter import RateLimiter


class MultiSourceSearchEngine:
    """Resolves a gym name against every provider of a strategy."""

    def __init__(
        self,
        providers: Sequence[PlaceProvider],
        planner: Optional[QueryPlanner] = None,
        merger: Optional[CandidateMerger] = None,
        rate_limiter: Optional[RateLimiter] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the search engine.

        Args:
            providers: Providers to fan each query out to
            planner: Query planner instance
            merger: Candidate merger instance
            rate_limiter: Limiter spacing successive provider batches.
                Defaults to settings.inter_query_delay
            timeout: Per-provider timeout in seconds. Defaults to settings.provider_timeout
        """
        self.providers = list(providers)
        self.planner = planner or query_planner
        self.merger = merger or CandidateMerger()
        self.rate_limiter = rate_limiter or RateLimiter(settings.inter_query_delay)
        self.timeout = timeout or settings.provider_timeout

    async def search_query(self, query: str) -> List[SearchCandidate]:
        """Run one query against all providers concurrently.

        Waits for every provider before returning; providers never raise.

        Args:
            query: Search string

        Returns:
            Candidates from all providers, in provider order
        """
        await self.rate_limiter.acquire()
        batches = await asyncio.gather(
            *(provider.search(query, self.timeout) for provider in self.providers)
        )
        return [candidate for batch in batches for candidate in batch]

    async def search_gym(self, gym_name: str) -> List[SearchCandidate]:
        """Collect candidates for every planned query of a gym, one query at a time.

        Args:
            gym_name: Stored gym name

        Returns:
            All candidates across all queries and providers
        """
        queries = self.planner.plan(gym_name)
        logger.info(f"Searching '{gym_name}' with {len(queries)} queries")

        candidates: List[SearchCandidate] = []
        for index, query in enumerate(queries, 1):
            results = await self.search_query(query)
            logger.debug(f"[{index}/{len(queries)}] '{query}': {len(results)} candidates")
            candidates.extend(results)

        return candidates

    async def find_best(self, gym_name: str) -> Optional[SearchCandidate]:
        """Search for a gym and return the merged winner.

        Args:
            gym_name: Stored gym name

        Returns:
            Highest-confidence unique candidate, or None
        """
        candidates = await self.search_gym(gym_name)
        best = self.merger.merge(candidates)
        if best:
            logger.info(
                f"Selected {best.name} ({best.address}) from {best.source} "
                f"with confidence {best.confidence}"
            )
        return best
