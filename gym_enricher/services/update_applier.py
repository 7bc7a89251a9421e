"""Writing search winners back to gym storage."""
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..models import AmenityFlags, GymRecord, SearchCandidate, UpdateCycleStats, UpdateStrategy
from ..utils.logger import logger
from .gym_store import GymRepository
from .http_client import HTTPClient
from .providers import ProviderFactory, build_providers
from .rate_limiter import RateLimiter
from .search_engine import MultiSourceSearchEngine

# Most gyms offer GX and PT; sources without amenity data fall back to this.
DEFAULT_AMENITIES = AmenityFlags(
    has_gx=True,
    has_pt=True,
    has_group_pt=False,
    has_parking=False,
    has_shower=False,
    is_24_hours=False,
)

FACILITIES_NOTE = "멀티소스 검색 결과 ({source})"


class UpdateApplier:
    """Applies one gym's search outcome and records it in the cycle stats."""

    def __init__(self, now: Callable[[], datetime] = datetime.now):
        self._now = now

    def build_update(self, gym: GymRecord, best: SearchCandidate) -> GymRecord:
        """Return ``gym`` with the winner's fields applied."""
        amenities = best.amenities or DEFAULT_AMENITIES
        return gym.model_copy(
            update={
                "address": best.address,
                "phone": best.phone or gym.phone,
                "latitude": best.latitude,
                "longitude": best.longitude,
                "facilities": FACILITIES_NOTE.format(source=best.source),
                "open_hour": amenities.open_hour,
                "is_24_hours": amenities.is_24_hours,
                "has_gx": amenities.has_gx,
                "has_pt": amenities.has_pt,
                "has_group_pt": amenities.has_group_pt,
                "has_parking": amenities.has_parking,
                "has_shower": amenities.has_shower,
                "updated_at": self._now(),
            }
        )

    async def apply(
        self,
        repository: GymRepository,
        gym: GymRecord,
        best: Optional[SearchCandidate],
        stats: UpdateCycleStats,
    ) -> Optional[GymRecord]:
        """Persist the winner for a gym or report the gym as unmatched.

        Args:
            repository: Open gym repository
            gym: Gym being resolved
            best: Merged winner, or None
            stats: Cycle statistics to update

        Returns:
            The saved gym, or None if nothing was written
        """
        if best is None:
            logger.info(f"{gym.name}: no search results")
            stats.record_failure(gym.name)
            return None

        updated = await repository.save(self.build_update(gym, best))
        stats.record_success()
        logger.info(f"{gym.name}: updated from {best.source} (confidence {best.confidence})")
        return updated


def log_cycle_summary(stats: UpdateCycleStats) -> None:
    """Log the end-of-cycle counters and unmatched gyms."""
    logger.info(
        f"Update results: success={stats.success_count}, failure={stats.failure_count}, "
        f"success_rate={stats.success_rate:.1f}%"
    )
    if stats.failed_names:
        logger.info(f"Failed gyms: {', '.join(stats.failed_names)}")


class GymUpdatePipeline:
    """Search, merge and apply across a gym collection for one strategy."""

    def __init__(
        self,
        provider_factory: ProviderFactory = build_providers,
        applier: Optional[UpdateApplier] = None,
        rate_limiter: Optional[RateLimiter] = None,
        http_factory: Callable[[], HTTPClient] = HTTPClient,
    ):
        """Initialize the pipeline.

        Args:
            provider_factory: Builds the providers for a strategy
            applier: Update applier instance
            rate_limiter: Limiter shared by all gyms of a cycle
            http_factory: Creates the HTTP client opened for each cycle
        """
        self.provider_factory = provider_factory
        self.applier = applier or UpdateApplier()
        self.rate_limiter = rate_limiter
        self.http_factory = http_factory

    async def run(
        self,
        repository: GymRepository,
        gyms: Sequence[GymRecord],
        strategy: UpdateStrategy,
    ) -> UpdateCycleStats:
        """Resolve every gym sequentially and write the winners.

        Args:
            repository: Open gym repository
            gyms: Gyms to resolve
            strategy: Strategy selecting the provider set

        Returns:
            Statistics for the cycle
        """
        stats = UpdateCycleStats(total=len(gyms))
        logger.info(f"Starting {strategy.value} search for {len(gyms)} gyms")

        async with self.http_factory() as http:
            engine = MultiSourceSearchEngine(
                self.provider_factory(strategy, http),
                rate_limiter=self.rate_limiter,
            )
            if not engine.providers:
                logger.warning(f"No providers available for {strategy.value}")

            for index, gym in enumerate(gyms, 1):
                logger.info(f"Progress: {index}/{len(gyms)} ({gym.name})")
                try:
                    best = await engine.find_best(gym.name)
                    await self.applier.apply(repository, gym, best, stats)
                except Exception as e:
                    logger.error(f"{gym.name}: update failed: {e}")
                    stats.record_failure(gym.name)

        log_cycle_summary(stats)
        return stats
