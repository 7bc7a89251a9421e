"""Pre-run staleness check for the update cycle."""
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence

from ..config import settings
from ..models import GymRecord, PreRunDecision
from ..utils.logger import logger


class StalenessOracle:
    """Decides whether gym data is old enough to justify a full cycle.

    A gym is stale when it has never been enriched, was enriched more than
    ``stale_after_days`` ago, or still lacks coordinates.
    """

    def __init__(
        self,
        stale_after_days: Optional[int] = None,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.stale_after = timedelta(
            days=stale_after_days if stale_after_days is not None else settings.stale_after_days
        )
        self._now = now

    def is_stale(self, gym: GymRecord, now: Optional[datetime] = None) -> bool:
        now = now or self._now()
        if not gym.has_coordinates or gym.updated_at is None:
            return True
        return now - gym.updated_at > self.stale_after

    def stale_gyms(self, gyms: Sequence[GymRecord]) -> List[GymRecord]:
        now = self._now()
        return [gym for gym in gyms if self.is_stale(gym, now)]

    async def pre_run_check(self, gyms: Sequence[GymRecord]) -> PreRunDecision:
        """Check whether an update cycle should run.

        Args:
            gyms: Every gym currently stored

        Returns:
            Decision with a human-readable reason
        """
        if not gyms:
            return PreRunDecision(should_run_update=False, reason="No gyms in storage")

        stale = self.stale_gyms(gyms)
        if not stale:
            return PreRunDecision(
                should_run_update=False,
                reason=f"All {len(gyms)} gyms were updated within {self.stale_after.days} days",
            )

        return PreRunDecision(
            should_run_update=True,
            reason=f"{len(stale)}/{len(gyms)} gyms need an update",
        )

    async def log_statistics(self, gyms: Sequence[GymRecord]) -> None:
        """Log data completeness figures for the gym collection."""
        total = len(gyms)
        with_address = sum(1 for gym in gyms if gym.address)
        with_phone = sum(1 for gym in gyms if gym.phone)
        with_coordinates = sum(1 for gym in gyms if gym.has_coordinates)
        stale = len(self.stale_gyms(gyms))

        logger.info(
            f"Gym data: total={total}, address={with_address}, phone={with_phone}, "
            f"coordinates={with_coordinates}, stale={stale}"
        )


class PreRunGate:
    """Cheap check run before any network fan-out."""

    def __init__(self, oracle: Optional[StalenessOracle] = None):
        self.oracle = oracle or StalenessOracle()

    async def check(self, gyms: Sequence[GymRecord]) -> PreRunDecision:
        decision = await self.oracle.pre_run_check(gyms)
        if decision.should_run_update:
            logger.info(f"Running update: {decision.reason}")
        else:
            logger.info(f"Skipping update: {decision.reason}")
        return decision

    async def log_statistics(self, gyms: Sequence[GymRecord]) -> None:
        await self.oracle.log_statistics(gyms)
