"""Self-rescheduling auto-update scheduler for gym data."""
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ValidationError

from ..models import ScheduleConfig, SchedulerStatus, UpdateCycleStats, UpdateStrategy
from ..utils.logger import logger
from .gym_store import GymStore
from .staleness import PreRunGate
from .timers import AsyncioTimer, Clock, ScheduledTask, Timer
from .update_applier import GymUpdatePipeline


class AutoUpdateScheduler:
    """Runs the enrichment cycle at a fixed time of day every N days.

    At most one cycle runs at a time, whether triggered by the timer or
    manually; a trigger that arrives while a cycle is running is skipped.
    After every cycle, successful or not, the next run is recomputed and
    the timer re-armed, so a failing cycle never stops the schedule.
    """

    def __init__(
        self,
        store: GymStore,
        config: Optional[ScheduleConfig] = None,
        gate: Optional[PreRunGate] = None,
        pipeline: Optional[GymUpdatePipeline] = None,
        timer: Optional[Timer] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize the scheduler.

        Args:
            store: Gym store opened once per cycle
            config: Schedule configuration. Defaults to ScheduleConfig()
            gate: Pre-run staleness gate
            pipeline: Search/merge/apply pipeline
            timer: Timer arming the next run. Defaults to an asyncio timer
            clock: Wall-clock source
        """
        self.store = store
        self.config = config or ScheduleConfig()
        self.gate = gate or PreRunGate()
        self.pipeline = pipeline or GymUpdatePipeline()
        self.clock = clock or Clock()
        self.timer = timer or AsyncioTimer(self.clock)

        self.next_run_at: Optional[datetime] = None
        self.is_running = False
        self.last_stats: Optional[UpdateCycleStats] = None
        self._task: Optional[ScheduledTask] = None
        self._active = False
        self._last_slot: Optional[datetime] = None

    @property
    def is_armed(self) -> bool:
        """Whether a future run is currently scheduled."""
        return self._task is not None and not self._task.cancelled

    def calculate_next_run_time(self, now: Optional[datetime] = None) -> datetime:
        """Today at the trigger time, or ``interval_days`` later if that has passed.

        Args:
            now: Reference time. Defaults to the clock's current time

        Returns:
            Next run time, strictly after ``now``
        """
        now = now or self.clock.now()
        next_run = now.replace(
            hour=self.config.trigger_hour,
            minute=self.config.trigger_minute,
            second=0,
            microsecond=0,
        )
        if next_run <= now:
            next_run += timedelta(days=self.config.interval_days)
        return next_run

    def _is_due(self, now: datetime) -> bool:
        # Starting inside the trigger minute would otherwise skip to the next interval.
        return now.hour == self.config.trigger_hour and now.minute == self.config.trigger_minute

    def start(self) -> None:
        """Arm the scheduler."""
        if self.is_armed:
            logger.info("Scheduler is already running")
            return

        if not self.config.enabled:
            logger.info("Scheduler is disabled")
            return

        logger.info(
            f"Starting auto-update scheduler for {self.config.strategy.value} at "
            f"{self.config.schedule_label} every {self.config.interval_days} days"
        )
        self._active = True

        now = self.clock.now()
        if self._is_due(now):
            logger.info("Execution time has arrived, running immediately")
            self._arm(now)
        else:
            self._schedule_next_run()

    def stop(self) -> None:
        """Cancel the pending run; an in-flight cycle is left alone."""
        self._active = False
        if self.is_armed:
            self._task.cancel()
            logger.info("Scheduler stopped")

    def restart(self) -> None:
        """Stop and start again, picking up the current configuration."""
        self.stop()
        self.start()

    def update_config(self, partial: Union[Dict[str, Any], BaseModel]) -> ScheduleConfig:
        """Merge configuration changes, ignoring invalid fields.

        Args:
            partial: Fields to change; None values are ignored

        Returns:
            The resulting configuration
        """
        if isinstance(partial, BaseModel):
            partial = partial.model_dump(exclude_none=True)

        merged = self.config.model_dump()
        for field, value in partial.items():
            if value is None:
                continue
            if field not in ScheduleConfig.model_fields:
                logger.warning(f"Ignoring unknown scheduler setting '{field}'")
                continue
            try:
                ScheduleConfig(**{**merged, field: value})
            except ValidationError:
                logger.warning(f"Ignoring invalid scheduler setting {field}={value!r}")
                continue
            merged[field] = value

        self.config = ScheduleConfig(**merged)
        logger.info("Scheduler configuration updated")

        if self.is_armed:
            self.restart()
        return self.config

    def status(self) -> SchedulerStatus:
        """Get the current scheduler status."""
        return SchedulerStatus(
            enabled=self.config.enabled,
            strategy=self.config.strategy,
            next_run=self.next_run_at if self.is_armed else None,
            is_running=self.is_running,
            schedule=self.config.schedule_label,
            interval_days=self.config.interval_days,
        )

    async def run_manual_update(
        self, strategy: Optional[UpdateStrategy] = None
    ) -> Optional[UpdateCycleStats]:
        """Run one cycle now, optionally with a different strategy.

        Args:
            strategy: Strategy for this run only

        Returns:
            Cycle statistics, or None if the cycle was skipped or failed
        """
        strategy_to_use = UpdateStrategy(strategy) if strategy else self.config.strategy
        logger.info(f"Manual {strategy_to_use.value} update requested")

        original = self.config.strategy
        self.config.strategy = strategy_to_use
        try:
            return await self.execute_update()
        finally:
            # Leave a strategy changed through update_config during the run in place.
            if self.config.strategy == strategy_to_use:
                self.config.strategy = original

    async def execute_update(self) -> Optional[UpdateCycleStats]:
        """Run one full cycle under the mutual-exclusion guard.

        Returns:
            Cycle statistics, or None if the cycle was skipped or failed
        """
        if self.is_running:
            logger.warning("Update is already running, skipping")
            return None

        self.is_running = True
        started = self.clock.now()
        strategy = self.config.strategy
        logger.info(f"Starting {strategy.value} update")

        try:
            async with self.store.session() as repository:
                gyms = await repository.find_all()

                decision = await self.gate.check(gyms)
                await self.gate.log_statistics(gyms)
                if not decision.should_run_update:
                    return None

                stats = await self.pipeline.run(repository, gyms, strategy)

                logger.info("Checking gym data after update")
                await self.gate.log_statistics(await repository.find_all())

            self.last_stats = stats
            logger.info(
                f"{strategy.value} update completed successfully in {self._elapsed_ms(started)}ms"
            )
            return stats

        except Exception as e:
            logger.error(
                f"Error during {strategy.value} update after {self._elapsed_ms(started)}ms: {str(e)}"
            )
            return None

        finally:
            self.is_running = False
            self._schedule_next_run()

    async def _on_timer(self) -> None:
        # The loop timer runs on the monotonic clock and may fire just before
        # the wall-clock slot; the slot itself counts as already taken.
        self._last_slot = self._task.when if self._task else self.clock.now()
        self.next_run_at = self.calculate_next_run_time(self._reference_time())
        await self.execute_update()

    def _reference_time(self) -> datetime:
        now = self.clock.now()
        if self._last_slot is not None and self._last_slot > now:
            return self._last_slot
        return now

    def _elapsed_ms(self, started: datetime) -> int:
        return int((self.clock.now() - started).total_seconds() * 1000)

    def _arm(self, when: datetime) -> None:
        self.next_run_at = when
        if self._task is None:
            self._task = self.timer.schedule(when, self._on_timer)
        else:
            self._task.reschedule(when)

    def _schedule_next_run(self) -> None:
        next_run = self.calculate_next_run_time(self._reference_time())
        self.next_run_at = next_run
        if not self._active:
            return

        self._arm(next_run)
        delay = next_run - self.clock.now()
        hours, remainder = divmod(int(delay.total_seconds()), 3600)
        logger.info(
            f"Next update scheduled for {next_run:%Y-%m-%d %H:%M} "
            f"(in {delay.days} days, {hours % 24} hours, {remainder // 60} minutes)"
        )
