"""Application container owning the scheduler and its collaborators."""
from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel

from .config import Settings, settings as default_settings
from .exceptions import SchedulerNotInitializedError
from .models import ScheduleConfig, SchedulerStatus, UpdateCycleStats, UpdateStrategy
from .services import AutoUpdateScheduler, GymStore, JsonGymStore
from .utils.logger import logger

SchedulerFactory = Callable[[GymStore, ScheduleConfig], AutoUpdateScheduler]


def _default_scheduler_factory(store: GymStore, config: ScheduleConfig) -> AutoUpdateScheduler:
    return AutoUpdateScheduler(store=store, config=config)


class AppContainer:
    """Holds the single scheduler instance and exposes the control API."""

    def __init__(
        self,
        app_settings: Optional[Settings] = None,
        store: Optional[GymStore] = None,
        scheduler_factory: SchedulerFactory = _default_scheduler_factory,
    ):
        self.settings = app_settings or default_settings
        self._store = store
        self.scheduler_factory = scheduler_factory
        self.scheduler: Optional[AutoUpdateScheduler] = None

    @property
    def store(self) -> GymStore:
        """Gym store, opened on first use."""
        if self._store is None:
            self._store = JsonGymStore(self.settings.store_path)
        return self._store

    def start(
        self, overrides: Optional[Union[Dict[str, Any], BaseModel]] = None
    ) -> AutoUpdateScheduler:
        """Replace any existing scheduler with a fresh one and start it.

        Args:
            overrides: Configuration applied on top of the environment settings

        Returns:
            The new scheduler
        """
        if self.scheduler:
            self.scheduler.stop()

        scheduler = self.scheduler_factory(self.store, self.settings.schedule_config())
        if overrides:
            scheduler.update_config(overrides)
        scheduler.start()
        self.scheduler = scheduler
        return scheduler

    def stop(self) -> None:
        """Stop and discard the scheduler."""
        if self.scheduler:
            self.scheduler.stop()
            self.scheduler = None

    def status(self) -> Optional[SchedulerStatus]:
        """Get the scheduler status, or None if no scheduler exists."""
        return self.scheduler.status() if self.scheduler else None

    async def manual_update(
        self, strategy: Optional[UpdateStrategy] = None
    ) -> Optional[UpdateCycleStats]:
        """Run one cycle now.

        Raises:
            SchedulerNotInitializedError: If no scheduler has been started
        """
        if not self.scheduler:
            raise SchedulerNotInitializedError()
        return await self.scheduler.run_manual_update(strategy)

    def update_config(
        self, partial: Union[Dict[str, Any], BaseModel]
    ) -> Optional[ScheduleConfig]:
        """Apply configuration changes to the running scheduler, if any."""
        if not self.scheduler:
            return None
        return self.scheduler.update_config(partial)

    def auto_initialize(self) -> None:
        """Start the scheduler from environment settings at application startup."""
        try:
            self.start()
            logger.info("Auto-update scheduler initialized from environment variables")
        except Exception as e:
            logger.error(f"Failed to initialize auto-update scheduler: {str(e)}")


# Global container instance
container = AppContainer()
