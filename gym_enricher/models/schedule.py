"""Scheduler-related data models."""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class UpdateStrategy(str, Enum):
    """Named variants of the enrichment pipeline."""

    ENHANCED = "enhanced"
    BASIC = "basic"
    MULTISOURCE = "multisource"
    ADVANCED = "advanced"


class ScheduleConfig(BaseModel):
    """When and how the auto-update cycle runs."""

    trigger_hour: int = Field(default=6, ge=0, le=23)
    trigger_minute: int = Field(default=0, ge=0, le=59)
    strategy: UpdateStrategy = UpdateStrategy.ENHANCED
    enabled: bool = True
    interval_days: int = Field(default=3, ge=1)

    @property
    def schedule_label(self) -> str:
        """Trigger time formatted as ``H:MM``."""
        return f"{self.trigger_hour}:{self.trigger_minute:02d}"


class SchedulerStatus(BaseModel):
    """Snapshot of the scheduler returned by the control API."""

    enabled: bool
    strategy: UpdateStrategy
    next_run: Optional[datetime] = None
    is_running: bool
    schedule: str
    interval_days: int


class PreRunDecision(BaseModel):
    """Outcome of the pre-run staleness check."""

    should_run_update: bool
    reason: str


class UpdateCycleStats(BaseModel):
    """Per-cycle counters, logged at the end of every cycle."""

    total: int = 0
    success_count: int = 0
    failure_count: int = 0
    failed_names: List[str] = Field(default_factory=list)

    @computed_field
    @property
    def success_rate(self) -> float:
        """Percentage of gyms updated, rounded to one decimal place."""
        if not self.total:
            return 0.0
        return round(self.success_count / self.total * 100, 1)

    def record_success(self) -> None:
        self.success_count += 1

    def record_failure(self, gym_name: str) -> None:
        self.failure_count += 1
        self.failed_names.append(gym_name)
