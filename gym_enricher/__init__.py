"""Scheduled multi-source enrichment of gym location data."""
from .config import settings
from .models import (
    GymRecord,
    ScheduleConfig,
    SchedulerStatus,
    SearchCandidate,
    UpdateCycleStats,
    UpdateStrategy,
)

__version__ = "1.0.0"

__all__ = [
    "settings",
    "GymRecord",
    "ScheduleConfig",
    "SchedulerStatus",
    "SearchCandidate",
    "UpdateCycleStats",
    "UpdateStrategy",
]
