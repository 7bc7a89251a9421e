"""Data models for the application."""
from .gym import AmenityFlags, GymRecord, SearchCandidate
from .requests import ManualUpdateRequest, ScheduleConfigUpdate, StartSchedulerRequest
from .responses import ManualUpdateResponse, MessageResponse
from .schedule import (
    PreRunDecision,
    ScheduleConfig,
    SchedulerStatus,
    UpdateCycleStats,
    UpdateStrategy,
)

__all__ = [
    "AmenityFlags",
    "GymRecord",
    "SearchCandidate",
    "ManualUpdateRequest",
    "ScheduleConfigUpdate",
    "StartSchedulerRequest",
    "ManualUpdateResponse",
    "MessageResponse",
    "PreRunDecision",
    "ScheduleConfig",
    "SchedulerStatus",
    "UpdateCycleStats",
    "UpdateStrategy",
]
