"""Request models for the scheduler control API."""
from typing import Any, Optional

from pydantic import BaseModel, Field

from .schedule import UpdateStrategy


class ScheduleConfigUpdate(BaseModel):
    """Partial schedule configuration.

    Values are accepted as sent. Validation is left to the scheduler, which
    ignores a wrongly typed or out-of-range field instead of rejecting the
    whole update.
    """

    trigger_hour: Optional[Any] = Field(None, description="Execution hour (0-23)")
    trigger_minute: Optional[Any] = Field(None, description="Execution minute (0-59)")
    strategy: Optional[Any] = Field(None, description="Update strategy name")
    enabled: Optional[Any] = Field(None, description="Whether the schedule is active")
    interval_days: Optional[Any] = Field(None, description="Days between runs (>= 1)")

    class Config:
        json_schema_extra = {
            "example": {"trigger_hour": 4, "trigger_minute": 30, "strategy": "multisource"}
        }


class StartSchedulerRequest(ScheduleConfigUpdate):
    """Configuration overrides applied when (re)initializing the scheduler."""


class ManualUpdateRequest(BaseModel):
    """Request model for an out-of-band update cycle."""

    strategy: Optional[UpdateStrategy] = Field(
        None, description="Strategy to use for this run only"
    )
