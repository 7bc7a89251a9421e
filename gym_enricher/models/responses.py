"""Response models for the scheduler control API."""
from typing import Optional

from pydantic import BaseModel, Field

from .schedule import UpdateCycleStats


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class ManualUpdateResponse(BaseModel):
    """Result of a manual update request."""

    message: str = Field(..., description="Human-readable message")
    stats: Optional[UpdateCycleStats] = Field(
        None, description="Statistics of the last completed cycle, if any"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Manual enhanced update finished",
                "stats": {
                    "total": 3,
                    "success_count": 2,
                    "failure_count": 1,
                    "failed_names": ["파워짐 강남점"],
                    "success_rate": 66.7,
                },
            }
        }
