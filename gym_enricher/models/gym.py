"""Gym entity and search candidate models."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GymRecord(BaseModel):
    """A persisted gym, as held by the gym store."""

    id: int
    name: str
    address: str = ""
    phone: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    facilities: Optional[str] = None
    open_hour: Optional[str] = None
    is_24_hours: bool = False
    has_gx: bool = False
    has_pt: bool = False
    has_group_pt: bool = False
    has_parking: bool = False
    has_shower: bool = False
    updated_at: Optional[datetime] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class AmenityFlags(BaseModel):
    """Amenity information inferred from a provider's descriptive text."""

    model_config = ConfigDict(frozen=True)

    has_pt: bool = False
    has_gx: bool = False
    has_group_pt: bool = False
    has_parking: bool = False
    has_shower: bool = False
    is_24_hours: bool = False
    open_hour: str = "운영시간 정보 없음"


class SearchCandidate(BaseModel):
    """One externally sourced guess at a gym's location.

    Candidates live only for the duration of a single gym's resolution and are
    never persisted directly. Confidence is fixed by the source type.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    address: str
    phone: Optional[str] = None
    latitude: float
    longitude: float
    source: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    amenities: Optional[AmenityFlags] = None

    @property
    def dedup_key(self) -> tuple[str, str]:
        """Exact ``(name, address)`` pair used to collapse duplicates."""
        return (self.name, self.address)
