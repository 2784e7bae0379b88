"""Domain vocabulary and strict schemas for park discovery and visit planning.

This module defines the stable contract between the provider clients, the
deterministic services, and the HTTP layer: enums, request criteria, and the
small derived values (coordinates, geocoding outcomes, scored days). Provider
records live in ``trailhead.data_sources.records``. No interpretation logic
lives here.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling."""

    model_config = ConfigDict(extra="forbid")


class Coordinates(_StrictBaseModel):
    """WGS84 point; immutable once built."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class GeocodingResult(_StrictBaseModel):
    """Best geocoder match for a free-text location."""
    coordinates: Coordinates
    display_name: str
    confidence: float | None = None


class GeocodeStatus(str, Enum):
    """Outcome kinds for a geocoding lookup."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSPORT_ERROR = "transport_error"


class GeocodeOutcome(_StrictBaseModel):
    """Tagged result of resolving a location.

    ``NOT_FOUND`` means "try a different query"; ``TRANSPORT_ERROR`` means the
    provider could not be read and a retry may succeed.
    """
    query: str
    status: GeocodeStatus
    result: GeocodingResult | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _result_matches_status(self) -> "GeocodeOutcome":
        if (self.status == GeocodeStatus.FOUND) != (self.result is not None):
            raise ValueError("result must be present exactly when status is 'found'")
        return self

    @classmethod
    def found(cls, query: str, result: GeocodingResult) -> "GeocodeOutcome":
        return cls(query=query, status=GeocodeStatus.FOUND, result=result)

    @classmethod
    def not_found(cls, query: str) -> "GeocodeOutcome":
        return cls(query=query, status=GeocodeStatus.NOT_FOUND)

    @classmethod
    def transport_error(cls, query: str, error: str) -> "GeocodeOutcome":
        return cls(query=query, status=GeocodeStatus.TRANSPORT_ERROR, error=error)

    @property
    def is_found(self) -> bool:
        return self.status == GeocodeStatus.FOUND


class ScoredDay(_StrictBaseModel):
    """Visit suitability for one forecast day."""
    date: str
    score: int = Field(ge=0, le=8)
    conditions: str


class QueryMode(str, Enum):
    """Which provider query path answers a park search."""
    TEXT_OR_STATE = "text_or_state"
    ACTIVITY = "activity"
    LISTING = "listing"


class AlertSortKey(str, Enum):
    """Supported orderings for park alerts."""
    DATE = "date"
    TITLE = "title"
    CATEGORY = "category"


class Difficulty(str, Enum):
    """Trail difficulty levels accepted as a filter."""
    EASY = "easy"
    MODERATE = "moderate"
    STRENUOUS = "strenuous"


class ParkCriteria(_StrictBaseModel):
    """Optional search fields for the park finder; see ``park_search``."""
    q: str | None = None
    state_code: str | None = None
    activity: str | None = None
    limit: int = Field(default=10, ge=1)
    start: int = Field(default=0, ge=0)


class TrailFilters(_StrictBaseModel):
    """Filters applied to a park's trail listing."""
    trail_id: str | None = None
    difficulty: Difficulty | None = None
    min_length: float | None = Field(default=None, ge=0.0)
    max_length: float | None = Field(default=None, ge=0.0)


class DateWindow(_StrictBaseModel):
    """Inclusive calendar window, both ends as ``YYYY-MM-DD``."""
    start_date: str
    end_date: str
