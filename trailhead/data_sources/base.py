"""Interfaces and helpers for the parks, weather, recreation and geocoding providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol

from trailhead.data_sources.records import (
    Activity,
    AirQuality,
    Alert,
    Campground,
    Event,
    Facility,
    ForecastDay,
    Park,
    RecArea,
    Trail,
    WeatherAlert,
)
from trailhead.domain import TrailFilters


class GeocodingProvider(Protocol):
    """Anything that can turn free text into raw location candidates."""

    def search(self, query: str) -> List[Dict[str, Any]]:
        """Return candidates, best first; each has string ``lat``/``lon`` and ``display_name``."""
        ...


class ParksProvider(Protocol):
    """Interface for the parks-and-sites directory."""

    def get_park_by_id(self, park_code: str) -> Optional[Park]:
        """Return the park for a code, or None when no park matches."""
        ...

    def search_parks(
        self,
        q: str | None = None,
        state_code: str | None = None,
        limit: int = 10,
        start: int = 0,
    ) -> List[Park]:
        """Combined text/state search with native pagination."""
        ...

    def get_parks_by_state(self, state_code: str) -> List[Park]:
        """Return every park in a state."""
        ...

    def get_parks_by_activity(self, activity: str) -> List[Park]:
        """Return every park offering an activity; no native pagination."""
        ...

    def get_parks(self, limit: int = 10, start: int = 0) -> List[Park]:
        """Unfiltered listing with native pagination."""
        ...

    def search_parks_by_location(self, latitude: float, longitude: float, max_count: int = 5) -> List[Park]:
        """Return up to ``max_count`` parks nearest to a point."""
        ...

    def get_alerts_by_park(self, park_code: str) -> List[Alert]:
        """Return current alerts for a park."""
        ...

    def get_events_by_park(self, park_code: str, start_date: str, end_date: str) -> List[Event]:
        """Return events between two ``YYYY-MM-DD`` dates."""
        ...

    def get_campgrounds_by_park(self, park_code: str) -> List[Campground]:
        """Return every campground in a park."""
        ...

    def get_activities(self) -> List[Activity]:
        """Return the activity catalogue."""
        ...


class WeatherProvider(Protocol):
    """Interface for the forecast provider."""

    def get_7day_forecast_by_location(self, location: str) -> List[ForecastDay]:
        """Daily forecast for a place name, without rain chance."""
        ...

    def get_7day_forecast_by_coords(self, latitude: float, longitude: float) -> List[ForecastDay]:
        """Daily forecast for a point, without rain chance."""
        ...

    def get_detailed_forecast(self, location: str) -> List[ForecastDay]:
        """Daily forecast for a place name including ``chance_of_rain``."""
        ...

    def get_weather_alerts(self, location: str) -> List[WeatherAlert]:
        """Active weather alerts for a place name."""
        ...

    def get_air_quality(self, location: str) -> AirQuality:
        """Current air quality for a place name."""
        ...


class RecreationProvider(Protocol):
    """Interface for the recreation-facility directory."""

    def get_facilities_by_location(self, latitude: float, longitude: float, radius_miles: float) -> List[Facility]:
        """Facilities within ``radius_miles`` of a point."""
        ...

    def get_facilities_by_activity(self, activity_id: int) -> List[Facility]:
        """Facilities offering a recreation activity id."""
        ...

    def get_trails_by_park(self, park_code: str, filters: TrailFilters | None = None) -> List[Trail]:
        """Trails inside a park, optionally filtered."""
        ...

    def get_rec_areas_by_state(self, state_code: str) -> List[RecArea]:
        """Recreation areas in a state."""
        ...


@dataclass
class CallableRecreationDataSource(RecreationProvider):
    """Wrap four callables so facilities and trails can come from different backends."""

    facilities_by_location: Callable[..., List[Facility]]
    facilities_by_activity: Callable[..., List[Facility]]
    trails_by_park: Callable[..., List[Trail]]
    rec_areas_by_state: Callable[..., List[RecArea]]

    def get_facilities_by_location(self, *args, **kwargs) -> List[Facility]:
        """Delegate to the configured facilities-by-location callable."""
        return self.facilities_by_location(*args, **kwargs)

    def get_facilities_by_activity(self, *args, **kwargs) -> List[Facility]:
        """Delegate to the configured facilities-by-activity callable."""
        return self.facilities_by_activity(*args, **kwargs)

    def get_trails_by_park(self, *args, **kwargs) -> List[Trail]:
        """Delegate to the configured trails callable."""
        return self.trails_by_park(*args, **kwargs)

    def get_rec_areas_by_state(self, *args, **kwargs) -> List[RecArea]:
        """Delegate to the configured recreation-area callable."""
        return self.rec_areas_by_state(*args, **kwargs)
