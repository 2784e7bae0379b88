"""Park lookups and visit planning built on the parks and weather providers.

Every operation starts from a park code and raises ``ParkNotFound`` when the
directory has no such park. Provider failures propagate as
``ProviderFailure``; an empty provider answer is an empty list.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

from trailhead.data_sources.base import ParksProvider, RecreationProvider, WeatherProvider
from trailhead.data_sources.records import Alert, Campground, Event, ForecastDay, Image, Park, Trail
from trailhead.domain import AlertSortKey, DateWindow, ScoredDay, TrailFilters
from trailhead.errors import ParkNotFound, ProviderFailure
from trailhead.park_search import paginate
from trailhead.relevance import (
    DEDICATED_SEARCH_WINDOW_DAYS,
    OVERVIEW_WINDOW_DAYS,
    closure_alerts,
    event_window,
    events_in_window,
    forecast_for_trip,
    forecast_overlaps_trip,
    sort_alerts,
)
from trailhead.weather_scoring import recommended_days, score_days
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="planning_service")

OVERVIEW_ALERT_LIMIT = 3
OVERVIEW_EVENT_LIMIT = 5
OVERVIEW_CAMPGROUND_LIMIT = 3
OVERVIEW_IMAGE_LIMIT = 3

GENERIC_TIPS: Tuple[str, ...] = (
    "Check for any entrance reservation requirements",
    "Visit early morning or late afternoon to avoid crowds",
    "Check the official park website for seasonal road closures",
)

PARK_TIPS: Dict[str, Tuple[str, ...]] = {
    "yose": (
        "Yosemite's waterfalls are typically most impressive in spring and early summer",
        "The Tioga Road (Highway 120 through the park) is typically closed November through May",
        "Reservations are required during peak summer months",
    ),
    "grca": (
        "The North Rim is typically open May 15 through October 15",
        "Summer temperatures at the bottom of the canyon can exceed 100°F",
        "Winter brings snow to the rims but mild weather in the canyon",
    ),
}


@dataclass
class TripWeather:
    """How a requested trip lines up with the available forecast."""
    start_date: str
    end_date: str
    overlaps_forecast: bool
    days: List[ForecastDay] = field(default_factory=list)


@dataclass
class VisitPlan:
    park: Park
    closure_alerts: List[Alert]
    forecast: List[ForecastDay]
    scored_days: List[ScoredDay]
    recommended_days: List[ScoredDay]
    tips: List[str]
    trip: Optional[TripWeather] = None


@dataclass
class ParkOverview:
    """Sections of a park profile; a section left out of the request stays None."""
    park: Park
    alerts: Optional[List[Alert]] = None
    forecast: Optional[List[ForecastDay]] = None
    events: Optional[List[Event]] = None
    event_window: Optional[DateWindow] = None
    campgrounds: Optional[List[Campground]] = None
    images: Optional[List[Image]] = None


@dataclass
class AlertListing:
    park_code: str
    park_name: str
    sort_by: AlertSortKey
    total: int
    alerts: List[Alert]


@dataclass
class EventListing:
    park: Park
    window: DateWindow
    total: int
    events: List[Event]


@dataclass
class CampgroundPage:
    park: Park
    total: int
    start: int
    limit: int
    campgrounds: List[Campground]


@dataclass
class TrailListing:
    park_code: str
    park_name: str
    filters: TrailFilters
    trails: List[Trail]


@dataclass
class ParkForecast:
    park: Park
    forecast: List[ForecastDay]


def require_park(park_code: str, parks: ParksProvider) -> Park:
    """Look up a park or raise ``ParkNotFound``."""
    park = parks.get_park_by_id(park_code)
    if park is None:
        logger.info("Unknown park code", extra={"park_code": park_code})
        raise ParkNotFound(park_code)
    return park


def tips_for(park_code: str) -> List[str]:
    return list(PARK_TIPS.get(park_code.lower(), GENERIC_TIPS))


def park_events_in_window(park_code: str, events: List[Event], window: DateWindow) -> List[Event]:
    """Events overlapping ``window``; an unreadable event date is the provider's failure."""
    try:
        return events_in_window(events, window)
    except ValueError as exc:
        raise ProviderFailure("NPS", f"events for park '{park_code}'", f"malformed event date: {exc}") from exc


def plan_park_visit(
    park_code: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    *,
    parks: ParksProvider,
    weather: WeatherProvider,
) -> VisitPlan:
    """Closures, forecast, best days and tips for a park; trip overlap when both dates are given."""
    park = require_park(park_code, parks)
    alerts = parks.get_alerts_by_park(park_code)
    forecast = weather.get_7day_forecast_by_location(park.name)
    detailed = weather.get_detailed_forecast(park.name)

    trip = None
    if start_date and end_date:
        if start_date > end_date:
            raise ValueError("start_date must not be after end_date")
        try:
            overlaps = forecast_overlaps_trip(forecast, start_date, end_date)
            days = forecast_for_trip(forecast, start_date, end_date) if overlaps else []
        except ValueError as exc:
            raise ProviderFailure("WeatherAPI", f"forecast for '{park.name}'", f"malformed forecast date: {exc}") from exc
        trip = TripWeather(
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            overlaps_forecast=overlaps,
            days=days,
        )

    plan = VisitPlan(
        park=park,
        closure_alerts=closure_alerts(alerts),
        forecast=forecast,
        scored_days=score_days(detailed),
        recommended_days=recommended_days(detailed),
        tips=tips_for(park.park_code or park_code),
        trip=trip,
    )
    logger.info(
        "Visit plan built",
        extra={"park_code": park_code, "closures": len(plan.closure_alerts),
               "forecast_days": len(forecast), "trip": trip is not None},
    )
    return plan


def get_park_overview(
    park_code: str,
    include_basics: bool = True,
    include_alerts: bool = True,
    include_weather: bool = True,
    include_events: bool = True,
    include_camping: bool = True,
    include_images: bool = True,
    *,
    parks: ParksProvider,
    weather: WeatherProvider,
    today: Optional[date] = None,
) -> ParkOverview:
    """Profile of a park; each ``include_*`` flag turns one section on.

    ``include_basics`` is informational: the park record is always returned
    because every other section hangs off it.
    """
    park = require_park(park_code, parks)
    overview = ParkOverview(park=park)

    if include_alerts:
        overview.alerts = parks.get_alerts_by_park(park_code)[:OVERVIEW_ALERT_LIMIT]
    if include_weather:
        overview.forecast = weather.get_7day_forecast_by_location(park.name)
    if include_events:
        window = event_window(OVERVIEW_WINDOW_DAYS, today=today)
        events = parks.get_events_by_park(park_code, window.start_date, window.end_date)
        overview.events = park_events_in_window(park_code, events, window)[:OVERVIEW_EVENT_LIMIT]
        overview.event_window = window
    if include_camping:
        overview.campgrounds = parks.get_campgrounds_by_park(park_code)[:OVERVIEW_CAMPGROUND_LIMIT]
    if include_images:
        overview.images = list(park.images[:OVERVIEW_IMAGE_LIMIT])
    return overview


def get_park_alerts(
    park_code: str,
    limit: int = 10,
    sort_by: AlertSortKey = AlertSortKey.DATE,
    *,
    parks: ParksProvider,
) -> AlertListing:
    """Sorted, truncated alerts for a park."""
    if limit < 1:
        raise ValueError("limit must be at least 1")
    park = require_park(park_code, parks)
    alerts = parks.get_alerts_by_park(park_code)
    ordered = sort_alerts(alerts, AlertSortKey(sort_by))
    return AlertListing(
        park_code=park_code,
        park_name=park.name,
        sort_by=AlertSortKey(sort_by),
        total=len(alerts),
        alerts=ordered[:limit],
    )


def get_park_events(
    park_code: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    limit: int = 10,
    *,
    parks: ParksProvider,
    today: Optional[date] = None,
) -> EventListing:
    """Events inside ``[start_date, end_date]``, defaulting to the next thirty days."""
    if limit < 1:
        raise ValueError("limit must be at least 1")
    park = require_park(park_code, parks)
    window = event_window(DEDICATED_SEARCH_WINDOW_DAYS, start=start_date, end=end_date, today=today)
    if window.start_date > window.end_date:
        raise ValueError("start_date must not be after end_date")
    listed = parks.get_events_by_park(park_code, window.start_date, window.end_date)
    events = park_events_in_window(park_code, listed, window)
    return EventListing(park=park, window=window, total=len(events), events=events[:limit])


def get_campgrounds(
    park_code: str,
    limit: int = 10,
    start: int = 0,
    *,
    parks: ParksProvider,
) -> CampgroundPage:
    park = require_park(park_code, parks)
    campgrounds = parks.get_campgrounds_by_park(park_code)
    return CampgroundPage(
        park=park,
        total=len(campgrounds),
        start=start,
        limit=limit,
        campgrounds=paginate(campgrounds, start, limit),
    )


def get_trail_info(
    park_code: str,
    filters: Optional[TrailFilters] = None,
    *,
    parks: ParksProvider,
    recreation: RecreationProvider,
) -> TrailListing:
    """Trails in a park matching ``filters``."""
    filters = filters or TrailFilters()
    park = require_park(park_code, parks)
    trails = recreation.get_trails_by_park(park_code, filters)
    return TrailListing(
        park_code=park_code,
        park_name=park.name,
        filters=filters,
        trails=trails,
    )


def get_park_weather(park_code: str, *, parks: ParksProvider, weather: WeatherProvider) -> ParkForecast:
    park = require_park(park_code, parks)
    return ParkForecast(park=park, forecast=weather.get_7day_forecast_by_location(park.name))


def get_weather_by_coordinates(latitude: float, longitude: float, *, weather: WeatherProvider) -> List[ForecastDay]:
    """Daily forecast for a point."""
    if not -90.0 <= latitude <= 90.0 or not -180.0 <= longitude <= 180.0:
        raise ValueError(f"coordinates out of range: {latitude}, {longitude}")
    return weather.get_7day_forecast_by_coords(latitude, longitude)
