"""Find parks, recreation facilities and trails near a free-text location.

Only the geocoding step is a hard dependency. Facilities, nearby parks, the
per-park trail lookups and the weather context are independent: each one that
fails contributes an empty collection and a ``SourceFailure`` entry, and the
rest of the result is still returned.
"""
from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TypeVar

from trailhead.data_sources.base import GeocodingProvider, ParksProvider, RecreationProvider, WeatherProvider
from trailhead.data_sources.records import Facility, ForecastDay, Park, Trail
from trailhead.domain import GeocodingResult
from trailhead.errors import ProviderFailure
from trailhead.geocoding_resolver import require_coordinates
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="recreation_service")

T = TypeVar("T")

DEFAULT_RADIUS_MILES = 50.0
# Small towns return nothing on tight radii, so searches never go below this.
RADIUS_FLOOR_MILES = 25.0
NEARBY_PARK_LIMIT = 5
MAX_LISTED_FACILITIES = 8
MAX_LISTED_TRAILS = 8
DEFAULT_FANOUT_WORKERS = 5


@dataclass
class SourceFailure:
    """A provider lookup that failed while the rest of the aggregation went on."""
    source: str
    message: str


@dataclass
class RecreationResult:
    """Merged, filtered and truncated recreation options around a location."""
    location: str
    resolved: GeocodingResult
    effective_radius_miles: float
    activity: Optional[str]
    parks: List[Park]
    facilities: List[Facility]
    trails: List[Trail]
    facilities_total: int
    trails_total: int
    facilities_remaining: int
    trails_remaining: int
    current_weather: Optional[ForecastDay] = None
    failures: List[SourceFailure] = field(default_factory=list)

    @property
    def found_anything(self) -> bool:
        return bool(self.parks or self.facilities or self.trails)


def effective_radius(radius_miles: float) -> float:
    """Requested radius raised to the floor."""
    return max(float(radius_miles), RADIUS_FLOOR_MILES)


def _matches(term: str, *texts: Optional[str]) -> bool:
    return any(term in (text or "").lower() for text in texts)


def filter_facilities(facilities: Sequence[Facility], activity: Optional[str]) -> List[Facility]:
    """Facilities whose name or description mentions ``activity``."""
    if not activity:
        return list(facilities)
    term = activity.lower()
    return [f for f in facilities if _matches(term, f.name, f.description)]


def filter_trails(trails: Sequence[Trail], activity: Optional[str]) -> List[Trail]:
    """Match the permitted-use list when a trail has one, otherwise name or description."""
    if not activity:
        return list(trails)
    term = activity.lower()
    kept: List[Trail] = []
    for trail in trails:
        if trail.trail_use is not None:
            if any(term in use.lower() for use in trail.trail_use):
                kept.append(trail)
        elif _matches(term, trail.name, trail.description):
            kept.append(trail)
    return kept


def _collect(future: Future, source: str, failures: List[SourceFailure], default: T) -> T:
    """Result of ``future``, or ``default`` after recording a provider failure."""
    try:
        return future.result()
    except ProviderFailure as exc:
        logger.warning("Recreation source failed; continuing without it", extra={"source": source, "error": str(exc)})
        failures.append(SourceFailure(source=source, message=str(exc)))
        return default


def fetch_trails_for_parks(
    nearby_parks: Sequence[Park],
    recreation: RecreationProvider,
    failures: List[SourceFailure],
    *,
    max_workers: int = DEFAULT_FANOUT_WORKERS,
) -> List[Trail]:
    """Fetch every park's trails concurrently and concatenate them in park order."""
    codes = [p.park_code for p in nearby_parks if p.park_code]
    if not codes:
        return []

    trails: List[Trail] = []
    with ThreadPoolExecutor(max_workers=min(len(codes), max(1, max_workers))) as pool:
        futures = [(code, pool.submit(recreation.get_trails_by_park, code)) for code in codes]
        for code, future in futures:
            trails.extend(_collect(future, f"trails:{code}", failures, []))
    return trails


def aggregate_recreation(
    location: str,
    radius_miles: float = DEFAULT_RADIUS_MILES,
    activity: Optional[str] = None,
    include_trails: bool = True,
    *,
    geocoder: GeocodingProvider,
    parks: ParksProvider,
    recreation: RecreationProvider,
    weather: WeatherProvider | None = None,
    max_workers: int = DEFAULT_FANOUT_WORKERS,
) -> RecreationResult:
    """
    Gather recreation options around ``location``.

    Raises ``LocationNotFound`` or ``ProviderFailure`` when the location cannot
    be resolved; every later step tolerates provider failures.
    """
    resolved = require_coordinates(location, geocoder)
    lat = resolved.coordinates.latitude
    lon = resolved.coordinates.longitude
    radius = effective_radius(radius_miles)

    logger.info(
        "Aggregating recreation",
        extra={"location": location, "latitude": lat, "longitude": lon,
               "radius_miles": radius, "activity": activity, "include_trails": include_trails},
    )

    failures: List[SourceFailure] = []
    with ThreadPoolExecutor(max_workers=3) as pool:
        facilities_future = pool.submit(recreation.get_facilities_by_location, lat, lon, radius)
        parks_future = pool.submit(parks.search_parks_by_location, lat, lon, NEARBY_PARK_LIMIT)
        weather_future = pool.submit(weather.get_7day_forecast_by_location, location) if weather else None

        facilities = _collect(facilities_future, "facilities", failures, [])
        nearby_parks = _collect(parks_future, "parks", failures, [])[:NEARBY_PARK_LIMIT]
        forecast = _collect(weather_future, "weather", failures, []) if weather_future else []

    trails: List[Trail] = []
    if include_trails:
        trails = fetch_trails_for_parks(nearby_parks, recreation, failures, max_workers=max_workers)

    matched_facilities = filter_facilities(facilities, activity)
    matched_trails = filter_trails(trails, activity)

    result = RecreationResult(
        location=location,
        resolved=resolved,
        effective_radius_miles=radius,
        activity=activity,
        parks=list(nearby_parks),
        facilities=matched_facilities[:MAX_LISTED_FACILITIES],
        trails=matched_trails[:MAX_LISTED_TRAILS],
        facilities_total=len(matched_facilities),
        trails_total=len(matched_trails),
        facilities_remaining=max(0, len(matched_facilities) - MAX_LISTED_FACILITIES),
        trails_remaining=max(0, len(matched_trails) - MAX_LISTED_TRAILS),
        current_weather=forecast[0] if forecast else None,
        failures=failures,
    )
    logger.info(
        "Recreation aggregated",
        extra={"parks": len(result.parks), "facilities_total": result.facilities_total,
               "trails_total": result.trails_total, "failures": len(failures)},
    )
    return result
