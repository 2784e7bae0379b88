"""HTTP API for park discovery, recreation search and visit planning."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from .config import settings
from .data_sources import Providers, build_providers
from .domain import AlertSortKey, Difficulty, ParkCriteria, TrailFilters
from .geocoding_resolver import resolve_location
from .park_search import find_parks, parks_by_state
from .planning_service import (
    get_campgrounds,
    get_park_alerts,
    get_park_events,
    get_park_overview,
    get_park_weather,
    get_trail_info,
    get_weather_by_coordinates,
    plan_park_visit,
)
from .recreation_service import DEFAULT_RADIUS_MILES, aggregate_recreation
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="trailhead/api")

PROVIDERS = build_providers(settings)


def get_providers() -> Providers:
    """Current provider set; tests swap ``PROVIDERS`` or override this dependency."""
    return PROVIDERS


router = APIRouter()


@router.get("/parks")
def search_parks(
    q: Optional[str] = Query(default=None, description="Free text search over park names and descriptions"),
    state_code: Optional[str] = Query(default=None, description="Two-letter state code, e.g. CA"),
    activity: Optional[str] = Query(default=None, description="Activity name, e.g. hiking"),
    limit: int = Query(default=10, ge=1),
    start: int = Query(default=0, ge=0),
    providers: Providers = Depends(get_providers),
):
    """Find parks by text/state, by activity, or list them; see ``park_search`` for precedence."""
    criteria = ParkCriteria(q=q, state_code=state_code, activity=activity, limit=limit, start=start)
    return find_parks(criteria, providers.parks)


@router.get("/parks/state/{state_code}")
def search_parks_by_state(state_code: str, providers: Providers = Depends(get_providers)):
    parks = parks_by_state(state_code, providers.parks)
    return {"state_code": state_code, "total": len(parks), "parks": parks}


@router.get("/parks/{park_code}")
def park_overview(
    park_code: str,
    include_basics: bool = True,
    include_alerts: bool = True,
    include_weather: bool = True,
    include_events: bool = True,
    include_camping: bool = True,
    include_images: bool = True,
    providers: Providers = Depends(get_providers),
):
    """Park profile with optional alert, weather, event, camping and image sections."""
    return get_park_overview(
        park_code,
        include_basics=include_basics,
        include_alerts=include_alerts,
        include_weather=include_weather,
        include_events=include_events,
        include_camping=include_camping,
        include_images=include_images,
        parks=providers.parks,
        weather=providers.weather,
    )


@router.get("/parks/{park_code}/alerts")
def park_alerts(
    park_code: str,
    limit: int = Query(default=10, ge=1),
    sort_by: AlertSortKey = AlertSortKey.DATE,
    providers: Providers = Depends(get_providers),
):
    return get_park_alerts(park_code, limit=limit, sort_by=sort_by, parks=providers.parks)


@router.get("/parks/{park_code}/events")
def park_events(
    park_code: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    limit: int = Query(default=10, ge=1),
    providers: Providers = Depends(get_providers),
):
    """Events in a park; without dates the next thirty days are searched."""
    return get_park_events(park_code, start_date=start_date, end_date=end_date, limit=limit, parks=providers.parks)


@router.get("/parks/{park_code}/campgrounds")
def park_campgrounds(
    park_code: str,
    limit: int = Query(default=10, ge=1),
    start: int = Query(default=0, ge=0),
    providers: Providers = Depends(get_providers),
):
    return get_campgrounds(park_code, limit=limit, start=start, parks=providers.parks)


@router.get("/parks/{park_code}/trails")
def park_trails(
    park_code: str,
    trail_id: Optional[str] = None,
    difficulty: Optional[Difficulty] = None,
    min_length: Optional[float] = Query(default=None, ge=0),
    max_length: Optional[float] = Query(default=None, ge=0),
    providers: Providers = Depends(get_providers),
):
    filters = TrailFilters(trail_id=trail_id, difficulty=difficulty, min_length=min_length, max_length=max_length)
    return get_trail_info(park_code, filters, parks=providers.parks, recreation=providers.recreation)


@router.get("/parks/{park_code}/weather")
def park_weather(park_code: str, providers: Providers = Depends(get_providers)):
    return get_park_weather(park_code, parks=providers.parks, weather=providers.weather)


@router.get("/parks/{park_code}/plan")
def park_visit_plan(
    park_code: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    providers: Providers = Depends(get_providers),
):
    """Best days to visit a park, closures and tips; trip overlap when both dates are set."""
    return plan_park_visit(
        park_code,
        start_date=start_date,
        end_date=end_date,
        parks=providers.parks,
        weather=providers.weather,
    )


@router.get("/recreation/nearby")
def nearby_recreation(
    location: str = Query(min_length=1, description="Place name, address or landmark"),
    radius_miles: float = Query(default=DEFAULT_RADIUS_MILES, gt=0),
    activity: Optional[str] = Query(default=None, description="Activity such as camping, hiking or fishing"),
    include_trails: bool = True,
    providers: Providers = Depends(get_providers),
):
    """Parks, facilities and trails around a location; partial provider failures are listed."""
    return aggregate_recreation(
        location,
        radius_miles=radius_miles,
        activity=activity,
        include_trails=include_trails,
        geocoder=providers.geocoder,
        parks=providers.parks,
        recreation=providers.recreation,
        weather=providers.weather,
        max_workers=settings.trail_fanout_workers,
    )


@router.get("/locations/resolve")
def resolve(query: str = Query(min_length=1), providers: Providers = Depends(get_providers)):
    """Geocode a location; the status separates no match from an unreachable geocoder."""
    return resolve_location(query, providers.geocoder)


@router.get("/weather/coordinates")
def weather_by_coordinates(
    latitude: float = Query(ge=-90, le=90),
    longitude: float = Query(ge=-180, le=180),
    providers: Providers = Depends(get_providers),
):
    forecast = get_weather_by_coordinates(latitude, longitude, weather=providers.weather)
    return {"latitude": latitude, "longitude": longitude, "forecast": forecast}


@router.get("/facilities/activity/{activity_id}")
def facilities_by_activity(activity_id: int, providers: Providers = Depends(get_providers)):
    facilities = providers.recreation.get_facilities_by_activity(activity_id)
    return {"activity_id": activity_id, "total": len(facilities), "facilities": facilities}
