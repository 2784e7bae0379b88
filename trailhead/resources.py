"""Read-only JSON views of raw provider data, addressed by path parameters."""

from fastapi import APIRouter, Depends

from .api import get_providers
from .data_sources import Providers
from .errors import ParkNotFound
from .planning_service import park_events_in_window
from .relevance import DEDICATED_SEARCH_WINDOW_DAYS, event_window

router = APIRouter(prefix="/resources")


@router.get("/parks/{park_code}")
def park_resource(park_code: str, providers: Providers = Depends(get_providers)):
    park = providers.parks.get_park_by_id(park_code)
    if park is None:
        raise ParkNotFound(park_code)
    return park


@router.get("/activities")
def activities_resource(providers: Providers = Depends(get_providers)):
    return providers.parks.get_activities()


@router.get("/activities/{activity}/parks")
def parks_by_activity_resource(activity: str, providers: Providers = Depends(get_providers)):
    return providers.parks.get_parks_by_activity(activity)


@router.get("/parks/{park_code}/alerts")
def alerts_resource(park_code: str, providers: Providers = Depends(get_providers)):
    return providers.parks.get_alerts_by_park(park_code)


@router.get("/parks/{park_code}/events")
def events_resource(park_code: str, providers: Providers = Depends(get_providers)):
    """Events running at any point in the next thirty days."""
    window = event_window(DEDICATED_SEARCH_WINDOW_DAYS)
    events = providers.parks.get_events_by_park(park_code, window.start_date, window.end_date)
    return park_events_in_window(park_code, events, window)


@router.get("/parks/{park_code}/campgrounds")
def campgrounds_resource(park_code: str, providers: Providers = Depends(get_providers)):
    return providers.parks.get_campgrounds_by_park(park_code)


@router.get("/facilities/activity/{activity_id}")
def facilities_resource(activity_id: int, providers: Providers = Depends(get_providers)):
    return providers.recreation.get_facilities_by_activity(activity_id)


@router.get("/rec-areas/state/{state_code}")
def rec_areas_resource(state_code: str, providers: Providers = Depends(get_providers)):
    return providers.recreation.get_rec_areas_by_state(state_code)


@router.get("/weather/{location}")
def forecast_resource(location: str, providers: Providers = Depends(get_providers)):
    return providers.weather.get_7day_forecast_by_location(location)


@router.get("/weather/{location}/detailed")
def detailed_forecast_resource(location: str, providers: Providers = Depends(get_providers)):
    return providers.weather.get_detailed_forecast(location)


@router.get("/weather/{location}/alerts")
def weather_alerts_resource(location: str, providers: Providers = Depends(get_providers)):
    return providers.weather.get_weather_alerts(location)


@router.get("/weather/{location}/air-quality")
def air_quality_resource(location: str, providers: Providers = Depends(get_providers)):
    return providers.weather.get_air_quality(location)
