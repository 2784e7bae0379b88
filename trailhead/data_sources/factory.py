"""Factory helpers for wiring provider clients at startup."""

from __future__ import annotations

from dataclasses import dataclass

from trailhead import config
from trailhead.data_sources.base import (
    CallableRecreationDataSource,
    GeocodingProvider,
    ParksProvider,
    RecreationProvider,
    WeatherProvider,
)
from trailhead.data_sources.http_session import build_session
from trailhead.data_sources.nominatim_client import NominatimClient
from trailhead.data_sources.nps_client import NpsClient
from trailhead.data_sources.ridb_client import RidbClient
from trailhead.data_sources.weather_client import WeatherApiClient
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "live"


@dataclass
class Providers:
    """The four provider collaborators handed to the services."""
    geocoder: GeocodingProvider
    parks: ParksProvider
    weather: WeatherProvider
    recreation: RecreationProvider


def build_providers(settings: config.Settings | None = None) -> Providers:
    """Instantiate the configured providers; no network traffic happens here."""
    settings = settings or config.settings
    source = (settings.provider_source or DEFAULT_SOURCE_NAME).lower()

    if source == "live":
        session = build_session(retries=settings.http_retries, backoff_factor=settings.http_backoff_factor)
        timeout = settings.http_timeout_seconds

        nps = NpsClient(api_key=settings.nps_api_key, base_url=settings.nps_base_url, session=session, timeout=timeout)
        ridb = RidbClient(api_key=settings.ridb_api_key, base_url=settings.ridb_base_url, session=session, timeout=timeout)
        if not settings.weather_api_key:
            logger.warning("No weather API key configured; weather lookups will fail")
        if not settings.ridb_api_key:
            logger.warning("No Recreation.gov API key configured; facility lookups will fail")

        logger.info("Using live NPS, WeatherAPI, Recreation.gov and Nominatim providers")
        return Providers(
            geocoder=NominatimClient(
                base_url=settings.nominatim_base_url,
                user_agent=settings.nominatim_user_agent,
                session=session,
                timeout=timeout,
            ),
            parks=nps,
            weather=WeatherApiClient(
                api_key=settings.weather_api_key,
                base_url=settings.weather_base_url,
                session=session,
                timeout=timeout,
            ),
            # Recreation.gov has no trail catalogue; trails come from NPS "things to do".
            recreation=CallableRecreationDataSource(
                facilities_by_location=ridb.get_facilities_by_location,
                facilities_by_activity=ridb.get_facilities_by_activity,
                trails_by_park=nps.get_trails_by_park,
                rec_areas_by_state=ridb.get_rec_areas_by_state,
            ),
        )

    raise ValueError(f"Unknown provider source '{source}'")
