"""Provider clients and the interfaces the services depend on."""

from .base import (
    CallableRecreationDataSource,
    GeocodingProvider,
    ParksProvider,
    RecreationProvider,
    WeatherProvider,
)
from .factory import Providers, build_providers
from .nominatim_client import NominatimClient
from .nps_client import NpsClient
from .ridb_client import RidbClient
from .weather_client import WeatherApiClient

__all__ = [
    "build_providers",
    "Providers",
    "GeocodingProvider",
    "ParksProvider",
    "RecreationProvider",
    "WeatherProvider",
    "CallableRecreationDataSource",
    "NominatimClient",
    "NpsClient",
    "RidbClient",
    "WeatherApiClient",
]
