"""Helpers for fetching daily forecasts, weather alerts and air quality from WeatherAPI.com."""
from __future__ import annotations

from typing import Any, Dict, List

import requests

from trailhead.data_sources.http_session import build_session, fetch_json, reading_payload, to_float
from trailhead.data_sources.records import AirQuality, ForecastDay, WeatherAlert
from trailhead.errors import ProviderFailure
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="weather_client")

WEATHER_API_URL = "https://api.weatherapi.com/v1"
PROVIDER_NAME = "WeatherAPI"
FORECAST_DAYS = 7


def _forecast_days_from_payload(data: Dict[str, Any], *, include_rain: bool) -> List[ForecastDay]:
    """Turn ``forecast.forecastday`` into chronological ``ForecastDay`` records."""
    out: List[ForecastDay] = []
    for entry in data["forecast"]["forecastday"]:
        day = entry["day"]
        out.append(
            ForecastDay(
                date=entry["date"],
                min_temp_f=float(day["mintemp_f"]),
                max_temp_f=float(day["maxtemp_f"]),
                condition=day["condition"]["text"],
                chance_of_rain=to_float(day.get("daily_chance_of_rain")) if include_rain else None,
            )
        )
    return out


def _alerts_from_payload(data: Dict[str, Any]) -> List[WeatherAlert]:
    alerts = (data.get("alerts") or {}).get("alert") or []
    return [
        WeatherAlert(
            headline=a.get("headline") or a.get("event") or "Weather alert",
            event=a.get("event") or None,
            severity=a.get("severity") or None,
            areas=a.get("areas") or None,
            effective=a.get("effective") or None,
            expires=a.get("expires") or None,
            description=a.get("desc") or None,
        )
        for a in alerts
    ]


def _air_quality_from_payload(location: str, data: Dict[str, Any]) -> AirQuality:
    aq = data["current"].get("air_quality") or {}
    epa = aq.get("us-epa-index")
    return AirQuality(
        location=location,
        us_epa_index=int(epa) if epa is not None else None,
        pm2_5=to_float(aq.get("pm2_5")),
        pm10=to_float(aq.get("pm10")),
        ozone=to_float(aq.get("o3")),
        nitrogen_dioxide=to_float(aq.get("no2")),
        carbon_monoxide=to_float(aq.get("co")),
    )


class WeatherApiClient:
    """Weather provider backed by ``api.weatherapi.com``."""

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str = WEATHER_API_URL,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.session = session or build_session()
        self.timeout = timeout

    def _get(self, path: str, lookup: str, **params: Any) -> Dict[str, Any]:
        if not self.api_key:
            raise ProviderFailure(PROVIDER_NAME, lookup, "no weather API key configured")
        params["key"] = self.api_key
        data = fetch_json(
            self.session,
            f"{self.base_url}/{path}",
            provider=PROVIDER_NAME,
            lookup=lookup,
            params=params,
            timeout=self.timeout,
        )
        if not isinstance(data, dict):
            raise ProviderFailure(PROVIDER_NAME, lookup, "expected a JSON object")
        return data

    def _forecast(self, query: str, lookup: str, *, include_rain: bool) -> List[ForecastDay]:
        data = self._get("forecast.json", lookup, q=query, days=FORECAST_DAYS, aqi="no", alerts="no")
        with reading_payload(PROVIDER_NAME, lookup, "forecast"):
            days = _forecast_days_from_payload(data, include_rain=include_rain)
        logger.debug("Parsed forecast", extra={"lookup": lookup, "days": len(days)})
        return days

    def get_7day_forecast_by_location(self, location: str) -> List[ForecastDay]:
        return self._forecast(location, f"forecast for location '{location}'", include_rain=False)

    def get_7day_forecast_by_coords(self, latitude: float, longitude: float) -> List[ForecastDay]:
        return self._forecast(
            f"{latitude},{longitude}",
            f"forecast for coordinates {latitude}, {longitude}",
            include_rain=False,
        )

    def get_detailed_forecast(self, location: str) -> List[ForecastDay]:
        return self._forecast(location, f"detailed forecast for location '{location}'", include_rain=True)

    def get_weather_alerts(self, location: str) -> List[WeatherAlert]:
        lookup = f"weather alerts for location '{location}'"
        data = self._get("forecast.json", lookup, q=location, days=1, aqi="no", alerts="yes")
        with reading_payload(PROVIDER_NAME, lookup, "weather alerts"):
            return _alerts_from_payload(data)

    def get_air_quality(self, location: str) -> AirQuality:
        lookup = f"air quality for location '{location}'"
        data = self._get("current.json", lookup, q=location, aqi="yes")
        with reading_payload(PROVIDER_NAME, lookup, "air quality"):
            return _air_quality_from_payload(location, data)
