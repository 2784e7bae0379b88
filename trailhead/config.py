"""Application configuration pulled from environment variables via pydantic."""
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="config")


class Settings(BaseSettings):
    """Environment-driven configuration for the trailhead-insights service."""
    model_config = SettingsConfigDict(env_prefix="TRAILHEAD_", extra="ignore")

    provider_source: str = "live"  # options: live
    nps_api_key: str = "DEMO_KEY"
    nps_base_url: str = "https://developer.nps.gov/api/v1"
    weather_api_key: str | None = None
    weather_base_url: str = "https://api.weatherapi.com/v1"
    ridb_api_key: str | None = None
    ridb_base_url: str = "https://ridb.recreation.gov/api/v1"
    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    nominatim_user_agent: str = "NationalParksInfo/1.0"
    http_timeout_seconds: float = 10.0
    http_retries: int = 2
    http_backoff_factor: float = 0.2
    trail_fanout_workers: int = 5
    log_level: str = "INFO"

    @field_validator("nps_base_url", "weather_base_url", "ridb_base_url", "nominatim_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize base URLs to avoid double slashes."""
        return str(v).rstrip("/")

    @field_validator("trail_fanout_workers", mode="after")
    @classmethod
    def at_least_one_worker(cls, v: int) -> int:
        """A fan-out pool needs at least one worker."""
        return max(1, int(v))


settings = Settings()


if __name__ == "__main__":
    logger.setLevel("DEBUG")
    logger.debug(f"Loaded settings: {settings.model_dump_json(indent=4, exclude={'nps_api_key', 'weather_api_key', 'ridb_api_key'})}")
