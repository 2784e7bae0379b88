"""Free-text geocoding against OpenStreetMap Nominatim."""
from __future__ import annotations

from typing import Any, Dict, List

import requests

from trailhead.data_sources.http_session import build_session, fetch_json
from trailhead.errors import ProviderFailure
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="nominatim_client")

NOMINATIM_URL = "https://nominatim.openstreetmap.org"
PROVIDER_NAME = "Nominatim geocoding"


class NominatimClient:
    """Return raw search candidates; parsing them is the resolver's job."""

    def __init__(
        self,
        *,
        base_url: str = NOMINATIM_URL,
        user_agent: str = "NationalParksInfo/1.0",
        session: requests.Session | None = None,
        timeout: float = 10.0,
        max_results: int = 1,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        # Nominatim's usage policy requires an identifying User-Agent.
        self.headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self.session = session or build_session()
        self.timeout = timeout
        self.max_results = max_results

    def search(self, query: str) -> List[Dict[str, Any]]:
        """Search for ``query``; requests percent-encodes it on the wire."""
        lookup = f"location '{query}'"
        data = fetch_json(
            self.session,
            f"{self.base_url}/search",
            provider=PROVIDER_NAME,
            lookup=lookup,
            params={"q": query, "format": "json", "limit": self.max_results},
            headers=self.headers,
            timeout=self.timeout,
        )
        if not isinstance(data, list):
            raise ProviderFailure(PROVIDER_NAME, lookup, "expected a JSON list of candidates")
        logger.debug("Geocoder candidates", extra={"query": query, "count": len(data)})
        return data
