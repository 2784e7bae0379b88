"""Client for the Recreation Information Database (Recreation.gov) facilities and recreation areas."""
from __future__ import annotations

from typing import Any, Dict, List

import requests

from trailhead.data_sources.http_session import build_session, fetch_json, parse_items, to_float
from trailhead.data_sources.records import Facility, RecArea
from trailhead.errors import ProviderFailure
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="ridb_client")

RIDB_API_URL = "https://ridb.recreation.gov/api/v1"
PROVIDER_NAME = "Recreation.gov"
PAGE_LIMIT = 50


def facility_from_payload(item: Dict[str, Any]) -> Facility:
    """Map a RIDB facility into a ``Facility``."""
    return Facility(
        facility_id=str(item["FacilityID"]),
        name=item["FacilityName"],
        description=item.get("FacilityDescription") or None,
        facility_type=item.get("FacilityTypeDescription") or None,
        latitude=to_float(item.get("FacilityLatitude")),
        longitude=to_float(item.get("FacilityLongitude")),
        phone=item.get("FacilityPhone") or None,
        reservation_url=item.get("FacilityReservationURL") or None,
        activities=[a["ActivityName"] for a in item.get("ACTIVITY") or [] if a.get("ActivityName")],
    )


def rec_area_from_payload(item: Dict[str, Any]) -> RecArea:
    """Map a RIDB recreation area into a ``RecArea``."""
    return RecArea(
        rec_area_id=str(item["RecAreaID"]),
        name=item["RecAreaName"],
        description=item.get("RecAreaDescription") or None,
        latitude=to_float(item.get("RecAreaLatitude")),
        longitude=to_float(item.get("RecAreaLongitude")),
        phone=item.get("RecAreaPhone") or None,
        email=item.get("RecAreaEmail") or None,
        reservation_url=item.get("RecAreaReservationURL") or None,
    )


class RidbClient:
    """Facility and recreation-area lookups against ``ridb.recreation.gov``."""

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str = RIDB_API_URL,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.session = session or build_session()
        self.timeout = timeout

    def _get_records(self, path: str, lookup: str, **params: Any) -> List[Dict[str, Any]]:
        """Fetch a RIDB endpoint and return its ``RECDATA`` list."""
        if not self.api_key:
            raise ProviderFailure(PROVIDER_NAME, lookup, "no Recreation.gov API key configured")
        payload = fetch_json(
            self.session,
            f"{self.base_url}/{path}",
            provider=PROVIDER_NAME,
            lookup=lookup,
            params=params,
            headers={"apikey": self.api_key, "Accept": "application/json"},
            timeout=self.timeout,
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("RECDATA"), list):
            raise ProviderFailure(PROVIDER_NAME, lookup, "response has no 'RECDATA' list")
        return payload["RECDATA"]

    def get_facilities_by_location(self, latitude: float, longitude: float, radius_miles: float) -> List[Facility]:
        lookup = f"facilities within {radius_miles} miles of {latitude}, {longitude}"
        records = self._get_records(
            "facilities",
            lookup,
            latitude=latitude,
            longitude=longitude,
            radius=radius_miles,
            limit=PAGE_LIMIT,
            full="true",
        )
        facilities = parse_items(PROVIDER_NAME, lookup, records, facility_from_payload)
        logger.debug("Facilities near point", extra={"lookup": lookup, "count": len(facilities)})
        return facilities

    def get_facilities_by_activity(self, activity_id: int) -> List[Facility]:
        lookup = f"facilities for activity id {activity_id}"
        records = self._get_records("facilities", lookup, activity=activity_id, limit=PAGE_LIMIT, full="true")
        return parse_items(PROVIDER_NAME, lookup, records, facility_from_payload)

    def get_rec_areas_by_state(self, state_code: str) -> List[RecArea]:
        lookup = f"recreation areas in state '{state_code}'"
        records = self._get_records("recareas", lookup, state=state_code.upper(), limit=PAGE_LIMIT)
        return parse_items(PROVIDER_NAME, lookup, records, rec_area_from_payload)
