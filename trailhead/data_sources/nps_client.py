"""Client for the National Park Service Data API (parks, alerts, events, campgrounds, things to do)."""
from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

import requests

from trailhead.data_sources.http_session import (
    build_session,
    fetch_json,
    parse_items,
    reading_payload,
    to_float,
    to_int,
)
from trailhead.data_sources.records import (
    Activity,
    Alert,
    Campground,
    Campsites,
    Event,
    Fee,
    Image,
    Park,
    Trail,
)
from trailhead.domain import TrailFilters
from trailhead.errors import ProviderFailure
from utils.geo import haversine_miles
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="nps_client")

NPS_API_URL = "https://developer.nps.gov/api/v1"
PROVIDER_NAME = "NPS"

# The NPS directory holds roughly 470 units; one page this size covers all of them.
FULL_LISTING_LIMIT = 500
THINGS_TO_DO_LIMIT = 100
TRAIL_ACTIVITY_NAMES = {"hiking", "backpacking", "walking", "biking", "horse trekking"}
TRAIL_TITLE_WORDS = ("trail", "hike", "loop")

T = TypeVar("T")


def _parse_items(lookup: str, items: Iterable[Dict[str, Any]], parse: Callable[[Dict[str, Any]], T]) -> List[T]:
    return parse_items(PROVIDER_NAME, lookup, items, parse)


def _fees(raw: Optional[List[Dict[str, Any]]]) -> List[Fee]:
    return [
        Fee(title=f.get("title") or "", cost=f.get("cost"), description=f.get("description"))
        for f in raw or []
    ]


def park_from_payload(item: Dict[str, Any]) -> Park:
    """Map an NPS park (or activity-park stub) into a ``Park``."""
    return Park(
        park_code=item["parkCode"],
        name=item.get("fullName") or item["name"],
        park_id=item.get("id"),
        full_name=item.get("fullName"),
        states=item.get("states"),
        designation=item.get("designation"),
        description=item.get("description"),
        url=item.get("url"),
        latitude=to_float(item.get("latitude")),
        longitude=to_float(item.get("longitude")),
        activities=[Activity(activity_id=a.get("id", ""), name=a["name"]) for a in item.get("activities") or []],
        entrance_fees=_fees(item.get("entranceFees")),
        images=[
            Image(url=img["url"], title=img.get("title"), caption=img.get("caption"))
            for img in item.get("images") or []
        ],
    )


def alert_from_payload(item: Dict[str, Any]) -> Alert:
    """Map an NPS alert into an ``Alert``."""
    return Alert(
        title=item["title"],
        category=item.get("category") or "",
        description=item.get("description") or "",
        url=item.get("url") or None,
        park_code=item.get("parkCode"),
        last_indexed_date=item.get("lastIndexedDate") or None,
    )


def event_from_payload(item: Dict[str, Any]) -> Event:
    """Map an NPS event into an ``Event``; the first listed time is kept."""
    times = item.get("times") or []
    return Event(
        title=item["title"],
        date_start=item.get("datestart") or item.get("date") or None,
        date_end=item.get("dateend") or None,
        time_start=times[0].get("timestart") if times else None,
        location=item.get("location") or None,
        description=item.get("description") or None,
        fee_info=item.get("feeinfo") or None,
        contact_name=item.get("contactname") or None,
        contact_email=item.get("contactemailaddress") or None,
    )


def campground_from_payload(item: Dict[str, Any]) -> Campground:
    """Map an NPS campground into a ``Campground``."""
    sites = item.get("campsites")
    campsites = None
    if sites:
        campsites = Campsites(
            total_sites=to_int(sites.get("totalSites")),
            tent_only=to_int(sites.get("tentOnly")),
            electrical_hookups=to_int(sites.get("electricalHookups")),
            rv_only=to_int(sites.get("rvOnly")),
            walk_boat_to=to_int(sites.get("walkBoatTo")),
            group=to_int(sites.get("group")),
            horse=to_int(sites.get("horse")),
        )
    return Campground(
        name=item["name"],
        campground_id=item.get("id"),
        description=item.get("description") or None,
        campsites=campsites,
        fees=_fees(item.get("fees")),
        reservation_info=item.get("reservationInfo") or None,
        reservation_url=item.get("reservationUrl") or None,
    )


def _is_trail_like(item: Dict[str, Any]) -> bool:
    """Keep "things to do" entries that are hikes or trail outings."""
    activity_names = {(a.get("name") or "").lower() for a in item.get("activities") or []}
    if activity_names & TRAIL_ACTIVITY_NAMES:
        return True
    title = (item.get("title") or "").lower()
    return any(word in title for word in TRAIL_TITLE_WORDS)


def trail_from_payload(item: Dict[str, Any], park_code: str) -> Trail:
    """Map an NPS "things to do" entry into a ``Trail``."""
    activities = item.get("activities")
    return Trail(
        trail_id=item["id"],
        name=item["title"],
        park_code=park_code,
        description=item.get("shortDescription") or None,
        length_miles=to_float(item.get("lengthMiles")),
        difficulty=item.get("difficulty") or None,
        elevation_gain_ft=to_float(item.get("elevationGainFeet")),
        duration=item.get("duration") or None,
        trail_use=[a["name"] for a in activities] if isinstance(activities, list) else None,
        trailhead_latitude=to_float(item.get("latitude")),
        trailhead_longitude=to_float(item.get("longitude")),
    )


def apply_trail_filters(trails: List[Trail], filters: TrailFilters | None) -> List[Trail]:
    """Filter trails; a trail missing the filtered attribute does not match."""
    if filters is None:
        return list(trails)

    out: List[Trail] = []
    for trail in trails:
        if filters.trail_id is not None and trail.trail_id != filters.trail_id:
            continue
        if filters.difficulty is not None:
            if not trail.difficulty or trail.difficulty.lower() != filters.difficulty.value:
                continue
        if filters.min_length is not None:
            if trail.length_miles is None or trail.length_miles < filters.min_length:
                continue
        if filters.max_length is not None:
            if trail.length_miles is None or trail.length_miles > filters.max_length:
                continue
        out.append(trail)
    return out


class NpsClient:
    """Parks provider backed by ``developer.nps.gov``."""

    def __init__(
        self,
        *,
        api_key: str = "DEMO_KEY",
        base_url: str = NPS_API_URL,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.session = session or build_session()
        self.timeout = timeout

    def _get_data(self, path: str, lookup: str, **params: Any) -> List[Dict[str, Any]]:
        """Fetch an NPS endpoint and return its ``data`` list."""
        query = {k: v for k, v in params.items() if v is not None}
        query["api_key"] = self.api_key
        payload = fetch_json(
            self.session,
            f"{self.base_url}/{path}",
            provider=PROVIDER_NAME,
            lookup=lookup,
            params=query,
            timeout=self.timeout,
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise ProviderFailure(PROVIDER_NAME, lookup, "response has no 'data' list")
        return payload["data"]

    def get_park_by_id(self, park_code: str) -> Optional[Park]:
        lookup = f"park code '{park_code}'"
        parks = _parse_items(lookup, self._get_data("parks", lookup, parkCode=park_code), park_from_payload)
        if not parks:
            logger.info("No park for code", extra={"park_code": park_code})
            return None
        return parks[0]

    def search_parks(
        self,
        q: str | None = None,
        state_code: str | None = None,
        limit: int = 10,
        start: int = 0,
    ) -> List[Park]:
        lookup = f"park search (q={q!r}, stateCode={state_code!r})"
        data = self._get_data("parks", lookup, q=q, stateCode=state_code, limit=limit, start=start)
        return _parse_items(lookup, data, park_from_payload)

    def get_parks_by_state(self, state_code: str) -> List[Park]:
        lookup = f"state '{state_code}'"
        data = self._get_data("parks", lookup, stateCode=state_code, limit=FULL_LISTING_LIMIT)
        return _parse_items(lookup, data, park_from_payload)

    def get_parks_by_activity(self, activity: str) -> List[Park]:
        """Parks for every activity matching ``activity``, de-duplicated in first-seen order."""
        lookup = f"activity '{activity}'"
        groups = self._get_data("activities/parks", lookup, q=activity, limit=FULL_LISTING_LIMIT)
        stubs: List[Dict[str, Any]] = []
        seen = set()
        with reading_payload(PROVIDER_NAME, lookup):
            for group in groups:
                for stub in group.get("parks") or []:
                    code = stub.get("parkCode")
                    if code in seen:
                        continue
                    seen.add(code)
                    stubs.append(stub)
        return _parse_items(lookup, stubs, park_from_payload)

    def get_parks(self, limit: int = 10, start: int = 0) -> List[Park]:
        lookup = f"park listing (limit={limit}, start={start})"
        return _parse_items(lookup, self._get_data("parks", lookup, limit=limit, start=start), park_from_payload)

    def search_parks_by_location(self, latitude: float, longitude: float, max_count: int = 5) -> List[Park]:
        """Nearest parks by great-circle distance; parks without coordinates are skipped."""
        lookup = f"coordinates {latitude}, {longitude}"
        parks = _parse_items(lookup, self._get_data("parks", lookup, limit=FULL_LISTING_LIMIT), park_from_payload)
        located = [p for p in parks if p.latitude is not None and p.longitude is not None]
        located.sort(key=lambda p: haversine_miles(latitude, longitude, p.latitude, p.longitude))
        return located[:max_count]

    def get_alerts_by_park(self, park_code: str) -> List[Alert]:
        lookup = f"alerts for park code '{park_code}'"
        return _parse_items(lookup, self._get_data("alerts", lookup, parkCode=park_code), alert_from_payload)

    def get_events_by_park(self, park_code: str, start_date: str, end_date: str) -> List[Event]:
        lookup = f"events for park code '{park_code}'"
        data = self._get_data("events", lookup, parkCode=park_code, dateStart=start_date, dateEnd=end_date)
        return _parse_items(lookup, data, event_from_payload)

    def get_campgrounds_by_park(self, park_code: str) -> List[Campground]:
        lookup = f"campgrounds for park code '{park_code}'"
        data = self._get_data("campgrounds", lookup, parkCode=park_code)
        return _parse_items(lookup, data, campground_from_payload)

    def get_activities(self) -> List[Activity]:
        lookup = "activity catalogue"
        return _parse_items(
            lookup,
            self._get_data("activities", lookup),
            lambda item: Activity(activity_id=item["id"], name=item["name"]),
        )

    def get_trails_by_park(self, park_code: str, filters: TrailFilters | None = None) -> List[Trail]:
        """Trails from the park's "things to do" listing, then ``filters``."""
        lookup = f"trails for park code '{park_code}'"
        data = self._get_data("thingstodo", lookup, parkCode=park_code, limit=THINGS_TO_DO_LIMIT)
        with reading_payload(PROVIDER_NAME, lookup):
            trail_items = [item for item in data if _is_trail_like(item)]
        trails = _parse_items(lookup, trail_items, lambda item: trail_from_payload(item, park_code))
        return apply_trail_filters(trails, filters)
