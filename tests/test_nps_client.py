import unittest

import requests

from trailhead.data_sources import nps_client
from trailhead.data_sources.nps_client import NpsClient, apply_trail_filters
from trailhead.data_sources.records import Trail
from trailhead.domain import Difficulty, TrailFilters
from trailhead.errors import ProviderFailure


class DummyResp:
    def __init__(self, payload, status_error=None):
        self._payload = payload
        self._status_error = status_error

    def raise_for_status(self):
        if self._status_error:
            raise self._status_error

    def json(self):
        return self._payload


class DummySession:
    """Return queued payloads by path suffix and record every GET."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "headers": headers, "timeout": timeout})
        for suffix, payload in self.routes.items():
            if url.endswith(suffix):
                if isinstance(payload, Exception):
                    raise payload
                return DummyResp(payload)
        raise AssertionError(f"unexpected url {url}")


def _park_payload(code, name, lat=None, lon=None, **extra):
    item = {
        "id": f"id-{code}",
        "parkCode": code,
        "name": name,
        "fullName": f"{name} National Park",
        "states": "CA",
        "designation": "National Park",
        "latitude": lat if lat is not None else "",
        "longitude": lon if lon is not None else "",
        "activities": [{"id": "A1", "name": "Hiking"}],
        "entranceFees": [{"title": "Vehicle", "cost": "35.00", "description": "7 days"}],
        "images": [{"url": f"https://example.org/{code}.jpg", "title": name, "caption": "view"}],
    }
    item.update(extra)
    return item


class TestNpsClientParks(unittest.TestCase):
    def test_get_park_by_id_maps_fields_and_sends_key(self):
        session = DummySession({"/parks": {"data": [_park_payload("yose", "Yosemite", "37.84", "-119.55")]}})
        client = NpsClient(api_key="secret", session=session, timeout=3)
        park = client.get_park_by_id("yose")

        self.assertEqual(park.park_code, "yose")
        self.assertEqual(park.name, "Yosemite National Park")
        self.assertEqual(park.latitude, 37.84)
        self.assertEqual(park.activities[0].name, "Hiking")
        self.assertEqual(park.entrance_fees[0].cost, "35.00")
        self.assertEqual(park.images[0].url, "https://example.org/yose.jpg")
        call = session.calls[0]
        self.assertEqual(call["url"], "https://developer.nps.gov/api/v1/parks")
        self.assertEqual(call["params"], {"parkCode": "yose", "api_key": "secret"})
        self.assertEqual(call["timeout"], 3)

    def test_get_park_by_id_empty_is_none(self):
        client = NpsClient(session=DummySession({"/parks": {"data": []}}))
        self.assertIsNone(client.get_park_by_id("nope"))

    def test_search_parks_drops_missing_params(self):
        session = DummySession({"/parks": {"data": []}})
        NpsClient(api_key="k", session=session).search_parks(q="canyon", limit=5, start=10)
        self.assertEqual(session.calls[0]["params"], {"q": "canyon", "limit": 5, "start": 10, "api_key": "k"})

    def test_parks_by_activity_deduplicates(self):
        payload = {"data": [
            {"id": "A1", "name": "Hiking", "parks": [
                {"parkCode": "yose", "name": "Yosemite", "fullName": "Yosemite National Park"},
                {"parkCode": "zion", "name": "Zion", "fullName": "Zion National Park"},
            ]},
            {"id": "A2", "name": "Hiking tours", "parks": [
                {"parkCode": "yose", "name": "Yosemite", "fullName": "Yosemite National Park"},
            ]},
        ]}
        session = DummySession({"/activities/parks": payload})
        parks = NpsClient(session=session).get_parks_by_activity("hiking")
        self.assertEqual([p.park_code for p in parks], ["yose", "zion"])
        self.assertEqual(session.calls[0]["params"]["q"], "hiking")

    def test_search_by_location_orders_by_distance(self):
        payload = {"data": [
            _park_payload("acad", "Acadia", "44.35", "-68.21"),
            _park_payload("yose", "Yosemite", "37.84", "-119.55"),
            _park_payload("none", "Nowhere"),
            _park_payload("seki", "Sequoia", "36.71", "-118.56"),
        ]}
        parks = NpsClient(session=DummySession({"/parks": payload})).search_parks_by_location(37.7, -119.6, 2)
        self.assertEqual([p.park_code for p in parks], ["yose", "seki"])

    def test_missing_data_list_is_provider_failure(self):
        client = NpsClient(session=DummySession({"/parks": {"error": "API_KEY_INVALID"}}))
        with self.assertRaises(ProviderFailure) as ctx:
            client.get_park_by_id("yose")
        self.assertIn("yose", str(ctx.exception))

    def test_malformed_item_is_provider_failure(self):
        client = NpsClient(session=DummySession({"/alerts": {"data": [{"category": "Caution"}]}}))
        with self.assertRaises(ProviderFailure):
            client.get_alerts_by_park("yose")

    def test_malformed_activity_group_is_provider_failure(self):
        session = DummySession({"/activities/parks": {"data": ["Hiking"]}})
        with self.assertRaises(ProviderFailure) as ctx:
            NpsClient(session=session).get_parks_by_activity("hiking")
        self.assertIn("hiking", str(ctx.exception))

    def test_transport_error_is_provider_failure(self):
        session = DummySession({"/parks": requests.exceptions.ConnectionError("connection refused")})
        with self.assertRaises(ProviderFailure) as ctx:
            NpsClient(session=session).get_parks()
        self.assertEqual(ctx.exception.provider, "NPS")


class TestNpsClientParkDetails(unittest.TestCase):
    def test_alerts(self):
        payload = {"data": [{
            "title": "Tioga Road Closed",
            "category": "Park Closure",
            "description": "Closed for the season",
            "url": "",
            "parkCode": "yose",
            "lastIndexedDate": "2025-01-01 10:00:00.0",
        }]}
        alerts = NpsClient(session=DummySession({"/alerts": payload})).get_alerts_by_park("yose")
        self.assertEqual(alerts[0].category, "Park Closure")
        self.assertIsNone(alerts[0].url)
        self.assertEqual(alerts[0].last_indexed_date, "2025-01-01 10:00:00.0")

    def test_events_send_window(self):
        payload = {"data": [{
            "title": "Ranger Walk",
            "datestart": "2025-02-01",
            "dateend": "2025-02-01",
            "times": [{"timestart": "10:00 AM", "timeend": "11:00 AM"}],
            "location": "Valley Visitor Center",
            "feeinfo": "",
            "contactname": "Ranger Rick",
            "contactemailaddress": "rick@example.org",
        }]}
        session = DummySession({"/events": payload})
        events = NpsClient(session=session).get_events_by_park("yose", "2025-01-20", "2025-02-19")
        self.assertEqual(events[0].time_start, "10:00 AM")
        self.assertIsNone(events[0].fee_info)
        self.assertEqual(events[0].contact_email, "rick@example.org")
        params = session.calls[0]["params"]
        self.assertEqual((params["dateStart"], params["dateEnd"]), ("2025-01-20", "2025-02-19"))

    def test_campgrounds(self):
        payload = {"data": [{
            "id": "cg1",
            "name": "Upper Pines",
            "description": "Valley campground",
            "campsites": {"totalSites": "238", "tentOnly": "0", "electricalHookups": "", "rvOnly": "0",
                          "walkBoatTo": "0", "group": "0", "horse": "0"},
            "fees": [{"title": "Site", "cost": "36.00", "description": "per night"}],
            "reservationUrl": "https://www.recreation.gov/camping/campgrounds/232447",
        }]}
        campground = NpsClient(session=DummySession({"/campgrounds": payload})).get_campgrounds_by_park("yose")[0]
        self.assertEqual(campground.campsites.total_sites, 238)
        self.assertEqual(campground.campsites.electrical_hookups, 0)
        self.assertEqual(campground.fees[0].cost, "36.00")
        self.assertIsNone(campground.reservation_info)

    def test_activities(self):
        payload = {"data": [{"id": "A1", "name": "Hiking"}, {"id": "A2", "name": "Fishing"}]}
        activities = NpsClient(session=DummySession({"/activities": payload})).get_activities()
        self.assertEqual([a.name for a in activities], ["Hiking", "Fishing"])


class TestNpsTrails(unittest.TestCase):
    def _payload(self):
        return {"data": [
            {"id": "t1", "title": "Mist Trail", "shortDescription": "Waterfall hike",
             "activities": [{"id": "A1", "name": "Hiking"}], "duration": "3-5 Hours",
             "latitude": "37.73", "longitude": "-119.56"},
            {"id": "t2", "title": "Tunnel View", "activities": [{"id": "A9", "name": "Scenic Driving"}]},
            {"id": "t3", "title": "Valley Loop", "activities": []},
        ]}

    def test_only_trail_like_items_are_kept(self):
        session = DummySession({"/thingstodo": self._payload()})
        trails = NpsClient(session=session).get_trails_by_park("yose")
        self.assertEqual([t.trail_id for t in trails], ["t1", "t3"])
        self.assertEqual(trails[0].trail_use, ["Hiking"])
        self.assertEqual(trails[0].park_code, "yose")
        self.assertEqual(trails[0].trailhead_latitude, 37.73)
        self.assertEqual(session.calls[0]["params"]["limit"], nps_client.THINGS_TO_DO_LIMIT)

    def test_filters_applied(self):
        session = DummySession({"/thingstodo": self._payload()})
        trails = NpsClient(session=session).get_trails_by_park("yose", TrailFilters(trail_id="t3"))
        self.assertEqual([t.trail_id for t in trails], ["t3"])

    def test_activity_names_as_strings_are_provider_failure(self):
        payload = {"data": [{"id": "1", "title": "Mist Trail", "activities": ["Hiking"]}]}
        client = NpsClient(session=DummySession({"/thingstodo": payload}))
        with self.assertRaises(ProviderFailure) as ctx:
            client.get_trails_by_park("yose")
        self.assertIn("yose", str(ctx.exception))
        self.assertIn("malformed", str(ctx.exception))


def test_apply_trail_filters_missing_attributes_do_not_match():
    trails = [
        Trail(trail_id="a", name="A", difficulty="Moderate", length_miles=3.0),
        Trail(trail_id="b", name="B", difficulty=None, length_miles=8.0),
        Trail(trail_id="c", name="C", difficulty="moderate", length_miles=None),
    ]
    assert [t.trail_id for t in apply_trail_filters(trails, TrailFilters(difficulty=Difficulty.MODERATE))] == ["a", "c"]
    assert [t.trail_id for t in apply_trail_filters(trails, TrailFilters(min_length=2, max_length=5))] == ["a"]
    assert apply_trail_filters(trails, None) == trails


if __name__ == "__main__":
    unittest.main()
