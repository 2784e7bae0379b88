import unittest

import pytest

from trailhead.domain import GeocodeStatus
from trailhead.errors import LocationNotFound, ProviderFailure
from trailhead.geocoding_resolver import require_coordinates, resolve_location


class FakeGeocoder:
    def __init__(self, candidates=None, error=None):
        self.candidates = candidates or []
        self.error = error
        self.queries = []

    def search(self, query):
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.candidates


class TestResolveLocation(unittest.TestCase):
    def test_first_candidate_coordinates_are_exact(self):
        geocoder = FakeGeocoder([
            {"lat": "37.8651", "lon": "-119.5383", "display_name": "Yosemite Valley, CA", "importance": 0.71},
            {"lat": "1", "lon": "1", "display_name": "elsewhere"},
        ])
        outcome = resolve_location("Yosemite Valley", geocoder)
        self.assertEqual(outcome.status, GeocodeStatus.FOUND)
        self.assertTrue(outcome.is_found)
        self.assertEqual(outcome.result.coordinates.latitude, 37.8651)
        self.assertEqual(outcome.result.coordinates.longitude, -119.5383)
        self.assertEqual(outcome.result.display_name, "Yosemite Valley, CA")
        self.assertEqual(outcome.result.confidence, 0.71)
        self.assertEqual(geocoder.queries, ["Yosemite Valley"])

    def test_confidence_omitted_when_absent(self):
        outcome = resolve_location("Moab", FakeGeocoder([{"lat": "38.57", "lon": "-109.55", "display_name": "Moab"}]))
        self.assertIsNone(outcome.result.confidence)

    def test_empty_candidates_is_not_found(self):
        outcome = resolve_location("Nowhereville", FakeGeocoder([]))
        self.assertEqual(outcome.status, GeocodeStatus.NOT_FOUND)
        self.assertIsNone(outcome.result)
        self.assertIsNone(outcome.error)

    def test_transport_failure_is_distinct_from_not_found(self):
        geocoder = FakeGeocoder(error=ProviderFailure("Nominatim geocoding", "location 'Moab'", "timed out"))
        outcome = resolve_location("Moab", geocoder)
        self.assertEqual(outcome.status, GeocodeStatus.TRANSPORT_ERROR)
        self.assertIn("timed out", outcome.error)

    def test_unparseable_latitude_is_not_coerced_to_zero(self):
        outcome = resolve_location("Moab", FakeGeocoder([{"lat": "north", "lon": "-109.55", "display_name": "Moab"}]))
        self.assertEqual(outcome.status, GeocodeStatus.TRANSPORT_ERROR)
        self.assertIsNone(outcome.result)

    def test_out_of_range_latitude_is_rejected(self):
        outcome = resolve_location("Mars", FakeGeocoder([{"lat": "120", "lon": "0", "display_name": "?"}]))
        self.assertEqual(outcome.status, GeocodeStatus.TRANSPORT_ERROR)

    def test_blank_query_raises(self):
        with self.assertRaises(ValueError):
            resolve_location("   ", FakeGeocoder())


def test_require_coordinates_returns_result():
    geocoder = FakeGeocoder([{"lat": "36.1", "lon": "-112.1", "display_name": "Grand Canyon Village"}])
    result = require_coordinates("Grand Canyon", geocoder)
    assert result.coordinates.latitude == 36.1


def test_require_coordinates_not_found_raises_location_not_found():
    with pytest.raises(LocationNotFound) as excinfo:
        require_coordinates("Atlantis", FakeGeocoder([]))
    assert "Atlantis" in str(excinfo.value)


def test_require_coordinates_transport_error_raises_provider_failure():
    geocoder = FakeGeocoder(error=ProviderFailure("Nominatim geocoding", "location 'Moab'", "503"))
    with pytest.raises(ProviderFailure) as excinfo:
        require_coordinates("Moab", geocoder)
    assert "Moab" in str(excinfo.value)


if __name__ == "__main__":
    unittest.main()
