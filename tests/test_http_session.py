import unittest

import pytest
import requests

from trailhead.data_sources.http_session import (
    RETRY_STATUS_CODES,
    build_session,
    fetch_json,
    parse_items,
    reading_payload,
    to_float,
    to_int,
)
from trailhead.errors import ProviderFailure


class DummyResp:
    def __init__(self, payload=None, status_error=None, json_error=None):
        self._payload = payload
        self._status_error = status_error
        self._json_error = json_error

    def raise_for_status(self):
        if self._status_error:
            raise self._status_error

    def json(self):
        if self._json_error:
            raise self._json_error
        return self._payload


class DummySession:
    def __init__(self, resp=None, error=None):
        self.resp = resp
        self.error = error

    def get(self, url, params=None, headers=None, timeout=None):
        if self.error:
            raise self.error
        return self.resp


class TestFetchJson(unittest.TestCase):
    def test_returns_decoded_payload(self):
        data = fetch_json(DummySession(DummyResp({"data": []})), "https://x.test/a", provider="P", lookup="thing")
        self.assertEqual(data, {"data": []})

    def test_invalid_json_is_provider_failure(self):
        session = DummySession(DummyResp(json_error=ValueError("Expecting value")))
        with self.assertRaises(ProviderFailure) as ctx:
            fetch_json(session, "https://x.test/a", provider="P", lookup="thing")
        self.assertEqual(str(ctx.exception), "P lookup failed for thing: response was not valid JSON")

    def test_error_text_masks_api_key(self):
        leaked = "https://developer.nps.gov/api/v1/parks?parkCode=yose&api_key=supersecret"
        response = requests.Response()
        response.url = leaked
        error = requests.exceptions.HTTPError(f"403 Client Error: Forbidden for url: {leaked}", response=response)
        with self.assertRaises(ProviderFailure) as ctx:
            fetch_json(DummySession(DummyResp(status_error=error)), leaked, provider="NPS", lookup="park code 'yose'")
        self.assertNotIn("supersecret", str(ctx.exception))
        self.assertIn("park code 'yose'", str(ctx.exception))

    def test_timeout_is_provider_failure(self):
        session = DummySession(error=requests.exceptions.Timeout("read timed out"))
        with self.assertRaises(ProviderFailure) as ctx:
            fetch_json(session, "https://x.test/a", provider="P", lookup="thing")
        self.assertEqual(ctx.exception.detail, "read timed out")


def test_build_session_mounts_retrying_adapter():
    session = build_session(retries=3, backoff_factor=0.5)
    retry = session.get_adapter("https://example.org").max_retries
    assert retry.total == 3
    assert retry.backoff_factor == 0.5
    assert set(retry.status_forcelist) == set(RETRY_STATUS_CODES)


@pytest.mark.parametrize("value, expected", [(None, None), ("", None), ("  ", None), ("12.5", 12.5), (3, 3.0)])
def test_to_float(value, expected):
    assert to_float(value) == expected


def test_to_int_blank_is_zero():
    assert to_int("") == 0
    assert to_int("238") == 238


def test_to_float_rejects_garbage():
    with pytest.raises(ValueError):
        to_float("lots")


@pytest.mark.parametrize("items", [["Hiking"], [{"name": None}], [{}], [{"name": "x", "size": "big"}]])
def test_parse_items_wraps_shape_errors(items):
    def parse(item):
        return item["name"].upper(), to_float(item.get("size"))

    with pytest.raises(ProviderFailure) as excinfo:
        parse_items("P", "thing", items, parse)
    assert excinfo.value.provider == "P"
    assert "malformed payload" in str(excinfo.value)


def test_reading_payload_leaves_other_errors_alone():
    with pytest.raises(ProviderFailure) as excinfo:
        with reading_payload("P", "thing", "forecast"):
            raise ProviderFailure("P", "thing", "HTTP 500")
    assert excinfo.value.detail == "HTTP 500"
    with pytest.raises(ProviderFailure, match="malformed forecast"):
        with reading_payload("P", "thing", "forecast"):
            [].get("day")


if __name__ == "__main__":
    unittest.main()
