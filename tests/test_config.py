import os
import unittest

from trailhead.config import Settings


class TestConfig(unittest.TestCase):
    def _with_env(self, name, value, fn):
        previous = os.environ.get(name)
        try:
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = value
            return fn()
        finally:
            if previous is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = previous

    def test_settings_defaults(self):
        s = self._with_env("TRAILHEAD_NPS_BASE_URL", None, Settings)
        self.assertEqual(s.nps_base_url, "https://developer.nps.gov/api/v1")
        self.assertEqual(s.provider_source, "live")
        self.assertEqual(s.nominatim_user_agent, "NationalParksInfo/1.0")
        self.assertEqual(s.trail_fanout_workers, 5)

    def test_env_override_strips_trailing_slash(self):
        s = self._with_env("TRAILHEAD_RIDB_BASE_URL", "http://ridb.local/api/v1/", Settings)
        self.assertEqual(s.ridb_base_url, "http://ridb.local/api/v1")

    def test_api_key_from_env(self):
        s = self._with_env("TRAILHEAD_WEATHER_API_KEY", "abc123", Settings)
        self.assertEqual(s.weather_api_key, "abc123")

    def test_fanout_workers_floor(self):
        s = self._with_env("TRAILHEAD_TRAIL_FANOUT_WORKERS", "0", Settings)
        self.assertEqual(s.trail_fanout_workers, 1)


if __name__ == "__main__":
    unittest.main()
