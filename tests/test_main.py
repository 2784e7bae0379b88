import unittest

from fastapi.testclient import TestClient

from trailhead.main import app


class TestMain(unittest.TestCase):
    def test_app_metadata(self):
        self.assertEqual(app.title, "Trailhead Insights")

    def test_routes_are_mounted_under_v1(self):
        paths = {route.path for route in app.routes}
        self.assertIn("/v1/parks", paths)
        self.assertIn("/v1/recreation/nearby", paths)
        self.assertIn("/v1/resources/parks/{park_code}", paths)

    def test_health(self):
        resp = TestClient(app).get("/health")
        self.assertEqual(resp.json(), {"status": "ok"})


if __name__ == "__main__":
    unittest.main()
