import logging
import unittest

from utils import logging_utils
from utils.logging_utils import build_logging_config, get_tagged_logger, mask_secret_params


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        self.records.append(record)


class TestLoggingUtils(unittest.TestCase):
    def test_build_logging_config_has_expected_handlers_and_filters(self):
        cfg = build_logging_config(job_name="trailhead_test")
        self.assertEqual(set(cfg["handlers"]), {"stdout", "stderr"})
        self.assertEqual(cfg["filters"]["job_name"]["job_name"], "trailhead_test")
        self.assertIn("stdout_max_info", cfg["handlers"]["stdout"]["filters"])
        self.assertEqual(cfg["handlers"]["stderr"]["level"], "WARNING")

    def test_get_tagged_logger_injects_tag(self):
        handler = _ListHandler()
        logger = get_tagged_logger("trailhead.test", tag="custom_tag")
        base_logger = logger.logger
        base_logger.setLevel(logging.DEBUG)
        base_logger.addHandler(handler)
        base_logger.propagate = False
        try:
            logger.info("hello world")
            self.assertEqual(handler.records[-1].tag, "custom_tag")
        finally:
            base_logger.removeHandler(handler)
            base_logger.propagate = True

    def test_default_tag_is_last_name_segment(self):
        logger = get_tagged_logger("trailhead.data_sources.nps_client")
        self.assertEqual(logger.extra["tag"], "nps_client")

    def test_max_level_filter(self):
        flt = logging_utils.MaxLevelFilter(logging.INFO)
        info = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        warning = logging.LogRecord("x", logging.WARNING, __file__, 1, "msg", None, None)
        self.assertTrue(flt.filter(info))
        self.assertFalse(flt.filter(warning))

    def test_ensure_tag_filter_fills_missing_tag(self):
        record = logging.LogRecord("uvicorn.error", logging.INFO, __file__, 1, "msg", None, None)
        logging_utils.EnsureTagFilter().filter(record)
        self.assertEqual(record.tag, "error")

    def test_setup_logging_override_applies_filters(self):
        root = logging.getLogger()
        orig_handlers = root.handlers[:]
        orig_level = root.level
        try:
            logging_utils.setup_logging(level="INFO", job_name="trailhead_test", override_existing=True)
            self.assertTrue(
                any(
                    any(f.__class__.__name__ == "JobNameFilter" for f in h.filters)
                    for h in root.handlers
                )
            )
        finally:
            root.handlers = orig_handlers
            root.setLevel(orig_level)
            logging_utils._CONFIGURED = False


class TestMaskSecretParams(unittest.TestCase):
    def test_masks_api_key(self):
        url = "https://developer.nps.gov/api/v1/parks?parkCode=yose&api_key=abc"
        self.assertEqual(
            mask_secret_params(url),
            "https://developer.nps.gov/api/v1/parks?parkCode=yose&api_key=%2A%2A%2A",
        )

    def test_masks_weather_key_param(self):
        masked = mask_secret_params("https://api.weatherapi.com/v1/forecast.json?key=wk&q=Moab&days=7")
        self.assertNotIn("wk", masked)
        self.assertIn("q=Moab", masked)

    def test_leaves_urls_without_secrets(self):
        url = "https://nominatim.openstreetmap.org/search?q=Moab&format=json"
        self.assertEqual(mask_secret_params(url), url)

    def test_leaves_urls_without_query(self):
        url = "https://ridb.recreation.gov/api/v1/facilities"
        self.assertEqual(mask_secret_params(url), url)


if __name__ == "__main__":
    unittest.main()
