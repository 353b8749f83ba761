import os
import unittest
from pathlib import Path

from pydantic import ValidationError

from pawcheck.config import Settings
from pawcheck.domain import AdvisoryConfig, Thresholds


class TestConfig(unittest.TestCase):
    def setUp(self):
        self._saved = {k: v for k, v in os.environ.items() if k.startswith("PAWCHECK_")}
        for k in self._saved:
            os.environ.pop(k)

    def tearDown(self):
        for k in [k for k in os.environ if k.startswith("PAWCHECK_")]:
            os.environ.pop(k)
        os.environ.update(self._saved)

    def test_settings_defaults(self):
        s = Settings()
        self.assertEqual(s.cache_file, "pawcheck_final.json")
        self.assertEqual(s.cache_duration_minutes, 10)
        self.assertEqual(s.refresh_interval_minutes, 10)
        self.assertIsNone(s.latitude)
        self.assertFalse(s.has_fixed_location)
        self.assertEqual(s.forecast_url, "https://api.open-meteo.com/v1/forecast")

    def test_env_override(self):
        os.environ["PAWCHECK_CACHE_DIR"] = "/tmp/pawcheck-test"
        os.environ["PAWCHECK_FORECAST_URL"] = "http://localhost:8080/v1/forecast/"
        s = Settings()
        self.assertEqual(s.cache_path, Path("/tmp/pawcheck-test/pawcheck_final.json"))
        self.assertEqual(s.forecast_url, "http://localhost:8080/v1/forecast")

    def test_fixed_location(self):
        os.environ["PAWCHECK_LATITUDE"] = "33.45"
        os.environ["PAWCHECK_LONGITUDE"] = "-112.07"
        s = Settings()
        self.assertTrue(s.has_fixed_location)
        self.assertEqual(s.latitude, 33.45)

    def test_half_location_rejected(self):
        os.environ["PAWCHECK_LATITUDE"] = "33.45"
        with self.assertRaises(ValidationError):
            Settings()

    def test_advisory_config_from_settings(self):
        os.environ["PAWCHECK_CACHE_DURATION_MINUTES"] = "5"
        cfg = AdvisoryConfig.from_settings(Settings())
        self.assertEqual(cfg.cache_duration_minutes, 5)
        self.assertEqual(cfg.thresholds, Thresholds())
        self.assertEqual(cfg.force_refresh_sentinel, "force_refresh")

    def test_advisory_config_is_immutable(self):
        cfg = AdvisoryConfig()
        with self.assertRaises(ValidationError):
            cfg.cache_duration_minutes = 1


if __name__ == "__main__":
    unittest.main()
