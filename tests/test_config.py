"""Tests for settings loading."""
import os
import unittest
import tempfile
import shutil
from pathlib import Path
from unittest import mock

from smskpi.config.settings import AppSettings, DEFAULT_CONFIG_PATH, get_settings, reset_settings
from smskpi.utils.exceptions import ConfigError


VALID_YAML = """
app:
  name: smskpi-test
  version: 1.2
logging:
  level: DEBUG
  max_file_size_mb: 2
  backup_count: 3
csv:
  encoding: utf-8
  date_format: "%Y-%m-%d %H:%M"
  default_label: Misc
  excluded_labels: [transfer]
processing:
  max_workers: 2
report:
  currency_symbol: "$"
  default_timeframe: all
"""


class TestAppSettings(unittest.TestCase):
    """Test AppSettings loading and validation."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        reset_settings()

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)
        reset_settings()

    def _write(self, text: str) -> Path:
        path = self.test_dir / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_bundled_defaults(self):
        settings = AppSettings.load(DEFAULT_CONFIG_PATH)
        self.assertEqual(settings.csv_date_format, "%d-%m-%Y %H:%M")
        self.assertEqual(settings.csv_default_label, "Unknown")
        self.assertEqual(settings.csv_excluded_labels, ["personal-income", "non-payment"])
        self.assertEqual(settings.currency_symbol, "₹")
        self.assertEqual(settings.default_timeframe, "6")

    def test_load_custom_file(self):
        settings = AppSettings.load(self._write(VALID_YAML))
        self.assertEqual(settings.app_version, "1.2")
        self.assertEqual(settings.max_workers, 2)
        self.assertEqual(settings.log_max_bytes, 2 * 1024 * 1024)
        self.assertEqual(settings.csv_excluded_labels, ["transfer"])

    def test_env_override(self):
        path = self._write(VALID_YAML)
        with mock.patch.dict(os.environ, {"SMSKPI_CONFIG": str(path)}):
            settings = get_settings()
        self.assertEqual(settings.app_name, "smskpi-test")

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            AppSettings.load(self.test_dir / "nope.yaml")

    def test_missing_section(self):
        with self.assertRaises(ConfigError):
            AppSettings.load(self._write("app:\n  name: x\n  version: 1\n"))

    def test_invalid_values(self):
        with self.assertRaises(ConfigError):
            AppSettings.load(self._write(VALID_YAML.replace("max_workers: 2", "max_workers: 0")))
        with self.assertRaises(ConfigError):
            AppSettings.load(self._write(VALID_YAML.replace("default_timeframe: all", "default_timeframe: 5")))

    def test_not_a_mapping(self):
        with self.assertRaises(ConfigError):
            AppSettings.load(self._write("- just\n- a list\n"))


if __name__ == "__main__":
    unittest.main()
