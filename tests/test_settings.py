# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from grocery_prices.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants and vendor registry."""

    def test_histogram_bin_width_is_one_dollar(self) -> None:
        """Histogram bins are one currency unit wide."""
        self.assertEqual(Settings.HISTOGRAM_BIN_WIDTH, 1.0)

    def test_histogram_range(self) -> None:
        """Histogram x-axis spans 0 to 50."""
        self.assertEqual(Settings.HISTOGRAM_RANGE, (0.0, 50.0))

    def test_scatter_range(self) -> None:
        """Scatter axes span 0 to 100."""
        self.assertEqual(Settings.SCATTER_RANGE, (0.0, 100.0))

    def test_required_columns(self) -> None:
        """vendor and current_price are the only required columns."""
        self.assertEqual(
            Settings.REQUIRED_COLUMNS, ["vendor", "current_price"],
        )

    def test_known_vendors_unique(self) -> None:
        """No duplicate vendor names."""
        self.assertEqual(
            len(Settings.KNOWN_VENDORS), len(set(Settings.KNOWN_VENDORS)),
        )

    def test_every_known_vendor_has_a_color(self) -> None:
        """Each known vendor has an explicit chart colour."""
        for vendor in Settings.KNOWN_VENDORS:
            with self.subTest(vendor=vendor):
                self.assertIn(vendor, Settings.VENDOR_COLORS)

    def test_default_transform_is_registered(self) -> None:
        """The default transform name resolves in the registry."""
        from grocery_prices.analysis.transforms import TRANSFORMS

        self.assertIn(Settings.DEFAULT_TRANSFORM, TRANSFORMS)

    def test_path_constants_are_paths(self) -> None:
        """Path-typed settings are Path instances."""
        for path in (
            Settings.BASE_DIR,
            Settings.DATA_PATH,
            Settings.OUTPUT_DIR,
            Settings.CHARTS_DIR,
            Settings.LOGS_DIR,
        ):
            with self.subTest(path=path):
                self.assertIsInstance(path, Path)

    def test_data_path_is_csv(self) -> None:
        """The default input is a CSV file."""
        self.assertEqual(Settings.DATA_PATH.suffix, ".csv")


if __name__ == "__main__":
    unittest.main()
