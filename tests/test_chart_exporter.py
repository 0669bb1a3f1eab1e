# tests/test_chart_exporter.py

"""Tests for the Plotly chart exporter."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import pandas as pd

from grocery_prices.charts.chart_specs import (
    build_grouped_bar_spec,
    build_histogram_spec,
    build_report_specs,
    build_scatter_spec,
)
from grocery_prices.storage.chart_exporter import (
    export_figure,
    export_report_charts,
    grouped_bar_figure,
    histogram_figure,
    scatter_figure,
    spec_figure,
)


class _TableMixin:
    """Provide a small price table across three vendors."""

    table: pd.DataFrame

    def _setup_table(self) -> None:
        """Set up the sample table."""
        self.table = pd.DataFrame(
            {
                "vendor": ["Loblaws", "Loblaws", "Metro", "T&T", "T&T"],
                "current_price": [5.0, 15.0, 8.0, 60.0, None],
                "old_price": [10.0, 10.0, 8.0, None, 4.0],
            }
        )


class TestFigures(_TableMixin, unittest.TestCase):
    """Tests for spec-to-figure conversion."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self._setup_table()

    def test_histogram_single_trace(self) -> None:
        """An ungrouped histogram has one bar trace per bin set."""
        fig = histogram_figure(build_histogram_spec(self.table))
        self.assertEqual(len(fig.data), 1)
        self.assertEqual(len(fig.data[0].x), 50)
        self.assertEqual(list(fig.layout.xaxis.range), [0.0, 50.0])

    def test_histogram_stacks_vendors(self) -> None:
        """A grouped histogram has one trace per vendor."""
        fig = histogram_figure(
            build_histogram_spec(self.table, group_by="vendor")
        )
        self.assertEqual(
            [t.name for t in fig.data], ["Loblaws", "Metro", "T&T"],
        )
        self.assertEqual(fig.layout.barmode, "stack")

    def test_grouped_bar_traces(self) -> None:
        """One trace per price series, grouped side by side."""
        fig = grouped_bar_figure(build_grouped_bar_spec(self.table))
        self.assertEqual(
            [t.name for t in fig.data], ["Current price", "Old price"],
        )
        self.assertEqual(fig.layout.barmode, "group")
        self.assertEqual(list(fig.data[0].y), [10.0, 8.0, 60.0])
        self.assertEqual(list(fig.data[1].y), [10.0, 8.0, 4.0])

    def test_scatter_has_reference_line(self) -> None:
        """The last trace is the dashed identity line."""
        fig = scatter_figure(build_scatter_spec(self.table))
        line = fig.data[-1]
        self.assertEqual(line.mode, "lines")
        self.assertEqual(list(line.x), list(line.y))
        self.assertEqual(list(fig.layout.yaxis.range), [0.0, 100.0])

    def test_spec_figure_dispatches_on_type(self) -> None:
        """spec_figure picks the matching builder."""
        fig = spec_figure(build_scatter_spec(self.table))
        self.assertEqual(fig.data[-1].name, "No change")


class TestExportFigure(_TableMixin, unittest.TestCase):
    """Tests for writing HTML charts to disk."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self._setup_table()

    @patch("grocery_prices.storage.chart_exporter.webbrowser")
    def test_generates_html_file(self, mock_wb: MagicMock) -> None:
        """Export should create an HTML file."""
        with tempfile.TemporaryDirectory() as tmp:
            with patch(
                "grocery_prices.storage.chart_exporter._CHARTS_DIR",
                Path(tmp),
            ):
                fig = histogram_figure(build_histogram_spec(self.table))
                result = export_figure(fig, "hist")
                self.assertTrue(result.exists())
                self.assertTrue(result.name.startswith("hist_"))
                self.assertIn("plotly", result.read_text().lower())
        mock_wb.open.assert_not_called()

    @patch("grocery_prices.storage.chart_exporter.webbrowser")
    def test_open_browser(self, mock_wb: MagicMock) -> None:
        """open_browser hands the file URI to the browser."""
        with tempfile.TemporaryDirectory() as tmp:
            fig = scatter_figure(build_scatter_spec(self.table))
            result = export_figure(
                fig, "scatter", open_browser=True, charts_dir=Path(tmp),
            )
            mock_wb.open.assert_called_once_with(result.as_uri())

    def test_export_report_charts(self) -> None:
        """All three report charts are written to the given directory."""
        with tempfile.TemporaryDirectory() as tmp:
            charts_dir = Path(tmp) / "charts"
            paths = export_report_charts(
                build_report_specs(self.table), charts_dir=charts_dir,
            )
            self.assertEqual(
                list(paths),
                ["price_histogram", "vendor_means", "old_vs_current"],
            )
            for path in paths.values():
                self.assertTrue(path.exists())
                self.assertEqual(path.parent, charts_dir)


if __name__ == "__main__":
    unittest.main()
