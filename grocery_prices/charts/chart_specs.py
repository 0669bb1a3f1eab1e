# grocery_prices/charts/chart_specs.py

"""Renderer-agnostic chart specifications built from the price table.

Each builder is a pure function of the loaded table: it never mutates the
input and returns a frozen spec describing axis ranges, bins, series and
colours. Rendering lives in :mod:`grocery_prices.storage.chart_exporter`.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import numpy as np
import pandas as pd

from grocery_prices.analysis.aggregator import group_keys, summarize
from grocery_prices.config.settings import Settings
from grocery_prices.models.price_record import PRICE_CHANGES, classify_price_change

logger = logging.getLogger("grocery_prices.charts")

SERIES_LABELS: dict[str, str] = {
    "current_price": "Current price",
    "old_price": "Old price",
}


@dataclass(frozen=True)
class ChartStyle:
    """Declarative styling passed through to the renderer."""

    title: str = ""
    x_label: str = ""
    y_label: str = ""
    colors: Mapping[str, str] = field(
        default_factory=lambda: Settings.VENDOR_COLORS, hash=False,
    )

    def __post_init__(self) -> None:
        # Read-only snapshot of the mapping given at construction
        object.__setattr__(self, "colors", MappingProxyType(dict(self.colors)))

    def color_for(self, key: str) -> str:
        return self.colors.get(key, Settings.FALLBACK_COLOR)


def _check_range(value_range: tuple[float, float]) -> tuple[float, float]:
    lower, upper = float(value_range[0]), float(value_range[1])
    if not lower < upper:
        msg = f"Invalid range {value_range}: lower bound must be below upper"
        raise ValueError(msg)
    return lower, upper


# ── Histogram ─────────────────────────────────────────────


@dataclass(frozen=True)
class HistogramBin:
    """Half-open bin ``[lower, upper)``."""

    lower: float
    upper: float
    count: int

    @property
    def center(self) -> float:
        return (self.lower + self.upper) / 2


@dataclass(frozen=True)
class HistogramSpec:
    field: str
    bin_width: float
    x_range: tuple[float, float]
    bins: tuple[HistogramBin, ...]
    excluded_count: int
    missing_count: int
    style: ChartStyle
    group_counts: Mapping[str, tuple[int, ...]] = field(
        default_factory=dict, hash=False,
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "group_counts", MappingProxyType(dict(self.group_counts)),
        )

    @property
    def total(self) -> int:
        return sum(b.count for b in self.bins)


def _bin_counts(
    values: pd.Series, lower: float, width: float, n_bins: int,
) -> tuple[int, ...]:
    idx = np.floor((values.to_numpy() - lower) / width).astype(int)
    idx = np.clip(idx, 0, n_bins - 1)
    return tuple(int(c) for c in np.bincount(idx, minlength=n_bins))


def build_histogram_spec(
    table: pd.DataFrame,
    field: str = "current_price",
    bin_width: float = Settings.HISTOGRAM_BIN_WIDTH,
    x_range: tuple[float, float] = Settings.HISTOGRAM_RANGE,
    group_by: str | None = None,
    style: ChartStyle | None = None,
) -> HistogramSpec:
    """Bin *field* into fixed-width half-open bins over *x_range*.

    Values outside ``[lower, upper)`` are left out of the displayed
    distribution and counted in ``excluded_count``. With *group_by*,
    per-group counts aligned with the bins are included for stacking.
    """
    if bin_width <= 0:
        msg = f"bin_width must be positive, got {bin_width}"
        raise ValueError(msg)
    lower, upper = _check_range(x_range)
    if field not in table.columns:
        msg = f"Unknown column '{field}'"
        raise ValueError(msg)

    n_bins = math.ceil((upper - lower) / bin_width)
    values = table[field]
    present = values.notna()
    in_range = present & (values >= lower) & (values < upper)
    shown = values[in_range].astype("float64")

    counts = _bin_counts(shown, lower, bin_width, n_bins)
    bins = tuple(
        HistogramBin(
            lower=lower + i * bin_width,
            upper=min(lower + (i + 1) * bin_width, upper),
            count=counts[i],
        )
        for i in range(n_bins)
    )

    group_counts: dict[str, tuple[int, ...]] = {}
    if group_by is not None:
        keys = group_keys(table, group_by)
        by_group = {
            str(key): group
            for key, group in shown.groupby(
                table.loc[in_range, group_by], sort=False, observed=True,
            )
        }
        for key in keys:
            group_counts[key] = _bin_counts(
                by_group.get(key, shown.iloc[:0]), lower, bin_width, n_bins,
            )

    excluded = int((present & ~in_range).sum())
    missing = int((~present).sum())
    if excluded:
        logger.info(
            "Histogram of '%s' excludes %d value(s) outside [%g, %g)",
            field,
            excluded,
            lower,
            upper,
        )

    return HistogramSpec(
        field=field,
        bin_width=float(bin_width),
        x_range=(lower, upper),
        bins=bins,
        excluded_count=excluded,
        missing_count=missing,
        style=style or ChartStyle(
            title=f"Distribution of {SERIES_LABELS.get(field, field).lower()}",
            x_label=f"{SERIES_LABELS.get(field, field)} ($)",
            y_label="Number of products",
        ),
        group_counts=group_counts,
    )


# ── Grouped bar ───────────────────────────────────────────


@dataclass(frozen=True)
class Bar:
    category: str
    series: str
    value: float


@dataclass(frozen=True)
class GroupedBarSpec:
    categories: tuple[str, ...]
    series: tuple[str, ...]
    bars: tuple[Bar, ...]
    style: ChartStyle

    def bars_for(self, category: str) -> tuple[Bar, ...]:
        return tuple(b for b in self.bars if b.category == category)

    def value(self, category: str, series: str) -> float | None:
        for b in self.bars:
            if b.category == category and b.series == series:
                return b.value
        return None


def build_grouped_bar_spec(
    table: pd.DataFrame,
    fields: tuple[str, ...] = ("current_price", "old_price"),
    group_by: str = "vendor",
    style: ChartStyle | None = None,
) -> GroupedBarSpec:
    """Side-by-side mean bars per group, one bar per field.

    A field whose mean is absent for a group gets no bar in that group.
    """
    per_field = {f: summarize(table, f, group_by=group_by) for f in fields}
    categories = tuple(group_keys(table, group_by))

    bars: list[Bar] = []
    for category in categories:
        for f in fields:
            summary = per_field[f].get(category)
            if summary is None or summary.mean is None:
                continue
            bars.append(Bar(category=category, series=f, value=summary.mean))

    return GroupedBarSpec(
        categories=categories,
        series=tuple(fields),
        bars=tuple(bars),
        style=style or ChartStyle(
            title="Average current and old price by vendor",
            x_label="Vendor",
            y_label="Mean price ($)",
            colors={
                "current_price": "#1f77b4",
                "old_price": "#ff7f0e",
            },
        ),
    )


# ── Scatter ───────────────────────────────────────────────


@dataclass(frozen=True)
class ReferenceLine:
    slope: float = 1.0
    intercept: float = 0.0

    def at(self, x: float) -> float:
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class ScatterPoint:
    vendor: str
    x: float
    y: float
    change: str


@dataclass(frozen=True)
class ScatterSpec:
    x_field: str
    y_field: str
    axis_range: tuple[float, float]
    points: tuple[ScatterPoint, ...]
    reference_line: ReferenceLine
    excluded_count: int
    missing_count: int
    style: ChartStyle

    def change_counts(self) -> dict[str, int]:
        counts = {change: 0 for change in PRICE_CHANGES}
        for p in self.points:
            counts[p.change] += 1
        return counts


def build_scatter_spec(
    table: pd.DataFrame,
    x_field: str = "old_price",
    y_field: str = "current_price",
    axis_range: tuple[float, float] = Settings.SCATTER_RANGE,
    style: ChartStyle | None = None,
) -> ScatterSpec:
    """Plot (old, current) pairs against the identity line.

    Rows with either coordinate absent (``missing_count``) or outside the
    closed window *axis_range* (``excluded_count``) are left out of this
    view only.
    """
    lower, upper = _check_range(axis_range)
    for column in (x_field, y_field):
        if column not in table.columns:
            msg = f"Unknown column '{column}'"
            raise ValueError(msg)

    xs = table[x_field]
    ys = table[y_field]
    paired = xs.notna() & ys.notna()
    keep = paired & xs.between(lower, upper) & ys.between(lower, upper)

    points = tuple(
        ScatterPoint(
            vendor=str(vendor),
            x=float(x),
            y=float(y),
            change=classify_price_change(float(x), float(y)),
        )
        for vendor, x, y in table.loc[
            keep, ["vendor", x_field, y_field]
        ].itertuples(index=False, name=None)
    )

    excluded = int((paired & ~keep).sum())
    missing = int((~paired).sum())
    if excluded:
        logger.info(
            "Scatter of '%s' vs '%s' excludes %d row(s) outside [%g, %g]",
            y_field,
            x_field,
            excluded,
            lower,
            upper,
        )

    return ScatterSpec(
        x_field=x_field,
        y_field=y_field,
        axis_range=(lower, upper),
        points=points,
        reference_line=ReferenceLine(slope=1.0, intercept=0.0),
        excluded_count=excluded,
        missing_count=missing,
        style=style or ChartStyle(
            title="Current price against old price",
            x_label=f"{SERIES_LABELS.get(x_field, x_field)} ($)",
            y_label=f"{SERIES_LABELS.get(y_field, y_field)} ($)",
        ),
    )


ChartSpec = HistogramSpec | GroupedBarSpec | ScatterSpec


def build_report_specs(table: pd.DataFrame) -> dict[str, ChartSpec]:
    """The three report charts, keyed by output name."""
    return {
        "price_histogram": build_histogram_spec(table, group_by="vendor"),
        "vendor_means": build_grouped_bar_spec(table),
        "old_vs_current": build_scatter_spec(table),
    }
