# grocery_prices/storage/chart_exporter.py

"""Render chart specs as interactive Plotly HTML files."""

import importlib
import logging
import webbrowser
from datetime import datetime
from pathlib import Path
from types import ModuleType
from typing import Any

from grocery_prices.charts.chart_specs import (
    SERIES_LABELS,
    ChartSpec,
    GroupedBarSpec,
    HistogramSpec,
    ScatterSpec,
)
from grocery_prices.config.settings import Settings
from grocery_prices.models.price_record import (
    PRICE_DROP,
    PRICE_INCREASE,
    UNCHANGED,
)

logger = logging.getLogger("grocery_prices.chart")

_CHARTS_DIR: Path = Settings.CHARTS_DIR

_CHANGE_SYMBOLS: dict[str, str] = {
    PRICE_DROP: "triangle-down",
    PRICE_INCREASE: "triangle-up",
    UNCHANGED: "circle",
}


def _get_plotly_go() -> ModuleType:
    """Import plotly.graph_objects lazily."""
    return importlib.import_module("plotly.graph_objects")


def _ensure_charts_dir(charts_dir: Path | None = None) -> Path:
    """Create charts directory if it doesn't exist."""
    target = charts_dir or _CHARTS_DIR
    target.mkdir(parents=True, exist_ok=True)
    return target


def histogram_figure(spec: HistogramSpec) -> Any:
    """Build a bar-per-bin histogram, stacked by group when available."""
    go = _get_plotly_go()
    centers = [b.center for b in spec.bins]
    fig: Any = go.Figure()

    if spec.group_counts:
        for key, counts in spec.group_counts.items():
            fig.add_trace(go.Bar(
                x=centers,
                y=list(counts),
                width=spec.bin_width,
                name=key,
                marker_color=spec.style.color_for(key),
                hovertemplate=(
                    f"{key}<br>"
                    "Price: %{x:.2f}<br>"
                    "Count: %{y:,}"
                    "<extra></extra>"
                ),
            ))
        barmode = "stack"
    else:
        fig.add_trace(go.Bar(
            x=centers,
            y=[b.count for b in spec.bins],
            width=spec.bin_width,
            name=SERIES_LABELS.get(spec.field, spec.field),
            hovertemplate=(
                "Price: %{x:.2f}<br>"
                "Count: %{y:,}"
                "<extra></extra>"
            ),
        ))
        barmode = "overlay"

    fig.update_layout(
        title=spec.style.title,
        xaxis_title=spec.style.x_label,
        yaxis_title=spec.style.y_label,
        xaxis={"range": list(spec.x_range)},
        yaxis={"tickformat": ",d"},
        bargap=0,
        barmode=barmode,
        template="plotly_white",
    )
    return fig


def grouped_bar_figure(spec: GroupedBarSpec) -> Any:
    """Build side-by-side mean bars, one trace per price series."""
    go = _get_plotly_go()
    fig: Any = go.Figure()

    for series in spec.series:
        bars = [b for b in spec.bars if b.series == series]
        if not bars:
            continue
        label = SERIES_LABELS.get(series, series)
        fig.add_trace(go.Bar(
            x=[b.category for b in bars],
            y=[b.value for b in bars],
            name=label,
            marker_color=spec.style.color_for(series),
            hovertemplate=(
                "%{x}<br>"
                f"{label}: %{{y:.2f}}"
                "<extra></extra>"
            ),
        ))

    fig.update_layout(
        title=spec.style.title,
        xaxis_title=spec.style.x_label,
        yaxis_title=spec.style.y_label,
        xaxis={
            "categoryorder": "array",
            "categoryarray": list(spec.categories),
        },
        barmode="group",
        template="plotly_white",
        legend={"orientation": "h", "y": -0.15},
    )
    return fig


def scatter_figure(spec: ScatterSpec) -> Any:
    """Build the old-vs-current scatter with its identity reference line."""
    go = _get_plotly_go()
    fig: Any = go.Figure()

    vendors = list(dict.fromkeys(p.vendor for p in spec.points))
    for vendor in vendors:
        points = [p for p in spec.points if p.vendor == vendor]
        fig.add_trace(go.Scatter(
            x=[p.x for p in points],
            y=[p.y for p in points],
            mode="markers",
            name=vendor,
            customdata=[p.change for p in points],
            marker={
                "color": spec.style.color_for(vendor),
                "symbol": [_CHANGE_SYMBOLS[p.change] for p in points],
                "opacity": 0.6,
            },
            hovertemplate=(
                f"{vendor}<br>"
                "Old: %{x:.2f}<br>"
                "Current: %{y:.2f}<br>"
                "%{customdata}"
                "<extra></extra>"
            ),
        ))

    lower, upper = spec.axis_range
    line = spec.reference_line
    fig.add_trace(go.Scatter(
        x=[lower, upper],
        y=[line.at(lower), line.at(upper)],
        mode="lines",
        name="No change",
        line={"dash": "dash", "color": "black"},
        hoverinfo="skip",
    ))

    fig.update_layout(
        title=spec.style.title,
        xaxis_title=spec.style.x_label,
        yaxis_title=spec.style.y_label,
        xaxis={"range": [lower, upper]},
        yaxis={"range": [lower, upper]},
        template="plotly_white",
    )
    return fig


def export_figure(
    fig: Any,
    name: str,
    open_browser: bool = False,
    charts_dir: Path | None = None,
) -> Path:
    """Write *fig* to a timestamped HTML file in the charts directory."""
    charts_dir = _ensure_charts_dir(charts_dir)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = charts_dir / f"{name}_{stamp}.html"
    fig.write_html(str(filepath))
    logger.info("Chart saved to %s", filepath)

    if open_browser:
        webbrowser.open(filepath.as_uri())

    return filepath


def spec_figure(spec: ChartSpec) -> Any:
    """Build the Plotly figure matching the type of *spec*."""
    if isinstance(spec, HistogramSpec):
        return histogram_figure(spec)
    if isinstance(spec, GroupedBarSpec):
        return grouped_bar_figure(spec)
    return scatter_figure(spec)


def export_report_charts(
    specs: dict[str, ChartSpec],
    open_browser: bool = False,
    charts_dir: Path | None = None,
) -> dict[str, Path]:
    """Render and save each named spec, returning the written paths."""
    return {
        name: export_figure(
            spec_figure(spec), name,
            open_browser=open_browser, charts_dir=charts_dir,
        )
        for name, spec in specs.items()
    }
