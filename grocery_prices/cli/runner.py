# grocery_prices/cli/runner.py

"""Headless report runner: load, summarise, tabulate and chart."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from grocery_prices.analysis.aggregator import price_change_counts, summarize
from grocery_prices.analysis.transforms import get_transform, identity
from grocery_prices.charts.chart_specs import (
    HistogramSpec,
    ScatterSpec,
    build_report_specs,
)
from grocery_prices.config.settings import Settings
from grocery_prices.reporting.summary_tables import (
    price_change_table,
    summaries_to_dicts,
    summary_table,
)
from grocery_prices.storage.chart_exporter import export_report_charts
from grocery_prices.storage.errors import InputNotFoundError, MalformedInputError
from grocery_prices.storage.price_loader import load_prices

logger = logging.getLogger("grocery_prices.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def _report_exclusions(specs: dict[str, object]) -> None:
    """Tell the reader how many rows each clipped chart leaves out."""
    for name, spec in specs.items():
        if isinstance(spec, (HistogramSpec, ScatterSpec)) and spec.excluded_count:
            _err.print(
                f"[dim]{name}: {spec.excluded_count:,} value(s) outside "
                f"the plotted range[/dim]"
            )


def run_report(
    data_path: str | None = None,
    output_format: str = "table",
    output_dir: str | None = None,
    charts: bool = True,
    open_browser: bool = False,
    transform_name: str = Settings.DEFAULT_TRANSFORM,
) -> int:
    """Generate the report and return an exit code (0=ok, 1=fail)."""
    path = Path(data_path) if data_path else Settings.DATA_PATH
    _err.print(f"[bold]Loading:[/bold] {path}")

    try:
        table = load_prices(path)
    except (InputNotFoundError, MalformedInputError) as exc:
        logger.error("Report aborted: %s", exc, exc_info=True)
        _err.print(f"[red]{escape(str(exc))}[/red]")
        return 1

    if table.empty:
        _err.print("[yellow]No price rows found.[/yellow]")
        return 1

    transform = get_transform(transform_name)
    by_vendor = summarize(
        table, "current_price", identity, group_by="vendor",
    )
    transformed = summarize(
        table, "current_price", transform, group_by="vendor",
    )
    changes = price_change_counts(table)

    _err.print(
        f"[green]✓ {len(table):,} rows from "
        f"{len(by_vendor)} vendors[/green]"
    )

    if output_format == "json":
        json.dump(
            {
                "current_price": summaries_to_dicts(by_vendor),
                f"current_price_{transform_name}": summaries_to_dicts(
                    transformed
                ),
                "price_changes": changes,
            },
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    else:
        console = Console()
        console.print(summary_table(
            by_vendor, "Current price by vendor ($)",
        ))
        console.print(summary_table(
            transformed,
            f"Current price by vendor ({transform_name})",
            decimals=3,
        ))
        console.print(price_change_table(changes))

    if charts:
        specs = build_report_specs(table)
        _report_exclusions(specs)
        charts_dir = (
            Path(output_dir) / "charts" if output_dir else Settings.CHARTS_DIR
        )
        for name, chart_path in export_report_charts(
            specs, open_browser=open_browser, charts_dir=charts_dir,
        ).items():
            _err.print(f"[dim]Saved {name} → {chart_path}[/dim]")

    return 0
