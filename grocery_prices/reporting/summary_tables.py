# grocery_prices/reporting/summary_tables.py

"""Rich tables summarising vendor prices."""

from rich.table import Table

from grocery_prices.models.price_record import (
    PRICE_CHANGES,
    PRICE_DROP,
    PRICE_INCREASE,
    UNCHANGED,
)
from grocery_prices.models.summary import AggregateSummary

_MISSING = "—"

_CHANGE_HEADERS: dict[str, str] = {
    PRICE_DROP: "Price drops",
    PRICE_INCREASE: "Price increases",
    UNCHANGED: "Unchanged",
}


def format_number(value: float | None, decimals: int = 2) -> str:
    """Fixed-point with thousands separators; absent values as a dash."""
    if value is None:
        return _MISSING
    return f"{value:,.{decimals}f}"


def summary_table(
    summaries: dict[str, AggregateSummary],
    title: str,
    group_label: str = "Vendor",
    decimals: int = 2,
) -> Table:
    """One row per group with count, mean, median, SD, min and max."""
    table = Table(
        title=title,
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column(group_label, style="magenta")
    table.add_column("Count", justify="right", style="dim")
    for header in ("Mean", "Median", "SD", "Min", "Max"):
        table.add_column(header, justify="right", style="green")

    for key, s in summaries.items():
        table.add_row(
            key,
            f"{s.count:,}",
            format_number(s.mean, decimals),
            format_number(s.median, decimals),
            format_number(s.std, decimals),
            format_number(s.minimum, decimals),
            format_number(s.maximum, decimals),
        )
    return table


def price_change_table(
    counts: dict[str, dict[str, int]],
    title: str = "Advertised price changes by vendor",
) -> Table:
    """Counts and share of drops, increases and unchanged prices."""
    table = Table(
        title=title,
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Vendor", style="magenta")
    for change in PRICE_CHANGES:
        table.add_column(_CHANGE_HEADERS[change], justify="right")
    table.add_column("Share dropped", justify="right", style="green")

    for vendor, by_change in counts.items():
        total = sum(by_change.values())
        share = (
            f"{by_change[PRICE_DROP] / total:.1%}" if total else _MISSING
        )
        table.add_row(
            vendor,
            *(f"{by_change[change]:,}" for change in PRICE_CHANGES),
            share,
        )
    return table


def summaries_to_dicts(
    summaries: dict[str, AggregateSummary],
) -> dict[str, dict[str, float | int | None]]:
    """Serialise summaries to plain dicts for JSON output."""
    return {key: s.as_dict() for key, s in summaries.items()}
