# grocery_prices/analysis/aggregator.py

"""Grouped and ungrouped descriptive statistics over price columns."""

import logging

import numpy as np
import pandas as pd

from grocery_prices.analysis.transforms import Transform, identity
from grocery_prices.models.price_record import PRICE_CHANGES, classify_price_change
from grocery_prices.models.summary import AggregateSummary

logger = logging.getLogger("grocery_prices.aggregator")

# Key used for the single group when no grouping column is given
ALL_ROWS = "All vendors"


def _require_column(table: pd.DataFrame, column: str) -> None:
    if column not in table.columns:
        msg = f"Unknown column '{column}' (have: {', '.join(table.columns)})"
        raise ValueError(msg)


def _summarize_values(
    values: pd.Series, transform: Transform,
) -> AggregateSummary:
    """Summarise the present values of one group after *transform*."""
    present = values.dropna().astype("float64")
    if present.empty:
        return AggregateSummary.empty()

    transformed = pd.Series(transform(present), dtype="float64")
    transformed = transformed[np.isfinite(transformed)]
    if transformed.empty:
        return AggregateSummary.empty()

    count = len(transformed)
    if count < 2:
        std: float | None = None
    elif transformed.nunique() == 1:
        std = 0.0
    else:
        std = float(transformed.std(ddof=1))

    return AggregateSummary(
        count=count,
        mean=float(transformed.mean()),
        median=float(transformed.median()),
        std=std,
        minimum=float(transformed.min()),
        maximum=float(transformed.max()),
    )


def group_keys(table: pd.DataFrame, group_by: str) -> list[str]:
    """Distinct values of *group_by* in order of first appearance."""
    _require_column(table, group_by)
    return [str(k) for k in pd.unique(table[group_by].dropna().astype(object))]


def summarize(
    table: pd.DataFrame,
    field: str,
    transform: Transform = identity,
    group_by: str | None = None,
) -> dict[str, AggregateSummary]:
    """Describe *field* per group, excluding absent values pairwise.

    Returns a mapping from group key to :class:`AggregateSummary`. Without
    *group_by* the mapping has the single key :data:`ALL_ROWS`. Group keys
    keep the order in which they first appear in *table*. A group with no
    present values maps to an all-absent summary.
    """
    _require_column(table, field)
    values = table[field]

    if group_by is None:
        return {ALL_ROWS: _summarize_values(values, transform)}

    _require_column(table, group_by)
    groups = {
        str(key): group
        for key, group in values.groupby(
            table[group_by], sort=False, observed=True,
        )
    }
    result: dict[str, AggregateSummary] = {}
    for key in group_keys(table, group_by):
        summary = _summarize_values(groups[key], transform)
        if summary.is_empty:
            logger.debug("No present '%s' values for %s", field, key)
        result[key] = summary

    logger.debug(
        "Summarised '%s' over %d group(s) with %s",
        field,
        len(result),
        getattr(transform, "__name__", "transform"),
    )
    return result


def summary_frame(summaries: dict[str, AggregateSummary]) -> pd.DataFrame:
    """Tabulate summaries, one row per group key."""
    return pd.DataFrame(
        [s.as_dict() for s in summaries.values()],
        index=pd.Index(list(summaries), name="group"),
        columns=["count", "mean", "median", "std", "minimum", "maximum"],
    )


def price_change_counts(
    table: pd.DataFrame, group_by: str = "vendor",
) -> dict[str, dict[str, int]]:
    """Count price drops, increases and unchanged rows per group.

    Only rows with both ``old_price`` and ``current_price`` present are
    classified.
    """
    _require_column(table, "old_price")
    _require_column(table, "current_price")

    counts: dict[str, dict[str, int]] = {
        key: {change: 0 for change in PRICE_CHANGES}
        for key in group_keys(table, group_by)
    }
    paired = table.dropna(subset=["old_price", "current_price", group_by])
    for key, old, current in paired[
        [group_by, "old_price", "current_price"]
    ].itertuples(index=False, name=None):
        counts[str(key)][classify_price_change(old, current)] += 1
    return counts
