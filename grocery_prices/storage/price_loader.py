# grocery_prices/storage/price_loader.py

"""Load the cleaned grocery price CSV into a typed table."""

import logging
from pathlib import Path

import numpy as np
import pandas as pd

from grocery_prices.config.settings import Settings
from grocery_prices.models.price_record import PriceRecord
from grocery_prices.storage.errors import InputNotFoundError, MalformedInputError

logger = logging.getLogger("grocery_prices.loader")

COLUMNS: list[str] = ["vendor", "current_price", "old_price", "units"]


def _to_price(raw: pd.Series, column: str) -> pd.Series:
    """Parse a price column, keeping empty and invalid cells absent."""
    numeric = pd.to_numeric(raw, errors="coerce").astype("float64")

    unparseable = int((numeric.isna() & raw.notna()).sum())
    if unparseable:
        logger.warning(
            "%d non-numeric value(s) in '%s' treated as missing",
            unparseable,
            column,
        )

    # "inf" and "-inf" parse as floats but are not prices
    finite = pd.Series(np.isfinite(numeric), index=numeric.index)
    non_finite = int((numeric.notna() & ~finite).sum())
    if non_finite:
        logger.warning(
            "%d non-finite value(s) in '%s' treated as missing",
            non_finite,
            column,
        )

    negative = int((finite & (numeric < 0)).sum())
    if negative:
        logger.warning(
            "%d negative value(s) in '%s' treated as missing",
            negative,
            column,
        )

    return numeric.where(finite & (numeric >= 0))


def _to_vendor(raw: pd.Series) -> pd.Series:
    """Categorical vendor column, categories in order of appearance."""
    values = raw.astype("string").str.strip()
    values = values.mask((values == "").fillna(False))
    return pd.Series(
        pd.Categorical(values, categories=pd.unique(values.dropna())),
        index=raw.index,
        name="vendor",
    )


def load_prices(path: Path | str | None = None) -> pd.DataFrame:
    """Read the price CSV at *path* (default ``Settings.DATA_PATH``).

    The returned frame has exactly the columns ``vendor`` (categorical),
    ``current_price`` and ``old_price`` (float, ``NaN`` when absent) and
    ``units`` (string, ``<NA>`` when absent). Missing optional columns
    are added as all-absent columns; extra columns are dropped.

    Raises:
        InputNotFoundError: *path* does not resolve to a file.
        MalformedInputError: ``vendor`` or ``current_price`` is absent
            from the header, or the file is not valid UTF-8 CSV (ragged
            rows, undecodable bytes).
    """
    csv_path = Path(path) if path is not None else Settings.DATA_PATH
    if not csv_path.is_file():
        raise InputNotFoundError(f"Price data not found: {csv_path}")

    try:
        raw = pd.read_csv(
            csv_path, dtype=str, skipinitialspace=True, encoding="utf-8",
        )
    except pd.errors.EmptyDataError as exc:
        raise MalformedInputError(
            str(csv_path), Settings.REQUIRED_COLUMNS,
        ) from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise MalformedInputError(str(csv_path), reason=str(exc)) from exc

    raw.columns = [str(c).strip() for c in raw.columns]
    missing = [c for c in Settings.REQUIRED_COLUMNS if c not in raw.columns]
    if missing:
        raise MalformedInputError(str(csv_path), missing)

    for column in Settings.OPTIONAL_COLUMNS:
        if column not in raw.columns:
            logger.info(
                "Column '%s' not in %s, treating it as missing",
                column,
                csv_path.name,
            )
            raw[column] = None

    vendor = _to_vendor(raw["vendor"])
    keep = vendor.notna()
    dropped = int((~keep).sum())
    if dropped:
        logger.warning("Dropped %d row(s) with no vendor", dropped)

    table = pd.DataFrame({
        "vendor": vendor,
        "current_price": _to_price(raw["current_price"], "current_price"),
        "old_price": _to_price(raw["old_price"], "old_price"),
        "units": raw["units"].astype("string"),
    })[keep].reset_index(drop=True)
    table["vendor"] = table["vendor"].cat.remove_unused_categories()

    unknown = sorted(
        set(table["vendor"].cat.categories) - set(Settings.KNOWN_VENDORS)
    )
    if unknown:
        logger.info("Vendors outside the known set: %s", ", ".join(unknown))

    logger.info(
        "Loaded %d rows from %s (%d vendors)",
        len(table),
        csv_path,
        len(table["vendor"].cat.categories),
    )
    return table


def _absent_to_none(value: object) -> object:
    return None if pd.isna(value) else value


def to_records(table: pd.DataFrame) -> tuple[PriceRecord, ...]:
    """Convert a loaded table into immutable :class:`PriceRecord` rows."""
    records: list[PriceRecord] = []
    for vendor, current, old, units in table[COLUMNS].itertuples(
        index=False, name=None,
    ):
        current = _absent_to_none(current)
        old = _absent_to_none(old)
        units = _absent_to_none(units)
        records.append(PriceRecord(
            vendor=str(vendor),
            current_price=float(current) if current is not None else None,
            old_price=float(old) if old is not None else None,
            units=str(units) if units is not None else None,
        ))
    return tuple(records)
