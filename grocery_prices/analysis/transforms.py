# grocery_prices/analysis/transforms.py

"""Value transforms applied to a price column before aggregation."""

from collections.abc import Callable
from functools import reduce

import numpy as np
import pandas as pd

Transform = Callable[[pd.Series], pd.Series]


def identity(values: pd.Series) -> pd.Series:
    return values


def log1p(values: pd.Series) -> pd.Series:
    """``ln(x + 1)``: keeps zero prices finite and compresses right skew."""
    return np.log1p(values)


def compose(*transforms: Transform) -> Transform:
    """Chain transforms, applying them left to right."""
    if not transforms:
        return identity
    return lambda values: reduce(lambda acc, fn: fn(acc), transforms, values)


TRANSFORMS: dict[str, Transform] = {
    "identity": identity,
    "log1p": log1p,
}


def get_transform(name: str) -> Transform:
    """Look up a registered transform by name."""
    try:
        return TRANSFORMS[name]
    except KeyError:
        valid = ", ".join(sorted(TRANSFORMS))
        msg = f"Unknown transform '{name}' (available: {valid})"
        raise ValueError(msg) from None
