# grocery_prices/models/summary.py

"""Descriptive statistics for one group of prices."""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class AggregateSummary:
    """Mean, median, spread and range of the present values in a group.

    Every statistic is ``None`` when it is undefined for the group.
    """

    count: int
    mean: float | None
    median: float | None
    std: float | None
    minimum: float | None
    maximum: float | None

    @classmethod
    def empty(cls) -> "AggregateSummary":
        """Summary of a group with no present values."""
        return cls(
            count=0,
            mean=None,
            median=None,
            std=None,
            minimum=None,
            maximum=None,
        )

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def as_dict(self) -> dict[str, float | int | None]:
        return asdict(self)
