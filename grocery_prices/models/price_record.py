# grocery_prices/models/price_record.py

"""Row model for one observed grocery price."""

from dataclasses import dataclass

PRICE_DROP = "price-drop"
PRICE_INCREASE = "price-increase"
UNCHANGED = "unchanged"

PRICE_CHANGES: tuple[str, ...] = (PRICE_DROP, PRICE_INCREASE, UNCHANGED)


def classify_price_change(old_price: float, current_price: float) -> str:
    """Place an (old, current) pair relative to the identity line.

    Points below the line (current < old) are price drops, points above
    are price increases.
    """
    if current_price < old_price:
        return PRICE_DROP
    if current_price > old_price:
        return PRICE_INCREASE
    return UNCHANGED


@dataclass(frozen=True)
class PriceRecord:
    """A single vendor price observation."""

    vendor: str
    current_price: float | None = None
    old_price: float | None = None
    units: str | None = None

    @property
    def price_change(self) -> str | None:
        """Classification of the advertised change, if both prices exist."""
        if self.current_price is None or self.old_price is None:
            return None
        return classify_price_change(self.old_price, self.current_price)
