"""
Headless cart views.

Display surfaces that only read the cart through its feeds:
- CartBadge: item count for the header badge
- CartSummary: lines and total for the cart page
"""
from decimal import Decimal
from typing import Tuple

from shopcart.cart import CartLine, CartStore
from shopcart.money import format_money


class CartBadge:
    """Header badge showing the number of items in the cart."""

    def __init__(self, store: CartStore):
        self.max_count = store.settings.badge_max
        self.count = 0
        self._subscription = store.count.subscribe(self._on_count)

    def _on_count(self, count: int) -> None:
        self.count = count

    @property
    def label(self) -> str:
        """Badge text: empty when the cart is empty, capped at max_count."""
        if self.count <= 0:
            return ""
        if self.count > self.max_count:
            return f"{self.max_count}+"
        return str(self.count)

    def close(self) -> None:
        self._subscription.unsubscribe()


class CartSummary:
    """Cart page: current lines and the order total."""

    def __init__(self, store: CartStore):
        self._store = store
        self.lines: Tuple[CartLine, ...] = ()
        self.total = Decimal("0")
        self._subscription = store.lines.subscribe(self._on_lines)

    def _on_lines(self, lines: Tuple[CartLine, ...]) -> None:
        self.lines = lines
        self.total = self._store.get_total_price()

    @property
    def total_display(self) -> str:
        return format_money(self.total, self._store.settings.currency)

    def close(self) -> None:
        self._subscription.unsubscribe()
