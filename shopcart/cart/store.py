"""Cart store: in-memory cart state with change feeds."""
from collections import deque
from contextlib import contextmanager
from decimal import Decimal
from typing import Callable, Deque, Iterator, List, Mapping, Optional, Tuple, Union

from shopcart.config import Settings, get_settings
from shopcart.logging import get_logger, loggable_id
from shopcart.money import format_money, to_float
from .feed import Feed
from .models import CartLine, CartProduct, CartState, ProductId

logger = get_logger(__name__)

ProductInput = Union[CartProduct, Mapping]


class CartStore:
    """
    Single source of truth for the cart contents.

    Features:
    - One line per product; adding an existing product bumps its quantity
    - Two feeds, `lines` and `count`, with replay of the current value
    - Mutations called from inside a subscriber (including its first,
      replayed value) are queued until that delivery has finished

    Create one store per application and pass it to every consumer.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._lines: List[CartLine] = []
        self._lines_feed: Feed[Tuple[CartLine, ...]] = Feed((), name="lines", guard=self._replaying)
        self._count_feed: Feed[int] = Feed(0, name="count", guard=self._replaying)
        self._pending: Deque[Callable[[], bool]] = deque()
        self._publishing = False

    @property
    def lines(self) -> Feed[Tuple[CartLine, ...]]:
        """Feed of the cart lines in insertion order."""
        return self._lines_feed

    @property
    def count(self) -> Feed[int]:
        """Feed of the total item count (sum of quantities)."""
        return self._count_feed

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_item(self, product: ProductInput) -> None:
        """Add one unit of product; a new line starts at quantity 1."""
        if not isinstance(product, CartProduct):
            product = CartProduct.model_validate(product)
        self._dispatch(lambda: self._add(product))

    def remove_item(self, product_id: ProductId) -> None:
        """Remove the line for product_id. Unknown ids are ignored."""
        self._dispatch(lambda: self._remove(product_id))

    def set_quantity(self, product_id: ProductId, quantity: int) -> None:
        """
        Set the quantity of an existing line.

        quantity <= 0 removes the line. Unknown ids are ignored: only
        add_item creates lines.
        """
        quantity = int(quantity)
        self._dispatch(lambda: self._set_quantity(product_id, quantity))

    def clear(self) -> None:
        """Empty the cart."""
        self._dispatch(self._clear)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_total_price(self) -> Decimal:
        """Sum of unit_price * quantity over the current lines."""
        return sum((line.line_total for line in self._lines), Decimal("0"))

    def get_line(self, product_id: ProductId) -> Optional[CartLine]:
        index = self._index_of(product_id)
        return None if index is None else self._lines[index]

    def snapshot(self) -> CartState:
        """Current contents as an immutable CartState."""
        return CartState(lines=tuple(self._lines))

    def summary(self) -> dict:
        """Get cart summary for the cart page."""
        state = self.snapshot()
        currency = self.settings.currency

        if state.is_empty:
            return {
                "is_empty": True,
                "total_items": 0,
                "items": [],
                "total": 0.0,
                "total_display": format_money(0, currency),
            }

        total = state.total_price
        return {
            "is_empty": False,
            "total_items": state.total_count,
            "items": [
                {
                    "product_id": line.product_id,
                    "name": line.name,
                    "image": line.image,
                    "quantity": line.quantity,
                    "unit_price": to_float(line.unit_price),
                    "total": to_float(line.line_total),
                }
                for line in state.lines
            ],
            "total": to_float(total),
            "total_display": format_money(total, currency),
        }

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, product_id: object) -> bool:
        return self._index_of(product_id) is not None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index_of(self, product_id: object) -> Optional[int]:
        for index, line in enumerate(self._lines):
            if line.product_id == product_id:
                return index
        return None

    def _add(self, product: CartProduct) -> bool:
        index = self._index_of(product.product_id)
        if index is None:
            self._lines.append(CartLine.from_product(product))
            logger.debug(f"Added product {loggable_id(product.product_id)} to cart")
        else:
            line = self._lines[index]
            self._lines[index] = line.with_quantity(line.quantity + 1)
            logger.debug(
                f"Incremented product {loggable_id(product.product_id)} "
                f"to quantity {line.quantity + 1}"
            )
        return True

    def _remove(self, product_id: ProductId) -> bool:
        index = self._index_of(product_id)
        if index is None:
            return False
        del self._lines[index]
        logger.debug(f"Removed product {loggable_id(product_id)} from cart")
        return True

    def _set_quantity(self, product_id: ProductId, quantity: int) -> bool:
        if quantity <= 0:
            return self._remove(product_id)

        index = self._index_of(product_id)
        if index is None:
            logger.debug(
                f"Ignored quantity update for product {loggable_id(product_id)} "
                "not in cart"
            )
            return False
        self._lines[index] = self._lines[index].with_quantity(quantity)
        logger.debug(f"Set product {loggable_id(product_id)} quantity to {quantity}")
        return True

    def _clear(self) -> bool:
        self._lines = []
        logger.debug("Cleared cart")
        return True

    def _dispatch(self, mutation: Callable[[], bool]) -> None:
        self._pending.append(mutation)
        if self._publishing:
            # Re-entrant call from a subscriber: runs after the current publish
            logger.debug("Deferred cart mutation until current publish completes")
            return
        self._drain()

    def _drain(self) -> None:
        while self._pending:
            if self._pending.popleft()():
                self._publish()

    @contextmanager
    def _replaying(self) -> Iterator[None]:
        """Hold mutations while a new subscriber receives the current value."""
        if self._publishing:
            yield
            return
        self._publishing = True
        try:
            yield
        finally:
            self._publishing = False
        self._drain()

    def _publish(self) -> None:
        lines = tuple(self._lines)
        self._publishing = True
        try:
            # Both values are in place before any subscriber runs
            self._lines_feed._set(lines)
            self._count_feed._set(sum(line.quantity for line in lines))
            self._lines_feed._notify()
            self._count_feed._notify()
        finally:
            self._publishing = False
