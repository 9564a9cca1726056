"""shopcart - in-memory shopping cart state with change feeds."""
from shopcart.cart import CartLine, CartProduct, CartState, CartStore
from shopcart.config import get_settings
from shopcart.logging import configure_logging

__version__ = "1.0.0"

configure_logging(get_settings().log_level)

__all__ = [
    "CartLine",
    "CartProduct",
    "CartState",
    "CartStore",
    "configure_logging",
]
