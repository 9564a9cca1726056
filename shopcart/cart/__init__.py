"""Cart package: models, feeds, and the cart store."""
from .feed import Feed, Subscription
from .models import CartLine, CartProduct, CartState
from .store import CartStore

__all__ = [
    "CartLine",
    "CartProduct",
    "CartState",
    "CartStore",
    "Feed",
    "Subscription",
]
