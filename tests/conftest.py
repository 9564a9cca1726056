"""Pytest configuration and fixtures"""
import os
from decimal import Decimal

import pytest

# Set test environment variables before the package reads them
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from shopcart.cart import CartProduct, CartStore  # noqa: E402
from shopcart.config import Settings, get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Settings are cached per process; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Fixed settings independent of the environment"""
    return Settings(currency="USD", badge_max=99)


@pytest.fixture
def store(settings):
    """Fresh empty cart store"""
    return CartStore(settings=settings)


@pytest.fixture
def laptop():
    """Sample product"""
    return CartProduct(
        product_id=1,
        name="Laptop Pro",
        unit_price=999.99,
        image="laptop.jpg",
    )


@pytest.fixture
def headphones():
    """Sample product without image"""
    return CartProduct(product_id=2, name="Wireless Headphones", unit_price=Decimal("199.99"))


class Recorder:
    """Callback that remembers every value it receives."""

    def __init__(self):
        self.values = []

    def __call__(self, value):
        self.values.append(value)

    @property
    def last(self):
        return self.values[-1]


@pytest.fixture
def recorder():
    """Factory for recording subscriber callbacks"""
    return Recorder
