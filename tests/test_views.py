"""
Tests for cart views
"""

from decimal import Decimal

from shopcart.cart import CartStore
from shopcart.config import Settings
from shopcart.views import CartBadge, CartSummary


class TestCartBadge:
    """Tests for the header badge."""

    def test_empty_badge(self, store):
        """Test empty cart shows no label."""
        badge = CartBadge(store)

        assert badge.count == 0
        assert badge.label == ""

    def test_badge_follows_count(self, store, laptop, headphones):
        """Test badge updates on every mutation."""
        badge = CartBadge(store)

        store.add_item(laptop)
        store.add_item(headphones)
        store.set_quantity(2, 4)

        assert badge.count == 5
        assert badge.label == "5"

    def test_badge_cap(self, laptop):
        """Test label is capped by configuration."""
        store = CartStore(settings=Settings(badge_max=9))
        badge = CartBadge(store)

        store.add_item(laptop)
        store.set_quantity(1, 12)

        assert badge.label == "9+"

    def test_close(self, store, laptop):
        """Test closed badge stops updating."""
        badge = CartBadge(store)
        badge.close()

        store.add_item(laptop)

        assert badge.count == 0


class TestCartSummary:
    """Tests for the cart page summary."""

    def test_late_summary_sees_current_cart(self, store, laptop):
        """Test a summary created after adds shows the existing lines."""
        store.add_item(laptop)
        store.add_item(laptop)

        summary = CartSummary(store)

        assert len(summary.lines) == 1
        assert summary.total == Decimal("1999.98")
        assert summary.total_display == "$1,999.98"

    def test_summary_tracks_clear(self, store, laptop):
        """Test summary resets after clear."""
        summary = CartSummary(store)
        store.add_item(laptop)
        store.clear()

        assert summary.lines == ()
        assert summary.total == 0
        assert summary.total_display == "$0.00"

    def test_currency_from_settings(self, headphones):
        """Test display currency comes from settings."""
        store = CartStore(settings=Settings(currency="EUR"))
        summary = CartSummary(store)

        store.add_item(headphones)

        assert summary.total_display == "€199.99"

    def test_shared_store(self, store, laptop):
        """Test several views on one injected store stay in sync."""
        badge = CartBadge(store)
        summary = CartSummary(store)

        store.add_item(laptop)

        assert badge.count == sum(line.quantity for line in summary.lines)
