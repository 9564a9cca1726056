"""
Tests for Feed subscriptions
"""

import pytest

from shopcart.cart import Feed


class TestFeed:
    """Tests for the replay-one observer registry."""

    def test_initial_value_replayed(self, recorder):
        """Test subscribe delivers the current value immediately."""
        feed = Feed(5, name="count")
        values = recorder()

        feed.subscribe(values)

        assert values.values == [5]
        assert feed.value == 5

    def test_not_callable(self):
        """Test subscribe rejects non-callables."""
        feed = Feed(0)

        with pytest.raises(TypeError):
            feed.subscribe("not a callback")

    def test_subscription_context_manager(self, recorder):
        """Test subscription ends when the with-block exits."""
        feed = Feed(0)
        values = recorder()

        with feed.subscribe(values) as subscription:
            assert subscription.active
            assert feed.subscriber_count == 1

        assert not subscription.active
        assert feed.subscriber_count == 0

    def test_subscribers_called_in_order(self, store, laptop):
        """Test callbacks run in subscription order."""
        calls = []
        store.count.subscribe(lambda _: calls.append("first"))
        store.count.subscribe(lambda _: calls.append("second"))
        calls.clear()

        store.add_item(laptop)

        assert calls == ["first", "second"]

    def test_unsubscribe_inside_callback(self, store, laptop, recorder):
        """Test a callback can unsubscribe itself; later subscribers still run."""
        later = recorder()
        holder = {}

        def once(value):
            if value:
                holder["subscription"].unsubscribe()

        holder["subscription"] = store.count.subscribe(once)
        store.count.subscribe(later)

        store.add_item(laptop)
        store.add_item(laptop)

        assert later.values == [0, 1, 2]
        assert store.count.subscriber_count == 1

    def test_subscribe_during_publish_delivers_once(self, store, laptop, recorder):
        """Test a subscriber added mid-publish gets the new value exactly once."""
        late = recorder()

        def on_lines(lines):
            if lines and not late.values:
                store.count.subscribe(late)

        store.lines.subscribe(on_lines)
        store.add_item(laptop)

        assert late.values == [1]
