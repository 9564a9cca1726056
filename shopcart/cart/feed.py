"""Subscribable values with replay of the latest value on subscribe."""
from contextlib import nullcontext
from typing import Callable, ContextManager, Generic, List, Optional, TypeVar

from shopcart.errors import ERROR_SUBSCRIBER_NOT_CALLABLE
from shopcart.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by Feed.subscribe."""

    def __init__(self, feed: "Feed", callback: Callable):
        self._feed: Optional[Feed] = feed
        self.callback = callback
        # Version of the last value delivered to this subscriber
        self.seen_version = -1

    @property
    def active(self) -> bool:
        return self._feed is not None

    def unsubscribe(self) -> None:
        """Stop receiving values. Safe to call more than once."""
        if self._feed is None:
            return
        self._feed._remove(self)
        self._feed = None

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


class Feed(Generic[T]):
    """
    Observer registry with a cached last value.

    New subscribers are called immediately with the current value, then once
    per published value. Callbacks run synchronously in subscription order.
    Only the owning store publishes; consumers subscribe or read `value`.

    `guard` is supplied by the owner and wraps the first delivery to a new
    subscriber, so work the callback triggers waits until it has returned.
    """

    def __init__(
        self,
        initial: T,
        name: str = "feed",
        guard: Optional[Callable[[], ContextManager]] = None,
    ):
        self.name = name
        self._guard = guard or nullcontext
        self._value = initial
        self._version = 0
        self._subscriptions: List[Subscription] = []

    @property
    def value(self) -> T:
        """Last published value."""
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """Register callback and deliver the current value to it right away."""
        if not callable(callback):
            raise TypeError(ERROR_SUBSCRIBER_NOT_CALLABLE)
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        with self._guard():
            self._deliver(subscription)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _set(self, value: T) -> None:
        self._value = value
        self._version += 1

    def _notify(self) -> None:
        # Copy: callbacks may subscribe or unsubscribe while we iterate
        for subscription in list(self._subscriptions):
            if subscription.active and subscription.seen_version < self._version:
                self._deliver(subscription)

    def _deliver(self, subscription: Subscription) -> None:
        subscription.seen_version = self._version
        try:
            subscription.callback(self._value)
        except Exception as e:
            logger.warning(f"Subscriber of '{self.name}' feed failed: {e}", exc_info=True)
