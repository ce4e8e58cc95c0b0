"""Change notification for the in-memory trackers.

Trackers own a ``ChangeSignal`` and emit it after every effective mutation.
Presentation code subscribes a zero-argument callback and re-renders when it
fires. Notifications are synchronous: ``emit`` returns only after every
subscriber has run, in the same call stack as the mutation.
"""
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from itertools import count

logger = logging.getLogger(__name__)

Callback = Callable[[], None]

_ids = count(1)


@dataclass(eq=False)
class Subscription:
    """Handle returned by ``ChangeSignal.subscribe``.

    Attributes:
        callback: The callable invoked on every emit.
        signal: The signal this subscription belongs to.
        number: Process-unique number, useful in logs.
    """
    callback: Callback
    signal: "ChangeSignal" = field(repr=False)
    number: int = field(default_factory=lambda: next(_ids))

    @property
    def active(self) -> bool:
        return self.signal.is_subscribed(self)

    def cancel(self) -> bool:
        """Stop receiving notifications. Returns False if already cancelled."""
        return self.signal.unsubscribe(self)


class ChangeSignal:
    """A zero-argument "changed" signal with explicit subscribe/unsubscribe."""

    def __init__(self, name: str = "changed"):
        self.name = name
        self._subscriptions: list[Subscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, callback: Callback) -> Subscription:
        """Register ``callback`` and return a handle that can cancel it."""
        if not callable(callback):
            raise TypeError(f"{self.name} subscriber must be callable, got {callback!r}")
        subscription = Subscription(callback=callback, signal=self)
        self._subscriptions.append(subscription)
        logger.debug(f"Subscribed #{subscription.number} to {self.name}")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            return False
        logger.debug(f"Unsubscribed #{subscription.number} from {self.name}")
        return True

    def is_subscribed(self, subscription: Subscription) -> bool:
        return subscription in self._subscriptions

    def clear(self) -> None:
        """Drop every subscriber."""
        self._subscriptions.clear()

    def emit(self) -> None:
        """Invoke every subscriber in subscription order.

        Iterates over a snapshot, so callbacks that subscribe or unsubscribe
        during an emit only affect the next one. Exceptions from a callback
        propagate to the caller.
        """
        for subscription in list(self._subscriptions):
            subscription.callback()
