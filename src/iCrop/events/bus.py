"""In-process publish/subscribe for crop session notifications."""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Type


@dataclass(kw_only=True)
class Event:
    """Base class for everything a crop session publishes."""
    timestamp: datetime = field(default_factory=datetime.now)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))


@dataclass
class Subscription:
    """Handle returned by :meth:`EventBus.subscribe`."""
    event_type: Type[Event]
    handler: Callable[[Event], None]
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    """Deliver crop events to listeners on the publishing thread.

    A listener subscribed to an event class also receives its subclasses, so
    subscribing to :class:`Event` observes every notification of a session.
    Listeners for the most specific class run first, each group in
    subscription order.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)
        self._subscriptions: Dict[Type[Event], List[Subscription]] = defaultdict(list)

    def subscribe(self, event_type: Type[Event], handler: Callable[[Event], None]) -> Subscription:
        sub = Subscription(event_type=event_type, handler=handler)
        self._subscriptions[event_type].append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.cancel()
        subs = self._subscriptions.get(subscription.event_type)
        if subs and subscription in subs:
            subs.remove(subscription)

    def listeners(self, event_type: Type[Event]) -> List[Subscription]:
        """Return the active subscriptions that *event_type* is delivered to."""

        matched: List[Subscription] = []
        for klass in event_type.__mro__:
            if klass is object:
                break
            matched.extend(sub for sub in self._subscriptions.get(klass, ()) if sub.active)
        return matched

    def publish(self, event: Event) -> int:
        """Deliver *event* and return how many listeners handled it without raising."""

        delivered = 0
        for sub in self.listeners(type(event)):
            if not sub.active:
                continue
            try:
                sub.handler(event)
            except Exception:
                # Listener failures never reach the publisher.
                self._logger.exception(
                    "Listener for %s failed on %s", sub.event_type.__name__, type(event).__name__
                )
                continue
            delivered += 1
        return delivered
