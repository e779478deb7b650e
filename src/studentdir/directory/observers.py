"""Observer registry for directory state changes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import uuid4

from studentdir.logging import get_logger

if TYPE_CHECKING:
    from studentdir.directory.models import DirectoryState

logger = get_logger("directory.observers")

StateCallback = Callable[["DirectoryState"], None]


@dataclass
class StateObservers:
    """Subscribers notified with each new DirectoryState."""

    _subscribers: dict[str, StateCallback] = field(default_factory=dict)

    def subscribe(self, callback: StateCallback) -> str:
        """Register a callback.

        Args:
            callback: Called with every new state snapshot.

        Returns:
            Subscriber ID for unsubscribe().
        """
        subscriber_id = str(uuid4())
        self._subscribers[subscriber_id] = callback
        return subscriber_id

    def unsubscribe(self, subscriber_id: str) -> None:
        """Remove a callback. Unknown IDs are ignored."""
        self._subscribers.pop(subscriber_id, None)

    def publish(self, state: DirectoryState) -> None:
        """Deliver a snapshot to every subscriber.

        A failing subscriber is logged and does not stop delivery to the others.
        """
        for subscriber_id, callback in list(self._subscribers.items()):
            try:
                callback(state)
            except Exception:
                logger.exception("State subscriber %s failed", subscriber_id)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
