"""Change notification interface.

Writers publish the name of the collection they changed; subscribers
re-read the whole collection (full-snapshot semantics). Notifications
carry no payload and are delivered only after the write is durable.
"""

from abc import ABC, abstractmethod
from typing import Callable

from vouch.domain.value import Collection

ChangeListener = Callable[[Collection], None]


class ChangeSubscription(ABC):
    """Handle returned by ``ChangeFeed.subscribe``."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop delivering notifications to the listener. Idempotent."""
        pass


class ChangeFeed(ABC):
    """Publishes and delivers collection change notifications."""

    @abstractmethod
    def subscribe(
        self, collection: Collection, listener: ChangeListener
    ) -> ChangeSubscription:
        """Register a listener for changes to one collection.

        Args:
            collection: Collection to watch
            listener: Called synchronously with the collection name

        Returns:
            Subscription handle used to cancel
        """
        pass

    @abstractmethod
    def publish(self, collection: Collection) -> None:
        """Announce that a collection changed."""
        pass
