"""Change feed implementations.

``InProcessChangeFeed`` fans notifications out to listeners in this
process. ``TransactionalChangeFeed`` wraps it for one unit of work and
holds notifications back until the work's transaction has committed, so
subscribers never re-read data that is not yet visible (or never will be).
"""

import logfire

from vouch.domain.repository import ChangeFeed, ChangeListener, ChangeSubscription
from vouch.domain.value import Collection


class _ListenerHandle(ChangeSubscription):
    def __init__(
        self, feed: "InProcessChangeFeed", collection: Collection, listener: ChangeListener
    ) -> None:
        self._feed = feed
        self._collection = collection
        self._listener = listener
        self._active = True

    def cancel(self) -> None:
        if self._active:
            self._active = False
            self._feed._remove(self._collection, self._listener)


class InProcessChangeFeed(ChangeFeed):
    """Delivers notifications synchronously to listeners in this process."""

    def __init__(self) -> None:
        self._listeners: dict[Collection, list[ChangeListener]] = {}

    def subscribe(
        self, collection: Collection, listener: ChangeListener
    ) -> ChangeSubscription:
        self._listeners.setdefault(collection, []).append(listener)
        return _ListenerHandle(self, collection, listener)

    def _remove(self, collection: Collection, listener: ChangeListener) -> None:
        listeners = self._listeners.get(collection, [])
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, collection: Collection | None = None) -> int:
        if collection is not None:
            return len(self._listeners.get(collection, []))
        return sum(len(listeners) for listeners in self._listeners.values())

    def publish(self, collection: Collection) -> None:
        # Copy: listeners may cancel themselves while being notified
        for listener in list(self._listeners.get(collection, [])):
            try:
                listener(collection)
            except Exception:
                logfire.exception(
                    "Change listener failed", collection=collection.value
                )


class TransactionalChangeFeed(ChangeFeed):
    """Buffers published notifications until ``flush``.

    Subscriptions go straight to the wrapped feed. Each collection is
    announced at most once per flush.
    """

    def __init__(self, inner: ChangeFeed) -> None:
        self.inner = inner
        self._pending: list[Collection] = []

    @property
    def pending(self) -> tuple[Collection, ...]:
        return tuple(self._pending)

    def subscribe(
        self, collection: Collection, listener: ChangeListener
    ) -> ChangeSubscription:
        return self.inner.subscribe(collection, listener)

    def publish(self, collection: Collection) -> None:
        if collection not in self._pending:
            self._pending.append(collection)

    def flush(self) -> None:
        """Deliver buffered notifications (call after commit)."""
        pending, self._pending = self._pending, []
        for collection in pending:
            self.inner.publish(collection)

    def discard(self) -> None:
        """Drop buffered notifications (call after rollback)."""
        if self._pending:
            logfire.debug(
                "Discarding change notifications after rollback",
                collections=[c.value for c in self._pending],
            )
        self._pending = []
