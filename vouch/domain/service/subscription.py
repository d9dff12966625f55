"""Live feed and thread subscriptions.

A subscription listens to collection change notifications, marks the
affected streams dirty and, on ``refresh``, reloads only those streams
before recomputing. Consumers iterate ``updates()``; ``close()`` cancels
every listener and ends the iteration.
"""

import asyncio
from typing import AsyncContextManager, AsyncIterator, Callable, Optional

import logfire

from vouch.domain.error import RetrievalError
from vouch.domain.feed.aggregate import FeedAggregator, FeedSources, apply_filter
from vouch.domain.model.comment import Comment
from vouch.domain.model.feed import FeedItem, FeedSnapshot
from vouch.domain.repository import ChangeFeed, ChangeSubscription
from vouch.domain.value import Collection, CommentId, FeedFilter, Identity, ThreadKey

from .feed_service import CONTENT_STREAMS, FEED_STREAMS, FeedService
from .thread_service import ThreadService

# Opens a short-lived scope (one session) for a single load
FeedServiceScope = Callable[[], AsyncContextManager[FeedService]]

# Reloading a stream invalidates the streams derived from it
DEPENDENT_STREAMS: dict[Collection, frozenset[Collection]] = {
    Collection.FRIENDSHIPS: frozenset(CONTENT_STREAMS),
    Collection.RECOMMENDATIONS: frozenset({Collection.RECOMMENDATION_VOUCH_COMMENTS}),
    Collection.RECOMMENDATION_REQUESTS: frozenset({Collection.RECOMMENDATION_COMMENTS}),
}


def expand_dirty(dirty: set[Collection]) -> set[Collection]:
    """Add every stream that depends on a dirty stream."""
    expanded = set(dirty)
    for stream in dirty:
        expanded |= DEPENDENT_STREAMS.get(stream, frozenset())
    return expanded


class FeedSubscription:
    """Keeps one viewer's feed current as its source streams change.

    The subscription is bound to a single viewer for its whole life. When
    the identity changes, close it and start a new one.

    Nothing is held open between loads: ``start`` and each ``refresh``
    enter ``feed_services`` for their reads and leave it before waiting.
    """

    def __init__(
        self,
        viewer: Identity,
        feed_services: FeedServiceScope,
        change_feed: ChangeFeed,
        feed_filter: Optional[FeedFilter] = None,
    ) -> None:
        self.viewer = viewer
        self.feed_services = feed_services
        self.change_feed = change_feed
        self.feed_filter = feed_filter or FeedFilter()

        self._aggregator = FeedAggregator()
        self._handles: list[ChangeSubscription] = []
        self._dirty: set[Collection] = set()
        self._changed = asyncio.Event()
        self._closed = False
        self._sources: Optional[FeedSources] = None
        self._versions: dict[str, int] = {stream.value: 0 for stream in FEED_STREAMS}
        self._degraded: set[Collection] = set()
        self._items: list[FeedItem] = []
        self._snapshot: Optional[FeedSnapshot] = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def latest(self) -> Optional[FeedSnapshot]:
        return self._snapshot

    @property
    def pending(self) -> frozenset[Collection]:
        """Streams marked dirty since the last refresh."""
        return frozenset(self._dirty)

    def _on_change(self, collection: Collection) -> None:
        if self._closed:
            return
        self._dirty.add(collection)
        self._changed.set()

    async def start(self) -> FeedSnapshot:
        """Subscribe to every source stream and publish the first snapshot.

        Listeners are registered before loading, so a change that lands
        during the initial load is picked up by the next refresh.

        Raises:
            RetrievalError: If the viewer's circle could not be resolved
        """
        if self._closed:
            raise RuntimeError("Subscription is closed")

        with logfire.span("feed_subscription.start", viewer=self.viewer):
            for stream in FEED_STREAMS:
                self._handles.append(self.change_feed.subscribe(stream, self._on_change))

            try:
                async with self.feed_services() as feed_service:
                    circle = await feed_service.resolve_circle(self.viewer)
                    self._sources, degraded = await feed_service.load_sources(
                        self.viewer, circle
                    )
            except RetrievalError:
                self.close()
                raise

            self._degraded = set(degraded)
            return self._publish(self._sources)

    async def refresh(self) -> Optional[FeedSnapshot]:
        """Reload dirty streams and publish a new snapshot.

        A stream that fails to reload keeps its last good data and is
        reported as degraded until a later reload succeeds.

        Returns:
            The new snapshot, or None if the subscription is closed
        """
        if self._closed or self._sources is None:
            return None

        dirty = expand_dirty(self._dirty)
        self._dirty.clear()
        self._changed.clear()

        with logfire.span(
            "feed_subscription.refresh",
            viewer=self.viewer,
            dirty=sorted(s.value for s in dirty),
        ):
            sources = self._sources
            async with self.feed_services() as feed_service:
                if Collection.FRIENDSHIPS in dirty:
                    try:
                        circle = await feed_service.resolve_circle(self.viewer)
                        sources = sources.model_copy(update={"circle": circle})
                        self._degraded.discard(Collection.FRIENDSHIPS)
                        self._versions[Collection.FRIENDSHIPS.value] += 1
                    except RetrievalError:
                        logfire.warn("Keeping last known circle", viewer=self.viewer)
                        self._degraded.add(Collection.FRIENDSHIPS)

                content = [s for s in CONTENT_STREAMS if s in dirty]
                if content:
                    sources, failed = await feed_service.load_sources(
                        self.viewer, sources.circle, content, previous=sources
                    )
                    for stream in content:
                        if stream in failed:
                            self._degraded.add(stream)
                        else:
                            self._degraded.discard(stream)
                            self._versions[stream.value] += 1

            # Closed while loading: publish nothing
            if self._closed:
                return None

            self._sources = sources
            return self._publish(sources)

    def set_filter(self, feed_filter: FeedFilter) -> Optional[FeedSnapshot]:
        """Change the view-time filter without reloading or re-aggregating."""
        self.feed_filter = feed_filter
        if self._closed or self._sources is None:
            return None
        return self._publish(self._sources, reaggregate=False)

    def _publish(self, sources: FeedSources, reaggregate: bool = True) -> FeedSnapshot:
        if reaggregate:
            self._items = self._aggregator.aggregate(self.viewer, sources, self._versions)
        version = (self._snapshot.version + 1) if self._snapshot else 1
        self._snapshot = FeedSnapshot(
            viewer=self.viewer,
            items=tuple(apply_filter(self._items, self.feed_filter)),
            degraded_streams=tuple(sorted(s.value for s in self._degraded)),
            version=version,
        )
        return self._snapshot

    async def updates(self) -> AsyncIterator[FeedSnapshot]:
        """Yield the current snapshot, then one per batch of changes."""
        if self._snapshot is None:
            await self.start()
        if self._snapshot is not None and not self._closed:
            yield self._snapshot

        while not self._closed:
            await self._changed.wait()
            if self._closed:
                break
            snapshot = await self.refresh()
            if snapshot is not None:
                yield snapshot

    def close(self) -> None:
        """Unsubscribe from every stream. Idempotent."""
        if self._closed:
            return
        self._closed = True
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()
        self._dirty.clear()
        self._changed.set()
        logfire.info("Feed subscription closed", viewer=self.viewer)


class ThreadSubscription:
    """Delivers new comments of one thread to one of its participants.

    Access is checked when the subscription starts and again on every
    refresh, so a participant who loses access stops receiving comments.
    """

    def __init__(
        self,
        key: ThreadKey,
        viewer: Identity,
        thread_service: ThreadService,
        change_feed: ChangeFeed,
    ) -> None:
        self.key = key
        self.viewer = viewer
        self.thread_service = thread_service
        self.change_feed = change_feed

        self._handle: Optional[ChangeSubscription] = None
        self._delivered: set[CommentId] = set()
        self._changed = asyncio.Event()
        self._closed = False

    def _on_change(self, collection: Collection) -> None:
        if not self._closed:
            self._changed.set()

    async def start(self) -> list[Comment]:
        """Open the thread and return its current comments.

        Raises:
            NotFoundError: If the request does not exist
            AccessDeniedError: If the viewer is not a participant
        """
        thread = await self.thread_service.open_thread(self.key, self.viewer)
        self._handle = self.change_feed.subscribe(
            Collection.RECOMMENDATION_COMMENTS, self._on_change
        )
        self._delivered = {comment.id for comment in thread.comments}
        return list(thread.comments)

    async def refresh(self) -> list[Comment]:
        """Return comments posted since the last delivery, oldest first."""
        self._changed.clear()
        if self._closed:
            return []
        thread = await self.thread_service.open_thread(self.key, self.viewer)
        new = [c for c in thread.comments if c.id not in self._delivered]
        self._delivered.update(c.id for c in new)
        return new

    async def updates(self) -> AsyncIterator[list[Comment]]:
        """Yield the existing comments, then each batch of new ones."""
        if self._handle is None:
            yield await self.start()
        while not self._closed:
            await self._changed.wait()
            if self._closed:
                break
            new = await self.refresh()
            if new:
                yield new

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._handle is not None:
            self._handle.cancel()
        self._changed.set()
