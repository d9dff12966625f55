"""Unit tests for the change feed implementations."""

from vouch.domain.value import Collection
from vouch.persistence.change_feed import InProcessChangeFeed, TransactionalChangeFeed


class TestInProcessChangeFeed:
    """Tests for InProcessChangeFeed."""

    def test_delivers_to_matching_listeners_only(self):
        feed = InProcessChangeFeed()
        seen = []
        feed.subscribe(Collection.VOTES, seen.append)

        feed.publish(Collection.FRIENDSHIPS)
        feed.publish(Collection.VOTES)

        assert seen == [Collection.VOTES]

    def test_cancel_is_idempotent(self):
        feed = InProcessChangeFeed()
        seen = []
        handle = feed.subscribe(Collection.VOTES, seen.append)

        handle.cancel()
        handle.cancel()
        feed.publish(Collection.VOTES)

        assert seen == []
        assert feed.listener_count() == 0

    def test_failing_listener_does_not_stop_others(self):
        feed = InProcessChangeFeed()
        seen = []

        def broken(collection):
            raise RuntimeError("listener bug")

        feed.subscribe(Collection.VOTES, broken)
        feed.subscribe(Collection.VOTES, seen.append)

        feed.publish(Collection.VOTES)

        assert seen == [Collection.VOTES]

    def test_listener_may_cancel_itself(self):
        feed = InProcessChangeFeed()
        seen = []
        handles = []

        def once(collection):
            seen.append(collection)
            handles[0].cancel()

        handles.append(feed.subscribe(Collection.VOTES, once))
        feed.publish(Collection.VOTES)
        feed.publish(Collection.VOTES)

        assert seen == [Collection.VOTES]


class TestTransactionalChangeFeed:
    """Tests for TransactionalChangeFeed."""

    def test_held_until_flush(self):
        hub = InProcessChangeFeed()
        unit_of_work = TransactionalChangeFeed(hub)
        seen = []
        hub.subscribe(Collection.RECOMMENDATIONS, seen.append)

        unit_of_work.publish(Collection.RECOMMENDATIONS)
        assert seen == []

        unit_of_work.flush()
        assert seen == [Collection.RECOMMENDATIONS]
        assert unit_of_work.pending == ()

    def test_each_collection_announced_once_per_flush(self):
        hub = InProcessChangeFeed()
        unit_of_work = TransactionalChangeFeed(hub)
        seen = []
        hub.subscribe(Collection.RECOMMENDATIONS, seen.append)
        hub.subscribe(Collection.VOTES, seen.append)

        unit_of_work.publish(Collection.RECOMMENDATIONS)
        unit_of_work.publish(Collection.VOTES)
        unit_of_work.publish(Collection.RECOMMENDATIONS)
        unit_of_work.flush()

        assert seen == [Collection.RECOMMENDATIONS, Collection.VOTES]

    def test_discard_after_rollback(self):
        hub = InProcessChangeFeed()
        unit_of_work = TransactionalChangeFeed(hub)
        seen = []
        hub.subscribe(Collection.VOTES, seen.append)

        unit_of_work.publish(Collection.VOTES)
        unit_of_work.discard()
        unit_of_work.flush()

        assert seen == []

    def test_subscriptions_go_to_the_hub(self):
        hub = InProcessChangeFeed()
        unit_of_work = TransactionalChangeFeed(hub)

        handle = unit_of_work.subscribe(Collection.VOTES, lambda c: None)
        assert hub.listener_count(Collection.VOTES) == 1

        handle.cancel()
        assert hub.listener_count(Collection.VOTES) == 0
