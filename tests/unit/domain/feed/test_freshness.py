"""Unit tests for freshness and unread counts."""

from vouch.domain.feed import compute_freshness, thread_unread_counts
from tests.conftest import (
    ALICE,
    BOB,
    CAROL,
    at,
    make_comment,
    make_request,
    make_response,
)


class TestComputeFreshness:
    """Tests for compute_freshness."""

    def test_request_without_activity_uses_created_at(self):
        request = make_request(created_at=at(5))

        freshness = compute_freshness(request, [], ALICE)

        assert freshness.sort_timestamp == at(5)
        assert freshness.unread_count == 0

    def test_latest_response_or_comment_wins(self):
        request = make_request(requester=ALICE, responders=(BOB,))
        comment = make_comment(request.id, 0, author=BOB, created_at=at(42))

        freshness = compute_freshness(request, [comment], ALICE)

        assert freshness.sort_timestamp == at(42)

    def test_own_comments_are_not_unread(self):
        request = make_request(requester=ALICE, responders=(BOB,))
        comments = [
            make_comment(request.id, 0, author=ALICE, created_at=at(20)),
            make_comment(request.id, 0, author=BOB, created_at=at(21)),
            make_comment(request.id, 0, author=BOB, created_at=at(22)),
        ]

        assert compute_freshness(request, comments, ALICE).unread_count == 2
        assert compute_freshness(request, comments, BOB).unread_count == 1

    def test_comments_for_other_requests_are_ignored(self):
        request = make_request(requester=ALICE, responders=(BOB,))
        other = make_request(requester=ALICE, responders=(BOB,))
        comment = make_comment(other.id, 0, author=BOB, created_at=at(99))

        freshness = compute_freshness(request, [comment], ALICE)

        assert freshness.unread_count == 0
        assert freshness.sort_timestamp == at(10)

    def test_new_activity_never_moves_timestamp_backwards(self):
        """Adding an older comment keeps the newer timestamp."""
        request = make_request(requester=ALICE, responders=(BOB,))
        newer = make_comment(request.id, 0, author=BOB, created_at=at(50))
        older = make_comment(request.id, 0, author=BOB, created_at=at(30))

        before = compute_freshness(request, [newer], ALICE)
        after = compute_freshness(request, [newer, older], ALICE)

        assert after.sort_timestamp >= before.sort_timestamp
        assert after.unread_count == before.unread_count + 1


class TestThreadUnreadCounts:
    """Tests for the per-thread breakdown."""

    def test_breakdown_sums_to_request_level_count(self):
        request = make_request(requester=ALICE, responders=(BOB, CAROL))
        comments = [
            make_comment(request.id, 0, author=BOB),
            make_comment(request.id, 1, author=CAROL),
            make_comment(request.id, 1, author=CAROL),
            make_comment(request.id, 1, author=ALICE),
        ]

        counts = thread_unread_counts(request, comments, ALICE)

        assert counts == {0: 1, 1: 2}
        assert sum(counts.values()) == compute_freshness(
            request, comments, ALICE
        ).unread_count

    def test_every_response_has_an_entry(self):
        request = make_request(requester=ALICE)
        request = request.with_response(make_response(request.id, 0, BOB))

        assert thread_unread_counts(request, [], ALICE) == {0: 0}
