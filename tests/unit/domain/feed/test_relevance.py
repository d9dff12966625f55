"""Unit tests for the relevance classifier."""

from vouch.domain.feed import classify
from vouch.domain.value import ActivityCategory
from tests.conftest import ALICE, BOB, CAROL, make_request

CIRCLE = frozenset({ALICE, BOB})


class TestClassify:
    """Tests for classify rule precedence."""

    def test_own_request_without_responses_is_open(self):
        request = make_request(requester=ALICE)

        assert classify(request, ALICE, CIRCLE) == ActivityCategory.MY_OPEN_REQUEST

    def test_own_request_with_responses(self):
        request = make_request(requester=ALICE, responders=(BOB,))

        assert (
            classify(request, ALICE, CIRCLE)
            == ActivityCategory.MY_REQUEST_WITH_RESPONSES
        )

    def test_requester_who_also_responded_keeps_requester_view(self):
        """Being the requester beats having answered."""
        request = make_request(requester=ALICE, responders=(ALICE,))

        assert (
            classify(request, ALICE, CIRCLE)
            == ActivityCategory.MY_REQUEST_WITH_RESPONSES
        )

    def test_responder_sees_followups_even_when_requester_is_friend(self):
        """Having answered beats the friend rule."""
        request = make_request(requester=ALICE, responders=(BOB,))

        assert (
            classify(request, BOB, frozenset({ALICE, BOB}))
            == ActivityCategory.MY_RESPONSE_WITH_FOLLOWUPS
        )

    def test_friend_open_request_needs_help(self):
        request = make_request(requester=ALICE)

        assert classify(request, BOB, CIRCLE) == ActivityCategory.FRIEND_NEEDS_HELP

    def test_friend_request_already_answered_by_someone_else_is_hidden(self):
        """Once anyone answers, only participants see the request."""
        request = make_request(requester=ALICE, responders=(CAROL,))

        assert classify(request, BOB, CIRCLE) is None

    def test_stranger_request_is_not_relevant(self):
        request = make_request(requester=CAROL)

        assert classify(request, BOB, CIRCLE) is None

    def test_responder_outside_circle_still_sees_own_response(self):
        """Rule 2 does not depend on the circle."""
        request = make_request(requester=CAROL, responders=(BOB,))

        assert (
            classify(request, BOB, frozenset({BOB}))
            == ActivityCategory.MY_RESPONSE_WITH_FOLLOWUPS
        )
