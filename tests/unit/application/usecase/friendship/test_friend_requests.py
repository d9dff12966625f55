"""Unit tests for the friendship use cases."""

import pytest

from vouch.application.usecase.friendship import (
    ListFriendsRequest,
    ListFriendsUseCase,
    RespondFriendRequestRequest,
    RespondFriendRequestUseCase,
    SendFriendRequestRequest,
    SendFriendRequestUseCase,
)
from vouch.domain.error import ValidationError
from vouch.domain.value import FriendshipStatus
from tests.conftest import ALICE, BOB
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestFriendRequests:
    """Tests for sending, answering and listing friend requests."""

    @pytest.mark.asyncio
    async def test_target_email_normalised(self, unit_env):
        send = await unit_env.get(SendFriendRequestUseCase)

        item = await send.execute(
            SendFriendRequestRequest(requester=ALICE, target="  Bob@Example.COM ")
        )

        assert item.target == BOB
        assert item.status == FriendshipStatus.PENDING

    @pytest.mark.asyncio
    async def test_target_must_be_email(self, unit_env):
        send = await unit_env.get(SendFriendRequestUseCase)

        with pytest.raises(ValidationError):
            await send.execute(SendFriendRequestRequest(requester=ALICE, target="bob"))

    @pytest.mark.asyncio
    async def test_accept_then_list(self, unit_env):
        send = await unit_env.get(SendFriendRequestUseCase)
        respond = await unit_env.get(RespondFriendRequestUseCase)
        list_friends = await unit_env.get(ListFriendsUseCase)
        item = await send.execute(
            SendFriendRequestRequest(requester=ALICE, target=BOB)
        )

        incoming = await list_friends.execute(ListFriendsRequest(identity=BOB))
        assert [f.friendship_id for f in incoming.incoming] == [item.friendship_id]

        accepted = await respond.execute(
            RespondFriendRequestRequest(
                friendship_id=item.friendship_id, identity=BOB, accept=True
            )
        )
        listing = await list_friends.execute(ListFriendsRequest(identity=ALICE))

        assert accepted.friendship.status == FriendshipStatus.ACCEPTED
        assert [(f.identity, f.handle) for f in listing.friends] == [(BOB, "bob")]
        assert listing.incoming == []

    @pytest.mark.asyncio
    async def test_decline_returns_nothing(self, unit_env):
        send = await unit_env.get(SendFriendRequestUseCase)
        respond = await unit_env.get(RespondFriendRequestUseCase)
        item = await send.execute(
            SendFriendRequestRequest(requester=ALICE, target=BOB)
        )

        declined = await respond.execute(
            RespondFriendRequestRequest(
                friendship_id=item.friendship_id, identity=BOB, accept=False
            )
        )

        assert declined.friendship is None
