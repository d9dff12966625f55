"""Friendship domain service."""

from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from vouch.config import FeedSettings
from vouch.domain.error import (
    BusinessRuleViolationError,
    DuplicateFriendshipError,
    NotFoundError,
    RetrievalError,
)
from vouch.domain.feed.circle import cap_circle, resolve_circle
from vouch.domain.model.friendship import Friendship
from vouch.domain.repository import ChangeFeed, FriendshipRepository
from vouch.domain.value import (
    Collection,
    FriendshipId,
    FriendshipStatus,
    Identity,
)

from .base import Service


class FriendshipService(Service):
    """Domain service for the friend graph and circle resolution."""

    def __init__(
        self,
        friendship_repository: FriendshipRepository,
        change_feed: ChangeFeed,
        feed_settings: FeedSettings,
    ) -> None:
        """Initialize friendship service.

        Args:
            friendship_repository: Friendship repository
            change_feed: Change notifications for written collections
            feed_settings: Feed settings (circle size cap)
        """
        self.friendship_repository = friendship_repository
        self.change_feed = change_feed
        self.feed_settings = feed_settings

    async def resolve_circle(self, identity: Identity) -> frozenset[Identity]:
        """Resolve the in-circle set for an identity.

        Returns:
            The identity plus every accepted friend

        Raises:
            RetrievalError: If friendships could not be read. A failed read
                is never reported as an empty circle.
        """
        with logfire.span("friendship_service.resolve_circle", identity=identity):
            try:
                friendships = await self.friendship_repository.find_accepted(identity)
            except SQLAlchemyError as e:
                logfire.error(
                    "Failed to load friendships", identity=identity, error=str(e)
                )
                raise RetrievalError(Collection.FRIENDSHIPS.value, str(e)) from e

            circle = resolve_circle(identity, friendships)

            limit = self.feed_settings.max_circle_size
            if limit is not None and len(circle) > limit:
                logfire.warn(
                    "Circle exceeds configured maximum, truncating",
                    identity=identity,
                    size=len(circle),
                    limit=limit,
                )
                circle = cap_circle(circle, identity, limit)

            return circle

    async def send_request(self, requester: Identity, target: Identity) -> Friendship:
        """Send a friend request.

        Raises:
            ValidationError: If requester and target are the same identity
            DuplicateFriendshipError: If the pair already has a friendship
                in any status or direction
        """
        with logfire.span(
            "friendship_service.send_request", requester=requester, target=target
        ):
            friendship = Friendship.build(
                id=FriendshipId(uuid4()),
                requester=requester,
                target=target,
                status=FriendshipStatus.PENDING,
            )

            existing = await self.friendship_repository.find_by_pair(requester, target)
            if existing:
                logfire.warn(
                    "Duplicate friend request",
                    requester=requester,
                    target=target,
                    existing_status=existing.status.value,
                )
                raise DuplicateFriendshipError(requester, target)

            try:
                saved = await self.friendship_repository.save(friendship)
            except IntegrityError as e:
                # Lost a race with a concurrent request for the same pair
                logfire.warn(
                    "Concurrent friend request", requester=requester, target=target
                )
                raise DuplicateFriendshipError(requester, target) from e

            self.change_feed.publish(Collection.FRIENDSHIPS)
            logfire.info(
                "Friend request sent",
                friendship_id=str(saved.id),
                requester=requester,
                target=target,
            )
            return saved

    async def _get_involving(
        self, friendship_id: FriendshipId, identity: Identity
    ) -> Friendship:
        friendship = await self.friendship_repository.find_by_id(friendship_id)
        # Friendships of other people are reported as missing
        if not friendship or not friendship.involves(identity):
            raise NotFoundError("Friendship", str(friendship_id))
        return friendship

    async def accept(self, friendship_id: FriendshipId, identity: Identity) -> Friendship:
        """Accept a pending friend request addressed to ``identity``.

        Raises:
            NotFoundError: If no such friendship involves the identity
            BusinessRuleViolationError: If the identity is the requester or
                the friendship is already accepted
        """
        with logfire.span(
            "friendship_service.accept",
            friendship_id=str(friendship_id),
            identity=identity,
        ):
            friendship = await self._get_involving(friendship_id, identity)
            if friendship.is_accepted:
                raise BusinessRuleViolationError("Friend request already accepted")
            if friendship.target != identity:
                raise BusinessRuleViolationError(
                    "Only the recipient can accept a friend request"
                )

            accepted = await self.friendship_repository.update(friendship.accept())
            self.change_feed.publish(Collection.FRIENDSHIPS)
            logfire.info(
                "Friend request accepted",
                friendship_id=str(friendship_id),
                requester=friendship.requester,
                target=friendship.target,
            )
            return accepted

    async def decline(self, friendship_id: FriendshipId, identity: Identity) -> None:
        """Decline (target) or cancel (requester) a pending friend request.

        Raises:
            NotFoundError: If no such friendship involves the identity
            BusinessRuleViolationError: If the friendship is already accepted
        """
        with logfire.span(
            "friendship_service.decline",
            friendship_id=str(friendship_id),
            identity=identity,
        ):
            friendship = await self._get_involving(friendship_id, identity)
            if friendship.is_accepted:
                raise BusinessRuleViolationError("Friend request already accepted")

            await self.friendship_repository.delete(friendship_id)
            self.change_feed.publish(Collection.FRIENDSHIPS)
            logfire.info(
                "Friend request removed",
                friendship_id=str(friendship_id),
                by=identity,
            )

    async def list_friends(self, identity: Identity) -> list[Identity]:
        """List accepted friends, sorted by identity. Not subject to the circle cap."""
        with logfire.span("friendship_service.list_friends", identity=identity):
            friendships = await self.friendship_repository.find_accepted(identity)
            return sorted({f.other(identity) for f in friendships})

    async def list_incoming(self, identity: Identity) -> list[Friendship]:
        """List pending friend requests addressed to an identity."""
        with logfire.span("friendship_service.list_incoming", identity=identity):
            return await self.friendship_repository.find_pending_for_target(identity)
