"""Vote domain service."""

from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from vouch.domain.error import NotFoundError, WriteConflictError
from vouch.domain.model.vote import Vote, VoteTally
from vouch.domain.repository import (
    ChangeFeed,
    RecommendationRepository,
    RecommendationRequestRepository,
    VoteRepository,
)
from vouch.domain.value import (
    Collection,
    Identity,
    RecommendationId,
    RequestId,
    VotableType,
    VoteId,
    VoteType,
)

from .base import Service


class VoteService(Service):
    """Domain service for helpfulness votes."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        recommendation_repository: RecommendationRepository,
        request_repository: RecommendationRequestRepository,
        change_feed: ChangeFeed,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            recommendation_repository: Used to check votable recommendations exist
            request_repository: Used to check votable requests exist
            change_feed: Change notifications for written collections
        """
        self.vote_repository = vote_repository
        self.recommendation_repository = recommendation_repository
        self.request_repository = request_repository
        self.change_feed = change_feed

    async def _ensure_exists(self, item_id: UUID, item_type: VotableType) -> None:
        if item_type == VotableType.RECOMMENDATION:
            found = await self.recommendation_repository.find_by_id(
                RecommendationId(item_id)
            )
        else:
            found = await self.request_repository.find_by_id(RequestId(item_id))
        if not found:
            logfire.warn(
                "Vote on non-existent item",
                item_id=str(item_id),
                item_type=item_type.value,
            )
            raise NotFoundError(item_type.value.capitalize(), str(item_id))

    async def cast_vote(
        self,
        item_id: UUID,
        item_type: VotableType,
        voter: Identity,
        vote_type: VoteType,
    ) -> VoteTally:
        """Cast, switch or withdraw a vote.

        Any existing vote by the voter on the item is removed first. Voting
        the same direction again leaves no vote (toggle off); voting the
        other direction stores the new one.

        Returns:
            The item's tally after the change

        Raises:
            NotFoundError: If the item does not exist
            WriteConflictError: If a concurrent vote by the same voter won
        """
        with logfire.span(
            "vote_service.cast_vote",
            item_id=str(item_id),
            item_type=item_type.value,
            voter=voter,
            vote_type=vote_type.value,
        ):
            await self._ensure_exists(item_id, item_type)

            existing = await self.vote_repository.find_by_voter_and_item(
                voter, item_type, item_id
            )
            if existing:
                await self.vote_repository.delete(existing.id)

            if existing and existing.vote_type == vote_type:
                logfire.info("Vote toggled off", item_id=str(item_id), voter=voter)
            else:
                vote = Vote(
                    id=VoteId(uuid4()),
                    item_id=item_id,
                    item_type=item_type,
                    voter=voter,
                    vote_type=vote_type,
                )
                try:
                    await self.vote_repository.save(vote)
                except IntegrityError as e:
                    logfire.warn(
                        "Duplicate vote attempt", item_id=str(item_id), voter=voter
                    )
                    raise WriteConflictError("Vote", str(item_id)) from e
                logfire.info(
                    "Vote recorded",
                    item_id=str(item_id),
                    voter=voter,
                    vote_type=vote_type.value,
                )

            self.change_feed.publish(Collection.VOTES)
            return await self.tally(item_id, item_type, voter)

    async def tally(
        self, item_id: UUID, item_type: VotableType, viewer: Identity | None = None
    ) -> VoteTally:
        """Count the votes on an item."""
        votes = await self.vote_repository.find_by_item(item_type, item_id)
        return VoteTally.from_votes(votes, viewer)
