"""Cast vote use case."""

from pydantic import BaseModel

from vouch.application.usecase.base import parse_uuid
from vouch.domain.error import BusinessRuleViolationError
from vouch.domain.service import FeatureFlagService, VoteService
from vouch.domain.value import Identity, VotableType, VoteType

VOTING_FLAG = "enable_voting"


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    item_type: VotableType
    item_id: str  # UUID string
    voter: str  # Identity from authenticated session
    vote_type: VoteType


class VoteTallyResponse(BaseModel):
    """Vote counts for an item."""

    item_type: VotableType
    item_id: str
    up: int
    down: int
    score: int
    viewer_vote: VoteType | None


class CastVoteUseCase:
    """Use case for voting on a recommendation or request."""

    def __init__(
        self, vote_service: VoteService, feature_flag_service: FeatureFlagService
    ) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            feature_flag_service: Gates voting
        """
        self.vote_service = vote_service
        self.feature_flag_service = feature_flag_service

    async def execute(self, request: CastVoteRequest) -> VoteTallyResponse:
        """Execute cast vote flow.

        Voting the same direction twice withdraws the vote.

        Raises:
            BusinessRuleViolationError: If voting is disabled
            NotFoundError: If the item does not exist
        """
        if not await self.feature_flag_service.is_enabled(VOTING_FLAG):
            raise BusinessRuleViolationError("Voting is disabled")

        tally = await self.vote_service.cast_vote(
            item_id=parse_uuid(request.item_id),
            item_type=request.item_type,
            voter=Identity(request.voter),
            vote_type=request.vote_type,
        )
        return VoteTallyResponse(
            item_type=request.item_type,
            item_id=request.item_id,
            up=tally.up,
            down=tally.down,
            score=tally.score,
            viewer_vote=tally.viewer_vote,
        )
