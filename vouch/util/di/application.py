"""Application layer DI providers."""

from dishka import Scope, provide

from vouch.application.usecase.feed import BuildFeedUseCase
from vouch.application.usecase.flags import GetFeatureFlagsUseCase
from vouch.application.usecase.friendship import (
    ListFriendsUseCase,
    RespondFriendRequestUseCase,
    SendFriendRequestUseCase,
)
from vouch.application.usecase.recommendation import (
    BackfillOriginsUseCase,
    CommentOnRecommendationUseCase,
    CreateRecommendationUseCase,
    GetRecommendationCommentsUseCase,
)
from vouch.application.usecase.request import (
    CreateRequestUseCase,
    RespondToRequestUseCase,
)
from vouch.application.usecase.thread import OpenThreadUseCase, PostThreadCommentUseCase
from vouch.application.usecase.vote import CastVoteUseCase, GetVotesUseCase
from vouch.domain.service import (
    FeatureFlagService,
    FeedService,
    FriendshipService,
    RecommendationService,
    RequestService,
    ThreadService,
    VoteService,
)
from vouch.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Feed use cases
    @provide(scope=Scope.REQUEST)
    def get_build_feed_use_case(self, feed_service: FeedService) -> BuildFeedUseCase:
        """Provide build feed use case."""
        return BuildFeedUseCase(feed_service=feed_service)

    # Request use cases
    @provide(scope=Scope.REQUEST)
    def get_create_request_use_case(
        self, request_service: RequestService
    ) -> CreateRequestUseCase:
        """Provide create request use case."""
        return CreateRequestUseCase(request_service=request_service)

    @provide(scope=Scope.REQUEST)
    def get_respond_to_request_use_case(
        self, request_service: RequestService
    ) -> RespondToRequestUseCase:
        """Provide respond to request use case."""
        return RespondToRequestUseCase(request_service=request_service)

    # Thread use cases
    @provide(scope=Scope.REQUEST)
    def get_open_thread_use_case(
        self, thread_service: ThreadService
    ) -> OpenThreadUseCase:
        """Provide open thread use case."""
        return OpenThreadUseCase(thread_service=thread_service)

    @provide(scope=Scope.REQUEST)
    def get_post_thread_comment_use_case(
        self, thread_service: ThreadService
    ) -> PostThreadCommentUseCase:
        """Provide post thread comment use case."""
        return PostThreadCommentUseCase(thread_service=thread_service)

    # Recommendation use cases
    @provide(scope=Scope.REQUEST)
    def get_create_recommendation_use_case(
        self, recommendation_service: RecommendationService
    ) -> CreateRecommendationUseCase:
        """Provide create recommendation use case."""
        return CreateRecommendationUseCase(
            recommendation_service=recommendation_service
        )

    @provide(scope=Scope.REQUEST)
    def get_comment_on_recommendation_use_case(
        self,
        recommendation_service: RecommendationService,
        feature_flag_service: FeatureFlagService,
    ) -> CommentOnRecommendationUseCase:
        """Provide comment on recommendation use case."""
        return CommentOnRecommendationUseCase(
            recommendation_service=recommendation_service,
            feature_flag_service=feature_flag_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_recommendation_comments_use_case(
        self,
        recommendation_service: RecommendationService,
        feature_flag_service: FeatureFlagService,
    ) -> GetRecommendationCommentsUseCase:
        """Provide get recommendation comments use case."""
        return GetRecommendationCommentsUseCase(
            recommendation_service=recommendation_service,
            feature_flag_service=feature_flag_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_backfill_origins_use_case(
        self, recommendation_service: RecommendationService
    ) -> BackfillOriginsUseCase:
        """Provide backfill origins use case."""
        return BackfillOriginsUseCase(recommendation_service=recommendation_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, vote_service: VoteService, feature_flag_service: FeatureFlagService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            vote_service=vote_service, feature_flag_service=feature_flag_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_votes_use_case(self, vote_service: VoteService) -> GetVotesUseCase:
        """Provide get votes use case."""
        return GetVotesUseCase(vote_service=vote_service)

    # Friendship use cases
    @provide(scope=Scope.REQUEST)
    def get_send_friend_request_use_case(
        self, friendship_service: FriendshipService
    ) -> SendFriendRequestUseCase:
        """Provide send friend request use case."""
        return SendFriendRequestUseCase(friendship_service=friendship_service)

    @provide(scope=Scope.REQUEST)
    def get_respond_friend_request_use_case(
        self, friendship_service: FriendshipService
    ) -> RespondFriendRequestUseCase:
        """Provide respond friend request use case."""
        return RespondFriendRequestUseCase(friendship_service=friendship_service)

    @provide(scope=Scope.REQUEST)
    def get_list_friends_use_case(
        self, friendship_service: FriendshipService
    ) -> ListFriendsUseCase:
        """Provide list friends use case."""
        return ListFriendsUseCase(friendship_service=friendship_service)

    # Feature flag use cases
    @provide(scope=Scope.REQUEST)
    def get_feature_flags_use_case(
        self, feature_flag_service: FeatureFlagService
    ) -> GetFeatureFlagsUseCase:
        """Provide get feature flags use case."""
        return GetFeatureFlagsUseCase(feature_flag_service=feature_flag_service)
