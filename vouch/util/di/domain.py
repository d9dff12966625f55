"""Domain layer DI providers."""

from dishka import Scope, provide

from vouch.config import AuthSettings, FeatureFlagSettings, FeedSettings
from vouch.domain.repository import (
    ChangeFeed,
    CommentRepository,
    FeatureFlagRepository,
    FriendshipRepository,
    RecommendationCommentRepository,
    RecommendationRepository,
    RecommendationRequestRepository,
    VoteRepository,
)
from vouch.domain.service import (
    FeatureFlagCache,
    FeatureFlagService,
    FeedService,
    FriendshipService,
    JWTService,
    RecommendationService,
    RequestService,
    ThreadService,
    VoteService,
)
from vouch.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_friendship_service(
        self,
        friendship_repository: FriendshipRepository,
        change_feed: ChangeFeed,
        feed_settings: FeedSettings,
    ) -> FriendshipService:
        """Provide friendship domain service."""
        return FriendshipService(
            friendship_repository=friendship_repository,
            change_feed=change_feed,
            feed_settings=feed_settings,
        )

    @provide
    def get_recommendation_service(
        self,
        friendship_service: FriendshipService,
        recommendation_repository: RecommendationRepository,
        recommendation_comment_repository: RecommendationCommentRepository,
        request_repository: RecommendationRequestRepository,
        change_feed: ChangeFeed,
        feed_settings: FeedSettings,
    ) -> RecommendationService:
        """Provide recommendation domain service."""
        return RecommendationService(
            friendship_service=friendship_service,
            recommendation_repository=recommendation_repository,
            recommendation_comment_repository=recommendation_comment_repository,
            request_repository=request_repository,
            change_feed=change_feed,
            feed_settings=feed_settings,
        )

    @provide
    def get_request_service(
        self,
        request_repository: RecommendationRequestRepository,
        recommendation_service: RecommendationService,
        friendship_service: FriendshipService,
        change_feed: ChangeFeed,
    ) -> RequestService:
        """Provide request domain service."""
        return RequestService(
            request_repository=request_repository,
            recommendation_service=recommendation_service,
            friendship_service=friendship_service,
            change_feed=change_feed,
        )

    @provide
    def get_thread_service(
        self,
        request_repository: RecommendationRequestRepository,
        comment_repository: CommentRepository,
        change_feed: ChangeFeed,
        feed_settings: FeedSettings,
    ) -> ThreadService:
        """Provide thread domain service."""
        return ThreadService(
            request_repository=request_repository,
            comment_repository=comment_repository,
            change_feed=change_feed,
            feed_settings=feed_settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        recommendation_repository: RecommendationRepository,
        request_repository: RecommendationRequestRepository,
        change_feed: ChangeFeed,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            recommendation_repository=recommendation_repository,
            request_repository=request_repository,
            change_feed=change_feed,
        )

    @provide
    def get_feed_service(
        self,
        friendship_service: FriendshipService,
        recommendation_repository: RecommendationRepository,
        request_repository: RecommendationRequestRepository,
        comment_repository: CommentRepository,
        recommendation_comment_repository: RecommendationCommentRepository,
    ) -> FeedService:
        """Provide feed domain service."""
        return FeedService(
            friendship_service=friendship_service,
            recommendation_repository=recommendation_repository,
            request_repository=request_repository,
            comment_repository=comment_repository,
            recommendation_comment_repository=recommendation_comment_repository,
        )

    @provide
    def get_feature_flag_service(
        self,
        feature_flag_repository: FeatureFlagRepository,
        cache: FeatureFlagCache,
        settings: FeatureFlagSettings,
    ) -> FeatureFlagService:
        """Provide feature flag domain service."""
        return FeatureFlagService(
            feature_flag_repository=feature_flag_repository,
            cache=cache,
            settings=settings,
        )
