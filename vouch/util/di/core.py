"""Configuration providers."""

from dishka import Scope, provide

from vouch.config import AuthSettings, FeatureFlagSettings, FeedSettings, Settings
from vouch.domain.service import FeatureFlagCache
from vouch.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings and their sections, read once per container.

    Services depend on the section they need rather than ``Settings``.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_feed_settings(self, settings: Settings) -> FeedSettings:
        return settings.feed

    @provide
    def provide_feature_flag_settings(self, settings: Settings) -> FeatureFlagSettings:
        return settings.feature_flags

    @provide
    def provide_feature_flag_cache(self) -> FeatureFlagCache:
        """Snapshot holder shared by every request in the process."""
        return FeatureFlagCache()
