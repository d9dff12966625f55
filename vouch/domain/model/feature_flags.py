"""Feature flag snapshot."""

from datetime import datetime
from types import MappingProxyType
from typing import Mapping

from pydantic import Field, field_serializer, field_validator

from vouch.domain.model.common import DomainModel, utc_now


class FeatureFlags(DomainModel):
    """Immutable snapshot of the feature flags at one point in time."""

    flags: Mapping[str, bool] = Field(default_factory=dict)
    fetched_at: datetime = Field(default_factory=utc_now)

    @field_validator("flags")
    @classmethod
    def freeze_flags(cls, v: Mapping[str, bool]) -> Mapping[str, bool]:
        return MappingProxyType(dict(v))

    @field_serializer("flags")
    def serialize_flags(self, v: Mapping[str, bool]) -> dict[str, bool]:
        return dict(v)

    def is_enabled(self, name: str) -> bool:
        """Unknown flags are disabled."""
        return bool(self.flags.get(name, False))
