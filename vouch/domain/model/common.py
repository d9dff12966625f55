"""Base model for all domain entities."""

from datetime import datetime, timezone
from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from vouch.domain.error import ValidationError


def utc_now() -> datetime:
    """Canonical server-side timestamp (timezone-aware UTC)."""
    return datetime.now(timezone.utc)


class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for immutability and custom types.
    """

    model_config = ConfigDict(
        frozen=True,  # All domain models are immutable
        arbitrary_types_allowed=True,  # Allow custom value objects
    )

    @classmethod
    def build(cls, **data: Any) -> Self:
        """Construct a model from untrusted input.

        Raises:
            ValidationError: If any field violates the model's rules
        """
        try:
            return cls(**data)
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']) or cls.__name__}: {error['msg']}"
                for error in e.errors()
            )
            raise ValidationError(problems) from e
