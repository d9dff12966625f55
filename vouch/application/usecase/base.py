"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from vouch.domain.error import ValidationError
from vouch.domain.value import Identity, normalize_identity


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_identity(value: str) -> Identity:
    """Normalise an identity from a request.

    Raises:
        ValidationError: If the value is not an email address
    """
    try:
        return normalize_identity(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def parse_uuid(value: str) -> UUID:
    """Parse an identifier taken from a request path.

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return UUID(value)
    except ValueError as e:
        raise ValidationError(f"Invalid identifier: {value}") from e
