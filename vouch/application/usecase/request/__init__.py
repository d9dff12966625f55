"""Recommendation request use cases."""

from .create_request import (
    CreateRequestRequest,
    CreateRequestResponse,
    CreateRequestUseCase,
)
from .respond_to_request import (
    RespondToRequestRequest,
    RespondToRequestResponse,
    RespondToRequestUseCase,
)

__all__ = [
    "CreateRequestRequest",
    "CreateRequestResponse",
    "CreateRequestUseCase",
    "RespondToRequestRequest",
    "RespondToRequestResponse",
    "RespondToRequestUseCase",
]
