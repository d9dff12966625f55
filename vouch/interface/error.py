"""Interface layer errors.

Domain errors are translated to HTTP responses in one place so routes can
let them propagate.
"""

from fastapi import HTTPException, status

from vouch.domain.error import (
    AccessDeniedError,
    BusinessRuleViolationError,
    DomainError,
    NotFoundError,
    RetrievalError,
    ValidationError,
    WriteConflictError,
)


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP exception returned to the client.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException with status code and client-safe detail
    """
    if isinstance(error, ValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(error)
        )
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, AccessDeniedError):
        # Generic on purpose: never echo thread content or participants
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have access to this conversation",
        )
    if isinstance(error, WriteConflictError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(error),
            headers={"Retry-After": "0"},
        )
    if isinstance(error, BusinessRuleViolationError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, RetrievalError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{error}. Please try again.",
            headers={"Retry-After": "5"},
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unexpected error"
    )
