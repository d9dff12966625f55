"""Session token helpers shared by the routes."""

from fastapi import HTTPException, status

from vouch.domain.service import JWTService
from vouch.domain.value import Identity

BEARER_PREFIX = "bearer "


def extract_token(auth_token: str | None, authorization: str | None) -> str | None:
    """Pick the session token from the cookie or an ``Authorization`` header.

    The cookie wins when both are present.
    """
    if auth_token:
        return auth_token
    if authorization and authorization.lower().startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :].strip() or None
    return None


def require_identity(
    jwt_service: JWTService,
    auth_token: str | None,
    authorization: str | None = None,
    action: str = "access this resource",
) -> Identity:
    """Resolve the caller's identity or reject the request.

    Raises:
        HTTPException: 401 if no valid session token was sent
    """
    identity = jwt_service.get_identity_from_token(
        extract_token(auth_token, authorization)
    )
    if not identity:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Authentication required to {action}",
        )
    return identity
