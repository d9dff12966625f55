"""Session token encoding and verification (PyJWT).

Tokens are minted by the hosted auth backend; the subject claim is the
user's email address. ``create_token`` mints the same shape of token for
local development and tests.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from vouch.config import AuthSettings

REQUIRED_CLAIMS = ["sub", "exp"]


class TokenPayload(BaseModel):
    sub: str
    exp: datetime
    iss: str | None = None


class JWTError(Exception):
    """Token missing a claim, badly signed, expired or malformed."""


def create_token(identity: str, settings: AuthSettings) -> str:
    """Mint a session token for ``identity``."""
    claims: dict = {
        "sub": identity,
        "exp": datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days),
    }
    if settings.jwt_issuer:
        claims["iss"] = settings.jwt_issuer
    if settings.jwt_audience:
        claims["aud"] = settings.jwt_audience
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check signature, expiry and (when configured) issuer and audience.

    Raises:
        JWTError: If the token is not acceptable
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            leeway=settings.jwt_leeway_seconds,
            options={
                "require": REQUIRED_CLAIMS,
                "verify_aud": settings.jwt_audience is not None,
            },
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}") from e

    try:
        return TokenPayload.model_validate(claims)
    except ValueError as e:
        raise JWTError(f"Malformed token payload: {e}") from e
