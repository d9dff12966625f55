"""Session identity service."""

import logfire

from vouch.config import AuthSettings
from vouch.domain.value import Identity, normalize_identity
from vouch.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Turns session tokens into identities."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, identity: Identity) -> str:
        """Mint a session token (development and tests)."""
        return create_token(identity, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a token and return its claims.

        Raises:
            JWTError: If the token is not acceptable
        """
        try:
            return verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.warn("Session token rejected", error=str(e))
            raise

    def get_identity_from_token(self, token: str | None) -> Identity | None:
        """Resolve the caller's identity, or None when unauthenticated.

        A missing token, an unacceptable one, and one whose subject is not
        an email address all count as unauthenticated.
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
        except JWTError:
            return None

        try:
            return normalize_identity(payload.sub)
        except ValueError:
            logfire.warn("Session token subject is not an email address")
            return None
