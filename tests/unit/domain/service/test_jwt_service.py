"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from vouch.config import AuthSettings
from vouch.domain.service import JWTService
from vouch.util.jwt import JWTError
from tests.conftest import ALICE

SETTINGS = AuthSettings(jwt_secret="test-secret")


def encode(claims: dict, secret: str = "test-secret") -> str:
    return jwt.encode(claims, secret, algorithm="HS256")


def in_days(days: int) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


class TestJWTService:
    def test_round_trip_identity(self):
        service = JWTService(SETTINGS)

        assert service.get_identity_from_token(service.create_token(ALICE)) == ALICE

    def test_subject_normalised(self):
        service = JWTService(SETTINGS)
        token = encode({"sub": " Alice@Example.com", "exp": in_days(1)})

        assert service.get_identity_from_token(token) == ALICE

    def test_unacceptable_tokens_are_anonymous(self):
        service = JWTService(SETTINGS)

        assert service.get_identity_from_token(None) is None
        assert service.get_identity_from_token("garbage") is None
        assert (
            service.get_identity_from_token(
                encode({"sub": ALICE, "exp": in_days(1)}, secret="other")
            )
            is None
        )
        assert (
            service.get_identity_from_token(encode({"sub": "alice", "exp": in_days(1)}))
            is None
        )

    def test_expired_token(self):
        service = JWTService(SETTINGS)
        token = encode({"sub": ALICE, "exp": in_days(-1)})

        with pytest.raises(JWTError, match="expired"):
            service.verify_token(token)

    def test_missing_expiry_rejected(self):
        service = JWTService(SETTINGS)

        with pytest.raises(JWTError):
            service.verify_token(encode({"sub": ALICE}))

    def test_issuer_and_audience_checked_when_configured(self):
        strict = JWTService(
            AuthSettings(
                jwt_secret="test-secret", jwt_issuer="auth.vouch.app", jwt_audience="api"
            )
        )
        foreign = encode(
            {"sub": ALICE, "exp": in_days(1), "iss": "elsewhere", "aud": "api"}
        )

        assert strict.get_identity_from_token(strict.create_token(ALICE)) == ALICE
        assert strict.get_identity_from_token(foreign) is None
