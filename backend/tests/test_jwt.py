"""Tests for session token issuing and verification."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from app.core.errors import TokenExpired, TokenInvalid, Unauthorized
from app.core.jwt import TokenIssuer


class TestTokenIssuer:
    def test_round_trip_returns_admin_id(self, token_issuer: TokenIssuer) -> None:
        token = token_issuer.issue_token(42)

        assert token_issuer.verify_token(token) == 42

    def test_payload_has_user_id_and_one_hour_expiry(self, token_issuer: TokenIssuer) -> None:
        issued_at = datetime.now(timezone.utc).replace(microsecond=0)
        token = token_issuer.issue_token(7, issued_at=issued_at)

        payload = jwt.decode(token, options={"verify_signature": False})

        assert payload["user_id"] == 7
        assert payload["iat"] == int(issued_at.timestamp())
        assert payload["exp"] - payload["iat"] == 3600

    def test_valid_at_59_minutes(self, token_issuer: TokenIssuer) -> None:
        issued_at = datetime.now(timezone.utc) - timedelta(minutes=59)
        token = token_issuer.issue_token(1, issued_at=issued_at)

        assert token_issuer.verify_token(token) == 1

    def test_expired_at_61_minutes(self, token_issuer: TokenIssuer) -> None:
        issued_at = datetime.now(timezone.utc) - timedelta(minutes=61)
        token = token_issuer.issue_token(1, issued_at=issued_at)

        with pytest.raises(TokenExpired):
            token_issuer.verify_token(token)

    def test_other_key_is_rejected(self, token_issuer: TokenIssuer) -> None:
        other = TokenIssuer(secret="a-completely-different-signing-key-987654")
        token = other.issue_token(1)

        with pytest.raises(TokenInvalid):
            token_issuer.verify_token(token)

    def test_tampered_signature_is_rejected(self, token_issuer: TokenIssuer) -> None:
        token = token_issuer.issue_token(1)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        with pytest.raises(TokenInvalid):
            token_issuer.verify_token(tampered)

    def test_garbage_is_rejected(self, token_issuer: TokenIssuer) -> None:
        with pytest.raises(TokenInvalid):
            token_issuer.verify_token("not-a-token")

    def test_missing_user_id_is_rejected(self, token_issuer: TokenIssuer) -> None:
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"iat": now, "exp": now + timedelta(minutes=5)},
            token_issuer._secret,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalid):
            token_issuer.verify_token(token)

    def test_non_integer_user_id_is_rejected(self, token_issuer: TokenIssuer) -> None:
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"user_id": "1", "iat": now, "exp": now + timedelta(minutes=5)},
            token_issuer._secret,
            algorithm="HS256",
        )

        with pytest.raises(TokenInvalid):
            token_issuer.verify_token(token)

    def test_errors_are_unauthorized(self) -> None:
        assert issubclass(TokenExpired, Unauthorized)
        assert issubclass(TokenInvalid, Unauthorized)

    def test_empty_secret_refused(self) -> None:
        with pytest.raises(ValueError):
            TokenIssuer(secret="")
