"""
Unit tests for session token issuing and verification.
"""
from datetime import timedelta

import jwt
import pytest

from dugout.services.token_service import TokenClaims, TokenService
from dugout.utils.datetime_utils import utcnow

SECRET = "unit-test-secret"


def _flip_signature_char(token: str) -> str:
    """Change the first character of the signature segment."""
    header, payload, signature = token.split(".")
    replacement = "A" if signature[0] != "A" else "B"
    return ".".join([header, payload, replacement + signature[1:]])


class TestTokenIssuing:
    """Tests for token creation."""

    def test_issue_and_verify(self):
        tokens = TokenService(SECRET)
        token = tokens.issue(42, "player")

        assert isinstance(token, str)
        assert tokens.verify(token) == TokenClaims(user_id=42, role="player")

    def test_token_carries_expiry_window(self):
        """Test that the token expires after the configured window."""
        tokens = TokenService(SECRET, expires_delta=timedelta(days=7))
        payload = jwt.decode(tokens.issue(1, "admin"), SECRET, algorithms=["HS256"])

        assert payload["exp"] - payload["iat"] == 7 * 24 * 60 * 60
        assert payload["user_id"] == 1
        assert payload["role"] == "admin"

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenService("")


class TestTokenVerification:
    """Every kind of bad token verifies to None."""

    def test_expired_token(self):
        issued_long_ago = lambda: utcnow() - timedelta(days=7, seconds=1)  # noqa: E731
        tokens = TokenService(SECRET, clock=issued_long_ago)
        token = tokens.issue(1, "player")

        assert TokenService(SECRET).verify(token) is None

    def test_token_inside_window(self):
        almost_a_week_ago = lambda: utcnow() - timedelta(days=6, hours=23)  # noqa: E731
        token = TokenService(SECRET, clock=almost_a_week_ago).issue(1, "player")

        assert TokenService(SECRET).verify(token) is not None

    def test_tampered_signature(self):
        tokens = TokenService(SECRET)
        token = _flip_signature_char(tokens.issue(1, "player"))

        assert tokens.verify(token) is None

    def test_tampered_payload(self):
        """Swapping in a payload with a different role breaks the signature."""
        tokens = TokenService(SECRET)
        header, _, signature = tokens.issue(1, "player").split(".")
        _, forged_payload, _ = jwt.encode(
            {"user_id": 1, "role": "admin", "iat": utcnow(), "exp": utcnow() + timedelta(days=1)},
            "another-secret",
            algorithm="HS256",
        ).split(".")

        assert tokens.verify(".".join([header, forged_payload, signature])) is None

    def test_wrong_secret(self):
        token = TokenService("some-other-secret").issue(1, "player")
        assert TokenService(SECRET).verify(token) is None

    @pytest.mark.parametrize("token", ["", "invalid_token_string", "a.b.c", "a.b"])
    def test_malformed_token(self, token):
        assert TokenService(SECRET).verify(token) is None

    def test_unknown_role(self):
        token = jwt.encode(
            {"user_id": 1, "role": "superuser", "iat": utcnow(), "exp": utcnow() + timedelta(days=1)},
            SECRET,
            algorithm="HS256",
        )
        assert TokenService(SECRET).verify(token) is None

    def test_missing_user_id(self):
        token = jwt.encode(
            {"role": "player", "iat": utcnow(), "exp": utcnow() + timedelta(days=1)},
            SECRET,
            algorithm="HS256",
        )
        assert TokenService(SECRET).verify(token) is None

    def test_non_integer_user_id(self):
        token = jwt.encode(
            {"user_id": "1", "role": "player", "iat": utcnow(), "exp": utcnow() + timedelta(days=1)},
            SECRET,
            algorithm="HS256",
        )
        assert TokenService(SECRET).verify(token) is None

    def test_unsigned_token(self):
        token = jwt.encode(
            {"user_id": 1, "role": "admin", "iat": utcnow(), "exp": utcnow() + timedelta(days=1)},
            None,
            algorithm="none",
        )
        assert TokenService(SECRET).verify(token) is None
