"""
Session token issuing and verification (signed JWT, HS256 by default).

Tokens are stateless: they are checked by signature and expiry only and
cannot be revoked before they expire.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

import jwt

from dugout.database.models import Role
from dugout.utils.datetime_utils import utcnow

logger = logging.getLogger(__name__)

TOKEN_EXPIRATION_DAYS = 7


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""

    user_id: int
    role: str


class TokenService:
    """Mints and validates bearer tokens with a process-wide secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(days=TOKEN_EXPIRATION_DAYS),
        clock: Callable[[], datetime] = utcnow,
    ):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expires_delta = expires_delta
        self._clock = clock

    def issue(self, user_id: int, role: str) -> str:
        """Create a token for user_id/role valid for the configured window."""
        issued_at = self._clock()
        payload = {
            "user_id": user_id,
            "role": role,
            "iat": issued_at,
            "exp": issued_at + self._expires_delta,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[TokenClaims]:
        """
        Decode and check a token.

        Returns:
            TokenClaims, or None for any malformed, tampered or expired token.
            The cause is deliberately not reported to the caller.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat", "user_id", "role"]},
            )
        except jwt.PyJWTError as e:
            logger.debug(f"Rejected token: {type(e).__name__}")
            return None

        user_id = payload.get("user_id")
        role = payload.get("role")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            return None
        if role not in {r.value for r in Role}:
            return None
        return TokenClaims(user_id=user_id, role=role)
