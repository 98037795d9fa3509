"""
Password hashing with bcrypt.

bcrypt is CPU-bound, so the async methods run it in the default executor to
keep the event loop free for other requests. The digest embeds its own salt
and cost, so verification needs nothing but the stored string.
"""

import asyncio
from typing import Optional

import bcrypt

DEFAULT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes and newer releases reject longer input.
_MAX_PASSWORD_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_MAX_PASSWORD_BYTES]


class PasswordHasher:
    """Salted one-way hashing with a fixed cost factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._dummy_digest: Optional[str] = None

    def hash_sync(self, plain: str) -> str:
        return bcrypt.hashpw(_encode(plain), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify_sync(self, plain: str, digest: str) -> bool:
        """Return False for malformed digests rather than propagating a ValueError."""
        try:
            return bcrypt.checkpw(_encode(plain), digest.encode("utf-8"))
        except ValueError:
            return False

    async def hash(self, plain: str) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.hash_sync, plain)

    async def verify(self, plain: str, digest: str) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.verify_sync, plain, digest)

    async def burn(self, plain: str) -> None:
        """
        Spend the same work as a real verification against a throwaway digest.

        Used when there is no stored digest to check (unknown account) so the
        response time matches a wrong-password attempt.
        """
        if self._dummy_digest is None:
            self._dummy_digest = await self.hash("dugout-timing-placeholder")
        await self.verify(plain, self._dummy_digest)
