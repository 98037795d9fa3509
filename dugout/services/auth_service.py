"""
Authentication service: login and invite-code registration.

This is the only component that hashes/verifies passwords and mints tokens.
"""

import logging
from typing import Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.services import team_service, user_service
from dugout.services.errors import InvalidCredentials, InvalidInviteCode, UserAlreadyExists
from dugout.services.password_hasher import PasswordHasher
from dugout.services.token_service import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """Orchestrates credential checks, account creation and token issuing."""

    def __init__(self, hasher: PasswordHasher, tokens: TokenService):
        self.hasher = hasher
        self.tokens = tokens

    async def login(self, session: AsyncSession, email: str, password: str) -> Dict:
        """
        Check credentials and issue a token.

        Returns:
            {"user": public user fields, "token": str}

        Raises:
            InvalidCredentials: Unknown email or wrong password (indistinguishable)
        """
        user = await user_service.get_user_by_email(session, email)
        if user is None:
            await self.hasher.burn(password)
            raise InvalidCredentials()

        if not await self.hasher.verify(password, user["password_hash"]):
            raise InvalidCredentials()

        token = self.tokens.issue(user["id"], user["role"])
        logger.info(f"User {user['id']} logged in")
        return {"user": user_service.public_user(user), "token": token}

    async def register(
        self,
        session: AsyncSession,
        name: str,
        email: str,
        password: str,
        invite_code: str,
        role: str,
    ) -> Dict:
        """
        Create an account bound to the team owning invite_code.

        Input is expected to be structurally valid already (see RegisterRequest).
        The invite code is checked before email uniqueness so probing with bad
        codes never reveals whether an account exists. The user row and its
        membership row are committed together or not at all.

        Returns:
            {"user": public user fields, "token": str}

        Raises:
            InvalidInviteCode: No team uses invite_code
            UserAlreadyExists: The email is taken (including a lost race)
        """
        email = user_service.normalize_email(email)

        team = await team_service.get_team_by_invite_code(session, invite_code)
        if team is None:
            raise InvalidInviteCode()

        if await user_service.email_exists(session, email):
            raise UserAlreadyExists()

        password_hash = await self.hasher.hash(password)

        try:
            user = await user_service.create_user(
                session, name=name, email=email, password_hash=password_hash, role=role
            )
            await team_service.add_membership(session, user.id, team["id"], role)
            await session.commit()
        except IntegrityError:
            # Unique email constraint is the final arbiter for concurrent sign-ups.
            await session.rollback()
            raise UserAlreadyExists()
        except Exception:
            await session.rollback()
            raise

        public = {"id": user.id, "name": user.name, "email": user.email, "role": user.role}
        token = self.tokens.issue(user.id, user.role)
        logger.info(f"User {user.id} registered on team {team['id']} as {role}")
        return {"user": public, "token": token}
