"""
User service layer for user account database operations.
"""

from typing import Optional, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from dugout.database.models import User
import logging

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address."""
    return email.strip().lower()


async def create_user(
    session: AsyncSession, name: str, email: str, password_hash: str, role: str
) -> User:
    """
    Insert a new user row without committing.

    The caller owns the transaction so the user can be written together with
    its team membership. A duplicate email surfaces as IntegrityError on flush.

    Args:
        session: Database session
        name: Display name
        email: Normalized email address
        password_hash: bcrypt digest
        role: Default account role

    Returns:
        The flushed User instance (id populated)
    """
    new_user = User(name=name, email=email, password_hash=password_hash, role=role)
    session.add(new_user)
    await session.flush()
    return new_user


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[Dict]:
    """
    Get user by email address, including the password hash.

    Args:
        session: Database session
        email: Email address (will be normalized to lowercase)

    Returns:
        User dictionary or None if not found
    """
    email = normalize_email(email) if email else None
    if not email:
        return None

    result = await session.execute(select(User).where(User.email == email).limit(1))
    user = result.scalar_one_or_none()
    return _user_to_dict(user, include_password_hash=True) if user else None


async def get_user_by_id(session: AsyncSession, user_id: int) -> Optional[Dict]:
    """
    Get the public fields of a user by ID.

    Returns:
        User dictionary or None if not found
    """
    result = await session.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    return _user_to_dict(user) if user else None


async def email_exists(session: AsyncSession, email: str) -> bool:
    result = await session.execute(
        select(User.id).where(User.email == normalize_email(email)).limit(1)
    )
    return result.scalar_one_or_none() is not None


def public_user(user: Dict) -> Dict:
    """Strip everything but the public fields from a user dictionary."""
    return {key: user[key] for key in ("id", "name", "email", "role")}


def _user_to_dict(user: User, include_password_hash: bool = False) -> Dict:
    data = {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
    }
    if include_password_hash:
        data["password_hash"] = user.password_hash
    return data
