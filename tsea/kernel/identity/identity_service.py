"""
Identity service for user registration, login and tier changes.
"""

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tsea.curriculum.models import Tier
from tsea.kernel.identity.jwt import JWTManager
from tsea.kernel.identity.password import hash_password, verify_password
from tsea.kernel.models.user import User
from tsea.logging_config import get_logger

logger = get_logger(__name__)


class IdentityService:
    """User identity operations over one database session."""

    def __init__(self, session: AsyncSession, jwt_manager: Optional[JWTManager] = None):
        self.session = session
        self.jwt_manager = jwt_manager or JWTManager()

    async def register_user(
        self,
        email: str,
        password: str,
        full_name: str = "",
        tier: Tier = Tier.BASIC,
    ) -> User:
        """
        Register a new user.

        Raises:
            ValueError: If email already exists
        """
        if await self.get_user_by_email(email):
            raise ValueError("Email already registered")

        user = User(
            email=email.lower().strip(),
            password_hash=hash_password(password),
            full_name=full_name.strip(),
            tier=tier.value,
        )
        self.session.add(user)
        await self.session.flush()
        logger.info("User registered", extra={"user_id": str(user.id), "tier": user.tier_value})
        return user

    async def authenticate(self, email: str, password: str) -> Optional[tuple[User, str, int]]:
        """
        Check credentials and issue an access token.

        Returns:
            (user, token, expires_in) on success, None otherwise
        """
        user = await self.get_user_by_email(email)
        if not user or not user.is_active:
            return None
        if not verify_password(password, user.password_hash):
            return None
        token, expires_in = self.jwt_manager.create_access_token(user.id, user.email)
        return user, token, expires_in

    async def get_user_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.email == email.lower().strip())
        )
        return result.scalar_one_or_none()

    async def set_tier(self, email: str, tier: Tier) -> Optional[User]:
        """Change a user's subscription tier; None when the email is unknown."""
        user = await self.get_user_by_email(email)
        if not user:
            return None
        previous = user.tier_value
        user.tier = tier.value
        await self.session.flush()
        logger.info(
            "User tier changed",
            extra={"user_id": str(user.id), "from_tier": previous, "to_tier": tier.value},
        )
        return user
