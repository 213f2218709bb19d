"""Authentication service: credential checks and token issue."""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizadmin.core.security import create_access_token, verify_password
from bizadmin.models.user import User

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def authenticate_user(self, login: str, password: str) -> User | None:
        """Validate username-or-email and password, return the user or None."""
        login = login.strip().lower()
        result = await self.db.execute(
            select(User).where(
                or_(func.lower(User.username) == login, func.lower(User.email) == login)
            )
        )
        user = result.scalars().first()
        if user is None or not user.active:
            return None
        if not user.password_hash or not verify_password(password, user.password_hash):
            return None
        return user

    async def login(self, login: str, password: str) -> tuple[str, int] | None:
        """Return ``(token, expires_in)`` or None when the credentials are rejected."""
        user = await self.authenticate_user(login, password)
        if user is None:
            logger.info("Failed login attempt for %s", login)
            return None
        logger.info("User %s logged in", user.id)
        return create_access_token(user.id)
