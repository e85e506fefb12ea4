from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.db_handlers.base import BaseDBHandler
from postboard.exceptions import ConflictError
from postboard.models.user import User
from postboard.utils.logger import setup_logger

logger = setup_logger("db_handlers.user")


class UserDBHandler(BaseDBHandler[User]):
    def __init__(self):
        super().__init__(User)

    async def get_user_by_email(self, email: str, *, db: AsyncSession) -> User | None:
        """Get a user by email."""
        return await self.get_by_attributes(email=email, db=db)

    async def create_user(self, user_dict: dict[str, Any], *, db: AsyncSession) -> User:
        """
        Insert a user row.

        The unique index on email is the final arbiter when two registrations
        race past the existence check: the loser gets a ConflictError.
        """
        try:
            return await self.create(user_dict, db=db)
        except IntegrityError as e:
            logger.info(f"Rejected duplicate registration for '{user_dict.get('email')}'")
            raise ConflictError() from e
