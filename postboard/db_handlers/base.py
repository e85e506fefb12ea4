from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.exceptions import StoreError
from postboard.models.base import Base
from postboard.utils.logger import setup_logger

logger = setup_logger("db_handlers")


ModelType = TypeVar("ModelType", bound=Base)


class BaseDBHandler(Generic[ModelType]):
    """
    Generic handler for database operations with basic CRUD methods.

    The caller owns the session and passes it as ``db``; each write commits
    its own single-row transaction.
    """

    def __init__(self, model: type[ModelType]):
        self.model = model

    async def create(self, obj_dict: dict[str, Any], *, db: AsyncSession) -> ModelType:
        """Create a new record in the database."""

        db_obj = self.model(**obj_dict)
        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
            return db_obj
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"IntegrityError creating {self.model.__name__}: {e}")
            # Re-raise IntegrityError so calling code can handle it specifically
            raise
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error creating {self.model.__name__}: {e}", exc_info=True)
            raise StoreError() from e

    async def get(self, id: Any, *, db: AsyncSession) -> ModelType | None:
        """Get a single record by its primary key."""
        try:
            return await db.get(self.model, id)
        except SQLAlchemyError as e:
            logger.error(
                f"Error fetching {self.model.__name__} with id {id}: {e}", exc_info=True
            )
            raise StoreError() from e

    async def get_by_attributes(self, *, db: AsyncSession, **kwargs) -> ModelType | None:
        """Get a single record by a set of attributes."""
        stmt = select(self.model).filter_by(**kwargs)
        try:
            result = await db.execute(stmt)
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(
                f"Error fetching {self.model.__name__} by {list(kwargs)}: {e}",
                exc_info=True,
            )
            raise StoreError() from e
