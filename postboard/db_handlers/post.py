from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from postboard.db_handlers.base import BaseDBHandler
from postboard.db_handlers.user import UserDBHandler
from postboard.exceptions import NotFoundError, StoreError, ValidationError
from postboard.models import Post
from postboard.models.base import utcnow
from postboard.utils.logger import setup_logger

logger = setup_logger("db_handlers.post")


class PostDBHandler(BaseDBHandler[Post]):
    """
    Post persistence. Every read joins the author so callers always receive
    posts with ``post.author`` populated, newest first.
    """

    def __init__(self):
        super().__init__(Post)
        self.user_handler = UserDBHandler()

    def _with_author(self):
        return (
            select(Post)
            .join(Post.author)
            .options(contains_eager(Post.author))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .execution_options(populate_existing=True)
        )

    async def _fetch_all(self, stmt, *, db: AsyncSession) -> list[Post]:
        try:
            result = await db.execute(stmt)
            return list(result.scalars().unique().all())
        except SQLAlchemyError as e:
            logger.error(f"Error listing posts: {e}", exc_info=True)
            raise StoreError() from e

    async def create_post(self, author_id: int, content: str, *, db: AsyncSession) -> Post:
        """Create a post for an existing author and return it with the author loaded."""
        if not content:
            raise ValidationError("Post content is required")

        if await self.user_handler.get(author_id, db=db) is None:
            raise NotFoundError("Author not found")

        try:
            post = await self.create(
                {"content": content, "author_id": author_id, "created_at": utcnow()},
                db=db,
            )
        except IntegrityError as e:
            # Author vanished between the check and the insert
            raise NotFoundError("Author not found") from e

        logger.info(f"Created post {post.id} for user {author_id}")
        return await self.get_post_with_author(post.id, db=db)

    async def get_post_with_author(self, post_id: int, *, db: AsyncSession) -> Post | None:
        posts = await self._fetch_all(self._with_author().where(Post.id == post_id), db=db)
        return posts[0] if posts else None

    async def get_feed(self, *, db: AsyncSession) -> list[Post]:
        """Every post, newest first."""
        return await self._fetch_all(self._with_author(), db=db)

    async def get_posts_by_author(self, author_id: int, *, db: AsyncSession) -> list[Post]:
        """Posts written by ``author_id``, newest first. Unknown authors yield an empty list."""
        return await self._fetch_all(
            self._with_author().where(Post.author_id == author_id), db=db
        )
