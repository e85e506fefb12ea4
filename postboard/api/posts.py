"""
Post API routes - authenticated post creation and the public feed.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.db import get_app_db
from postboard.db_handlers import PostDBHandler
from postboard.dependencies.auth import get_current_user_id
from postboard.schemas import PostCreate, PostResponse

router = APIRouter(prefix="/api/posts", tags=["Posts"])


@router.post("", response_model=PostResponse)
async def create_post(
    post_data: PostCreate,
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_app_db),
    post_db_handler: PostDBHandler = Depends(),
):
    """Create a post authored by the authenticated caller."""
    post = await post_db_handler.create_post(current_user_id, post_data.content, db=db)
    return PostResponse.model_validate(post)


@router.get("", response_model=list[PostResponse])
async def get_feed(
    db: AsyncSession = Depends(get_app_db),
    post_db_handler: PostDBHandler = Depends(),
):
    """Public feed of every post, newest first."""
    posts = await post_db_handler.get_feed(db=db)
    return [PostResponse.model_validate(post) for post in posts]
