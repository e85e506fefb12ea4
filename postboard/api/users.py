"""
User API Routes - public profiles and per-author post listings.

No authentication is required; any caller may read any user's public
projection and posts.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.db import get_app_db
from postboard.db_handlers import PostDBHandler
from postboard.dependencies.auth import get_auth_service
from postboard.dependencies.users import parse_posts_user_id, parse_user_id
from postboard.schemas import PostResponse, UserProfile
from postboard.services.auth_service import AuthService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/{user_id}", response_model=UserProfile)
async def get_user_profile(
    user_id: int = Depends(parse_user_id),
    db: AsyncSession = Depends(get_app_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Retrieve a user's public profile (password excluded)."""
    return await auth_service.get_public_user(db, user_id)


@router.get("/{user_id}/posts", response_model=list[PostResponse])
async def get_user_posts(
    user_id: int = Depends(parse_posts_user_id),
    db: AsyncSession = Depends(get_app_db),
    post_db_handler: PostDBHandler = Depends(),
):
    """Retrieve every post written by a user, newest first."""
    posts = await post_db_handler.get_posts_by_author(user_id, db=db)
    return [PostResponse.model_validate(post) for post in posts]
