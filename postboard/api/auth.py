# Authentication API routes for user registration, login, and profile lookup

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.db import get_app_db
from postboard.dependencies.auth import get_auth_service, get_current_user_id
from postboard.schemas import AuthResponse, UserLogin, UserProfile, UserRegister
from postboard.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse)
async def register_user(
    user_data: UserRegister,
    db: AsyncSession = Depends(get_app_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user and return a token with the public user record."""
    return await auth_service.register(db, user_data)


@router.post("/login", response_model=AuthResponse)
async def login_user(
    user_data: UserLogin,
    db: AsyncSession = Depends(get_app_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate by email and password and return a fresh token."""
    return await auth_service.login(db, user_data)


@router.get("/me", response_model=UserProfile)
async def get_current_user_info(
    current_user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_app_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Retrieve the authenticated user's profile."""
    return await auth_service.get_public_user(db, current_user_id)
