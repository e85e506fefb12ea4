"""Credential store: registration, login and public user lookups."""

from __future__ import annotations

import asyncio
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from postboard.db_handlers.user import UserDBHandler
from postboard.exceptions import ConflictError, CredentialError, NotFoundError
from postboard.models.user import User
from postboard.schemas import AuthResponse, UserLogin, UserProfile, UserRegister, UserSummary
from postboard.utils.auth import create_access_token, get_password_hash, verify_password
from postboard.utils.logger import setup_logger

logger = setup_logger("services.auth")


class AuthService:
    def __init__(
        self,
        user_handler: UserDBHandler,
        *,
        secret_key: str | None,
        algorithm: str,
        token_ttl: timedelta,
        bcrypt_rounds: int,
    ) -> None:
        self.user_handler = user_handler
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.token_ttl = token_ttl
        self.bcrypt_rounds = bcrypt_rounds

    def issue_access_token(self, user_id: int) -> str:
        return create_access_token(
            user_id,
            secret_key=self.secret_key,
            algorithm=self.algorithm,
            expires_delta=self.token_ttl,
        )

    def _auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            token=self.issue_access_token(user.id),
            user=UserSummary.model_validate(user),
        )

    async def register(self, db: AsyncSession, payload: UserRegister) -> AuthResponse:
        """
        Create an account and sign the caller in.

        Raises ConflictError if the email is taken, either by the up-front
        lookup or by the unique index when a concurrent registration wins.
        """
        existing = await self.user_handler.get_user_by_email(payload.email, db=db)
        if existing:
            raise ConflictError()

        password_hash = await asyncio.to_thread(
            get_password_hash, payload.password, self.bcrypt_rounds
        )

        user_dict = {
            "name": payload.name,
            "email": payload.email,
            "password": password_hash,
        }
        if payload.bio is not None:
            user_dict["bio"] = payload.bio

        user = await self.user_handler.create_user(user_dict, db=db)
        logger.info(f"Registered user {user.id}")
        return self._auth_response(user)

    async def login(self, db: AsyncSession, payload: UserLogin) -> AuthResponse:
        user = await self.user_handler.get_user_by_email(payload.email, db=db)
        if user is None:
            logger.info("Login rejected")
            raise CredentialError()

        is_match = await asyncio.to_thread(verify_password, payload.password, user.password)
        if not is_match:
            logger.info(f"Login rejected for user {user.id}")
            raise CredentialError()

        logger.info(f"Login: user {user.id}")
        return self._auth_response(user)

    async def get_public_user(self, db: AsyncSession, user_id: int) -> UserProfile:
        user = await self.user_handler.get(user_id, db=db)
        if user is None:
            raise NotFoundError()
        return UserProfile.model_validate(user)
