"""
Authentication dependencies for FastAPI route protection.
"""


from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from postboard.config import Settings
from postboard.exceptions import InvalidTokenError, NoTokenError
from postboard.services.auth_service import AuthService
from postboard.utils.auth import extract_user_id_from_token

AUTH_TOKEN_HEADER = "x-auth-token"

# Raw token in a custom header, not an Authorization: Bearer scheme
token_header = APIKeyHeader(name=AUTH_TOKEN_HEADER, auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def get_current_user_id(
    token: str | None = Depends(token_header),
    settings: Settings = Depends(get_settings),
) -> int:
    """
    Resolve the authenticated user id from the x-auth-token header.

    A missing header and a bad token are rejected with different messages;
    expired and tampered tokens are indistinguishable.
    """
    if not token:
        raise NoTokenError()

    user_id = extract_user_id_from_token(
        token, secret_key=settings.jwt_secret, algorithm=settings.jwt_algorithm
    )
    if user_id is None:
        raise InvalidTokenError()

    return user_id
