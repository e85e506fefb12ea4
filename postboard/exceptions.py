"""
Client-facing and server-side error kinds raised by handlers, services and
dependencies. ``main.create_app`` maps each one to a ``{"msg": ...}`` JSON
response with the matching status code.
"""

from fastapi import status


class PostboardError(Exception):
    """Base class for every error the API knows how to render."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server Error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PostboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class InvalidIdError(ValidationError):
    default_message = "Invalid or missing user ID."


class ConflictError(PostboardError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "User already exists"


class AuthError(PostboardError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authorization denied"


class NoTokenError(AuthError):
    default_message = "No token, authorization denied"


class InvalidTokenError(AuthError):
    default_message = "Token is not valid"


class CredentialError(PostboardError):
    # Same message whether the email is unknown or the password is wrong
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid Credentials"


class NotFoundError(PostboardError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found"


class StoreError(PostboardError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server Error"
