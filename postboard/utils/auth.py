"""
Authentication utilities with JWT tokens and bcrypt password hashing.

- bcrypt with a random salt per hash (cost factor 10 by default)
- HS256-signed tokens carrying ``{"user": {"id": <id>}}``
- 5 hour token lifetime unless configured otherwise
- UTC timezone consistency
"""

from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

DEFAULT_ALGORITHM = "HS256"
DEFAULT_BCRYPT_ROUNDS = 10
ACCESS_TOKEN_EXPIRE_MINUTES = 5 * 60


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), hashed_password.encode("utf-8")
        )
    except ValueError:
        # Malformed stored hash or a password bcrypt refuses to process
        return False


def get_password_hash(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a plain text password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=rounds)
    hashed_password = bcrypt.hashpw(password=pwd_bytes, salt=salt)
    return hashed_password.decode("utf-8")


def create_access_token(
    user_id: int,
    *,
    secret_key: str,
    algorithm: str = DEFAULT_ALGORITHM,
    expires_delta: timedelta | None = None,
    issued_at: datetime | None = None,
) -> str:
    """Create a signed token asserting the identity of ``user_id``."""
    if not secret_key:
        raise RuntimeError("Token signing secret is not configured")

    issued = issued_at or datetime.now(UTC)
    expire = issued + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode = {"user": {"id": user_id}, "iat": issued, "exp": expire}
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(
    token: str, *, secret_key: str, algorithm: str = DEFAULT_ALGORITHM
) -> dict | None:
    """Decode and verify a token. Expired, tampered and malformed all give None."""
    if not secret_key:
        raise RuntimeError("Token verification secret is not configured")
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        return None


def extract_user_id_from_token(
    token: str, *, secret_key: str, algorithm: str = DEFAULT_ALGORITHM
) -> int | None:
    """Extract the user id from a token, or None if the token is not valid."""
    payload = decode_access_token(token, secret_key=secret_key, algorithm=algorithm)
    if payload is None:
        return None

    user = payload.get("user")
    if not isinstance(user, dict):
        return None
    user_id = user.get("id")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        return None
    return user_id
