from fastapi import Path

from postboard.exceptions import InvalidIdError

MAX_USER_ID = 2**31 - 1  # INTEGER primary key range
POSTS_INVALID_ID_MESSAGE = "Invalid or missing user ID for posts."


def _to_user_id(raw: str, message: str | None = None) -> int:
    raw = raw.strip()
    if not raw.isascii() or not raw.isdigit():
        raise InvalidIdError(message)

    parsed = int(raw)
    if parsed <= 0 or parsed > MAX_USER_ID:
        raise InvalidIdError(message)
    return parsed


async def parse_user_id(
    user_id: str = Path(..., description="Numeric id of the user"),
) -> int:
    """
    Dependency converting the ``user_id`` path segment to an int.

    Raises InvalidIdError (400) for anything that is not a positive base-10
    integer, so malformed ids never reach the store.
    """
    return _to_user_id(user_id)


async def parse_posts_user_id(
    user_id: str = Path(..., description="Numeric id of the author"),
) -> int:
    """Same rules as ``parse_user_id``, reported with the posts listing message."""
    return _to_user_id(user_id, POSTS_INVALID_ID_MESSAGE)
