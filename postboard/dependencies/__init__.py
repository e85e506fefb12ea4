from postboard.dependencies.auth import (
    get_auth_service,
    get_current_user_id,
    get_settings,
)
from postboard.dependencies.users import parse_posts_user_id, parse_user_id

__all__ = [
    "get_auth_service",
    "get_current_user_id",
    "get_settings",
    "parse_posts_user_id",
    "parse_user_id",
]
