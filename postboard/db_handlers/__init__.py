from postboard.db_handlers.base import BaseDBHandler
from postboard.db_handlers.post import PostDBHandler
from postboard.db_handlers.user import UserDBHandler

__all__ = [
    "BaseDBHandler",
    "PostDBHandler",
    "UserDBHandler",
]
