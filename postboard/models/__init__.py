"""
Database models for postboard.

Architecture: User → Post (one user authors many posts).
"""

from postboard.models.post import Post
from postboard.models.user import User

__all__ = [
    "User",
    "Post",
]
