"""
User model for authentication and post authorship.

Architecture:
    User → Post

Key Features:
    - bcrypt password hashes only, never plaintext
    - Email is the unique login identifier
    - Users are created at registration and never deleted
"""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from postboard.models.base import Base, TimestampMixin

DEFAULT_BIO = "No bio yet."


class User(Base, TimestampMixin):
    """Registered account that can author posts."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    name = Column(String(255), nullable=False, comment="Display name")

    email = Column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Unique email address used for login",
    )

    password = Column(
        String(255),
        nullable=False,
        comment="bcrypt hash of the user's password",
    )

    bio = Column(Text, nullable=True, default=DEFAULT_BIO)

    posts = relationship(
        "Post",
        back_populates="author",
        doc="Posts written by this user",
    )

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
