"""
Post model: a short, immutable text entry owned by exactly one user.
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship

from postboard.models.base import Base, TimestampMixin


class Post(Base, TimestampMixin):
    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_author_id", "author_id"),
        Index("ix_posts_created_at", "created_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)

    content = Column(Text, nullable=False)

    # Always the authenticated caller, never client-supplied
    author_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        comment="User who created the post",
    )

    author = relationship("User", back_populates="posts")

    def __repr__(self):
        return f"<Post(id={self.id}, author_id={self.author_id})>"
