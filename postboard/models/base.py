"""
Base configurations and mixins for database models.

Provides the declarative base shared by every postboard model together with
the timestamp mixin that gives each row its creation and update times.
"""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.functions import now as db_now


def utcnow() -> datetime:
    return datetime.now(UTC)


# Create the base class for all models
Base = declarative_base()


class TimestampMixin:
    """
    Adds created_at / updated_at columns.

    Values are stamped application-side (sub-second precision on every
    backend) with a database default as a fallback for raw inserts.
    """

    created_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=db_now(),
        nullable=False,
        comment="Timestamp when the record was created",
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=db_now(),
        onupdate=utcnow,
        nullable=False,
        comment="Timestamp when the record was last updated",
    )


__all__ = ["Base", "TimestampMixin", "utcnow"]
