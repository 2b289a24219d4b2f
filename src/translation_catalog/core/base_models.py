"""Base models and mixins for SQLModel schemas.

Usage:
    - Database models (table=True) inherit from composed base classes
    - Response schemas use TimestampResponseMixin for timestamp fields
    - Forward-only list responses use SimplePage[T]

Example:
    class Translation(TranslationBase, TimestampedTable, table=True):
        ...
"""

from datetime import UTC, datetime
from typing import Generic, TypeVar

from sqlmodel import Field, SQLModel

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(UTC)


class IntPrimaryKeyMixin(SQLModel):
    """Autoincrement integer primary key. Ascending id is creation order."""

    id: int | None = Field(default=None, primary_key=True)


class TimestampMixin(SQLModel):
    """Created/updated timestamps for audit trail."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class BaseTable(IntPrimaryKeyMixin):
    """Base for simple tables (ID only).

    Use for: Locale, Tag
    """

    pass


class TimestampedTable(IntPrimaryKeyMixin, TimestampMixin):
    """Base for tables with timestamps.

    Use for: Translation
    """

    pass


class TimestampResponseMixin(SQLModel):
    """For Public/Response schemas that include timestamps."""

    created_at: datetime
    updated_at: datetime


class SimplePage(SQLModel, Generic[T]):
    """Forward-only page without a total count.

    Example:
        @router.get("/translations", response_model=SimplePage[TranslationPublic])
        def list_translations(...):
            return SimplePage(data=rows, page=1, per_page=10, has_more=False)
    """

    data: list[T]
    page: int
    per_page: int
    has_more: bool


class Message(SQLModel):
    message: str
