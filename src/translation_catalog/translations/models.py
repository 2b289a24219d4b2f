from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from translation_catalog.core.base_models import (
    SimplePage,
    TimestampedTable,
    TimestampResponseMixin,
)
from translation_catalog.locales.models import Locale, LocalePublic
from translation_catalog.tags.models import Tag, TagPublic, TranslationTag

PAGE_SIZE = 10


class TranslationBase(SQLModel):
    key: str = Field(min_length=1, max_length=255)
    value: str


class Translation(TranslationBase, TimestampedTable, table=True):
    """A key/value string pair scoped to one locale.

    ``(locale_id, key)`` is unique. Tag associations live in translation_tag
    and are owned by the translation.
    """

    __tablename__ = "translations"
    __table_args__ = (
        UniqueConstraint("locale_id", "key", name="uq_translations_locale_id_key"),
    )

    locale_id: int = Field(foreign_key="locales.id", nullable=False, index=True)
    key: str = Field(index=True, max_length=255)
    value: str = Field(index=True)

    locale: Locale = Relationship()
    tags: list[Tag] = Relationship(link_model=TranslationTag)


class TranslationCreate(TranslationBase):
    locale_id: int
    tags: list[str] | None = None


class TranslationUpdate(SQLModel):
    locale_id: int | None = None
    key: str | None = Field(default=None, min_length=1, max_length=255)
    value: str | None = None
    tags: list[str] | None = None


class TranslationPublic(TranslationBase, TimestampResponseMixin):
    """Fully materialized translation with its locale and tags resolved."""

    id: int
    locale_id: int
    locale: LocalePublic
    tags: list[TagPublic]


class TranslationFilters(SQLModel):
    """Listing filters. Empty or missing fields do not restrict the query.

    key/value are substring matches, tags matches any of the given names.
    """

    key: str | None = None
    value: str | None = None
    tags: list[str] | None = None


class TranslationExport(SQLModel):
    key: str
    value: str
    tags: list[str]


TranslationsPage = SimplePage[TranslationPublic]
