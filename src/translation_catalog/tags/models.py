from sqlmodel import Field, SQLModel

from translation_catalog.core.base_models import BaseTable


class TagBase(SQLModel):
    name: str = Field(min_length=1, max_length=255)


class Tag(TagBase, BaseTable, table=True):
    """Reusable label attached to many translations through translation_tag."""

    __tablename__ = "tags"

    name: str = Field(unique=True, index=True, max_length=255)


class TranslationTag(SQLModel, table=True):
    """Association row between a translation and a tag.

    The composite primary key makes each (translation, tag) pair unique.
    Rows go away with either side.
    """

    __tablename__ = "translation_tag"

    translation_id: int = Field(
        foreign_key="translations.id",
        primary_key=True,
        index=True,
        ondelete="CASCADE",
    )
    tag_id: int = Field(
        foreign_key="tags.id",
        primary_key=True,
        index=True,
        ondelete="CASCADE",
    )


class TagCreate(TagBase):
    pass


class TagPublic(TagBase):
    id: int
