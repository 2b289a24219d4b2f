from sqlmodel import Field, SQLModel

from translation_catalog.core.base_models import BaseTable


class LocaleBase(SQLModel):
    code: str = Field(min_length=1, max_length=32)
    name: str = Field(min_length=1, max_length=255)


class Locale(LocaleBase, BaseTable, table=True):
    """A language/region identity that scopes a set of translations.

    Locales are shared by translations and never removed implicitly.
    """

    __tablename__ = "locales"

    code: str = Field(unique=True, index=True, max_length=32)
    name: str = Field(index=True, max_length=255)


class LocaleCreate(LocaleBase):
    pass


class LocalePublic(LocaleBase):
    id: int
