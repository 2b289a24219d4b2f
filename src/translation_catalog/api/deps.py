from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from translation_catalog.core.db import get_db
from translation_catalog.translations import normalize_tag_names

SessionDep = Annotated[Session, Depends(get_db)]


def split_csv(raw: str | None) -> list[str]:
    """Split a comma separated query value into normalized tag names."""
    if not raw:
        return []
    return normalize_tag_names(raw.split(","))
