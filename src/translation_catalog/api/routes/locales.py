from typing import Any

from fastapi import APIRouter, status

from translation_catalog.api.deps import SessionDep
from translation_catalog.locales import (
    LocaleCreate,
    LocalePublic,
    create_locale,
    get_locale_by_code,
    get_locales,
)

router = APIRouter(prefix="/locales", tags=["locales"])


@router.get("/", response_model=list[LocalePublic])
def read_locales(session: SessionDep) -> Any:
    return get_locales(session=session)


@router.get("/{code}", response_model=LocalePublic)
def read_locale(session: SessionDep, code: str) -> Any:
    return get_locale_by_code(session=session, code=code)


@router.post("/", response_model=LocalePublic, status_code=status.HTTP_201_CREATED)
def create_locale_endpoint(session: SessionDep, locale_in: LocaleCreate) -> Any:
    return create_locale(session=session, locale_in=locale_in)
