from typing import Annotated, Any

from fastapi import APIRouter, Path, Query, status

from translation_catalog.api.deps import SessionDep, split_csv
from translation_catalog.core.base_models import Message
from translation_catalog.core.exceptions import ValidationError
from translation_catalog.tags import get_tags_by_names
from translation_catalog.translations import (
    TranslationCreate,
    TranslationExport,
    TranslationFilters,
    TranslationPublic,
    TranslationsPage,
    TranslationUpdate,
    create_translation,
    delete_translation,
    export_translations,
    get_translation,
    list_translations,
    normalize_tag_names,
    update_translation,
)

router = APIRouter(prefix="/translations", tags=["translations"])

TranslationId = Annotated[int, Path(description="Translation ID")]


def require_known_tags(session: SessionDep, names: list[str] | None) -> None:
    """Reject tag names that don't exist yet.

    Raises:
        ValidationError: 422 listing the unknown names
    """
    wanted = normalize_tag_names(names)
    if not wanted:
        return
    known = {tag.name for tag in get_tags_by_names(session=session, names=wanted)}
    unknown = [name for name in wanted if name not in known]
    if unknown:
        raise ValidationError(f"Unknown tags: {', '.join(unknown)}", field="tags")


@router.get("/", response_model=TranslationsPage)
def read_translations(
    session: SessionDep,
    key: Annotated[str | None, Query(max_length=255)] = None,
    value: Annotated[str | None, Query(max_length=255)] = None,
    tags: Annotated[str | None, Query(description="Comma separated tag names")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
) -> Any:
    """List translations filtered by key/value substring and tag names."""
    filters = TranslationFilters(key=key, value=value, tags=split_csv(tags))
    return list_translations(session=session, filters=filters, page=page)


@router.get("/export/{locale_code}", response_model=list[TranslationExport])
def export_translations_endpoint(
    session: SessionDep,
    locale_code: str,
    tags: Annotated[str | None, Query(description="Comma separated tag names")] = None,
) -> Any:
    """Export tagged translations of a locale with their tag names."""
    return export_translations(
        session=session, locale_code=locale_code, tags=split_csv(tags)
    )


@router.get("/{translation_id}", response_model=TranslationPublic)
def read_translation(session: SessionDep, translation_id: TranslationId) -> Any:
    return get_translation(session=session, translation_id=translation_id)


@router.post(
    "/", response_model=TranslationPublic, status_code=status.HTTP_201_CREATED
)
def create_translation_endpoint(
    session: SessionDep, translation_in: TranslationCreate
) -> Any:
    """Create a translation. Tag names must already exist."""
    require_known_tags(session, translation_in.tags)
    return create_translation(session=session, translation_in=translation_in)


@router.put("/{translation_id}", response_model=TranslationPublic)
def update_translation_endpoint(
    session: SessionDep,
    translation_id: TranslationId,
    translation_in: TranslationUpdate,
) -> Any:
    """Update a translation. A tags list replaces the current tags."""
    require_known_tags(session, translation_in.tags)
    return update_translation(
        session=session, translation_id=translation_id, translation_in=translation_in
    )


@router.delete("/{translation_id}", response_model=Message)
def delete_translation_endpoint(
    session: SessionDep, translation_id: TranslationId
) -> Any:
    delete_translation(session=session, translation_id=translation_id)
    return Message(message="Translation deleted successfully")
