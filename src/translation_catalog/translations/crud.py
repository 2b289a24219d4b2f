from collections.abc import Iterable
from itertools import groupby
from operator import itemgetter

from sqlalchemy import ColumnElement
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select
from sqlmodel.sql.expression import SelectOfScalar

from translation_catalog.core.base_models import utcnow
from translation_catalog.core.db import paginate_forward
from translation_catalog.core.exceptions import ResourceExistsError, ResourceNotFoundError
from translation_catalog.core.logging import get_logger
from translation_catalog.core.uow import atomic
from translation_catalog.locales.crud import get_locale, get_locale_by_code
from translation_catalog.locales.models import LocalePublic
from translation_catalog.tags.crud import get_tags_by_names
from translation_catalog.tags.models import Tag, TagPublic, TranslationTag
from translation_catalog.translations.models import (
    PAGE_SIZE,
    Translation,
    TranslationCreate,
    TranslationExport,
    TranslationFilters,
    TranslationPublic,
    TranslationsPage,
    TranslationUpdate,
)

logger = get_logger(__name__)

__all__ = [
    "build_translation_conditions",
    "create_translation",
    "delete_translation",
    "export_translations",
    "get_translation",
    "list_translations",
    "normalize_tag_names",
    "update_translation",
]


def normalize_tag_names(names: Iterable[str] | None) -> list[str]:
    """Strip names, drop blanks and duplicates, keep first-seen order."""
    if not names:
        return []
    return list(dict.fromkeys(name.strip() for name in names if name and name.strip()))


def build_translation_conditions(
    filters: TranslationFilters,
) -> list[ColumnElement[bool]]:
    """Compose the WHERE conditions for a translation listing.

    Each provided filter adds one condition, in key/value/tags order. The tag
    filter is a membership test against the translation ids carrying any of
    the names, so a translation matching several tags still yields one row.
    """
    conditions: list[ColumnElement[bool]] = []

    if filters.key:
        conditions.append(col(Translation.key).contains(filters.key, autoescape=True))
    if filters.value:
        conditions.append(
            col(Translation.value).contains(filters.value, autoescape=True)
        )

    tag_names = normalize_tag_names(filters.tags)
    if tag_names:
        tagged_ids = (
            select(TranslationTag.translation_id)
            .join(Tag, col(Tag.id) == col(TranslationTag.tag_id))
            .where(col(Tag.name).in_(tag_names))
        )
        conditions.append(col(Translation.id).in_(tagged_ids))

    return conditions


def list_translations(
    *, session: Session, filters: TranslationFilters, page: int = 1
) -> TranslationsPage:
    """List translations matching ``filters``, ten per page, by ascending id.

    Args:
        session: Database session
        filters: Optional key/value substrings and tag names
        page: 1-based page number

    Returns:
        Page of translations with locale and tags resolved
    """
    statement = _with_relations(select(Translation))
    conditions = build_translation_conditions(filters)
    if conditions:
        statement = statement.where(*conditions)
    rows, has_more = paginate_forward(
        session,
        statement,
        page=page,
        per_page=PAGE_SIZE,
        order_by=col(Translation.id),
    )
    return TranslationsPage(
        data=[_to_public(row) for row in rows],
        page=page,
        per_page=PAGE_SIZE,
        has_more=has_more,
    )


def get_translation(*, session: Session, translation_id: int) -> TranslationPublic:
    """Get a translation by ID with its locale and tags.

    Raises:
        ResourceNotFoundError: If the translation does not exist
    """
    return _to_public(_load(session, translation_id))


def create_translation(
    *, session: Session, translation_in: TranslationCreate
) -> TranslationPublic:
    """Create a translation and attach the named tags that exist.

    The insert and the tag attachment commit together.

    Raises:
        ResourceNotFoundError: If locale_id does not reference a locale
        ResourceExistsError: If the key is already used in that locale
    """
    get_locale(session=session, locale_id=translation_in.locale_id)
    _ensure_key_available(session, translation_in.locale_id, translation_in.key)

    tag_names = normalize_tag_names(translation_in.tags)
    try:
        with atomic(session) as uow:
            db_translation = Translation(
                locale_id=translation_in.locale_id,
                key=translation_in.key,
                value=translation_in.value,
            )
            uow.session.add(db_translation)
            uow.flush()
            translation_id = db_translation.id
            if tag_names:
                db_translation.tags = _resolve_tags(uow.session, tag_names)
    except IntegrityError as e:
        raise ResourceExistsError("Translation", "key") from e

    logger.info(
        "translation_created",
        translation_id=translation_id,
        locale_id=translation_in.locale_id,
        key=translation_in.key,
    )
    return _to_public(_load(session, translation_id))


def update_translation(
    *, session: Session, translation_id: int, translation_in: TranslationUpdate
) -> TranslationPublic:
    """Apply a partial update.

    When ``tags`` is provided the resolved tags replace the current set
    entirely; an empty list detaches everything.

    Raises:
        ResourceNotFoundError: If the translation or the new locale is missing
        ResourceExistsError: If the new (locale, key) pair is taken
    """
    db_translation = session.get(Translation, translation_id)
    if not db_translation:
        raise ResourceNotFoundError("Translation", str(translation_id))

    update_data = translation_in.model_dump(exclude_unset=True)
    tag_names = update_data.pop("tags", None)
    changes = {field: value for field, value in update_data.items() if value is not None}

    if "locale_id" in changes:
        get_locale(session=session, locale_id=changes["locale_id"])

    target = (
        changes.get("locale_id", db_translation.locale_id),
        changes.get("key", db_translation.key),
    )
    if target != (db_translation.locale_id, db_translation.key):
        _ensure_key_available(session, *target, exclude_id=translation_id)

    try:
        with atomic(session) as uow:
            db_translation.sqlmodel_update(changes)
            db_translation.updated_at = utcnow()
            if tag_names is not None:
                db_translation.tags = _resolve_tags(
                    uow.session, normalize_tag_names(tag_names)
                )
            uow.session.add(db_translation)
    except IntegrityError as e:
        raise ResourceExistsError("Translation", "key") from e

    logger.info(
        "translation_updated",
        translation_id=translation_id,
        fields=sorted(changes),
        tags_synced=tag_names is not None,
    )
    return _to_public(_load(session, translation_id))


def delete_translation(*, session: Session, translation_id: int) -> None:
    """Delete a translation together with its tag associations.

    Raises:
        ResourceNotFoundError: If the translation does not exist
    """
    db_translation = session.get(Translation, translation_id)
    if not db_translation:
        raise ResourceNotFoundError("Translation", str(translation_id))

    with atomic(session) as uow:
        # Deleting the parent removes its translation_tag rows
        uow.session.delete(db_translation)

    logger.info("translation_deleted", translation_id=translation_id)


def export_translations(
    *, session: Session, locale_code: str, tags: Iterable[str] | None = None
) -> list[TranslationExport]:
    """Export the tagged translations of one locale.

    Translations are joined to their tags, so untagged ones are left out.
    With a tag filter, each row lists only the tags that matched it, not the
    full tag set of the translation.

    Raises:
        ResourceNotFoundError: If no locale has this code
    """
    locale = get_locale_by_code(session=session, code=locale_code)
    tag_names = normalize_tag_names(tags)

    statement = (
        select(Translation.id, Translation.key, Translation.value, Tag.name)
        .select_from(Translation)
        .join(TranslationTag, col(TranslationTag.translation_id) == col(Translation.id))
        .join(Tag, col(Tag.id) == col(TranslationTag.tag_id))
        .where(Translation.locale_id == locale.id)
    )
    if tag_names:
        statement = statement.where(col(Tag.name).in_(tag_names))
    statement = statement.order_by(col(Translation.id).asc(), col(Tag.id).asc())

    rows = session.exec(statement).all()
    exported = [
        TranslationExport(key=key, value=value, tags=[row[3] for row in group])
        for (_, key, value), group in groupby(rows, key=itemgetter(0, 1, 2))
    ]

    logger.debug(
        "translations_exported",
        locale_code=locale_code,
        tag_filter=tag_names,
        count=len(exported),
    )
    return exported


def _with_relations(
    statement: SelectOfScalar[Translation],
) -> SelectOfScalar[Translation]:
    return statement.options(
        selectinload(Translation.locale),  # type: ignore[arg-type]
        selectinload(Translation.tags),  # type: ignore[arg-type]
    )


def _load(session: Session, translation_id: int) -> Translation:
    statement = (
        _with_relations(select(Translation))
        .where(Translation.id == translation_id)
        .execution_options(populate_existing=True)
    )
    translation = session.exec(statement).first()
    if not translation:
        raise ResourceNotFoundError("Translation", str(translation_id))
    return translation


def _to_public(translation: Translation) -> TranslationPublic:
    return TranslationPublic(
        id=translation.id,
        locale_id=translation.locale_id,
        key=translation.key,
        value=translation.value,
        created_at=translation.created_at,
        updated_at=translation.updated_at,
        locale=LocalePublic.model_validate(translation.locale),
        tags=[
            TagPublic.model_validate(tag)
            for tag in sorted(translation.tags, key=lambda tag: tag.id or 0)
        ],
    )


def _resolve_tags(session: Session, names: list[str]) -> list[Tag]:
    tags = get_tags_by_names(session=session, names=names)
    unresolved = set(names) - {tag.name for tag in tags}
    if unresolved:
        logger.warning("translation_tags_unresolved", names=sorted(unresolved))
    return tags


def _ensure_key_available(
    session: Session, locale_id: int, key: str, exclude_id: int | None = None
) -> None:
    statement = select(Translation.id).where(
        Translation.locale_id == locale_id, Translation.key == key
    )
    if exclude_id is not None:
        statement = statement.where(Translation.id != exclude_id)
    if session.exec(statement).first() is not None:
        raise ResourceExistsError("Translation", "key")
