from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from translation_catalog.core.exceptions import ResourceExistsError, ResourceNotFoundError
from translation_catalog.core.logging import get_logger
from translation_catalog.core.uow import atomic
from translation_catalog.tags.models import Tag, TagCreate, TranslationTag

logger = get_logger(__name__)

CREATE_ATTEMPTS = 3

__all__ = [
    "create_or_retrieve_tags",
    "create_tag",
    "delete_tag",
    "get_tag",
    "get_tag_by_name",
    "get_tags",
    "get_tags_by_names",
]


def get_tags(*, session: Session) -> list[Tag]:
    statement = select(Tag).order_by(col(Tag.id).asc())
    return list(session.exec(statement).all())


def get_tag(*, session: Session, tag_id: int) -> Tag:
    tag = session.get(Tag, tag_id)
    if not tag:
        raise ResourceNotFoundError("Tag", str(tag_id))
    return tag


def get_tag_by_name(*, session: Session, name: str) -> Tag:
    statement = select(Tag).where(Tag.name == name)
    tag = session.exec(statement).first()
    if not tag:
        raise ResourceNotFoundError("Tag", name)
    return tag


def get_tags_by_names(*, session: Session, names: Iterable[str]) -> list[Tag]:
    """Get the tags whose name is in ``names``.

    Names without a matching tag are skipped, nothing is created.
    """
    wanted = list(dict.fromkeys(names))
    if not wanted:
        return []
    statement = (
        select(Tag).where(col(Tag.name).in_(wanted)).order_by(col(Tag.id).asc())
    )
    return list(session.exec(statement).all())


def create_tag(*, session: Session, tag_in: TagCreate) -> Tag:
    """Create a tag explicitly.

    Raises:
        ResourceExistsError: If a tag with this name exists
    """
    db_tag = Tag.model_validate(tag_in)
    session.add(db_tag)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ResourceExistsError("Tag", "name") from e
    session.refresh(db_tag)
    logger.info("tag_created", tag_id=db_tag.id, name=db_tag.name)
    return db_tag


def create_or_retrieve_tags(*, session: Session, names: Iterable[str]) -> list[Tag]:
    """Return one tag per distinct name, creating the ones that don't exist.

    Existing tags come first, followed by newly created ones. When another
    writer inserts some of the names first, the batch is rolled back and the
    names still missing are inserted again, up to ``CREATE_ATTEMPTS`` times.

    Raises:
        ResourceExistsError: If the names keep conflicting on every attempt
    """
    wanted = list(dict.fromkeys(names))
    for attempt in range(1, CREATE_ATTEMPTS + 1):
        existing = get_tags_by_names(session=session, names=wanted)
        existing_names = {tag.name for tag in existing}

        new_tags = [Tag(name=name) for name in wanted if name not in existing_names]
        if not new_tags:
            return existing

        session.add_all(new_tags)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.info("tags_create_conflict", names=wanted, attempt=attempt)
            continue

        for tag in new_tags:
            session.refresh(tag)
        logger.info("tags_created", names=[tag.name for tag in new_tags])
        return [*existing, *new_tags]

    raise ResourceExistsError("Tag", "name")


def delete_tag(*, session: Session, tag_id: int) -> None:
    """Delete a tag and detach it from every translation.

    Translations that carried the tag are kept.
    """
    tag = get_tag(session=session, tag_id=tag_id)
    with atomic(session) as uow:
        links = uow.session.exec(
            select(TranslationTag).where(TranslationTag.tag_id == tag_id)
        ).all()
        for link in links:
            uow.session.delete(link)
        # Associations must be gone before the tag row
        uow.flush()
        uow.session.delete(tag)
    logger.info("tag_deleted", tag_id=tag_id, detached=len(links))
