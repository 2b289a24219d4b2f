from collections.abc import Callable, Iterable

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from translation_catalog.core.exceptions import ResourceExistsError, ResourceNotFoundError
from translation_catalog.core.logging import get_logger
from translation_catalog.locales.models import Locale, LocaleCreate

logger = get_logger(__name__)

CREATE_ATTEMPTS = 3

__all__ = [
    "create_locale",
    "create_or_retrieve_locales_by_code",
    "create_or_retrieve_locales_by_name",
    "get_locale",
    "get_locale_by_code",
    "get_locale_by_name",
    "get_locales",
    "locale_exists_by_code",
]


def get_locale(*, session: Session, locale_id: int) -> Locale:
    """Get a locale by ID.

    Raises:
        ResourceNotFoundError: If no locale has this ID
    """
    locale = session.get(Locale, locale_id)
    if not locale:
        raise ResourceNotFoundError("Locale", str(locale_id))
    return locale


def get_locale_by_code(*, session: Session, code: str) -> Locale:
    """Get a locale by its exact code.

    Raises:
        ResourceNotFoundError: If no locale has this code
    """
    statement = select(Locale).where(Locale.code == code)
    locale = session.exec(statement).first()
    if not locale:
        raise ResourceNotFoundError("Locale", code)
    return locale


def get_locale_by_name(*, session: Session, name: str) -> Locale:
    """Get a locale by its exact name.

    Raises:
        ResourceNotFoundError: If no locale has this name
    """
    statement = select(Locale).where(Locale.name == name)
    locale = session.exec(statement).first()
    if not locale:
        raise ResourceNotFoundError("Locale", name)
    return locale


def get_locales(*, session: Session) -> list[Locale]:
    """Get all locales in creation order."""
    statement = select(Locale).order_by(col(Locale.id).asc())
    return list(session.exec(statement).all())


def locale_exists_by_code(*, session: Session, code: str) -> bool:
    statement = select(Locale.id).where(Locale.code == code)
    return session.exec(statement).first() is not None


def create_locale(*, session: Session, locale_in: LocaleCreate) -> Locale:
    """Create a locale explicitly.

    Raises:
        ResourceExistsError: If the code is already taken
    """
    if locale_exists_by_code(session=session, code=locale_in.code):
        raise ResourceExistsError("Locale", "code")

    db_locale = Locale.model_validate(locale_in)
    session.add(db_locale)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise ResourceExistsError("Locale", "code") from e
    session.refresh(db_locale)

    logger.info("locale_created", locale_id=db_locale.id, code=db_locale.code)
    return db_locale


def create_or_retrieve_locales_by_name(
    *, session: Session, names: Iterable[str]
) -> list[Locale]:
    """Return one locale per distinct name, creating the missing ones.

    New locales get ``code = name.lower()``.
    """
    return _create_or_retrieve(
        session,
        field="name",
        values=names,
        build=lambda name: Locale(name=name, code=name.lower()),
    )


def create_or_retrieve_locales_by_code(
    *, session: Session, codes: Iterable[str]
) -> list[Locale]:
    """Return one locale per distinct code, creating the missing ones.

    New locales get the code with its first letter upper-cased as name.
    """
    return _create_or_retrieve(
        session,
        field="code",
        values=codes,
        build=lambda code: Locale(code=code, name=code[:1].upper() + code[1:]),
    )


def _locales_by(session: Session, field: str, values: list[str]) -> dict[str, Locale]:
    column = col(getattr(Locale, field))
    statement = select(Locale).where(column.in_(values))
    return {getattr(locale, field): locale for locale in session.exec(statement).all()}


def _create_or_retrieve(
    session: Session,
    *,
    field: str,
    values: Iterable[str],
    build: Callable[[str], Locale],
) -> list[Locale]:
    """Look up locales by ``field``, inserting the missing values.

    A unique violation means another writer got some of the rows in first:
    roll back, re-read, and insert what is still missing. A value that keeps
    conflicting (a derived code taken by a different locale) ends in
    ``ResourceExistsError`` after ``CREATE_ATTEMPTS`` tries.
    """
    wanted = list(dict.fromkeys(values))
    if not wanted:
        return []

    for attempt in range(1, CREATE_ATTEMPTS + 1):
        found = _locales_by(session, field, wanted)
        new_locales = [build(value) for value in wanted if value not in found]
        if not new_locales:
            return [found[value] for value in wanted]

        session.add_all(new_locales)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.info(
                "locales_create_conflict", field=field, values=wanted, attempt=attempt
            )
            continue

        for locale in new_locales:
            session.refresh(locale)
            found[getattr(locale, field)] = locale
        logger.info(
            "locales_created",
            field=field,
            values=[getattr(locale, field) for locale in new_locales],
        )
        return [found[value] for value in wanted]

    raise ResourceExistsError("Locale", "code")
