"""Shared fixtures: an in-memory SQLite catalog and record factories."""

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine, event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from translation_catalog.core.db import get_db
from translation_catalog.locales.models import Locale
from translation_catalog.main import app
from translation_catalog.tags.models import Tag
from translation_catalog.translations.models import Translation


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    """Fresh schema per test, shared by every connection of the test."""

    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine, "connect")
    def _configure_connection(dbapi_connection, _record) -> None:
        dbapi_connection.execute("PRAGMA foreign_keys=ON")
        # LIKE matches case-sensitively, as on PostgreSQL
        dbapi_connection.execute("PRAGMA case_sensitive_like=ON")

    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture()
def client(engine: Engine) -> Generator[TestClient, None, None]:
    """HTTP client whose requests use the test database."""

    def _get_test_db() -> Generator[Session, None, None]:
        with Session(engine) as db_session:
            yield db_session

    app.dependency_overrides[get_db] = _get_test_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_locale(session: Session) -> Callable[..., Locale]:
    def _make(code: str = "en", name: str | None = None) -> Locale:
        locale = Locale(code=code, name=name or code.capitalize())
        session.add(locale)
        session.commit()
        session.refresh(locale)
        return locale

    return _make


@pytest.fixture()
def make_tag(session: Session) -> Callable[[str], Tag]:
    def _make(name: str) -> Tag:
        tag = Tag(name=name)
        session.add(tag)
        session.commit()
        session.refresh(tag)
        return tag

    return _make


@pytest.fixture()
def make_translation(session: Session) -> Callable[..., Translation]:
    def _make(
        locale: Locale, key: str, value: str, tags: list[Tag] | None = None
    ) -> Translation:
        translation = Translation(locale_id=locale.id, key=key, value=value)
        translation.tags = list(tags or [])
        session.add(translation)
        session.commit()
        session.refresh(translation)
        return translation

    return _make
