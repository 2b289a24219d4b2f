"""Unit of Work pattern for atomic database operations.

Multi-statement writes (insert a translation then attach its tags,
update a translation then sync its tags) run inside ``atomic()`` so the
second step can never leave the first one half-applied.

Based on patterns from Cosmic Python:
https://www.cosmicpython.com/book/chapter_06_uow.html
"""

from collections.abc import Generator
from contextlib import contextmanager

from sqlmodel import Session

from translation_catalog.core.logging import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """Manages a database transaction.

    Wraps a SQLModel session and provides explicit commit/rollback control.
    Use with the `atomic()` context manager for automatic handling.

    Attributes:
        session: The underlying SQLModel session
    """

    def __init__(self, session: Session):
        self._session = session
        self._committed = False

    @property
    def session(self) -> Session:
        """Access the underlying session for queries."""
        return self._session

    def commit(self) -> None:
        """Commit the transaction.

        Should only be called once. Subsequent calls are no-ops.
        """
        if not self._committed:
            self._session.commit()
            self._committed = True
            logger.debug("uow_committed")

    def rollback(self) -> None:
        """Rollback the transaction.

        Safe to call multiple times or after commit.
        """
        if not self._committed:
            self._session.rollback()
            logger.debug("uow_rolled_back")

    def flush(self) -> None:
        """Flush pending changes to the database without committing.

        Surfaces constraint violations and assigns primary keys early.
        """
        self._session.flush()


@contextmanager
def atomic(session: Session) -> Generator[UnitOfWork, None, None]:
    """Context manager for atomic database operations.

    Ensures all database operations within the block either
    succeed together or are rolled back together.

    Args:
        session: Request-scoped session the work runs on

    Yields:
        UnitOfWork instance for the transaction

    Usage:
        with atomic(session) as uow:
            translation = Translation(locale_id=locale.id, key=key, value=value)
            uow.session.add(translation)
            uow.flush()  # surfaces (locale_id, key) conflicts

            translation.tags = tags
            # Commits automatically on success
    """
    uow = UnitOfWork(session)

    try:
        yield uow
        uow.commit()
    except Exception:
        uow.rollback()
        raise
