from collections.abc import Generator
from typing import Any, TypeVar

from sqlalchemy.orm import InstrumentedAttribute
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.sql.expression import SelectOfScalar

from translation_catalog.core.config import settings

engine = create_engine(
    str(settings.SQLALCHEMY_DATABASE_URI),
    pool_size=5,
    max_overflow=10,
    pool_pre_ping=True,
    pool_recycle=3600,
    echo=settings.DEBUG and settings.ENVIRONMENT == "local",
)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


T = TypeVar("T", bound=SQLModel)


def paginate_forward(
    session: Session,
    statement: SelectOfScalar[T],
    page: int = 1,
    per_page: int = 10,
    order_by: InstrumentedAttribute[Any] | None = None,
) -> tuple[list[T], bool]:
    """Execute a forward-only paginated query.

    No count query is issued. One row beyond the page is fetched to tell
    whether a next page exists.

    Args:
        session: Database session
        statement: Base SQLModel select statement (without pagination)
        page: 1-based page number
        per_page: Maximum number of records to return
        order_by: Optional column to order by

    Returns:
        Tuple of (list of results, whether more results follow)

    Example:
        statement = select(Translation).where(Translation.locale_id == 1)
        rows, has_more = paginate_forward(session, statement, page=2)
    """
    if order_by is not None:
        statement = statement.order_by(order_by)

    offset = (max(page, 1) - 1) * per_page
    paginated_statement = statement.offset(offset).limit(per_page + 1)
    results = list(session.exec(paginated_statement).all())

    return results[:per_page], len(results) > per_page
