"""Block until the catalog database accepts queries.

Run before migrations in the container entrypoint. Attempts and the pause
between them come from ``DB_CONNECT_ATTEMPTS`` / ``DB_CONNECT_WAIT_SECONDS``.
"""

import logging

from sqlalchemy import Engine
from sqlmodel import Session, select
from tenacity import Retrying, before_sleep_log, stop_after_attempt, wait_fixed

from translation_catalog.core.config import settings
from translation_catalog.core.db import engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def ping(db_engine: Engine) -> None:
    with Session(db_engine) as session:
        session.exec(select(1))


def wait_for_database(
    db_engine: Engine,
    *,
    attempts: int | None = None,
    wait_seconds: float | None = None,
) -> int:
    """Retry ``ping`` until the database answers.

    Returns:
        Number of attempts it took

    Raises:
        tenacity.RetryError: If every attempt failed
    """
    retrying = Retrying(
        stop=stop_after_attempt(attempts or settings.DB_CONNECT_ATTEMPTS),
        wait=wait_fixed(
            settings.DB_CONNECT_WAIT_SECONDS if wait_seconds is None else wait_seconds
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
    )
    tries = 0
    for attempt in retrying:
        tries = attempt.retry_state.attempt_number
        with attempt:
            ping(db_engine)
    return tries


def main() -> None:
    logger.info("Waiting for database")
    tries = wait_for_database(engine)
    logger.info("Database ready after %d attempt(s)", tries)


if __name__ == "__main__":
    main()
