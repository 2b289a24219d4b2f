import pytest
from sqlalchemy import Engine
from sqlalchemy.exc import OperationalError
from tenacity import RetryError

from translation_catalog.scripts import backend_pre_start
from translation_catalog.scripts.backend_pre_start import wait_for_database


def test_wait_for_database_first_try(engine: Engine) -> None:
    assert wait_for_database(engine, attempts=3, wait_seconds=0) == 1


def test_wait_for_database_retries_until_reachable(
    engine: Engine, monkeypatch
) -> None:
    ping = backend_pre_start.ping
    calls = []

    def _flaky_ping(db_engine: Engine) -> None:
        calls.append(db_engine)
        if len(calls) < 3:
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))
        ping(db_engine)

    monkeypatch.setattr(backend_pre_start, "ping", _flaky_ping)

    assert wait_for_database(engine, attempts=5, wait_seconds=0) == 3


def test_wait_for_database_gives_up(engine: Engine, monkeypatch) -> None:
    def _down(db_engine: Engine) -> None:
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(backend_pre_start, "ping", _down)

    with pytest.raises(RetryError):
        wait_for_database(engine, attempts=2, wait_seconds=0)
