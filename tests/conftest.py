"""Shared pytest fixtures and configuration for the registry-auth test suite.

Guidelines
----------
* No network access: the auth provider is faked or served by
  ``httpx.MockTransport``; SQLAlchemy engines are replaced by FakeEngine.
* Environment variables are set here, before any ``registry_auth`` import
  reads settings.
* Real Postgres tests are marked ``integration`` and need TEST_POSTGRES_URL.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List

import pytest

os.environ["NODE_ENV"] = "test"
os.environ["BETTER_AUTH_URL"] = "http://localhost:3000"
os.environ["NEXT_PUBLIC_BETTER_AUTH_URL"] = "http://localhost:3000"
os.environ["BETTER_AUTH_SECRET"] = "test-secret-key-for-testing-purposes-only"
os.environ["POSTGRES_URL"] = "postgres://registry@localhost/registry_test?sslmode=disable"
os.environ["GITHUB_CLIENT_ID"] = "test-github-id"
os.environ["GITHUB_CLIENT_SECRET"] = "test-github-secret"
os.environ.pop("STATSIG_SERVER_SECRET", None)


# ---------------------------------------------------------------------------
# Fake SQLAlchemy engines
# ---------------------------------------------------------------------------


class FakeConnection:
    """Records statements on its engine; optionally fails on a substring."""

    def __init__(self, engine: "FakeEngine") -> None:
        self.engine = engine

    async def exec_driver_sql(self, statement: str) -> None:
        self.engine.statements.append(statement)
        if self.engine.fail_on and self.engine.fail_on in statement:
            raise RuntimeError(f"boom: {statement[:40]}")

    async def execute(self, clause: Any) -> None:
        await self.exec_driver_sql(str(clause))

    async def get_raw_connection(self) -> "FakeRawConnection":
        return FakeRawConnection(self)


class FakeRawConnection:
    """Pool-proxied connection whose ``driver_connection`` runs whole scripts."""

    def __init__(self, connection: FakeConnection) -> None:
        self.driver_connection = FakeDriverConnection(connection)


class FakeDriverConnection:
    def __init__(self, connection: FakeConnection) -> None:
        self._connection = connection

    async def execute(self, script: str) -> str:
        await self._connection.exec_driver_sql(script)
        return "OK"


class FakeEngine:
    """Stand-in for AsyncEngine: connect()/begin() context managers, dispose()."""

    def __init__(self, url: Any, **kwargs: Any) -> None:
        self.url = url
        self.kwargs = kwargs
        self.statements: List[str] = []
        self.transactions = 0
        self.disposed = False
        self.fail_on: str | None = None
        self.dispose_error: Exception | None = None

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[FakeConnection]:
        yield FakeConnection(self)

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[FakeConnection]:
        self.transactions += 1
        yield FakeConnection(self)

    async def dispose(self) -> None:
        self.disposed = True
        if self.dispose_error is not None:
            raise self.dispose_error


class EngineRecorder:
    """engine_factory replacement that keeps every engine it builds."""

    def __init__(self) -> None:
        self.engines: List[FakeEngine] = []

    def __call__(self, url: Any, **kwargs: Any) -> FakeEngine:
        engine = FakeEngine(url, **kwargs)
        self.engines.append(engine)
        return engine

    def for_database(self, name: str) -> List[FakeEngine]:
        return [e for e in self.engines if e.url.database == name]


@pytest.fixture
def engine_factory() -> EngineRecorder:
    return EngineRecorder()


@pytest.fixture
def migrations_dir(tmp_path):
    """Two small idempotent migrations, written out of order on purpose."""
    directory = tmp_path / "migrations"
    directory.mkdir()
    (directory / "002_indexes.sql").write_text(
        'CREATE INDEX IF NOT EXISTS "idx_item_name" ON "item"("name");\n',
        encoding="utf-8",
    )
    (directory / "001_tables.sql").write_text(
        "-- base table\n"
        'CREATE TABLE IF NOT EXISTS "item" ("id" TEXT PRIMARY KEY, "name" TEXT);\n'
        'CREATE TABLE IF NOT EXISTS "tag" ("id" TEXT PRIMARY KEY);\n',
        encoding="utf-8",
    )
    (directory / "README.md").write_text("not a migration", encoding="utf-8")
    return directory
