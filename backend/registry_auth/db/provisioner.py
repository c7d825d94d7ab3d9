from __future__ import annotations

"""backend/registry_auth/db/provisioner.py

Fresh, isolated Postgres database for the test suite.

Lifecycle:

    uninitialized -> connected -> migrated -> (reused) -> torn_down
                        ^            |
                        +------------+  recreate_database() again

``recreate_database()`` re-reads the connection URL from the environment
on every call, refuses to touch any database whose name lacks ``_test``,
then drops, creates and migrates it in strict sequence. Setup failures
propagate; ``cleanup()`` is best-effort and only logs.
"""

import enum
import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from registry_auth.db.migrations import MigrationRunner
from registry_auth.db.session import (
    Database,
    EngineFactory,
    database_name,
    parse_database_url,
    quote_identifier,
)
from registry_auth.errors import ConfigurationError, UnsafeDatabaseError

logger = logging.getLogger(__name__)

TEST_DATABASE_MARKER = "_test"
DEFAULT_URL_ENV = "POSTGRES_URL"


class ProvisionState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTED = "connected"
    MIGRATED = "migrated"
    TORN_DOWN = "torn_down"


def ensure_test_database(name: str) -> None:
    """Raise UnsafeDatabaseError unless *name* carries the test marker."""
    if TEST_DATABASE_MARKER not in name:
        raise UnsafeDatabaseError(name)


class TestDatabaseProvisioner:
    """Drop/create/migrate the database named by ``$POSTGRES_URL``."""

    __test__ = False  # Prevent pytest from collecting this as a test class

    def __init__(
        self,
        *,
        url_env: str = DEFAULT_URL_ENV,
        migrations_dir: str | Path | None = None,
        environ: Optional[Mapping[str, str]] = None,
        engine_factory: EngineFactory = create_async_engine,
    ) -> None:
        self.url_env = url_env
        self.migrations_dir = migrations_dir
        self._environ = environ
        self._engine_factory = engine_factory
        self._database: Optional[Database] = None
        self.state = ProvisionState.UNINITIALIZED

    @property
    def database(self) -> Optional[Database]:
        return self._database

    def current_url(self) -> str:
        environ = os.environ if self._environ is None else self._environ
        url = environ.get(self.url_env)
        if not url:
            raise ConfigurationError(f"Missing required environment variable: {self.url_env}")
        return url

    def connection(self) -> AsyncEngine:
        """Scoped engine for test code; lazily created on first use."""
        return self._require_database().engine()

    async def recreate_database(self) -> None:
        url = self.current_url()
        name = database_name(url)
        logger.info("Recreating test database %r", name)

        # Must run before any engine is created or statement issued
        ensure_test_database(name)

        try:
            database = await self._database_for(url)
            admin = database.admin_engine()

            # Idle pooled connections would block DROP DATABASE
            await database.dispose_engine()

            quoted = quote_identifier(name)
            async with admin.connect() as conn:
                await conn.exec_driver_sql(f"DROP DATABASE IF EXISTS {quoted}")
                logger.info("Dropped test database %s", name)
                await conn.exec_driver_sql(f"CREATE DATABASE {quoted}")
                logger.info("Created test database %s", name)
            self.state = ProvisionState.CONNECTED

            await self.run_migrations()
        except Exception:
            logger.exception("Failed to recreate test database %s", name)
            raise

    async def run_migrations(self) -> List[str]:
        database = self._database
        if database is None:
            database = await self._database_for(self.current_url())
        applied = await MigrationRunner(database, self.migrations_dir).run()
        self.state = ProvisionState.MIGRATED
        return applied

    async def cleanup(self) -> None:
        """Close both pools; teardown errors are logged, never raised."""
        database, self._database = self._database, None
        if database is not None:
            try:
                await database.dispose()
            except Exception as exc:  # noqa: BLE001
                logger.warning("Failed to close test database connections: %s", exc)
            else:
                logger.info("Test database connections closed")
        self.state = ProvisionState.TORN_DOWN

    async def _database_for(self, url: str) -> Database:
        """Reuse the current handle unless the environment now points elsewhere."""
        database = self._database
        if database is not None and database.url == parse_database_url(url):
            return database
        if database is not None:
            await database.dispose()
        self._database = Database(url, engine_factory=self._engine_factory)
        return self._database

    def _require_database(self) -> Database:
        if self._database is None:
            self._database = Database(self.current_url(), engine_factory=self._engine_factory)
        return self._database
