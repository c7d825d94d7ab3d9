# backend/registry_auth/db/session.py
from __future__ import annotations

"""
Database handle with lazily created async engines.

A Database owns up to two SQLAlchemy AsyncEngine pools for one Postgres
URL:
- the scoped engine, bound to the named database (queries, migrations)
- the administrative engine, bound to the server's ``postgres``
  maintenance database in AUTOCOMMIT mode (CREATE/DROP DATABASE only)

Both are created on first access and memoized on the handle. Creation is
synchronous, so two call sites racing on the same event loop still share
one pool. ``dispose()`` closes whatever was created; the next access
after that lazily creates a fresh pool.

This module depends on:
- registry_auth.config.get_settings for POSTGRES_URL (get_database only)
It is used by:
- registry_auth.db.migrations / registry_auth.db.provisioner
- registry_auth.main (health check, shutdown)
- registry_auth.cli
"""

import logging
from functools import lru_cache
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import inspect, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from registry_auth.config import get_settings
from registry_auth.errors import ConfigurationError

logger = logging.getLogger(__name__)

ASYNC_DRIVER = "postgresql+asyncpg"
MAINTENANCE_DATABASE = "postgres"
POOL_SIZE = 10

EngineFactory = Callable[..., AsyncEngine]


def parse_database_url(url: str | URL) -> URL:
    """Parse *url* and switch it to the asyncpg driver.

    ``postgres://``, ``postgresql://`` and ``postgresql+<driver>://`` are
    all accepted; the ``sslmode`` query parameter is removed (see
    :func:`connect_args_for`).
    """
    try:
        parsed = make_url(url) if isinstance(url, str) else url
    except Exception as exc:  # noqa: BLE001
        raise ConfigurationError(f"Invalid database URL: {exc}") from exc

    if parsed.get_backend_name() not in ("postgres", "postgresql"):
        raise ConfigurationError(
            f"Unsupported database backend {parsed.get_backend_name()!r}; expected Postgres"
        )
    return parsed.set(drivername=ASYNC_DRIVER).difference_update_query(["sslmode"])


def database_name(url: str | URL) -> str:
    """Return the database name component of *url* ('' when absent)."""
    return (make_url(url) if isinstance(url, str) else url).database or ""


def connect_args_for(url: str | URL) -> Dict[str, Any]:
    """Translate libpq's ``sslmode`` into asyncpg's ``ssl`` argument."""
    parsed = make_url(url) if isinstance(url, str) else url
    sslmode = parsed.query.get("sslmode")
    if isinstance(sslmode, tuple):
        sslmode = sslmode[-1]
    return {"ssl": sslmode} if sslmode else {}


def quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


class Database:
    """Lazily connected scoped + administrative engines for one URL."""

    def __init__(
        self,
        url: str | URL,
        *,
        engine_factory: EngineFactory = create_async_engine,
        pool_size: int = POOL_SIZE,
    ) -> None:
        self._connect_args = connect_args_for(url)
        self.url = parse_database_url(url)
        self._engine_factory = engine_factory
        self._pool_size = pool_size
        self._engine: Optional[AsyncEngine] = None
        self._admin_engine: Optional[AsyncEngine] = None

    @property
    def name(self) -> str:
        return self.url.database or ""

    @property
    def admin_url(self) -> URL:
        return self.url.set(database=MAINTENANCE_DATABASE)

    @property
    def has_engine(self) -> bool:
        return self._engine is not None

    @property
    def has_admin_engine(self) -> bool:
        return self._admin_engine is not None

    def engine(self) -> AsyncEngine:
        """Scoped engine, created on first call."""
        if self._engine is None:
            logger.debug("Creating engine for database %s", self.name)
            self._engine = self._engine_factory(
                self.url,
                pool_size=self._pool_size,
                pool_pre_ping=True,
                connect_args=dict(self._connect_args),
            )
        return self._engine

    def admin_engine(self) -> AsyncEngine:
        """Administrative engine on the maintenance database, created on first call."""
        if self._admin_engine is None:
            logger.debug("Creating administrative engine on %s", MAINTENANCE_DATABASE)
            self._admin_engine = self._engine_factory(
                self.admin_url,
                isolation_level="AUTOCOMMIT",
                pool_size=1,
                connect_args=dict(self._connect_args),
            )
        return self._admin_engine

    async def dispose_engine(self) -> None:
        """Close the scoped pool only (e.g. before dropping its database)."""
        engine, self._engine = self._engine, None
        if engine is not None:
            await engine.dispose()

    async def dispose(self) -> None:
        """Close both pools. Errors propagate; callers decide whether to swallow."""
        engine, self._engine = self._engine, None
        admin, self._admin_engine = self._admin_engine, None
        try:
            if engine is not None:
                await engine.dispose()
        finally:
            if admin is not None:
                await admin.dispose()

    async def ping(self) -> bool:
        async with self.engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def table_names(self) -> List[str]:
        async with self.engine().connect() as conn:
            return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


@lru_cache(maxsize=1)
def get_database() -> Database:
    """Process-wide Database for the application's POSTGRES_URL."""
    return Database(get_settings().postgres_url)

