from __future__ import annotations

"""backend/registry_auth/db/migrations.py

Plain-SQL migration runner.

Migrations are ``*.sql`` files applied in lexicographic filename order,
one after another, each inside its own transaction on the scoped engine.
The runner keeps no bookkeeping table: every file must be idempotent on
its own (``CREATE ... IF NOT EXISTS``), so running the whole set again
is a no-op.

Each file is sent as a single script through asyncpg's simple-query
protocol, so it may hold any number of statements, string literals with
semicolons, ``$$`` bodies and trailing comments. Postgres runs such a
script in one implicit transaction.

This module depends on:
- registry_auth.db.session.Database for the scoped engine
It is used by:
- registry_auth.db.provisioner (test database setup)
- registry_auth.cli (``migrate`` command)
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from registry_auth.db.session import Database
from registry_auth.errors import MigrationError

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).resolve().parent / "sql"


@dataclass(frozen=True)
class Migration:
    name: str
    sql: str


def discover_migrations(directory: str | Path) -> List[Path]:
    """Return the ``*.sql`` files in *directory*, sorted by filename."""
    path = Path(directory)
    if not path.is_dir():
        raise MigrationError(str(path), "migrations directory does not exist")
    return sorted((p for p in path.glob("*.sql") if p.is_file()), key=lambda p: p.name)


async def load_migration(path: Path) -> Migration:
    sql = await asyncio.to_thread(path.read_text, encoding="utf-8")
    return Migration(name=path.name, sql=sql)
class MigrationRunner:
    """Apply every migration in *directory* to the database's scoped engine."""

    def __init__(self, database: Database, directory: str | Path | None = None) -> None:
        self.database = database
        self.directory = Path(directory) if directory else DEFAULT_MIGRATIONS_DIR

    async def run(self) -> List[str]:
        """Apply all migrations sequentially; return the applied filenames."""
        applied: List[str] = []
        for path in discover_migrations(self.directory):
            migration = await load_migration(path)
            await self._apply(migration)
            applied.append(migration.name)

        logger.info(
            "Applied %d migration(s) to %s: %s",
            len(applied),
            self.database.name,
            ", ".join(applied) or "-",
        )
        return applied

    async def _apply(self, migration: Migration) -> None:
        if not migration.sql.strip():
            logger.debug("Skipping empty migration %s", migration.name)
            return
        try:
            async with self.database.engine().begin() as conn:
                raw = await conn.get_raw_connection()
                # asyncpg: no bind arguments means the simple-query protocol
                await raw.driver_connection.execute(migration.sql)
        except Exception as exc:
            logger.exception("Migration %s failed on %s", migration.name, self.database.name)
            raise MigrationError(migration.name, str(exc)) from exc
