"""Command-line interface for database migrations and test database setup."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from registry_auth.db.migrations import MigrationRunner
from registry_auth.db.provisioner import TestDatabaseProvisioner
from registry_auth.db.session import Database

logger = logging.getLogger(__name__)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Database management for registry-auth."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option(
    "--migrations-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    envvar="MIGRATIONS_DIR",
    help="Directory of *.sql migrations (defaults to the packaged ones).",
)
def migrate(migrations_dir: Path | None) -> None:
    """Apply migrations to the database at POSTGRES_URL."""
    load_dotenv()
    url = os.environ.get("POSTGRES_URL")
    if not url:
        click.echo("❌ Migration failed: POSTGRES_URL is not set", err=True)
        sys.exit(1)

    async def _run() -> list[str]:
        database = Database(url)
        try:
            return await MigrationRunner(database, migrations_dir).run()
        finally:
            await database.dispose()

    try:
        applied = asyncio.run(_run())
    except Exception as exc:  # noqa: BLE001
        click.echo(f"❌ Migration failed: {exc}", err=True)
        sys.exit(1)
    click.echo(f"✅ Applied {len(applied)} migration(s)")


@cli.command("setup-test-db")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path(".env.test"),
    show_default=True,
    help="Environment file providing POSTGRES_URL for the test database.",
)
@click.option(
    "--migrations-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory of *.sql migrations (defaults to the packaged ones).",
)
def setup_test_db(env_file: Path, migrations_dir: Path | None) -> None:
    """Drop, recreate and migrate the test database."""
    if not env_file.is_file():
        click.echo(f"❌ Could not load {env_file}", err=True)
        sys.exit(1)
    load_dotenv(env_file, override=True)
    click.echo(f"✅ Loaded test environment from {env_file}")

    provisioner = TestDatabaseProvisioner(migrations_dir=migrations_dir)

    async def _run() -> None:
        try:
            await provisioner.recreate_database()
        finally:
            await provisioner.cleanup()

    click.echo("Setting up test database...")
    try:
        asyncio.run(_run())
    except Exception as exc:  # noqa: BLE001
        click.echo(f"❌ Test database setup failed: {exc}", err=True)
        sys.exit(1)
    click.echo("✅ Test database setup completed successfully")


def main() -> None:
    """Entry point for the registry-auth CLI."""
    cli()
