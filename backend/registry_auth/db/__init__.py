# backend/registry_auth/db/__init__.py
from __future__ import annotations

"""
Database package.

This package provides:
- session: the Database handle (lazy scoped + administrative engines)
- migrations: the plain-SQL MigrationRunner (packaged files live in db/sql)
- provisioner: TestDatabaseProvisioner for the test suite
"""

from .session import Database, get_database  # noqa: F401
