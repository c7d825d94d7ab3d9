from __future__ import annotations

"""backend/registry_auth/errors.py

Exception hierarchy for registry-auth.

The auth classifier and AuthFlow never raise; these exceptions belong to
configuration and database provisioning, where failures are fatal.

RegistryAuthError
├── ConfigurationError
├── UnsafeDatabaseError
└── MigrationError
"""


class RegistryAuthError(Exception):
    """Base exception for all registry-auth errors."""


class ConfigurationError(RegistryAuthError):
    """Raised when a required environment value is missing or malformed."""


class UnsafeDatabaseError(RegistryAuthError):
    """Raised when a destructive operation targets a non-test database."""

    def __init__(self, database_name: str) -> None:
        super().__init__(
            f"Expected test database name to contain '_test', got: {database_name!r}"
        )
        self.database_name = database_name


class MigrationError(RegistryAuthError):
    """Raised when a migration file fails to apply."""

    def __init__(self, filename: str, message: str) -> None:
        super().__init__(f"Migration {filename} failed: {message}")
        self.filename = filename
