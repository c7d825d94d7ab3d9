from __future__ import annotations

"""backend/registry_auth/config/settings.py

Application configuration using environment-driven settings.

This module centralizes:
- the authentication provider base URL and shared secret
- the Postgres connection URL
- optional GitHub OAuth credentials (social sign-in is omitted without them)
- CORS / trusted origins
- optional Statsig analytics key
"""
from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_ORIGIN = "http://localhost:3000"


class Settings(BaseSettings):
  app_name: str = "registry-auth"
  environment: str = Field(
      default="development",
      validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV", "environment"),
  )

  # Authentication provider (required)
  better_auth_url: str
  better_auth_secret: str

  # Base URL used by the client; falls back to better_auth_url
  public_auth_url: Optional[str] = Field(
      default=None, validation_alias="NEXT_PUBLIC_BETTER_AUTH_URL"
  )
  app_url: Optional[str] = Field(default=None, validation_alias="NEXT_PUBLIC_APP_URL")

  # Database (required)
  postgres_url: str

  # GitHub OAuth
  github_client_id: Optional[str] = None
  github_client_secret: Optional[str] = None

  # Analytics
  statsig_server_secret: Optional[str] = None

  # Provider HTTP calls (seconds)
  auth_request_timeout_seconds: float = 10.0

  model_config = SettingsConfigDict(
      env_file=".env",
      env_file_encoding="utf-8",
      extra="ignore",
      populate_by_name=True,
  )

  @property
  def is_production(self) -> bool:
    return self.environment == "production"

  @property
  def auth_base_url(self) -> str:
    return (self.public_auth_url or self.better_auth_url or DEV_ORIGIN).rstrip("/")

  @property
  def trusted_origins(self) -> List[str]:
    extra = [self.app_url] if self.is_production else [DEV_ORIGIN]
    origins = [self.better_auth_url, *extra]
    return [o for o in origins if o]

  @property
  def social_providers(self) -> Dict[str, Dict[str, str]]:
    """Enabled OAuth providers; GitHub needs both id and secret."""
    if self.github_client_id and self.github_client_secret:
      return {
          "github": {
              "client_id": self.github_client_id,
              "client_secret": self.github_client_secret,
          }
      }
    return {}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Return a cached Settings instance."""
  return Settings()
