# backend/registry_auth/main.py
from __future__ import annotations

"""
FastAPI application setup.

This module depends on:
- registry_auth.config.get_settings for configuration
- registry_auth.db.session.get_database for the health check / shutdown
- registry_auth.api.api_router for route registration
"""

import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from registry_auth import __version__
from registry_auth.api import api_router
from registry_auth.api.auth import get_auth_client
from registry_auth.config import get_settings
from registry_auth.db.session import Database, get_database
from registry_auth.services.statsig_client import shutdown_statsig

logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    version=__version__,
)


# ---- CORS ----

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.trusted_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- Routes ----

app.include_router(api_router, prefix="/api")


# ---- Lifecycle ----


@app.on_event("shutdown")
async def on_shutdown() -> None:
    """
    Close outbound connections.

    Schema migrations are not run here; use `registry-auth migrate`.
    """
    try:
        await get_auth_client().aclose()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to close auth provider client: %s", exc)
    try:
        await get_database().dispose()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to close database connections: %s", exc)
    shutdown_statsig()


# ---- Healthcheck ----


@app.get("/health", tags=["health"])
def health() -> dict:
    return {"status": "ok"}


@app.get("/health/db", tags=["health"])
async def health_db(db: Database = Depends(get_database)) -> dict:
    try:
        await db.ping()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Database health check failed: %s", exc)
        raise HTTPException(status_code=503, detail="Database unavailable") from exc
    return {"status": "ok", "database": db.name}
