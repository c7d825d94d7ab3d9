"""Optional Statsig analytics for sign-in and sign-up outcomes."""
from __future__ import annotations

import logging
from typing import Any

from statsig import StatsigEvent, StatsigOptions, StatsigServer, StatsigUser

from registry_auth.config import get_settings

logger = logging.getLogger(__name__)

# Events are attributed to the service, never to the person signing in
EVENT_USER_ID = "registry-auth"


class AuthEventRecorder:
    """Forward auth outcomes to Statsig; a no-op without a server secret."""

    def __init__(self, secret_key: str | None, environment: str):
        self._server: StatsigServer | None = None
        if not secret_key:
            return

        try:
            server = StatsigServer()
            server.initialize(secret_key, StatsigOptions(tier=environment))
            self._server = server
        except Exception as exc:  # noqa: BLE001
            logger.warning("Statsig initialization failed, auth events disabled: %s", exc)

    @property
    def enabled(self) -> bool:
        return self._server is not None

    def record(
        self,
        operation: str,
        *,
        succeeded: bool,
        provider: str | None = None,
        error_code: str | None = None,
    ) -> None:
        if self._server is None:
            return

        metadata: dict[str, Any] = {"operation": operation}
        if provider:
            metadata["provider"] = provider
        if error_code:
            metadata["error_code"] = error_code
        event_name = "auth_succeeded" if succeeded else "auth_failed"
        try:
            self._server.log_event(
                StatsigEvent(
                    StatsigUser(EVENT_USER_ID), event_name, value=operation, metadata=metadata
                )
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("Statsig %s event failed: %s", event_name, exc)

    def shutdown(self) -> None:
        server, self._server = self._server, None
        if server is None:
            return

        try:
            server.shutdown()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Statsig shutdown failed: %s", exc)


_recorder: AuthEventRecorder | None = None


def get_event_recorder() -> AuthEventRecorder:
    global _recorder
    if _recorder is None:
        settings = get_settings()
        _recorder = AuthEventRecorder(settings.statsig_server_secret, settings.environment)
    return _recorder


def log_auth_event(
    operation: str,
    *,
    succeeded: bool,
    provider: str | None = None,
    error_code: str | None = None,
) -> None:
    get_event_recorder().record(
        operation, succeeded=succeeded, provider=provider, error_code=error_code
    )


def shutdown_statsig() -> None:
    if _recorder is not None:
        _recorder.shutdown()
