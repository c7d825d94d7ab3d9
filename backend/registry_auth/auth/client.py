from __future__ import annotations

"""backend/registry_auth/auth/client.py

Async client for the authentication provider's REST API.

The provider (a Better Auth compatible server) owns sessions, password
hashing, OAuth and rate limiting. This client only issues requests under
``{base_url}/api/auth`` and maps responses into AuthResult values:

- 2xx with a JSON body  -> AuthSuccess(data=body)
- 2xx with a null body  -> AuthFailure with an empty ErrorDetail
- non-2xx               -> AuthFailure with message/code/status from the body

Transport failures (connection refused, timeouts) are NOT converted here;
they propagate as ``httpx.HTTPError`` and AuthFlow turns them into text.
"""

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from .results import AuthResult, is_failure, parse_auth_response

logger = logging.getLogger(__name__)

API_PREFIX = "/api/auth"


class AuthProvider(Protocol):
    """Minimal interface AuthFlow needs from a provider client."""

    async def sign_in_email(
        self, email: str, password: str, *, callback_url: str | None = None
    ) -> AuthResult[Any]:
        ...

    async def sign_in_social(
        self, provider: str, *, callback_url: str | None = None
    ) -> AuthResult[Any]:
        ...

    async def sign_up_email(self, name: str, email: str, password: str) -> AuthResult[Any]:
        ...


class AuthClient:
    """httpx-backed AuthProvider implementation."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=f"{self.base_url}{API_PREFIX}",
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> AuthClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def sign_in_email(
        self, email: str, password: str, *, callback_url: str | None = None
    ) -> AuthResult[Any]:
        body: Dict[str, Any] = {"email": email, "password": password}
        if callback_url:
            body["callbackURL"] = callback_url
        return await self._post("/sign-in/email", body)

    async def sign_in_social(
        self, provider: str, *, callback_url: str | None = None
    ) -> AuthResult[Any]:
        body: Dict[str, Any] = {"provider": provider}
        if callback_url:
            body["callbackURL"] = callback_url
        return await self._post("/sign-in/social", body)

    async def sign_up_email(self, name: str, email: str, password: str) -> AuthResult[Any]:
        return await self._post(
            "/sign-up/email", {"name": name, "email": email, "password": password}
        )

    async def sign_out(self, session_token: str) -> AuthResult[Any]:
        return await self._request(
            "POST", "/sign-out", json={}, headers=self._session_headers(session_token)
        )

    async def get_session(self, session_token: str) -> AuthResult[Any]:
        return await self._request(
            "GET", "/get-session", headers=self._session_headers(session_token)
        )

    # ---- internals ----

    @staticmethod
    def _session_headers(session_token: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {session_token}"}

    async def _post(self, path: str, body: Dict[str, Any]) -> AuthResult[Any]:
        return await self._request("POST", path, json=body)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> AuthResult[Any]:
        response = await self._http.request(method, path, json=json, headers=headers)
        return _to_result(response)


def _json_or_none(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _to_result(response: httpx.Response) -> AuthResult[Any]:
    payload = _json_or_none(response)
    envelope = {"data": payload} if response.is_success else {"error": payload}
    result = parse_auth_response(
        envelope, status=response.status_code, status_text=response.reason_phrase
    )

    if not response.is_success and is_failure(result):
        error = result.error
        logger.debug(
            "Auth provider returned %s for %s: code=%s message=%r",
            response.status_code,
            response.request.url.path,
            error.code.value if error.code else error.raw_code,
            error.message,
        )
    return result
