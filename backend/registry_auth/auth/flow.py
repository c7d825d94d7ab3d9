from __future__ import annotations

"""backend/registry_auth/auth/flow.py

Sign-in orchestration with an explicit loading-state machine.

AuthFlow drives one authentication attempt at a time:

    idle -> email      -> idle   (email sign-in, success or failure)
    idle -> submitting -> idle   (email sign-up, success or failure)
    idle -> social     -> idle   (social sign-in, failure only)
    idle -> social               (social success: left as-is, the caller
                                  is expected to follow the redirect)

Contract: the public operations never raise. Each returns the AuthResult
it resolved to; provider errors are classified into ``error`` text and
transport failures become an AuthFailure with a fixed generic message.
A call made while another one is in flight is rejected without touching
state or firing callbacks.
"""

import enum
import logging
from typing import Any, Awaitable, Callable, Optional

from .client import AuthProvider
from .messages import for_sign_in, for_sign_up, for_social
from .results import AuthFailure, AuthResult, ErrorDetail, is_failure

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = (
    "An unexpected error occurred. Please check your connection and try again."
)
SOCIAL_CONNECTION_ERROR_MESSAGE = (
    "Unable to connect to {provider}. Please check your connection and try again."
)
IN_PROGRESS_MESSAGE = "Another sign-in attempt is already in progress."


class LoadingState(str, enum.Enum):
    IDLE = "idle"
    EMAIL = "email"
    SOCIAL = "social"
    SUBMITTING = "submitting"


SuccessCallback = Callable[[Any], None]
ErrorCallback = Callable[[str], None]


class AuthFlow:
    """Loading state, error text and entry points for one sign-in form."""

    def __init__(
        self,
        client: AuthProvider,
        *,
        on_success: Optional[SuccessCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self._client = client
        self._on_success = on_success
        self._on_error = on_error
        self.loading_state = LoadingState.IDLE
        self.error: str | None = None
        self._in_flight = False

    @property
    def is_loading(self) -> bool:
        return self.loading_state is not LoadingState.IDLE

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def clear_error(self) -> None:
        self.error = None

    def reset(self) -> None:
        self.loading_state = LoadingState.IDLE
        self.error = None

    async def sign_in_with_email(self, email: str, password: str) -> AuthResult[Any]:
        return await self._run(
            LoadingState.EMAIL,
            lambda: self._client.sign_in_email(email, password),
            classify=for_sign_in,
            transport_message=CONNECTION_ERROR_MESSAGE,
            keep_state_on_success=False,
        )

    async def sign_in_with_social(
        self, provider: str, *, callback_url: str | None = None
    ) -> AuthResult[Any]:
        return await self._run(
            LoadingState.SOCIAL,
            lambda: self._client.sign_in_social(provider, callback_url=callback_url),
            classify=for_social,
            transport_message=SOCIAL_CONNECTION_ERROR_MESSAGE.format(provider=provider),
            keep_state_on_success=True,
        )

    async def sign_up_with_email(self, name: str, email: str, password: str) -> AuthResult[Any]:
        return await self._run(
            LoadingState.SUBMITTING,
            lambda: self._client.sign_up_email(name, email, password),
            classify=for_sign_up,
            transport_message=CONNECTION_ERROR_MESSAGE,
            keep_state_on_success=False,
        )

    async def _run(
        self,
        state: LoadingState,
        call: Callable[[], Awaitable[AuthResult[Any]]],
        *,
        classify: Callable[[ErrorDetail], str],
        transport_message: str,
        keep_state_on_success: bool,
    ) -> AuthResult[Any]:
        if self._in_flight:
            logger.warning(
                "Rejected %s sign-in: %s attempt still in flight",
                state.value,
                self.loading_state.value,
            )
            return AuthFailure(error=ErrorDetail(message=IN_PROGRESS_MESSAGE))

        self._in_flight = True
        self.loading_state = state
        self.error = None
        try:
            try:
                result = await call()
            except Exception:  # noqa: BLE001
                logger.exception("Auth provider call failed during %s sign-in", state.value)
                self._fail(transport_message)
                return AuthFailure(error=ErrorDetail(message=transport_message))

            if is_failure(result):
                self._fail(classify(result.error))
            else:
                if not keep_state_on_success:
                    self.loading_state = LoadingState.IDLE
                self._notify(self._on_success, result.data)
            return result
        finally:
            self._in_flight = False

    def _fail(self, message: str) -> None:
        self.error = message
        self.loading_state = LoadingState.IDLE
        self._notify(self._on_error, message)

    @staticmethod
    def _notify(callback: Optional[Callable[[Any], None]], value: Any) -> None:
        if callback is None:
            return
        try:
            callback(value)
        except Exception:  # noqa: BLE001
            logger.exception("Auth flow callback raised")
