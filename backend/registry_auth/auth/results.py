from __future__ import annotations

"""backend/registry_auth/auth/results.py

Tagged union for authentication provider responses.

An AuthResult is either AuthSuccess (data set, error None) or AuthFailure
(data None, error set). The union is exhaustive by construction: a
provider payload carrying neither data nor error is parsed as a failure
with an empty message, which renders as the generic fallback text.
"""

from dataclasses import dataclass
from typing import Any, Generic, Mapping, Optional, TypeVar, Union

from .codes import ErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class ErrorDetail:
    """Error payload returned by the provider."""

    message: str = ""
    status: Optional[int] = None
    status_text: Optional[str] = None
    code: Optional[ErrorCode] = None
    # Provider code that is outside the known vocabulary
    raw_code: Optional[str] = None


@dataclass(frozen=True)
class AuthSuccess(Generic[T]):
    data: T
    error: None = None

    def __post_init__(self) -> None:
        if self.data is None:
            raise ValueError("AuthSuccess requires data")


@dataclass(frozen=True)
class AuthFailure:
    error: ErrorDetail
    data: None = None


AuthResult = Union[AuthSuccess[T], AuthFailure]


def is_failure(result: AuthResult[Any]) -> bool:
    return result.error is not None


def is_success(result: AuthResult[Any]) -> bool:
    return result.data is not None and result.error is None


def error_detail_from_payload(
    payload: Any,
    *,
    status: Optional[int] = None,
    status_text: Optional[str] = None,
) -> ErrorDetail:
    """Build an ErrorDetail from a provider error body.

    Accepts a mapping with ``message`` / ``code`` / ``status`` /
    ``statusText`` keys, a bare string, or anything else (ignored).
    """
    if isinstance(payload, str):
        return ErrorDetail(message=payload, status=status, status_text=status_text)
    if not isinstance(payload, Mapping):
        return ErrorDetail(status=status, status_text=status_text)

    raw_code = payload.get("code")
    code = ErrorCode.parse(raw_code)
    message = payload.get("message") or ""
    body_status = payload.get("status")
    return ErrorDetail(
        message=str(message),
        status=body_status if isinstance(body_status, int) else status,
        status_text=payload.get("statusText") or status_text,
        code=code,
        raw_code=str(raw_code) if raw_code is not None and code is None else None,
    )


def parse_auth_response(
    payload: Any,
    *,
    status: Optional[int] = None,
    status_text: Optional[str] = None,
) -> AuthResult[Any]:
    """Normalize a ``{"data": ..., "error": ...}`` mapping into an AuthResult.

    *status* and *status_text* describe the transport response, if any,
    and are carried onto the resulting ErrorDetail.
    """
    if not isinstance(payload, Mapping):
        return AuthFailure(error=ErrorDetail(status=status, status_text=status_text))

    error = payload.get("error")
    if error is not None:
        return AuthFailure(
            error=error_detail_from_payload(error, status=status, status_text=status_text)
        )

    data = payload.get("data")
    if data is None:
        return AuthFailure(error=ErrorDetail(status=status, status_text=status_text))
    return AuthSuccess(data=data)
