from __future__ import annotations

"""backend/registry_auth/auth/messages.py

Centralized mapping from provider errors to user-facing text.

This module looks at an ErrorDetail (message, optional code) and picks the
single best string to show. The mapping is:
- deterministic (table lookups only)
- code-first (the structured code beats message sniffing)
- context-aware (sign-in, sign-up and social flows phrase some codes
  differently)

None of these functions raise; unknown or absent codes always resolve to
a string.
"""

from typing import Callable, Dict

from .codes import BASE_ERROR_MESSAGES, CODES_BY_MESSAGE, FRIENDLY_ERROR_MESSAGES, ErrorCode
from .results import ErrorDetail

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


def matches_code(error: ErrorDetail, code: ErrorCode) -> bool:
    """True if *error* carries *code*, or has no code and the canonical message."""
    if error.code is not None:
        return error.code == code
    return error.message == BASE_ERROR_MESSAGES[code]


def friendly_message(error: ErrorDetail) -> str:
    # 1) Structured code
    if error.code is not None and error.code in FRIENDLY_ERROR_MESSAGES:
        return FRIENDLY_ERROR_MESSAGES[error.code]

    # 2) Canonical message text
    code = CODES_BY_MESSAGE.get(error.message)
    if code is not None:
        return FRIENDLY_ERROR_MESSAGES[code]

    # 3) Provider text as-is, 4) generic fallback
    return error.message or GENERIC_ERROR_MESSAGE


def for_sign_in(error: ErrorDetail) -> str:
    if matches_code(error, ErrorCode.INVALID_EMAIL_OR_PASSWORD):
        return "Invalid email or password. Please check your credentials and try again."
    if matches_code(error, ErrorCode.EMAIL_NOT_VERIFIED):
        return "Please check your email and click the verification link before signing in."
    if matches_code(error, ErrorCode.USER_NOT_FOUND):
        return "No account found with this email. Please check the email address or sign up."
    return friendly_message(error)


def for_sign_up(error: ErrorDetail) -> str:
    if matches_code(error, ErrorCode.USER_ALREADY_EXISTS):
        return "An account with this email already exists. Please sign in instead."
    if matches_code(error, ErrorCode.INVALID_EMAIL):
        return "Please enter a valid email address."
    # Password length codes use the generic table wording
    return friendly_message(error)


def for_social(error: ErrorDetail) -> str:
    if matches_code(error, ErrorCode.SOCIAL_ACCOUNT_ALREADY_LINKED):
        return "This social account is already linked to another user."
    if matches_code(error, ErrorCode.PROVIDER_NOT_FOUND):
        return "Social sign-in is temporarily unavailable. Please try again later."
    if matches_code(error, ErrorCode.FAILED_TO_GET_USER_INFO):
        return "Unable to retrieve information from your social account. Please try again."
    return friendly_message(error)


AUTH_ERROR_HANDLERS: Dict[str, Callable[[ErrorDetail], str]] = {
    "sign_in": for_sign_in,
    "sign_up": for_sign_up,
    "social": for_social,
}
