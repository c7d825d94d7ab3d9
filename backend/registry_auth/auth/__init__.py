from __future__ import annotations

"""
Authentication client, error classification and sign-in flow.

This package provides:
- codes: the ErrorCode vocabulary and its message tables
- results: the AuthResult union returned by the provider client
- messages: error-to-text classification (generic and per flow)
- client: async HTTP client for the provider REST API
- flow: AuthFlow, the loading-state machine driving one attempt at a time
"""

from .codes import BASE_ERROR_MESSAGES, FRIENDLY_ERROR_MESSAGES, ErrorCode  # noqa: F401
from .messages import (  # noqa: F401
    AUTH_ERROR_HANDLERS,
    GENERIC_ERROR_MESSAGE,
    for_sign_in,
    for_sign_up,
    for_social,
    friendly_message,
    matches_code,
)
from .results import (  # noqa: F401
    AuthFailure,
    AuthResult,
    AuthSuccess,
    ErrorDetail,
    is_failure,
    is_success,
    parse_auth_response,
)
