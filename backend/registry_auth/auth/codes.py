from __future__ import annotations

"""backend/registry_auth/auth/codes.py

Closed vocabulary of authentication provider error codes.

Each ErrorCode has exactly one canonical message (the English text the
provider itself returns, also used as a matching key when the provider
omits the structured code) and exactly one friendly message shown to
end users. The two tables are kept 1:1 and never share text.
"""

import enum
from typing import Dict


class ErrorCode(str, enum.Enum):
    USER_NOT_FOUND = "USER_NOT_FOUND"
    FAILED_TO_CREATE_USER = "FAILED_TO_CREATE_USER"
    FAILED_TO_CREATE_SESSION = "FAILED_TO_CREATE_SESSION"
    FAILED_TO_UPDATE_USER = "FAILED_TO_UPDATE_USER"
    FAILED_TO_GET_SESSION = "FAILED_TO_GET_SESSION"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_EMAIL_OR_PASSWORD = "INVALID_EMAIL_OR_PASSWORD"
    SOCIAL_ACCOUNT_ALREADY_LINKED = "SOCIAL_ACCOUNT_ALREADY_LINKED"
    PROVIDER_NOT_FOUND = "PROVIDER_NOT_FOUND"
    INVALID_TOKEN = "INVALID_TOKEN"
    ID_TOKEN_NOT_SUPPORTED = "ID_TOKEN_NOT_SUPPORTED"
    FAILED_TO_GET_USER_INFO = "FAILED_TO_GET_USER_INFO"
    USER_EMAIL_NOT_FOUND = "USER_EMAIL_NOT_FOUND"
    EMAIL_NOT_VERIFIED = "EMAIL_NOT_VERIFIED"
    PASSWORD_TOO_SHORT = "PASSWORD_TOO_SHORT"
    PASSWORD_TOO_LONG = "PASSWORD_TOO_LONG"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    EMAIL_CAN_NOT_BE_UPDATED = "EMAIL_CAN_NOT_BE_UPDATED"
    CREDENTIAL_ACCOUNT_NOT_FOUND = "CREDENTIAL_ACCOUNT_NOT_FOUND"
    SESSION_EXPIRED = "SESSION_EXPIRED"
    FAILED_TO_UNLINK_LAST_ACCOUNT = "FAILED_TO_UNLINK_LAST_ACCOUNT"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    USER_ALREADY_HAS_PASSWORD = "USER_ALREADY_HAS_PASSWORD"

    @classmethod
    def parse(cls, value: object) -> ErrorCode | None:
        """Return the member for *value*, or None for unknown codes."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None


# Canonical provider messages
BASE_ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.USER_NOT_FOUND: "User not found",
    ErrorCode.FAILED_TO_CREATE_USER: "Failed to create user",
    ErrorCode.FAILED_TO_CREATE_SESSION: "Failed to create session",
    ErrorCode.FAILED_TO_UPDATE_USER: "Failed to update user",
    ErrorCode.FAILED_TO_GET_SESSION: "Failed to get session",
    ErrorCode.INVALID_PASSWORD: "Invalid password",
    ErrorCode.INVALID_EMAIL: "Invalid email",
    ErrorCode.INVALID_EMAIL_OR_PASSWORD: "Invalid email or password",
    ErrorCode.SOCIAL_ACCOUNT_ALREADY_LINKED: "Social account already linked",
    ErrorCode.PROVIDER_NOT_FOUND: "Provider not found",
    ErrorCode.INVALID_TOKEN: "Invalid token",
    ErrorCode.ID_TOKEN_NOT_SUPPORTED: "id_token not supported",
    ErrorCode.FAILED_TO_GET_USER_INFO: "Failed to get user info",
    ErrorCode.USER_EMAIL_NOT_FOUND: "User email not found",
    ErrorCode.EMAIL_NOT_VERIFIED: "Email not verified",
    ErrorCode.PASSWORD_TOO_SHORT: "Password too short",
    ErrorCode.PASSWORD_TOO_LONG: "Password too long",
    ErrorCode.USER_ALREADY_EXISTS: "User already exists. Use another email.",
    ErrorCode.EMAIL_CAN_NOT_BE_UPDATED: "Email can not be updated",
    ErrorCode.CREDENTIAL_ACCOUNT_NOT_FOUND: "Credential account not found",
    ErrorCode.SESSION_EXPIRED: "Session expired. Re-authenticate to perform this action.",
    ErrorCode.FAILED_TO_UNLINK_LAST_ACCOUNT: "You can't unlink your last account",
    ErrorCode.ACCOUNT_NOT_FOUND: "Account not found",
    ErrorCode.USER_ALREADY_HAS_PASSWORD: (
        "User already has a password. Provide that to delete the account."
    ),
}

# End-user wording
FRIENDLY_ERROR_MESSAGES: Dict[ErrorCode, str] = {
    ErrorCode.USER_NOT_FOUND: "No account found with this email address.",
    ErrorCode.FAILED_TO_CREATE_USER: "Failed to create your account. Please try again.",
    ErrorCode.FAILED_TO_CREATE_SESSION: "Unable to sign you in. Please try again.",
    ErrorCode.FAILED_TO_UPDATE_USER: "Failed to update your account.",
    ErrorCode.FAILED_TO_GET_SESSION: "Session error. Please try signing in again.",
    ErrorCode.INVALID_PASSWORD: "Incorrect password. Please try again.",
    ErrorCode.INVALID_EMAIL: "Please enter a valid email address.",
    ErrorCode.INVALID_EMAIL_OR_PASSWORD: (
        "Invalid email or password. Please check your credentials."
    ),
    ErrorCode.SOCIAL_ACCOUNT_ALREADY_LINKED: (
        "This social account is already linked to another user."
    ),
    ErrorCode.PROVIDER_NOT_FOUND: "Authentication provider not available.",
    ErrorCode.INVALID_TOKEN: "Invalid authentication token. Please try again.",
    ErrorCode.ID_TOKEN_NOT_SUPPORTED: "This authentication method is not supported.",
    ErrorCode.FAILED_TO_GET_USER_INFO: "Failed to retrieve user information.",
    ErrorCode.USER_EMAIL_NOT_FOUND: "No email address found for this account.",
    ErrorCode.EMAIL_NOT_VERIFIED: "Please verify your email address before signing in.",
    ErrorCode.PASSWORD_TOO_SHORT: (
        "Password is too short. Please use at least 8 characters."
    ),
    ErrorCode.PASSWORD_TOO_LONG: (
        "Password is too long. Please use fewer than 128 characters."
    ),
    ErrorCode.USER_ALREADY_EXISTS: (
        "An account with this email already exists. Please sign in instead."
    ),
    ErrorCode.EMAIL_CAN_NOT_BE_UPDATED: "Unable to update email address at this time.",
    ErrorCode.CREDENTIAL_ACCOUNT_NOT_FOUND: "Account credentials not found.",
    ErrorCode.SESSION_EXPIRED: "Your session has expired. Please sign in again.",
    ErrorCode.FAILED_TO_UNLINK_LAST_ACCOUNT: "You can't remove your last sign-in method.",
    ErrorCode.ACCOUNT_NOT_FOUND: "Account not found.",
    ErrorCode.USER_ALREADY_HAS_PASSWORD: (
        "You already have a password set for this account."
    ),
}

# Reverse index for message sniffing when the provider omits the code
CODES_BY_MESSAGE: Dict[str, ErrorCode] = {
    message: code for code, message in BASE_ERROR_MESSAGES.items()
}
