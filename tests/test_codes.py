"""Tests for the ErrorCode vocabulary and its message tables."""

from __future__ import annotations

import pytest

from registry_auth.auth.codes import (
    BASE_ERROR_MESSAGES,
    CODES_BY_MESSAGE,
    FRIENDLY_ERROR_MESSAGES,
    ErrorCode,
)


def test_vocabulary_size() -> None:
    assert len(ErrorCode) == 24


@pytest.mark.parametrize("code", list(ErrorCode))
def test_every_code_has_both_messages(code: ErrorCode) -> None:
    canonical = BASE_ERROR_MESSAGES[code]
    friendly = FRIENDLY_ERROR_MESSAGES[code]

    assert isinstance(friendly, str) and friendly.strip()
    assert isinstance(canonical, str) and canonical.strip()
    assert friendly != canonical


def test_tables_cover_exactly_the_enum() -> None:
    assert set(BASE_ERROR_MESSAGES) == set(ErrorCode)
    assert set(FRIENDLY_ERROR_MESSAGES) == set(ErrorCode)


def test_canonical_messages_are_unique() -> None:
    # Message sniffing relies on a 1:1 reverse index
    assert len(CODES_BY_MESSAGE) == len(ErrorCode)
    for code, message in BASE_ERROR_MESSAGES.items():
        assert CODES_BY_MESSAGE[message] is code


def test_canonical_text_matches_provider() -> None:
    assert BASE_ERROR_MESSAGES[ErrorCode.INVALID_PASSWORD] == "Invalid password"
    assert (
        BASE_ERROR_MESSAGES[ErrorCode.SESSION_EXPIRED]
        == "Session expired. Re-authenticate to perform this action."
    )


def test_parse_known_and_unknown_codes() -> None:
    assert ErrorCode.parse("USER_NOT_FOUND") is ErrorCode.USER_NOT_FOUND
    assert ErrorCode.parse(ErrorCode.INVALID_TOKEN) is ErrorCode.INVALID_TOKEN
    assert ErrorCode.parse("TOO_MANY_REQUESTS") is None
    assert ErrorCode.parse(None) is None
    assert ErrorCode.parse(401) is None
