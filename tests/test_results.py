"""Tests for the AuthResult union and provider payload parsing."""

from __future__ import annotations

import pytest

from registry_auth.auth.codes import ErrorCode
from registry_auth.auth.results import (
    AuthFailure,
    AuthSuccess,
    ErrorDetail,
    error_detail_from_payload,
    is_failure,
    is_success,
    parse_auth_response,
)


def test_success_predicates() -> None:
    result = AuthSuccess(data={"token": "abc"})
    assert is_success(result)
    assert not is_failure(result)


def test_failure_predicates() -> None:
    result = AuthFailure(error=ErrorDetail(message="nope"))
    assert is_failure(result)
    assert not is_success(result)


def test_success_requires_data() -> None:
    with pytest.raises(ValueError):
        AuthSuccess(data=None)


def test_parse_success() -> None:
    result = parse_auth_response({"data": {"user": {"id": "u1"}}, "error": None})
    assert isinstance(result, AuthSuccess)
    assert result.data == {"user": {"id": "u1"}}


def test_parse_failure_with_code() -> None:
    result = parse_auth_response(
        {
            "data": None,
            "error": {
                "message": "Invalid email or password",
                "status": 401,
                "statusText": "UNAUTHORIZED",
                "code": "INVALID_EMAIL_OR_PASSWORD",
            },
        }
    )
    assert isinstance(result, AuthFailure)
    assert result.error == ErrorDetail(
        message="Invalid email or password",
        status=401,
        status_text="UNAUTHORIZED",
        code=ErrorCode.INVALID_EMAIL_OR_PASSWORD,
    )


def test_parse_both_null_is_failure() -> None:
    # Neither data nor error: treated as a failure so the union stays exhaustive
    result = parse_auth_response({"data": None, "error": None})
    assert is_failure(result)
    assert not is_success(result)
    assert result.error == ErrorDetail()


def test_parse_carries_transport_status() -> None:
    empty = parse_auth_response({"data": None}, status=200, status_text="OK")
    assert empty.error == ErrorDetail(status=200, status_text="OK")

    failed = parse_auth_response(
        {"error": {"message": "User not found"}}, status=404, status_text="Not Found"
    )
    assert failed.error == ErrorDetail(
        message="User not found", status=404, status_text="Not Found"
    )


def test_parse_non_mapping_is_failure() -> None:
    assert is_failure(parse_auth_response(None))
    assert is_failure(parse_auth_response(["data"]))


def test_error_detail_keeps_unknown_code() -> None:
    detail = error_detail_from_payload(
        {"message": "Too many requests", "code": "TOO_MANY_REQUESTS"}, status=429
    )
    assert detail.code is None
    assert detail.raw_code == "TOO_MANY_REQUESTS"
    assert detail.status == 429


def test_error_detail_from_text() -> None:
    detail = error_detail_from_payload("Bad Gateway", status=502, status_text="Bad Gateway")
    assert detail == ErrorDetail(message="Bad Gateway", status=502, status_text="Bad Gateway")
