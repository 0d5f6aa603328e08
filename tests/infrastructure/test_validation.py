"""Tests for inbound payload validation helpers."""

import pytest

from outbound_client.infrastructure.io.validation import (
    ErrorBodyFields,
    IncomingDataError,
    extract_error_body,
    parse_session_blob,
    validate_as,
)


def test_extract_code_and_message() -> None:
    body = {"code": "SESSION_EXPIRED", "message": "Session expired"}
    assert extract_error_body(body) == ErrorBodyFields("SESSION_EXPIRED", "Session expired")


def test_extract_falls_back_to_error_code_and_error() -> None:
    body = {"errorCode": "ACCOUNT_LOCKED", "error": "Locked for 15 minutes"}
    assert extract_error_body(body) == ErrorBodyFields("ACCOUNT_LOCKED", "Locked for 15 minutes")


def test_extract_ignores_non_string_fields() -> None:
    body = {"code": 503, "message": {"nested": True}}
    assert extract_error_body(body) == ErrorBodyFields()


def test_extract_from_non_object_bodies() -> None:
    assert extract_error_body(None) == ErrorBodyFields()
    assert extract_error_body([1, 2]) == ErrorBodyFields()


def test_text_body_becomes_message() -> None:
    result = extract_error_body("  Service\n  Unavailable ")
    assert result == ErrorBodyFields(message="Service Unavailable")


def test_long_text_body_is_truncated() -> None:
    result = extract_error_body("x" * 1000)
    assert result.message is not None
    assert len(result.message) == 303
    assert result.message.endswith("...")


def test_parse_session_blob_rejects_invalid_json() -> None:
    with pytest.raises(IncomingDataError):
        parse_session_blob("{")


def test_validate_as_raises_incoming_data_error() -> None:
    with pytest.raises(IncomingDataError):
        validate_as(dict[str, object], "not a dict")
