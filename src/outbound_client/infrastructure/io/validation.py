"""Pydantic-based validation helpers for inbound session and error payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from typing_extensions import TypedDict

from pydantic import TypeAdapter, ValidationError

_MAX_TEXT_MESSAGE = 300

SchemaT = TypeVar("SchemaT")


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


class StoredUserInput(TypedDict, total=False):
    id: str | int | None
    email: str | None
    role: str | None


class SessionStateInput(TypedDict, total=False):
    token: str | None
    user: dict[str, object] | None


class SessionBlobInput(TypedDict, total=False):
    state: SessionStateInput | None


@dataclass(frozen=True)
class ErrorBodyFields:
    """Fields of an error response body the classifier cares about."""

    code: str | None = None
    message: str | None = None


def validate_as(schema: type[SchemaT], payload: object) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as exc:
        message = f"Invalid payload for {schema}."
        raise IncomingDataError(message) from exc


def validate_json_as(schema: type[SchemaT], payload: str | bytes | bytearray) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_json(payload)
    except ValidationError as exc:
        message = f"Invalid JSON payload for {schema}."
        raise IncomingDataError(message) from exc


def _as_text(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def parse_session_blob(raw: str) -> SessionBlobInput:
    """Parse the persisted session blob (`{"state": {"token": ..., "user": ...}}`)."""
    return validate_json_as(SessionBlobInput, raw)


def parse_stored_user(raw: str) -> StoredUserInput:
    return validate_json_as(StoredUserInput, raw)


def extract_error_body(payload: object) -> ErrorBodyFields:
    """Pull the application code and message out of an error body.

    Never raises: non-object bodies and non-string fields yield None. A
    plain-text body is used as the message.
    """
    if isinstance(payload, str):
        text = _as_text(" ".join(payload.split()))
        if text is not None and len(text) > _MAX_TEXT_MESSAGE:
            text = text[:_MAX_TEXT_MESSAGE] + "..."
        return ErrorBodyFields(message=text)
    try:
        body = validate_as(dict[str, object], payload)
    except IncomingDataError:
        return ErrorBodyFields()
    code = _as_text(body.get("code")) or _as_text(body.get("errorCode"))
    message = _as_text(body.get("message")) or _as_text(body.get("error"))
    return ErrorBodyFields(code=code, message=message)
