"""Failure taxonomy for outbound requests.

Classification is a pure, total function from what a failure exposes (HTTP
status, application error code, transport failure kind) to exactly one
`ErrorClassification`. It never raises: anything it does not recognise is
`UNCLASSIFIED`.

Usage example:
    from outbound_client.domain.classification import classify

    classify(http_status=401, application_code="SESSION_EXPIRED")
    # ErrorClassification.SESSION_EXPIRED
"""

from __future__ import annotations

from enum import StrEnum


class ErrorClassification(StrEnum):
    """Closed set of failure categories, each with one side effect."""

    ACCOUNT_SUSPENDED = "account_suspended"
    EMAIL_NOT_VERIFIED = "email_not_verified"
    ACCOUNT_LOCKED = "account_locked"
    MAINTENANCE_MODE = "maintenance_mode"
    SESSION_EXPIRED = "session_expired"
    UNAUTHORIZED_GENERIC = "unauthorized_generic"
    NETWORK_TIMEOUT = "network_timeout"
    NETWORK_UNREACHABLE = "network_unreachable"
    UNCLASSIFIED = "unclassified"


class ApplicationErrorCode(StrEnum):
    """Error codes the API places in failure response bodies."""

    ACCOUNT_SUSPENDED = "ACCOUNT_SUSPENDED"
    EMAIL_NOT_VERIFIED = "EMAIL_NOT_VERIFIED"
    ACCOUNT_LOCKED = "ACCOUNT_LOCKED"
    MAINTENANCE_MODE = "MAINTENANCE_MODE"
    SESSION_EXPIRED = "SESSION_EXPIRED"


class TransportFailureKind(StrEnum):
    """Why no HTTP response was received."""

    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"


# (status, code) pairs in precedence order; first match wins.
_STATUS_CODE_TABLE: tuple[tuple[int, ApplicationErrorCode, ErrorClassification], ...] = (
    (403, ApplicationErrorCode.ACCOUNT_SUSPENDED, ErrorClassification.ACCOUNT_SUSPENDED),
    (403, ApplicationErrorCode.EMAIL_NOT_VERIFIED, ErrorClassification.EMAIL_NOT_VERIFIED),
    (429, ApplicationErrorCode.ACCOUNT_LOCKED, ErrorClassification.ACCOUNT_LOCKED),
    (503, ApplicationErrorCode.MAINTENANCE_MODE, ErrorClassification.MAINTENANCE_MODE),
    (401, ApplicationErrorCode.SESSION_EXPIRED, ErrorClassification.SESSION_EXPIRED),
)

_TEARDOWN_CLASSIFICATIONS = frozenset(
    {
        ErrorClassification.ACCOUNT_SUSPENDED,
        ErrorClassification.SESSION_EXPIRED,
        ErrorClassification.UNAUTHORIZED_GENERIC,
    }
)

_RECOVERABLE_CLASSIFICATIONS = frozenset(
    {
        ErrorClassification.EMAIL_NOT_VERIFIED,
        ErrorClassification.ACCOUNT_LOCKED,
        ErrorClassification.MAINTENANCE_MODE,
        ErrorClassification.NETWORK_TIMEOUT,
        ErrorClassification.NETWORK_UNREACHABLE,
    }
)

DEFAULT_MESSAGES: dict[ErrorClassification, str] = {
    ErrorClassification.ACCOUNT_SUSPENDED: (
        "Your account has been suspended. Please contact support for assistance."
    ),
    ErrorClassification.EMAIL_NOT_VERIFIED: (
        "Please verify your email address before continuing."
    ),
    ErrorClassification.ACCOUNT_LOCKED: (
        "Too many failed attempts. Your account is temporarily locked, please try again later."
    ),
    ErrorClassification.MAINTENANCE_MODE: (
        "The platform is currently under maintenance. Please try again shortly."
    ),
    ErrorClassification.SESSION_EXPIRED: "Your session has expired. Please sign in again.",
    ErrorClassification.UNAUTHORIZED_GENERIC: "You are not signed in.",
    ErrorClassification.NETWORK_TIMEOUT: "Request timeout - check your connection.",
    ErrorClassification.NETWORK_UNREACHABLE: "Unable to reach the server.",
    ErrorClassification.UNCLASSIFIED: "Request failed.",
}


def classify(
    *,
    http_status: int | None = None,
    application_code: str | None = None,
    transport_failure: TransportFailureKind | None = None,
) -> ErrorClassification:
    """Map a failure to its classification.

    A transport failure only applies when there is no HTTP status; a
    response always wins over the transport signal.
    """
    if http_status is None:
        if transport_failure is TransportFailureKind.TIMEOUT:
            return ErrorClassification.NETWORK_TIMEOUT
        if transport_failure is TransportFailureKind.UNREACHABLE:
            return ErrorClassification.NETWORK_UNREACHABLE
        return ErrorClassification.UNCLASSIFIED

    code = application_code.strip().upper() if isinstance(application_code, str) else None
    for status, expected_code, classification in _STATUS_CODE_TABLE:
        if http_status == status and code == expected_code:
            return classification
    if http_status == 401:
        return ErrorClassification.UNAUTHORIZED_GENERIC
    return ErrorClassification.UNCLASSIFIED


def requires_teardown(classification: ErrorClassification) -> bool:
    """Return True when the classification forces a session reset."""
    return classification in _TEARDOWN_CLASSIFICATIONS


def is_recoverable(classification: ErrorClassification) -> bool:
    """Return True when the caller may retry without signing in again."""
    return classification in _RECOVERABLE_CLASSIFICATIONS


def default_message(classification: ErrorClassification) -> str:
    return DEFAULT_MESSAGES[classification]
