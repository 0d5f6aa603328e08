"""Custom exceptions for the outbound API client.

These exceptions carry the details callers need to decide what to do next
and enable testing of error paths.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .domain.classification import ErrorClassification, TransportFailureKind


class ClientError(Exception):
    """Base exception for all client errors."""

    pass


class TransportError(ClientError):
    """Raised by a transport when no HTTP response was received.

    The kind distinguishes a wall-clock timeout from an unreachable host.
    """

    def __init__(self, kind: TransportFailureKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        message = f"Transport failure ({kind.value})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ApiRequestError(ClientError):
    """Raised to callers when a request fails.

    Carries exactly what failure extraction found, plus the classification
    that drove the side effect. `data` and `headers` hold the error response
    as received (both empty for transport failures).
    """

    def __init__(
        self,
        *,
        classification: ErrorClassification,
        message: str,
        http_status: int | None = None,
        application_code: str | None = None,
        retry_after: int | None = None,
        data: object | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.classification = classification
        self.message = message
        self.http_status = http_status
        self.application_code = application_code
        self.retry_after = retry_after
        self.data = data
        self.headers: Mapping[str, str] = headers if headers is not None else {}
        super().__init__(message)

    @property
    def is_transport_failure(self) -> bool:
        return self.http_status is None


class ConfigFileNotFoundError(ClientError):
    """Raised when a config file path does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(ClientError):
    """Raised when a config file is not valid TOML."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Config file {path} is not valid TOML: {detail}")


class ConfigFileValidationError(ClientError):
    """Raised when a config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"Config file {path} is invalid: {detail}")
