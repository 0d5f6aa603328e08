"""Extract failure details from error responses and transport errors.

Extraction never raises; whatever cannot be read is left empty so that
classification falls through to UNCLASSIFIED.
"""

from __future__ import annotations

from ..exceptions import TransportError
from ..infrastructure.http import parse_retry_after
from ..infrastructure.io.validation import extract_error_body
from ..types import FailureDetails, TransportResponse


def failure_from_response(response: TransportResponse) -> FailureDetails:
    body = extract_error_body(response.data)
    return FailureDetails(
        http_status=response.status_code,
        application_code=body.code,
        message=body.message or "",
        reason=response.reason,
        retry_after=parse_retry_after(response.headers),
        data=response.data,
        headers=response.headers,
    )


def failure_from_transport_error(error: TransportError) -> FailureDetails:
    return FailureDetails(message=error.detail, transport_failure=error.kind)
