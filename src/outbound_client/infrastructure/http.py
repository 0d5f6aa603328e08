"""requests-backed transport for the API client.

Usage example:
    import requests

    from outbound_client.infrastructure.http import RequestsTransport

    transport = RequestsTransport(
        session=requests.Session(),
        base_url="https://api.example.com/api",
        timeout_seconds=30.0,
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing_extensions import override

import requests
from requests.structures import CaseInsensitiveDict

from ..domain.classification import TransportFailureKind
from ..exceptions import TransportError
from ..observability import get_logger
from ..protocols import Transport
from ..types import PreparedRequest, TransportResponse

logger = get_logger("outbound_client.infrastructure.http")

DEFAULT_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


def parse_retry_after(headers: Mapping[str, str] | None) -> int | None:
    """Parse Retry-After header into seconds, if available."""
    if not headers:
        return None
    value = headers.get("Retry-After")
    if not value:
        return None
    value = value.strip()
    if value.isdigit():
        return int(value)
    try:
        dt = parsedate_to_datetime(value)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        delta = (dt - datetime.now(UTC)).total_seconds()
        return max(0, int(delta))
    except (AttributeError, OverflowError, TypeError, ValueError):
        return None


def join_url(base_url: str, path: str) -> str:
    if not base_url or path.startswith(("http://", "https://")):
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def decode_body(response: requests.Response) -> object | None:
    """Decode a JSON body, falling back to text; empty bodies decode to None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        try:
            return response.text
        except (UnicodeDecodeError, ValueError):
            return None


class RequestsTransport(Transport):
    """Send prepared requests with a requests.Session.

    Non-2xx responses are returned to the pipeline unchanged. Timeouts and
    connection failures become `TransportError` with the matching kind.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        base_url: str = "",
        timeout_seconds: float = 30.0,
    ) -> None:
        self.session = session or requests.Session()
        self.session.headers.update(DEFAULT_HEADERS)
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds

    @override
    def send(self, request: PreparedRequest) -> TransportResponse:
        descriptor = request.descriptor
        url = join_url(self.base_url, descriptor.path)
        try:
            response = self.session.request(
                descriptor.method,
                url,
                params=dict(descriptor.params) if descriptor.params is not None else None,
                json=descriptor.body,
                headers=request.headers,
                timeout=self.timeout_seconds,
            )
        except requests.Timeout as exc:
            raise TransportError(TransportFailureKind.TIMEOUT, str(exc)) from exc
        except requests.RequestException as exc:
            raise TransportError(TransportFailureKind.UNREACHABLE, str(exc)) from exc

        logger.debug("%s %s -> %s", descriptor.method, url, response.status_code)
        return TransportResponse(
            status_code=response.status_code,
            data=decode_body(response),
            headers=CaseInsensitiveDict(response.headers),
            reason=response.reason or "",
        )
