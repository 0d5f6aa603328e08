"""Tests for the requests-backed transport."""

from datetime import UTC, datetime, timedelta
from email.utils import format_datetime
from unittest.mock import MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from outbound_client.domain.classification import TransportFailureKind
from outbound_client.exceptions import TransportError
from outbound_client.infrastructure import RequestsTransport, parse_retry_after
from outbound_client.infrastructure.http import join_url
from outbound_client.types import PreparedRequest, RequestDescriptor


def _response(
    status: int, body: bytes, headers: dict[str, str] | None = None
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.headers.update(headers or {})
    response.reason = "OK" if status < 400 else "Error"
    return response


def _session(response: requests.Response | None = None) -> MagicMock:
    session = MagicMock(spec=requests.Session)
    session.headers = CaseInsensitiveDict()
    if response is not None:
        session.request.return_value = response
    return session


def _prepared(
    method: str = "GET",
    path: str = "/campaigns",
    params: dict[str, object] | None = None,
    body: object | None = None,
) -> PreparedRequest:
    return PreparedRequest(
        descriptor=RequestDescriptor(method=method, path=path, params=params, body=body),
        headers={"Authorization": "Bearer abc"},
    )


class TestRequestsTransport:
    """Tests for RequestsTransport."""

    def test_sends_method_url_params_body_headers_and_timeout(self) -> None:
        session = _session(_response(200, b'{"ok": true}'))
        transport = RequestsTransport(
            session=session, base_url="https://api.example.com/api/", timeout_seconds=12.5
        )

        transport.send(_prepared("POST", "/campaigns", params={"a": 1}, body={"name": "x"}))

        session.request.assert_called_once_with(
            "POST",
            "https://api.example.com/api/campaigns",
            params={"a": 1},
            json={"name": "x"},
            headers={"Authorization": "Bearer abc"},
            timeout=12.5,
        )

    def test_decodes_json_body(self) -> None:
        transport = RequestsTransport(session=_session(_response(200, b'{"items": [1]}')))
        response = transport.send(_prepared())
        assert response.status_code == 200
        assert response.data == {"items": [1]}
        assert response.ok is True

    def test_text_body_falls_back_to_text(self) -> None:
        transport = RequestsTransport(session=_session(_response(502, b"Bad gateway")))
        response = transport.send(_prepared())
        assert response.data == "Bad gateway"
        assert response.ok is False

    def test_not_modified_is_not_ok(self) -> None:
        transport = RequestsTransport(session=_session(_response(304, b"")))
        assert transport.send(_prepared()).ok is False

    def test_empty_body_is_none(self) -> None:
        transport = RequestsTransport(session=_session(_response(204, b"")))
        assert transport.send(_prepared("DELETE", "/items/1")).data is None

    def test_headers_are_case_insensitive(self) -> None:
        raw = _response(429, b"{}", {"retry-after": "30"})
        response = RequestsTransport(session=_session(raw)).send(_prepared())
        assert response.headers["Retry-After"] == "30"

    def test_timeout_maps_to_timeout_kind(self) -> None:
        session = _session()
        session.request.side_effect = requests.Timeout("read timed out")
        with pytest.raises(TransportError) as exc_info:
            RequestsTransport(session=session).send(_prepared())
        assert exc_info.value.kind is TransportFailureKind.TIMEOUT
        assert isinstance(exc_info.value.__cause__, requests.Timeout)

    def test_connection_error_maps_to_unreachable_kind(self) -> None:
        session = _session()
        session.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(TransportError) as exc_info:
            RequestsTransport(session=session).send(_prepared())
        assert exc_info.value.kind is TransportFailureKind.UNREACHABLE

    def test_sets_json_default_headers_on_session(self) -> None:
        session = _session()
        RequestsTransport(session=session)
        assert session.headers["Content-Type"] == "application/json"


class TestJoinUrl:
    def test_joins_without_double_slash(self) -> None:
        assert join_url("https://api.example.com/", "/items") == "https://api.example.com/items"

    def test_no_base_url_keeps_path(self) -> None:
        assert join_url("", "/items") == "/items"

    def test_absolute_path_is_not_joined(self) -> None:
        assert join_url("https://a.example", "https://b.example/x") == "https://b.example/x"


class TestParseRetryAfter:
    """Tests for Retry-After parsing."""

    def test_numeric_seconds(self) -> None:
        assert parse_retry_after({"Retry-After": "12"}) == 12

    def test_http_date(self) -> None:
        future = datetime.now(UTC) + timedelta(seconds=30)
        header = format_datetime(future)
        value = parse_retry_after({"Retry-After": header})
        assert value is not None
        assert 0 <= value <= 30

    def test_invalid_header_returns_none(self) -> None:
        assert parse_retry_after({"Retry-After": "not-a-date"}) is None

    def test_missing_header_returns_none(self) -> None:
        assert parse_retry_after({}) is None
        assert parse_retry_after(None) is None
