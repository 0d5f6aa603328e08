"""Pytest fixtures for testing.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket

import pytest

from outbound_client.client import ApiClient
from outbound_client.composition import build_api_client
from outbound_client.config import ClientConfig
from outbound_client.infrastructure import InMemoryStorage, LocationNavigator
from tests.fakes import FakeClock, FakeTransport, RecordingAlertSink

# =============================================================================
# Network Isolation - Block all socket connections in tests
# =============================================================================

_original_socket_connect = socket.socket.connect


def _blocked_socket_connect(self, *args, **kwargs):
    """Raise an error if any test tries to make a real network connection."""
    raise RuntimeError(
        "Tests must not make network connections! "
        "Use FakeTransport or MagicMock instead. "
        f"Attempted connection to: {args}"
    )


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch):
    """Block all network access in tests.

    This fixture runs automatically for all tests and prevents any real
    network connections. Tests that need HTTP should use FakeTransport
    or a MagicMock requests.Session.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)
    yield


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def storage() -> InMemoryStorage:
    """Session storage with a signed-in (non-admin) user."""
    return InMemoryStorage(
        {
            "token": "primary-token",
            "user": '{"id": 7, "email": "owner@example.com", "role": "USER"}',
        }
    )


@pytest.fixture
def alerts() -> RecordingAlertSink:
    return RecordingAlertSink()


@pytest.fixture
def navigator() -> LocationNavigator:
    return LocationNavigator(location="/dashboard")


@pytest.fixture
def client(
    transport: FakeTransport,
    storage: InMemoryStorage,
    alerts: RecordingAlertSink,
    navigator: LocationNavigator,
    clock: FakeClock,
) -> ApiClient:
    """ApiClient wired to fakes with default config."""
    return build_api_client(
        ClientConfig(),
        storage=storage,
        transport=transport,
        alerts=alerts,
        navigator=navigator,
        clock=clock,
    )
