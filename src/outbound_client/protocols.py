"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces that the request and response
pipelines depend on, enabling isolated unit testing with fake implementations.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from .types import PreparedRequest, TransportResponse

Clock = Callable[[], float]


@runtime_checkable
class Transport(Protocol):
    """Underlying HTTP primitive the pipeline decorates."""

    def send(self, request: PreparedRequest) -> TransportResponse:
        """Send a prepared request and return whatever response came back.

        Non-2xx responses are returned, not raised.

        Raises:
            TransportError: When no response was received (timeout or unreachable).
        """
        ...


@runtime_checkable
class Cache(Protocol):
    """Abstract cache of successful GET payloads."""

    def lookup(self, key: str) -> object | None:
        """Return the fresh payload for key, or None (purging a stale entry)."""
        ...

    def store(self, key: str, payload: object) -> None:
        """Insert or replace the payload for key."""
        ...

    def invalidate(self, pattern: str) -> int:
        """Remove every entry whose key contains pattern; return how many went."""
        ...

    def clear_all(self) -> None:
        """Remove every entry."""
        ...


@runtime_checkable
class KeyValueStorage(Protocol):
    """String key/value store owned by the host application (tokens, session)."""

    def get_item(self, key: str) -> str | None:
        """Return the stored string, or None when absent."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store a string value."""
        ...

    def remove_item(self, key: str) -> None:
        """Remove a key if present."""
        ...


@runtime_checkable
class AlertSink(Protocol):
    """Surface a blocking, user-visible message."""

    def show(self, message: str) -> None:
        """Display a message to the user."""
        ...


@runtime_checkable
class Navigator(Protocol):
    """Current location and forced navigation for the host application."""

    @property
    def current_path(self) -> str:
        """Return the path the user is currently on."""
        ...

    def redirect(self, path: str) -> None:
        """Navigate to path."""
        ...


@runtime_checkable
class CredentialSource(Protocol):
    """Supplies the credential headers for outgoing requests."""

    def authorization_header(self) -> dict[str, str]:
        """Return `{"Authorization": "Bearer ..."}`, or an empty dict when signed out."""
        ...


@runtime_checkable
class SessionStore(Protocol):
    """Host application session state the error handler reads and tears down."""

    def is_admin(self) -> bool:
        """Return True when the signed-in user holds an elevated role."""
        ...

    def clear(self) -> None:
        """Remove all locally stored session data."""
        ...
