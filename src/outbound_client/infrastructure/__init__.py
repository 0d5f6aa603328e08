"""Concrete infrastructure implementations and shared helpers."""

from .auth import SessionKeys, SessionState, TokenFound, TokenNotFound, TokenResolver
from .cache import CacheEntry, ResponseCache
from .console import ConsoleAlertSink, LocationNavigator
from .http import RequestsTransport, parse_retry_after
from .storage import InMemoryStorage, JsonFileStorage

__all__ = [
    "CacheEntry",
    "ConsoleAlertSink",
    "InMemoryStorage",
    "JsonFileStorage",
    "LocationNavigator",
    "RequestsTransport",
    "ResponseCache",
    "SessionKeys",
    "SessionState",
    "TokenFound",
    "TokenNotFound",
    "TokenResolver",
    "parse_retry_after",
]
