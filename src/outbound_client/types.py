"""Typed request and response contracts shared across the pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .domain.cache_keys import build_cache_key, is_cacheable, is_mutating
from .domain.classification import TransportFailureKind


def _empty_headers() -> dict[str, str]:
    return {}


@dataclass(frozen=True)
class RequestDescriptor:
    """What a caller asks for: method, path, query params, body and cache flag."""

    method: str
    path: str
    params: Mapping[str, object] | None = None
    body: object | None = None
    bypass_cache: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())

    @property
    def cache_key(self) -> str:
        return build_cache_key(self.method, self.path, self.params)

    @property
    def cacheable(self) -> bool:
        return is_cacheable(self.method, bypass_cache=self.bypass_cache)

    @property
    def mutating(self) -> bool:
        return is_mutating(self.method)


@dataclass(frozen=True)
class PreparedRequest:
    """A descriptor decorated by the request pipeline, ready for the transport."""

    descriptor: RequestDescriptor
    headers: dict[str, str] = field(default_factory=_empty_headers)
    cache_key: str | None = None
    session_epoch: int = 0


@dataclass(frozen=True)
class TransportResponse:
    """Raw response handed back by a transport."""

    status_code: int
    data: object | None = None
    headers: Mapping[str, str] = field(default_factory=_empty_headers)
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class ApiResponse:
    """Successful response returned to callers."""

    status: int
    data: object | None
    headers: Mapping[str, str] = field(default_factory=_empty_headers)
    from_cache: bool = False


@dataclass(frozen=True)
class FailureDetails:
    """What failure extraction found on an error response or transport error.

    `message` is the text the server put in the body; `reason` is the HTTP
    reason phrase. `data` and `headers` are the untouched error response.
    """

    http_status: int | None = None
    application_code: str | None = None
    message: str = ""
    reason: str = ""
    retry_after: int | None = None
    transport_failure: TransportFailureKind | None = None
    data: object | None = None
    headers: Mapping[str, str] = field(default_factory=_empty_headers)
