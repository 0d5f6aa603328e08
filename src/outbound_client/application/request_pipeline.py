"""Request-side pipeline: auth injection and cache short-circuit.

Every request gets the current bearer token. A cacheable GET whose payload
is still fresh never reaches the transport; the cached payload comes back as
a synthesized 200 response.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..observability import get_logger
from ..protocols import Cache, CredentialSource
from ..types import ApiResponse, PreparedRequest, RequestDescriptor

logger = get_logger("outbound_client.request_pipeline")


@dataclass(frozen=True)
class RequestPlan:
    """Outcome of the request pipeline for one request.

    Exactly one of `cached_response` (short-circuit) or dispatch applies.
    """

    prepared: PreparedRequest
    cached_response: ApiResponse | None = None

    @property
    def should_dispatch(self) -> bool:
        return self.cached_response is None


def _no_epoch() -> int:
    return 0


@dataclass
class RequestPipeline:
    """Decorate outgoing requests and consult the cache."""

    cache: Cache
    credentials: CredentialSource
    session_epoch: Callable[[], int] = _no_epoch

    def prepare(self, descriptor: RequestDescriptor) -> RequestPlan:
        headers = dict(self.credentials.authorization_header())
        cache_key = descriptor.cache_key if descriptor.cacheable else None
        prepared = PreparedRequest(
            descriptor=descriptor,
            headers=headers,
            cache_key=cache_key,
            session_epoch=self.session_epoch(),
        )
        if cache_key is None:
            return RequestPlan(prepared=prepared)

        payload = self.cache.lookup(cache_key)
        if payload is None:
            logger.debug("Cache miss: %s", cache_key)
            return RequestPlan(prepared=prepared)

        logger.debug("Cache hit: %s", cache_key)
        return RequestPlan(
            prepared=prepared,
            cached_response=ApiResponse(status=200, data=payload, headers=headers, from_cache=True),
        )
