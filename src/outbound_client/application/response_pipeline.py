"""Response-side pipeline: cache population and write-driven invalidation."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass, field

from ..domain.invalidation import INVALIDATION_RULES, InvalidationRule, partitions_for_path
from ..observability import get_logger
from ..protocols import Cache
from ..types import ApiResponse, PreparedRequest, TransportResponse

logger = get_logger("outbound_client.response_pipeline")


def _no_epoch() -> int:
    return 0


@dataclass
class ResponsePipeline:
    """Handle a successful transport response.

    Cacheable GETs are stored under their key. Successful writes purge the
    partitions their path maps to. A response that arrives after the session
    it was issued under has been torn down is returned but not cached;
    `session_guard` makes that check and the store atomic with teardown.
    """

    cache: Cache
    session_epoch: Callable[[], int] = _no_epoch
    rules: tuple[InvalidationRule, ...] = INVALIDATION_RULES
    session_guard: AbstractContextManager[object] = field(default_factory=nullcontext)

    def complete(self, prepared: PreparedRequest, response: TransportResponse) -> ApiResponse:
        descriptor = prepared.descriptor
        if prepared.cache_key is not None:
            with self.session_guard:
                current = prepared.session_epoch == self.session_epoch()
                if current:
                    self.cache.store(prepared.cache_key, response.data)
            if not current:
                logger.debug("Session changed in flight; not caching %s", prepared.cache_key)

        if descriptor.mutating:
            for partition in partitions_for_path(descriptor.path, self.rules):
                removed = self.cache.invalidate(partition)
                logger.debug(
                    "%s %s invalidated %s cached entries for %s",
                    descriptor.method,
                    descriptor.path,
                    removed,
                    partition,
                )

        return ApiResponse(
            status=response.status_code,
            data=response.data,
            headers=response.headers,
        )
