"""Cache identity for outbound requests.

Usage example:
    from outbound_client.domain.cache_keys import build_cache_key

    key = build_cache_key("GET", "/campaigns", {"page": 2, "limit": 20})
    # 'get_/campaigns_{"limit": 20, "page": 2}'
"""

from __future__ import annotations

import json
from collections.abc import Mapping

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def build_cache_key(method: str, path: str, params: Mapping[str, object] | None) -> str:
    """Return a stable key for method + path + query params.

    Params are serialised with sorted keys so the same set of params in a
    different order maps to the same key.
    """
    serialised = json.dumps(
        dict(params) if params is not None else None,
        sort_keys=True,
        default=str,
        ensure_ascii=False,
    )
    return f"{method.lower()}_{path}_{serialised}"


def is_cacheable(method: str, *, bypass_cache: bool) -> bool:
    """Only GET requests not marked to bypass the cache are cacheable."""
    return method.upper() == "GET" and not bypass_cache


def is_mutating(method: str) -> bool:
    return method.upper() in MUTATING_METHODS
