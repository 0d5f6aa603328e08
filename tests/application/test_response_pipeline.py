"""Tests for the response pipeline."""

import threading

from outbound_client.application.response_pipeline import ResponsePipeline
from outbound_client.infrastructure import ResponseCache
from outbound_client.types import PreparedRequest, RequestDescriptor, TransportResponse
from tests.fakes import FakeClock


def _prepared(method: str, path: str, *, epoch: int = 0) -> PreparedRequest:
    descriptor = RequestDescriptor(method, path)
    return PreparedRequest(
        descriptor=descriptor,
        cache_key=descriptor.cache_key if descriptor.cacheable else None,
        session_epoch=epoch,
    )


def test_stores_cacheable_payload(clock: FakeClock) -> None:
    cache = ResponseCache(clock=clock)
    payload = {"items": [1]}
    response = ResponsePipeline(cache=cache).complete(
        _prepared("GET", "/items"), TransportResponse(200, payload)
    )
    assert response.data is payload
    assert response.from_cache is False
    assert cache.lookup("get_/items_null") is payload


def test_does_not_store_uncacheable_requests(clock: FakeClock) -> None:
    cache = ResponseCache(clock=clock)
    ResponsePipeline(cache=cache).complete(_prepared("POST", "/feedback"), TransportResponse(201))
    assert len(cache) == 0


def test_write_invalidates_matching_partition(clock: FakeClock) -> None:
    cache = ResponseCache(clock=clock)
    cache.store("get_/campaigns_null", 1)
    cache.store("get_/items_null", 2)

    ResponsePipeline(cache=cache).complete(
        _prepared("PUT", "/campaigns/5"), TransportResponse(200, {"id": 5})
    )

    assert cache.keys() == ["get_/items_null"]


def test_organization_write_also_invalidates_team(clock: FakeClock) -> None:
    cache = ResponseCache(clock=clock)
    cache.store("get_/organizations/3_null", 1)
    cache.store("get_/team_null", 2)
    cache.store("get_/dashboard/team/members_null", 3)
    cache.store("get_/items_null", 4)

    ResponsePipeline(cache=cache).complete(
        _prepared("DELETE", "/organizations/3"), TransportResponse(204)
    )

    assert cache.keys() == ["get_/items_null"]


def test_unmatched_write_invalidates_nothing(clock: FakeClock) -> None:
    cache = ResponseCache(clock=clock)
    cache.store("get_/admin/stats_null", 1)
    ResponsePipeline(cache=cache).complete(_prepared("POST", "/feedback"), TransportResponse(201))
    assert cache.keys() == ["get_/admin/stats_null"]


def test_response_from_torn_down_session_is_not_cached(clock: FakeClock) -> None:
    cache = ResponseCache(clock=clock)
    pipeline = ResponsePipeline(cache=cache, session_epoch=lambda: 1)

    response = pipeline.complete(_prepared("GET", "/items", epoch=0), TransportResponse(200, [1]))

    assert response.data == [1]
    assert len(cache) == 0


def test_teardown_holding_the_guard_blocks_a_late_store(clock: FakeClock) -> None:
    cache = ResponseCache(clock=clock)
    guard = threading.RLock()
    epoch = [0]
    pipeline = ResponsePipeline(cache=cache, session_epoch=lambda: epoch[0], session_guard=guard)
    prepared = _prepared("GET", "/items", epoch=0)

    with guard:
        worker = threading.Thread(
            target=pipeline.complete, args=(prepared, TransportResponse(200, {"items": []}))
        )
        worker.start()
        worker.join(timeout=0.1)
        assert "get_/items_null" not in cache
        epoch[0] += 1
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert len(cache) == 0
