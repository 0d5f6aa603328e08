"""API client façade composing the request pipeline, transport and error handling.

Usage example:
    from outbound_client.composition import build_api_client
    from outbound_client.config import ClientConfig

    client = build_api_client(ClientConfig.from_env())
    campaigns = client.get("/campaigns", params={"page": 1})
    client.post("/campaigns", json_body={"name": "Spring launch"})
    fresh = client.get("/campaigns", params={"page": 1}, bypass_cache=True)
"""

from __future__ import annotations

from collections.abc import Mapping

from .application.failures import failure_from_response, failure_from_transport_error
from .application.request_pipeline import RequestPipeline
from .application.response_pipeline import ResponsePipeline
from .application.session import SessionManager
from .exceptions import TransportError
from .protocols import Cache, CredentialSource, Transport
from .types import ApiResponse, RequestDescriptor


class ApiClient:
    """Outbound API client with response caching and session-aware error handling.

    - Fresh cached GETs are served without touching the transport
    - Successful writes invalidate related cached reads
    - Failures are classified; their side effects run before the error is raised
    """

    def __init__(
        self,
        *,
        transport: Transport,
        cache: Cache,
        credentials: CredentialSource,
        session_manager: SessionManager,
    ) -> None:
        self.transport = transport
        self.cache = cache
        self.session_manager = session_manager
        self.request_pipeline = RequestPipeline(
            cache=cache,
            credentials=credentials,
            session_epoch=session_manager.current_epoch,
        )
        self.response_pipeline = ResponsePipeline(
            cache=cache,
            session_epoch=session_manager.current_epoch,
            session_guard=session_manager.epoch_lock,
        )

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, object] | None = None,
        json_body: object | None = None,
        bypass_cache: bool = False,
    ) -> ApiResponse:
        """Send a request through the pipeline.

        Raises:
            ApiRequestError: For any failed request, after its side effect has run.
        """
        descriptor = RequestDescriptor(
            method=method,
            path=path,
            params=params,
            body=json_body,
            bypass_cache=bypass_cache,
        )
        plan = self.request_pipeline.prepare(descriptor)
        if plan.cached_response is not None:
            return plan.cached_response

        try:
            response = self.transport.send(plan.prepared)
        except TransportError as exc:
            raise self.session_manager.handle_failure(failure_from_transport_error(exc)) from exc

        if not response.ok:
            raise self.session_manager.handle_failure(failure_from_response(response))

        return self.response_pipeline.complete(plan.prepared, response)

    def get(
        self,
        path: str,
        *,
        params: Mapping[str, object] | None = None,
        bypass_cache: bool = False,
    ) -> ApiResponse:
        return self.request("GET", path, params=params, bypass_cache=bypass_cache)

    def post(
        self,
        path: str,
        *,
        json_body: object | None = None,
        params: Mapping[str, object] | None = None,
    ) -> ApiResponse:
        return self.request("POST", path, params=params, json_body=json_body)

    def put(
        self,
        path: str,
        *,
        json_body: object | None = None,
        params: Mapping[str, object] | None = None,
    ) -> ApiResponse:
        return self.request("PUT", path, params=params, json_body=json_body)

    def patch(
        self,
        path: str,
        *,
        json_body: object | None = None,
        params: Mapping[str, object] | None = None,
    ) -> ApiResponse:
        return self.request("PATCH", path, params=params, json_body=json_body)

    def delete(
        self,
        path: str,
        *,
        params: Mapping[str, object] | None = None,
    ) -> ApiResponse:
        return self.request("DELETE", path, params=params)

    def clear_cache(self, pattern: str | None = None) -> None:
        """Invalidate entries containing pattern, or everything when no pattern is given."""
        if pattern:
            self.cache.invalidate(pattern)
        else:
            self.cache.clear_all()
