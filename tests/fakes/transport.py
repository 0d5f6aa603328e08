"""Transport fakes for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing_extensions import override

from outbound_client.exceptions import TransportError
from outbound_client.protocols import Transport
from outbound_client.types import PreparedRequest, TransportResponse

CannedOutcome = TransportResponse | TransportError


def _empty_responses() -> dict[tuple[str, str], list[CannedOutcome]]:
    return {}


def _empty_calls() -> list[PreparedRequest]:
    return []


@dataclass
class FakeTransport(Transport):
    """Fake transport that replays canned outcomes per (method, path).

    Each registered outcome list is consumed in order; the last outcome
    repeats once the list is exhausted. Unregistered GETs return a fresh
    200 payload so identity checks can tell responses apart.
    """

    responses: dict[tuple[str, str], list[CannedOutcome]] = field(
        default_factory=_empty_responses
    )
    calls: list[PreparedRequest] = field(default_factory=_empty_calls)

    def add(self, method: str, path: str, *outcomes: CannedOutcome) -> None:
        self.responses.setdefault((method.upper(), path), []).extend(outcomes)

    def calls_to(self, method: str, path: str) -> list[PreparedRequest]:
        return [
            call
            for call in self.calls
            if call.descriptor.method == method.upper() and call.descriptor.path == path
        ]

    @override
    def send(self, request: PreparedRequest) -> TransportResponse:
        self.calls.append(request)
        key = (request.descriptor.method, request.descriptor.path)
        outcomes = self.responses.get(key)
        if not outcomes:
            return TransportResponse(
                status_code=200,
                data={"path": request.descriptor.path, "call": len(self.calls)},
            )
        outcome = outcomes.pop(0) if len(outcomes) > 1 else outcomes[0]
        if isinstance(outcome, TransportError):
            raise outcome
        return outcome
