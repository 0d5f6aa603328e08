"""Terminal adapters for user-visible alerts and navigation.

A headless client has no browser to redirect, so navigation is tracked as
state that the host (or CLI) can inspect after a request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing_extensions import override

from rich.console import Console
from rich.panel import Panel

from ..observability import get_logger
from ..protocols import AlertSink, Navigator

logger = get_logger("outbound_client.infrastructure.console")


class ConsoleAlertSink(AlertSink):
    """Show alerts as a rich panel on stderr."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    @override
    def show(self, message: str) -> None:
        self.console.print(Panel(message, title="Notice", border_style="yellow"))


def _empty_history() -> list[str]:
    return []


@dataclass
class LocationNavigator(Navigator):
    """Navigator that records the current location and redirect history."""

    location: str = "/"
    history: list[str] = field(default_factory=_empty_history)

    @property
    @override
    def current_path(self) -> str:
        return self.location

    @override
    def redirect(self, path: str) -> None:
        logger.info("Redirecting from %s to %s", self.location, path)
        self.history.append(path)
        self.location = path
