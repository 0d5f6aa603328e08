"""Key/value storage implementations for session data.

The host application owns token and session storage; the client reads it to
authenticate requests and clears it when a session is torn down.

Usage example:
    from pathlib import Path

    from outbound_client.infrastructure.storage import JsonFileStorage

    storage = JsonFileStorage(Path("~/.config/app/session.json").expanduser())
    storage.set_item("token", "abc123")
    token = storage.get_item("token")
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing_extensions import override

from ..observability import get_logger
from ..protocols import KeyValueStorage

logger = get_logger("outbound_client.infrastructure.storage")


def _empty_items() -> dict[str, str]:
    return {}


@dataclass
class InMemoryStorage(KeyValueStorage):
    """Process-local storage; contents vanish on restart."""

    items: dict[str, str] = field(default_factory=_empty_items)

    @override
    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    @override
    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    @override
    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


@dataclass
class JsonFileStorage(KeyValueStorage):
    """File-backed storage holding one JSON object of string values.

    A missing or unreadable file reads as empty; the next write replaces it.
    """

    path: Path
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            payload: object = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable session store %s: %s", self.path, exc)
            return {}
        if not isinstance(payload, dict):
            return {}
        return {str(key): value for key, value in payload.items() if isinstance(value, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(items, ensure_ascii=False, indent=2), encoding="utf-8")

    @override
    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._read_all().get(key)

    @override
    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            items = self._read_all()
            items[key] = value
            self._write_all(items)

    @override
    def remove_item(self, key: str) -> None:
        with self._lock:
            items = self._read_all()
            if key in items:
                del items[key]
                self._write_all(items)
