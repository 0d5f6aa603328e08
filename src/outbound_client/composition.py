"""Composition root for wiring the client and CLI dependencies."""

from __future__ import annotations

import time
from pathlib import Path

from .application.session import SessionManager
from .cli import CliDependencies, create_app
from .client import ApiClient
from .config import ClientConfig
from .infrastructure import (
    ConsoleAlertSink,
    InMemoryStorage,
    JsonFileStorage,
    LocationNavigator,
    RequestsTransport,
    ResponseCache,
    SessionKeys,
    SessionState,
    TokenResolver,
)
from .protocols import AlertSink, Clock, KeyValueStorage, Navigator, Transport


def build_storage(config: ClientConfig) -> KeyValueStorage:
    if config.session_store_path:
        return JsonFileStorage(Path(config.session_store_path).expanduser())
    return InMemoryStorage()


def build_api_client(
    config: ClientConfig,
    *,
    storage: KeyValueStorage | None = None,
    transport: Transport | None = None,
    alerts: AlertSink | None = None,
    navigator: Navigator | None = None,
    clock: Clock = time.monotonic,
) -> ApiClient:
    """Build an ApiClient with its own cache and alert state.

    Args:
        config: Client configuration.
        storage: Session storage shared with the host application.
        transport: HTTP transport (defaults to requests against `config.api_base_url`).
        alerts: Where user-visible messages go (defaults to the terminal).
        navigator: Host navigation (defaults to an in-memory location tracker).
        clock: Monotonic clock used for cache TTLs and alert cooldowns.
    """
    storage = storage if storage is not None else build_storage(config)
    keys = SessionKeys(
        token_key=config.token_key,
        session_blob_key=config.session_blob_key,
        user_key=config.user_key,
    )
    cache = ResponseCache(
        ttl_seconds=config.cache_ttl_seconds,
        max_entries=config.cache_max_entries,
        clock=clock,
    )
    session_manager = SessionManager(
        cache=cache,
        session=SessionState(storage=storage, keys=keys),
        alerts=alerts or ConsoleAlertSink(),
        navigator=navigator or LocationNavigator(),
        sign_in_path=config.sign_in_path,
        admin_sign_in_path=config.admin_sign_in_path,
        session_alert_cooldown_seconds=config.session_alert_cooldown_seconds,
        maintenance_alert_cooldown_seconds=config.maintenance_alert_cooldown_seconds,
        clock=clock,
    )
    return ApiClient(
        transport=transport
        or RequestsTransport(base_url=config.api_base_url, timeout_seconds=config.timeout_seconds),
        cache=cache,
        credentials=TokenResolver(storage=storage, keys=keys),
        session_manager=session_manager,
    )


def build_cli_dependencies(*, config: ClientConfig) -> CliDependencies:
    """Build concrete dependencies for CLI commands."""
    navigator = LocationNavigator()
    client = build_api_client(config, navigator=navigator)
    return CliDependencies(client=client, navigator=navigator)


app = create_app(build_cli_dependencies)
