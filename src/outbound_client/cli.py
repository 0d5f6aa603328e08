"""CLI for the outbound API client.

Commands:
- request: Send one request through the caching, auth and error pipeline
- classify: Show how a failure status and application code are classified
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.json import JSON

from .client import ApiClient
from .config import ClientConfig
from .config_file import load_client_config_file
from .domain.classification import classify, is_recoverable, requires_teardown
from .exceptions import ApiRequestError, ClientError
from .infrastructure.console import LocationNavigator


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: ClientConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    client: ApiClient
    navigator: LocationNavigator


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: ClientConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(self, config: ClientConfig | None = None) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(config=config or self.config)


class ParamFormatError(typer.BadParameter):
    """Raised when a --param value is not key=value."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Expected key=value, got {value!r}.")


class JsonBodyError(typer.BadParameter):
    """Raised when --data is not valid JSON."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"--data must be valid JSON: {detail}")


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the outbound-client entry point.")


def _parse_params(values: list[str] | None) -> dict[str, object] | None:
    if not values:
        return None
    params: dict[str, object] = {}
    for value in values:
        key, sep, raw = value.partition("=")
        if not sep or not key.strip():
            raise ParamFormatError(value)
        params[key.strip()] = raw
    return params


def _parse_body(data: str | None) -> object | None:
    if data is None:
        return None
    try:
        return json.loads(data)
    except ValueError as exc:
        raise JsonBodyError(str(exc)) from exc


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Outbound API client: cached, authenticated requests with session-aware errors",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="TOML config file overriding environment settings",
            ),
        ] = None,
    ) -> None:
        """Initialise CLI context."""
        config = ClientConfig.from_env()
        if config_path is not None:
            try:
                config = config.with_file_overrides(load_client_config_file(config_path))
            except ClientError as exc:
                raise typer.BadParameter(str(exc), param_hint="--config") from exc
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def request(
        ctx: typer.Context,
        method: Annotated[str, typer.Argument(help="HTTP method (GET, POST, PUT, PATCH, DELETE)")],
        path: Annotated[str, typer.Argument(help="Path relative to the API base URL")],
        param: Annotated[
            list[str] | None,
            typer.Option("--param", "-p", help="Query parameter as key=value (repeatable)"),
        ] = None,
        data: Annotated[
            str | None,
            typer.Option("--data", "-d", help="JSON request body"),
        ] = None,
        no_cache: Annotated[
            bool,
            typer.Option("--no-cache", help="Bypass the response cache for GET requests"),
        ] = False,
        base_url: Annotated[
            str | None,
            typer.Option("--base-url", help="Override API_BASE_URL"),
        ] = None,
    ) -> None:
        """Send one request and print the response."""
        state = _get_context(ctx)
        config = state.config.with_overrides(api_base_url=base_url)
        deps = state.build_dependencies(config)
        try:
            response = deps.client.request(
                method,
                path,
                params=_parse_params(param),
                json_body=_parse_body(data),
                bypass_cache=no_cache,
            )
        except ApiRequestError as exc:
            status = exc.http_status if exc.http_status is not None else "-"
            rprint(f"[red]✗ {exc.classification.value}[/red] (status {status}): {exc.message}")
            for location in deps.navigator.history:
                rprint(f"  Redirected to: {location}")
            raise typer.Exit(code=1) from exc

        source = " (cached)" if response.from_cache else ""
        rprint(f"[green]✓ {response.status}{source}[/green]")
        if response.data is not None:
            if isinstance(response.data, str):
                rprint(response.data)
            else:
                rprint(JSON.from_data(response.data))

    @app.command(name="classify")
    def classify_failure(
        status: Annotated[int, typer.Argument(help="HTTP status of the failed response")],
        code: Annotated[
            str | None,
            typer.Option("--code", help="Application error code from the response body"),
        ] = None,
    ) -> None:
        """Show the classification and side effects for a failure."""
        classification = classify(http_status=status, application_code=code)
        rprint(f"[bold]{classification.value}[/bold]")
        rprint(f"  Session teardown: {'yes' if requires_teardown(classification) else 'no'}")
        rprint(f"  Recoverable: {'yes' if is_recoverable(classification) else 'no'}")

    return app
