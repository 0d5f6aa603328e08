"""Typed parsing and validation for client config files.

Example file:

    schema_version = 1

    [client]
    api_base_url = "https://api.example.com/api"
    timeout_seconds = 15
    cache_ttl_seconds = 60
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class ClientConfigFile:
    """Validated client config values loaded from a TOML file."""

    api_base_url: str | None = None
    timeout_seconds: float | None = None
    cache_ttl_seconds: float | None = None
    cache_max_entries: int | None = None
    session_alert_cooldown_seconds: float | None = None
    maintenance_alert_cooldown_seconds: float | None = None
    session_store_path: str | None = None
    sign_in_path: str | None = None
    admin_sign_in_path: str | None = None


class _ClientSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    api_base_url: str | None = None
    timeout_seconds: float | None = None
    cache_ttl_seconds: float | None = None
    cache_max_entries: int | None = None
    session_alert_cooldown_seconds: float | None = None
    maintenance_alert_cooldown_seconds: float | None = None
    session_store_path: str | None = None
    sign_in_path: str | None = None
    admin_sign_in_path: str | None = None

    @field_validator("api_base_url", "session_store_path")
    @classmethod
    def _validate_non_empty_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("sign_in_path", "admin_sign_in_path")
    @classmethod
    def _validate_path(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text.startswith("/"):
            raise ValueError
        return text

    @field_validator(
        "timeout_seconds",
        "cache_ttl_seconds",
        "session_alert_cooldown_seconds",
        "maintenance_alert_cooldown_seconds",
    )
    @classmethod
    def _validate_positive_seconds(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value <= 0:
            raise ValueError
        return value

    @field_validator("cache_max_entries")
    @classmethod
    def _validate_positive_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    client: _ClientSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_client_config_file(path: Path) -> ClientConfigFile:
    """Load and validate a client TOML config file."""
    if not path.exists():
        raise ConfigFileNotFoundError(str(path))

    raw_payload = path.read_text(encoding="utf-8")
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), _format_validation_error(exc)) from exc

    section = model.client
    return ClientConfigFile(
        api_base_url=section.api_base_url,
        timeout_seconds=section.timeout_seconds,
        cache_ttl_seconds=section.cache_ttl_seconds,
        cache_max_entries=section.cache_max_entries,
        session_alert_cooldown_seconds=section.session_alert_cooldown_seconds,
        maintenance_alert_cooldown_seconds=section.maintenance_alert_cooldown_seconds,
        session_store_path=section.session_store_path,
        sign_in_path=section.sign_in_path,
        admin_sign_in_path=section.admin_sign_in_path,
    )
