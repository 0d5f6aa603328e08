"""Centralised, injectable configuration for the API client."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import ClientConfigFile


class PositiveNumberEnvVarError(ValueError):
    """Raised when an environment variable must be a positive number."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive number.")


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration object for the client and its pipelines.

    Load from environment with `ClientConfig.from_env()` or construct directly for testing.
    """

    # Transport
    api_base_url: str = ""
    timeout_seconds: float = 30.0

    # Response cache
    cache_ttl_seconds: float = 120.0
    cache_max_entries: int = 100

    # Alert dedup windows
    session_alert_cooldown_seconds: float = 5.0
    maintenance_alert_cooldown_seconds: float = 10.0

    # Session storage (empty path keeps the session in memory)
    session_store_path: str = ""
    token_key: str = "token"
    session_blob_key: str = "auth-storage"
    user_key: str = "user"

    # Navigation
    sign_in_path: str = "/signin"
    admin_sign_in_path: str = "/admin-login"

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            ClientConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            api_base_url=os.getenv("API_BASE_URL", "").strip(),
            timeout_seconds=_parse_positive_float(
                os.getenv("API_TIMEOUT_SECONDS", "30"), env_name="API_TIMEOUT_SECONDS"
            ),
            cache_ttl_seconds=_parse_positive_float(
                os.getenv("CACHE_TTL_SECONDS", "120"), env_name="CACHE_TTL_SECONDS"
            ),
            cache_max_entries=_parse_positive_int(
                os.getenv("CACHE_MAX_ENTRIES", "100"), env_name="CACHE_MAX_ENTRIES"
            ),
            session_alert_cooldown_seconds=_parse_positive_float(
                os.getenv("SESSION_ALERT_COOLDOWN_SECONDS", "5"),
                env_name="SESSION_ALERT_COOLDOWN_SECONDS",
            ),
            maintenance_alert_cooldown_seconds=_parse_positive_float(
                os.getenv("MAINTENANCE_ALERT_COOLDOWN_SECONDS", "10"),
                env_name="MAINTENANCE_ALERT_COOLDOWN_SECONDS",
            ),
            session_store_path=os.getenv("SESSION_STORE_PATH", "").strip(),
            token_key=os.getenv("TOKEN_KEY", "token").strip() or "token",
            session_blob_key=os.getenv("SESSION_BLOB_KEY", "auth-storage").strip()
            or "auth-storage",
            user_key=os.getenv("USER_KEY", "user").strip() or "user",
            sign_in_path=os.getenv("SIGN_IN_PATH", "/signin").strip() or "/signin",
            admin_sign_in_path=os.getenv("ADMIN_SIGN_IN_PATH", "/admin-login").strip()
            or "/admin-login",
        )

    def with_overrides(
        self,
        *,
        api_base_url: str | None = None,
        timeout_seconds: float | None = None,
        session_store_path: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            api_base_url=self.api_base_url if api_base_url is None else api_base_url.strip(),
            timeout_seconds=self.timeout_seconds if timeout_seconds is None else timeout_seconds,
            session_store_path=self.session_store_path
            if session_store_path is None
            else session_store_path.strip(),
        )

    def with_file_overrides(self, file_config: ClientConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            api_base_url=self.api_base_url
            if file_config.api_base_url is None
            else file_config.api_base_url,
            timeout_seconds=self.timeout_seconds
            if file_config.timeout_seconds is None
            else file_config.timeout_seconds,
            cache_ttl_seconds=self.cache_ttl_seconds
            if file_config.cache_ttl_seconds is None
            else file_config.cache_ttl_seconds,
            cache_max_entries=self.cache_max_entries
            if file_config.cache_max_entries is None
            else file_config.cache_max_entries,
            session_alert_cooldown_seconds=self.session_alert_cooldown_seconds
            if file_config.session_alert_cooldown_seconds is None
            else file_config.session_alert_cooldown_seconds,
            maintenance_alert_cooldown_seconds=self.maintenance_alert_cooldown_seconds
            if file_config.maintenance_alert_cooldown_seconds is None
            else file_config.maintenance_alert_cooldown_seconds,
            session_store_path=self.session_store_path
            if file_config.session_store_path is None
            else file_config.session_store_path,
            sign_in_path=self.sign_in_path
            if file_config.sign_in_path is None
            else file_config.sign_in_path,
            admin_sign_in_path=self.admin_sign_in_path
            if file_config.admin_sign_in_path is None
            else file_config.admin_sign_in_path,
        )


def _parse_positive_float(value: str, *, env_name: str) -> float:
    """Parse a positive float from an environment variable."""
    try:
        parsed = float(value.strip())
    except ValueError as exc:
        raise PositiveNumberEnvVarError(env_name) from exc
    if parsed <= 0:
        raise PositiveNumberEnvVarError(env_name)
    return parsed


def _parse_positive_int(value: str, *, env_name: str) -> int:
    """Parse a positive integer from an environment variable."""
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise PositiveNumberEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveNumberEnvVarError(env_name)
    return parsed
