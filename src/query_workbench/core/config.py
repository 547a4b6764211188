"""Configuration management for Query Workbench.

Handles TOML config files, environment variables, named service
profiles, and configuration precedence resolution.

Precedence order (highest to lowest):
1. CLI flags (--url, --timeout, ...)
2. Environment variables (QUERY_WORKBENCH_URL, QUERY_WORKBENCH_TIMEOUT)
3. Named profile (--profile or QUERY_WORKBENCH_PROFILE env var)
4. Config file defaults
5. Built-in defaults
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, ValidationError, computed_field, field_validator

from query_workbench.core.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "query-workbench" / "config.toml"

_ENV_VARS: dict[str, str] = {
    "QUERY_WORKBENCH_URL": "service_url",
    "QUERY_WORKBENCH_TIMEOUT": "request_timeout",
}

_SERVICE_DEFAULTS: dict[str, Any] = {
    "service_url": "http://localhost:3000",
    "query_path": "/query",
    "request_timeout": None,
}

_GENERAL_DEFAULTS: dict[str, Any] = {
    "default_format": "table",
    "progress_interval": 0.5,
    "progress_max_step": 20.0,
    "column_width": 40,
    "min_column_width": 5,
}


def _validate_url(v: str) -> str:
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        msg = f"Invalid service URL: '{v}'. Expected http:// or https://"
        raise ValueError(msg)
    return v.rstrip("/")


def _check_interval(v: float) -> float:
    if v <= 0:
        msg = f"Invalid progress_interval: {v}. Must be > 0"
        raise ValueError(msg)
    return v


def _check_max_step(v: float) -> float:
    if v < 0:
        msg = f"Invalid progress_max_step: {v}. Must be >= 0"
        raise ValueError(msg)
    return v


def _check_width(v: int) -> int:
    if v < 1:
        msg = f"Invalid column width: {v}. Must be >= 1"
        raise ValueError(msg)
    return v


class ServiceProfile(BaseModel):
    service_url: str = "http://localhost:3000"
    query_path: str = "/query"
    request_timeout: float | None = None

    @field_validator("service_url")
    @classmethod
    def validate_service_url(cls, v: str) -> str:
        return _validate_url(v)

    @field_validator("query_path")
    @classmethod
    def validate_query_path(cls, v: str) -> str:
        return v if v.startswith("/") else f"/{v}"


class AppConfig(BaseModel):
    default_format: str = "table"
    default_profile: str | None = None
    progress_interval: float = 0.5
    progress_max_step: float = 20.0
    column_width: int = 40
    min_column_width: int = 5
    service_url: str | None = None
    request_timeout: float | None = None
    profiles: dict[str, ServiceProfile] = {}

    @field_validator("progress_interval")
    @classmethod
    def validate_interval(cls, v: float) -> float:
        return _check_interval(v)

    @field_validator("progress_max_step")
    @classmethod
    def validate_max_step(cls, v: float) -> float:
        return _check_max_step(v)

    @field_validator("column_width", "min_column_width")
    @classmethod
    def validate_width(cls, v: int) -> int:
        return _check_width(v)


class ResolvedConfig(BaseModel):
    service_url: str = "http://localhost:3000"
    query_path: str = "/query"
    request_timeout: float | None = None
    default_format: str = "table"
    progress_interval: float = 0.5
    progress_max_step: float = 20.0
    column_width: int = 40
    min_column_width: int = 5
    active_profile: str | None = None
    sources: dict[str, str] = {}

    @field_validator("service_url")
    @classmethod
    def validate_service_url(cls, v: str) -> str:
        return _validate_url(v)

    @field_validator("request_timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            msg = f"Invalid request_timeout: {v}. Must be > 0"
            raise ValueError(msg)
        return v

    @field_validator("progress_interval")
    @classmethod
    def validate_interval(cls, v: float) -> float:
        return _check_interval(v)

    @field_validator("progress_max_step")
    @classmethod
    def validate_max_step(cls, v: float) -> float:
        return _check_max_step(v)

    @field_validator("column_width", "min_column_width")
    @classmethod
    def validate_width(cls, v: int) -> int:
        return _check_width(v)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def query_url(self) -> str:
        return f"{self.service_url.rstrip('/')}{self.query_path}"


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file.

    Returns default AppConfig if file doesn't exist.
    Raises ConfigError on malformed TOML or invalid config.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Malformed TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        return AppConfig.model_validate(data)
    except Exception as e:
        msg = f"Invalid configuration in {config_path}: {e}"
        raise ConfigError(msg) from e


def _first_error(error: ValidationError) -> str:
    detail = error.errors()[0]
    field = ".".join(str(part) for part in detail["loc"])
    message = str(detail.get("ctx", {}).get("error") or detail["msg"])
    return f"{field}: {message}" if field else message


def _parse_timeout(raw: str, origin: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        msg = f"Invalid {origin} value: '{raw}'. Must be a number of seconds"
        raise ConfigError(msg) from None
    if value <= 0:
        msg = f"Invalid {origin} value: '{raw}'. Must be > 0"
        raise ConfigError(msg)
    return value


def resolve_config(
    config: AppConfig,
    profile_name: str | None = None,
    **cli_overrides: Any,
) -> ResolvedConfig:
    """Resolve configuration using precedence chain.

    CLI > env > profile > config defaults > built-in defaults.
    """
    sources: dict[str, str] = {}
    resolved: dict[str, Any] = {}

    # Layer 1: Built-in defaults
    resolved.update(_SERVICE_DEFAULTS)
    resolved.update(_GENERAL_DEFAULTS)
    for key in resolved:
        sources[key] = "default"

    # Layer 2: Config file global defaults
    for key in config.model_fields_set:
        if key in resolved:
            resolved[key] = getattr(config, key)
            sources[key] = "config"

    # Layer 3: Named profile
    effective_profile = profile_name
    if not effective_profile:
        effective_profile = os.environ.get("QUERY_WORKBENCH_PROFILE")
    if not effective_profile:
        effective_profile = config.default_profile

    if effective_profile:
        if effective_profile not in config.profiles:
            available = (
                ", ".join(sorted(config.profiles.keys())) if config.profiles else "none"
            )
            msg = f"Unknown profile: '{effective_profile}'. Available profiles: {available}"
            raise ConfigError(msg)
        profile = config.profiles[effective_profile]
        for key in profile.model_fields_set:
            resolved[key] = getattr(profile, key)
            sources[key] = f"profile: {effective_profile}"

    # Layer 4: Environment variables
    for env_var, field_name in _ENV_VARS.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        if field_name == "request_timeout":
            resolved[field_name] = _parse_timeout(value, env_var)
        else:
            resolved[field_name] = value
        sources[field_name] = f"env: {env_var}"

    # Layer 5: CLI flags (highest priority)
    cli_to_field = {
        "url": "service_url",
        "timeout": "request_timeout",
        "width": "column_width",
        "format": "default_format",
    }
    for cli_name, field_name in cli_to_field.items():
        value = cli_overrides.get(cli_name)
        if value is not None:
            resolved[field_name] = value
            sources[field_name] = f"cli: --{cli_name}"

    resolved["active_profile"] = effective_profile
    resolved["sources"] = sources
    try:
        return ResolvedConfig(**resolved)
    except ValidationError as e:
        raise ConfigError(_first_error(e)) from None
