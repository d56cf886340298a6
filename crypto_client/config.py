"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coinbase.com/v2/"
DEFAULT_API_VERSION = "2017-08-31"

KEY_ENV_VAR = "COINBASE_KEY"
SECRET_ENV_VAR = "COINBASE_SECRET"

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Credentials:
    key: str = ""
    secret: str = ""

    def __repr__(self) -> str:
        return f"Credentials(key={self.key!r}, secret='***')"


@dataclass(frozen=True)
class ApiConfig:
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    request_timeout: float | None = None


@dataclass(frozen=True)
class AppConfig:
    api: ApiConfig = field(default_factory=ApiConfig)
    credentials: Credentials = field(default_factory=Credentials)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_api(raw: dict[str, Any]) -> ApiConfig:
    timeout = raw.get("request_timeout")
    return ApiConfig(
        base_url=str(raw.get("base_url") or DEFAULT_BASE_URL),
        api_version=str(raw.get("api_version") or DEFAULT_API_VERSION),
        request_timeout=float(timeout) if timeout not in (None, "") else None,
    )


def _build_credentials(raw: dict[str, Any]) -> Credentials:
    """Credentials from YAML when set, otherwise from the environment."""
    return Credentials(
        key=raw.get("key") or os.environ.get(KEY_ENV_VAR, ""),
        secret=raw.get("secret") or os.environ.get(SECRET_ENV_VAR, ""),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. When omitted, ``config.yaml`` in the
            current directory is used if present, otherwise built-in defaults.
            An explicit path that does not exist is an error. A ``.env`` file is
            searched for from the current directory upwards.
    """
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path)

    raw: dict[str, Any] = {}
    if config_path is None:
        default_path = Path.cwd() / "config.yaml"
        if default_path.exists():
            config_path = default_path
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with open(config_path) as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")
        raw = _interpolate_env(raw)

    cfg = AppConfig(
        api=_build_api(raw.get("api") or {}),
        credentials=_build_credentials(raw.get("credentials") or {}),
    )

    _validate(cfg)
    if config_path is not None:
        logger.info("Configuration loaded from %s", config_path)
    else:
        logger.info("No config file found, using defaults")
    if not cfg.credentials.key or not cfg.credentials.secret:
        logger.warning(
            "%s / %s not set; requests will be rejected as unauthenticated",
            KEY_ENV_VAR,
            SECRET_ENV_VAR,
        )
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration."""
    base_url = cfg.api.base_url
    if not base_url.startswith(("http://", "https://")):
        raise ValueError(f"api.base_url must be an http(s) URL: {base_url!r}")
    if not base_url.endswith("/"):
        raise ValueError(f"api.base_url must end with '/': {base_url!r}")
    if not cfg.api.api_version:
        raise ValueError("api.api_version must not be empty")
    if cfg.api.request_timeout is not None and cfg.api.request_timeout <= 0:
        raise ValueError("api.request_timeout must be positive")
