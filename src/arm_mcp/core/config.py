"""ARM connection settings resolved from the process environment."""

from __future__ import annotations

import math
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

DEFAULT_TIMEOUT_MS: Final[int] = 30000
DEFAULT_MAX_RETRIES: Final[int] = 2
DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[int] = 8000

_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


class ConfigurationError(ValueError):
    """Raised when a required connection setting is missing."""


@dataclass(frozen=True, slots=True)
class ArmConfig:
    """Immutable connection settings shared by every request."""

    base_url: str
    api_token: str
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_retries: int = DEFAULT_MAX_RETRIES

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


@dataclass(frozen=True, slots=True)
class ServerSettings:
    """Bind address and logging options for the MCP endpoint."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    log_format: str = "json"


def normalize_base_url(raw: str) -> str:
    """Trim, drop one trailing slash and default the scheme to https."""
    trimmed = raw.strip()
    if trimmed.endswith("/"):
        trimmed = trimmed[:-1]
    if _SCHEME.match(trimmed):
        return trimmed
    return f"https://{trimmed}"


def resolve_config(env: Mapping[str, str] | None = None) -> ArmConfig:
    """Build `ArmConfig` from `ARM_*` variables.

    Raises `ConfigurationError` when the base URL or token is absent or blank.
    Malformed numeric settings fall back to their defaults.
    """
    source = os.environ if env is None else env
    base_url = (source.get("ARM_BASE_URL") or "").strip()
    api_token = (source.get("ARM_API_TOKEN") or "").strip()

    if not base_url:
        msg = "Missing ARM_BASE_URL environment variable"
        raise ConfigurationError(msg)
    if not api_token:
        msg = "Missing ARM_API_TOKEN environment variable"
        raise ConfigurationError(msg)

    return ArmConfig(
        base_url=normalize_base_url(base_url),
        api_token=api_token,
        timeout_ms=_parse_number(
            source.get("ARM_TIMEOUT_MS"), default=DEFAULT_TIMEOUT_MS, minimum=1
        ),
        max_retries=_parse_number(
            source.get("ARM_MAX_RETRIES"), default=DEFAULT_MAX_RETRIES, minimum=0
        ),
    )


def resolve_server_settings(env: Mapping[str, str] | None = None) -> ServerSettings:
    source = os.environ if env is None else env
    host = (source.get("ARM_MCP_HOST") or "").strip() or DEFAULT_HOST
    log_format = (source.get("ARM_LOG_FORMAT") or "").strip().lower()
    return ServerSettings(
        host=host,
        port=_parse_number(source.get("ARM_MCP_PORT"), default=DEFAULT_PORT, minimum=1),
        log_level=(source.get("ARM_LOG_LEVEL") or "").strip().upper() or "INFO",
        log_format=log_format if log_format in {"json", "console"} else "json",
    )


def _parse_number(value: str | None, *, default: int, minimum: int) -> int:
    if value is None:
        return default
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    if not math.isfinite(parsed) or parsed < minimum:
        return default
    return int(parsed)
