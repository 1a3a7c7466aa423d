"""Structured logging configuration using structlog."""

from __future__ import annotations

import sys
from collections.abc import MutableMapping
from typing import Any, Final, cast

import structlog
from structlog.types import EventDict, WrappedLogger

SENSITIVE_KEYS: Final[frozenset[str]] = frozenset(
    {
        "token",
        "api_token",
        "api_key",
        "apikey",
        "authorization",
        "password",
        "secret",
        "credential",
        "credentials",
    }
)

_LEVELS: Final[dict[str, int]] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


class SecretRedactor:
    """Processor that masks values stored under sensitive key names."""

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        return cast(EventDict, self._redact(event_dict))

    def _redact(self, data: MutableMapping[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            if key.lower() in SENSITIVE_KEYS:
                result[key] = "[REDACTED]"
            elif isinstance(value, MutableMapping):
                result[key] = self._redact(value)
            else:
                result[key] = value
        return result


def setup_logging(level: str = "INFO", format: str = "json") -> None:
    """Configure structlog for the process.

    `format` is `json` for machine-readable output or `console` for development.
    Output goes to stderr so it never interleaves with protocol traffic.
    """
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        SecretRedactor(),
    ]
    if format == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_LEVELS.get(level.upper(), 20)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
