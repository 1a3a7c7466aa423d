"""Timeout-bounded, retrying HTTP execution against the ARM API."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import asdict, dataclass, field
from typing import Any, Final, Literal, TypeAlias

import httpx

from arm_mcp.core.config import ArmConfig
from arm_mcp.core.urls import compose_url, scalar_text
from arm_mcp.observability.logging import get_logger

HttpMethod: TypeAlias = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]
Sleep: TypeAlias = Callable[[float], Awaitable[None]]

HTTP_METHODS: Final[frozenset[str]] = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
BACKOFF_STEP_SECONDS: Final[float] = 0.3
TOKEN_HEADER: Final[str] = "token"

logger = get_logger(__name__)


@dataclass(slots=True)
class RequestOutcome:
    """Status, decoded body and lower-cased headers of one completed response."""

    status: int
    data: Any
    headers: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class RequestFailure(RuntimeError):
    """Raised when every attempt failed at the transport level."""

    def __init__(self, message: str, *, attempts: int, last_error: BaseException | None) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class RequestExecutor:
    """Issue ARM requests with a per-attempt timeout and linear backoff.

    HTTP error statuses are returned as outcomes; only transport failures
    (network errors, expired timeouts, undecodable JSON bodies) are retried.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep | None = None,
    ) -> None:
        self._transport = transport
        self._sleep = sleep or asyncio.sleep

    async def execute(
        self,
        config: ArmConfig,
        path: str,
        method: HttpMethod,
        *,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, Any] | None = None,
    ) -> RequestOutcome:
        url = compose_url(config.base_url, path, query)
        request_headers = build_headers(config, has_body=body is not None, extra=headers)
        content = None if body is None else json.dumps(body).encode("utf-8")
        total_attempts = config.max_retries + 1
        last_error: BaseException | None = None

        async with httpx.AsyncClient(
            transport=self._transport, timeout=None, follow_redirects=True
        ) as client:
            for attempt in range(total_attempts):
                try:
                    async with asyncio.timeout(config.timeout_seconds):
                        response = await client.request(
                            method, url, headers=request_headers, content=content
                        )
                        outcome = _read_outcome(response)
                except (httpx.HTTPError, TimeoutError, ValueError) as exc:
                    last_error = exc
                    logger.warning(
                        "ARM request attempt failed",
                        method=method,
                        path=path,
                        attempt=attempt,
                        error=_describe(exc),
                    )
                    if attempt + 1 < total_attempts:
                        await self._sleep(backoff_seconds(attempt))
                    continue

                logger.info(
                    "ARM request completed",
                    method=method,
                    path=path,
                    status_code=outcome.status,
                    attempt=attempt,
                )
                return outcome

        logger.error(
            "ARM request failed after all retries",
            method=method,
            path=path,
            attempts=total_attempts,
            error=_describe(last_error),
        )
        msg = f"ARM request failed after {total_attempts} attempts: {_describe(last_error)}"
        raise RequestFailure(msg, attempts=total_attempts, last_error=last_error) from last_error


def build_headers(
    config: ArmConfig,
    *,
    has_body: bool,
    extra: Mapping[str, Any] | None = None,
) -> dict[str, str]:
    """Default ARM headers, overridable by caller-supplied extras."""
    headers = {"Accept": "application/json", TOKEN_HEADER: config.api_token}
    if has_body:
        headers["Content-Type"] = "application/json"
    for key, value in (extra or {}).items():
        if value is None:
            continue
        for existing in [name for name in headers if name.lower() == key.lower()]:
            del headers[existing]
        headers[key] = scalar_text(value)
    return headers


def backoff_seconds(attempt: int) -> float:
    """Wait inserted after failed attempt number `attempt` (zero-based)."""
    return (attempt + 1) * BACKOFF_STEP_SECONDS


def _read_outcome(response: httpx.Response) -> RequestOutcome:
    content_type = response.headers.get("content-type", "").lower()
    if "application/json" in content_type:
        data = response.json() if response.content.strip() else None
    else:
        data = response.text
    headers = {key.lower(): value for key, value in response.headers.items()}
    return RequestOutcome(status=response.status_code, data=data, headers=headers)


def _describe(error: BaseException | None) -> str:
    if error is None:
        return "unknown error"
    if isinstance(error, TimeoutError):
        return "request timed out"
    return str(error) or type(error).__name__
