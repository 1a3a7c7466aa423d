"""Shared API dependency providers."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Request

from arm_mcp.core.config import ArmConfig, resolve_config
from arm_mcp.core.operation_dispatcher import OperationDispatcher

ConfigProvider = Callable[[], ArmConfig]

_OPERATION_DISPATCHER = OperationDispatcher()


def get_config_provider(request: Request) -> ConfigProvider:
    """Return the startup config when one was bound, else resolve from the environment."""
    bound: ArmConfig | None = getattr(request.app.state, "arm_config", None)
    if bound is not None:
        return lambda: bound
    return resolve_config


def get_operation_dispatcher() -> OperationDispatcher:
    return _OPERATION_DISPATCHER
