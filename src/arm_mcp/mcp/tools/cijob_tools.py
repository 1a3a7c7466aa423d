"""CI job tool adapters for MCP exposure."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias, cast

from arm_mcp.core.request_executor import HTTP_METHODS, HttpMethod
from arm_mcp.core.urls import encode_path_segment, is_origin_relative, scalar_text

ArmOperation: TypeAlias = Literal["quick_deploy", "rollback", "abort", "call"]

QUICK_DEPLOY_PATH = "/api/cijobs/v1/triggerquickdeploy"
ROLLBACK_PATH = "/api/cijobs/v1/rollback"
ABORT_PATH = "/api/cijobs/v1/abort"


class InvalidArgument(ValueError):
    """Raised for a missing or malformed tool argument."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


@dataclass(slots=True)
class ArmToolCall:
    """Canonical ARM request shaped from one tool call."""

    operation: ArmOperation
    path: str
    method: HttpMethod
    query: dict[str, Any] | None = None
    body: dict[str, Any] | None = None
    headers: dict[str, Any] | None = None


ARM_TOOL_OPERATIONS: dict[str, ArmOperation] = {
    "arm_quick_deploy": "quick_deploy",
    "arm_start_rollback": "rollback",
    "arm_abort_ci_job": "abort",
    "arm_call_api": "call",
}


def parse_cijob_tool_call(tool_name: str, arguments: dict[str, Any]) -> ArmToolCall | None:
    """Parse MCP ARM tool call into a request descriptor.

    Returns `None` when the tool is not an ARM tool.
    Raises `InvalidArgument` for malformed arguments.
    """
    operation = ARM_TOOL_OPERATIONS.get(tool_name)
    if operation is None:
        return None

    headers = _optional_object(arguments, "headers")

    if operation == "call":
        path = _optional_string(arguments, "path")
        raw_method = _optional_string(arguments, "method")
        if path is None or raw_method is None:
            msg = "path and method are required"
            raise InvalidArgument("path" if path is None else "method", msg)
        if not is_origin_relative(path):
            msg = "path must be a relative API path such as /api/..."
            raise InvalidArgument("path", msg)
        method = raw_method.upper()
        if method not in HTTP_METHODS:
            msg = f"Invalid method: {raw_method}"
            raise InvalidArgument("method", msg)
        return ArmToolCall(
            operation="call",
            path=path,
            method=cast(HttpMethod, method),
            query=_optional_object(arguments, "query"),
            body=_optional_object(arguments, "body"),
            headers=headers,
        )

    if operation == "rollback":
        return ArmToolCall(
            operation="rollback",
            path=ROLLBACK_PATH,
            method="POST",
            body=_job_body(arguments),
            headers=headers,
        )

    job_name = encode_path_segment(_required_string(arguments, "ciJobName"))
    build_segment = _build_segment(arguments.get("buildNumber"))
    if operation == "quick_deploy":
        return ArmToolCall(
            operation="quick_deploy",
            path=f"{QUICK_DEPLOY_PATH}/{job_name}{build_segment}",
            method="POST",
            body=_job_body(arguments),
            headers=headers,
        )
    return ArmToolCall(
        operation="abort",
        path=f"{ABORT_PATH}/{job_name}{build_segment}",
        method="PUT",
        body=_job_body(arguments),
        headers=headers,
    )


def _job_body(arguments: dict[str, Any]) -> dict[str, Any]:
    return {
        "projectName": _required_string(arguments, "projectName"),
        "title": _required_string(arguments, "title"),
    }


def _build_segment(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, int | float) or not math.isfinite(value):
        msg = "buildNumber must be a finite number"
        raise InvalidArgument("buildNumber", msg)
    return f"/{scalar_text(value)}"


def _required_string(arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    msg = f"{key} must be a non-empty string"
    raise InvalidArgument(key, msg)


def _optional_string(arguments: dict[str, Any], key: str) -> str | None:
    value = arguments.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    msg = f"{key} must be a string"
    raise InvalidArgument(key, msg)


def _optional_object(arguments: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = arguments.get(key)
    if value is None:
        return None
    if isinstance(value, dict):
        return value
    msg = f"{key} must be a JSON object"
    raise InvalidArgument(key, msg)
