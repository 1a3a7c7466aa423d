"""MCP JSON-RPC transport endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from arm_mcp.api.deps import ConfigProvider, get_config_provider, get_operation_dispatcher
from arm_mcp.core.config import ConfigurationError
from arm_mcp.core.operation_dispatcher import OperationDispatcher, UnknownOperation
from arm_mcp.core.request_executor import RequestFailure
from arm_mcp.mcp.prompts import UnknownPrompt, get_prompt
from arm_mcp.mcp.resources import UnknownResource, read_resource
from arm_mcp.mcp.results import format_tool_result
from arm_mcp.mcp.server import (
    PROTOCOL_VERSION,
    SERVER_NAME,
    SERVER_VERSION,
    registered_prompts,
    registered_resources,
    registered_tools,
)
from arm_mcp.mcp.tools.cijob_tools import InvalidArgument
from arm_mcp.observability.logging import get_logger

router = APIRouter(tags=["mcp-transport"])
logger = get_logger(__name__)

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def _response(request_id: str | int | None, result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _error(
    request_id: str | int | None,
    code: int,
    message: str,
    data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": request_id, "error": error}


@router.post("/mcp")
async def mcp_transport(
    payload: dict[str, Any],
    config_provider: ConfigProvider = Depends(get_config_provider),
    dispatcher: OperationDispatcher = Depends(get_operation_dispatcher),
) -> dict[str, Any]:
    request_id = payload.get("id")
    method = payload.get("method")
    params = payload.get("params") or {}

    if not isinstance(method, str):
        return _error(request_id, INVALID_REQUEST, "Invalid method")
    if not isinstance(params, dict):
        return _error(request_id, INVALID_PARAMS, "Invalid params")

    if method == "initialize":
        return _response(
            request_id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
                "capabilities": {
                    "tools": {"listChanged": False},
                    "resources": {"subscribe": False, "listChanged": False},
                    "prompts": {"listChanged": False},
                },
            },
        )

    if method in {"notifications/initialized", "ping"}:
        return _response(request_id, {})

    if method == "tools/list":
        return _response(request_id, {"tools": [tool.to_dict() for tool in registered_tools()]})

    if method == "resources/list":
        resources = [resource.to_dict() for resource in registered_resources()]
        return _response(request_id, {"resources": resources})

    if method == "prompts/list":
        prompts = [prompt.to_dict() for prompt in registered_prompts()]
        return _response(request_id, {"prompts": prompts})

    if method == "tools/call":
        tool_name = params.get("name")
        arguments = params.get("arguments") or {}
        if not isinstance(tool_name, str):
            return _error(request_id, INVALID_PARAMS, "Missing tool name")
        if not isinstance(arguments, dict):
            return _error(request_id, INVALID_PARAMS, "Invalid tool arguments")
        return await _handle_tool_call(
            request_id,
            tool_name=tool_name,
            arguments=arguments,
            config_provider=config_provider,
            dispatcher=dispatcher,
        )

    if method == "resources/read":
        uri = params.get("uri")
        if not isinstance(uri, str):
            return _error(request_id, INVALID_PARAMS, "Missing resource uri")
        try:
            return _response(request_id, read_resource(uri))
        except UnknownResource as exc:
            return _error(request_id, INVALID_REQUEST, str(exc))

    if method == "prompts/get":
        name = params.get("name")
        prompt_args = params.get("arguments") or {}
        if not isinstance(name, str):
            return _error(request_id, INVALID_PARAMS, "Missing prompt name")
        if not isinstance(prompt_args, dict):
            return _error(request_id, INVALID_PARAMS, "Invalid prompt arguments")
        try:
            return _response(request_id, get_prompt(name, prompt_args))
        except UnknownPrompt as exc:
            return _error(request_id, INVALID_REQUEST, str(exc))

    return _error(request_id, METHOD_NOT_FOUND, f"Unknown method: {method}")


async def _handle_tool_call(
    request_id: str | int | None,
    *,
    tool_name: str,
    arguments: dict[str, Any],
    config_provider: ConfigProvider,
    dispatcher: OperationDispatcher,
) -> dict[str, Any]:
    try:
        config = config_provider()
        outcome = await dispatcher.dispatch(config, tool_name, arguments)
    except ConfigurationError as exc:
        return _error(request_id, INVALID_REQUEST, str(exc))
    except InvalidArgument as exc:
        return _error(request_id, INVALID_PARAMS, str(exc), {"field": exc.field})
    except UnknownOperation as exc:
        return _error(request_id, METHOD_NOT_FOUND, str(exc))
    except RequestFailure as exc:
        return _error(request_id, INTERNAL_ERROR, str(exc), {"attempts": exc.attempts})
    logger.info("ARM tool call completed", tool=tool_name, status_code=outcome.status)
    return _response(request_id, format_tool_result(outcome))
