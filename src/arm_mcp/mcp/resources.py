"""Static documentation resources served over MCP."""

from __future__ import annotations

import json
from typing import Any

from arm_mcp.mcp.server import (
    SERVER_NAME,
    SERVER_VERSION,
    MCPResource,
    find_resource,
    registered_tools,
)


class UnknownResource(LookupError):
    """Raised when a resource URI is not served."""

    def __init__(self, uri: str) -> None:
        super().__init__(f"Unknown resource URI: {uri}")
        self.uri = uri


_MODELED_APIS: list[dict[str, Any]] = [
    {
        "tool": "arm_quick_deploy",
        "method": "POST",
        "path": "/api/cijobs/v1/triggerquickdeploy/{ciJobName}/{buildNumber?}",
        "body": ["projectName", "title"],
    },
    {
        "tool": "arm_start_rollback",
        "method": "POST",
        "path": "/api/cijobs/v1/rollback",
        "body": ["projectName", "title"],
    },
    {
        "tool": "arm_abort_ci_job",
        "method": "PUT",
        "path": "/api/cijobs/v1/abort/{ciJobName}/{buildNumber?}",
        "body": ["projectName", "title"],
    },
]

_AUTH_GUIDE = "\n".join(
    [
        "# ARM Auth",
        "",
        "Set these environment variables before starting the MCP server:",
        "",
        "- `ARM_BASE_URL`: Your ARM org URL (for example `pilot.autorabit.com` "
        "or `https://pilot.autorabit.com`)",
        "- `ARM_API_TOKEN`: API token sent as `token` header",
        "- `ARM_TIMEOUT_MS` (optional): request timeout in milliseconds, default `30000`",
        "- `ARM_MAX_RETRIES` (optional): retry count for network failures, default `2`",
        "",
        "Default headers sent:",
        "- `token: <ARM_API_TOKEN>`",
        "- `Accept: application/json`",
        "- `Content-Type: application/json` when body exists",
    ]
)


def read_resource(uri: str) -> dict[str, Any]:
    """Return the MCP `resources/read` payload for one URI."""
    resource = find_resource(uri)
    if resource is None:
        raise UnknownResource(uri)
    return {"contents": [{"uri": uri, "mimeType": resource.mime_type, "text": _render(resource)}]}


def _render(resource: MCPResource) -> str:
    if resource.uri == "arm://docs/overview":
        return json.dumps(_overview(), indent=2)
    if resource.uri == "arm://docs/cijobs-v1":
        return json.dumps(_MODELED_APIS, indent=2)
    return _AUTH_GUIDE


def _overview() -> dict[str, Any]:
    return {
        "server": SERVER_NAME,
        "version": SERVER_VERSION,
        "capabilities": ["tools", "resources", "prompts"],
        "tools": [tool.name for tool in registered_tools()],
        "modeledApis": [f"{api['method']} {api['path']}" for api in _MODELED_APIS],
        "utilityFeatures": [
            "token header auth",
            "Base URL normalization with implicit https",
            "Timeout + retries",
            "Structured JSON response wrapping",
            "Generic endpoint tool",
        ],
    }
