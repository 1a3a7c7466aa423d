"""ARM MCP server tool/resource/prompt catalog."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final

SERVER_NAME: Final[str] = "arm-mcp-server"
SERVER_VERSION: Final[str] = "0.2.0"
PROTOCOL_VERSION: Final[str] = "2025-11-25"


@dataclass(slots=True)
class MCPTool:
    """MCP tool descriptor exposed by the ARM server."""

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(slots=True)
class MCPResource:
    """MCP resource descriptor exposed by the ARM server."""

    uri: str
    name: str
    description: str
    mime_type: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "uri": self.uri,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type,
        }


@dataclass(slots=True)
class MCPPromptArgument:
    name: str
    description: str
    required: bool = True


@dataclass(slots=True)
class MCPPrompt:
    """MCP prompt descriptor exposed by the ARM server."""

    name: str
    description: str
    arguments: list[MCPPromptArgument] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [
                {
                    "name": argument.name,
                    "required": argument.required,
                    "description": argument.description,
                }
                for argument in self.arguments
            ],
        }


_EXTRA_HEADERS_SCHEMA: Final[dict[str, Any]] = {
    "type": "object",
    "description": "Optional extra headers",
    "additionalProperties": True,
}


def _cijob_schema(*, with_job: bool) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    required: list[str] = []
    if with_job:
        properties["ciJobName"] = {"type": "string", "description": "Case-sensitive CI job name"}
        properties["buildNumber"] = {
            "type": "number",
            "description": "Optional build number. If omitted, latest build is used.",
        }
        required.append("ciJobName")
    properties["projectName"] = {
        "type": "string",
        "description": "Case-sensitive CI job project name",
    }
    properties["title"] = {"type": "string", "description": "CI job build label"}
    properties["headers"] = dict(_EXTRA_HEADERS_SCHEMA)
    required.extend(["projectName", "title"])
    return {
        "type": "object",
        "properties": properties,
        "required": required,
        "additionalProperties": False,
    }


_REGISTERED_TOOLS: Final[list[MCPTool]] = [
    MCPTool(
        name="arm_quick_deploy",
        description=(
            "POST /api/cijobs/v1/triggerquickdeploy/{ciJobName}/{buildNumber?}. "
            "Triggers quick deploy."
        ),
        input_schema=_cijob_schema(with_job=True),
    ),
    MCPTool(
        name="arm_start_rollback",
        description="POST /api/cijobs/v1/rollback. Initiates rollback operation for CI job.",
        input_schema=_cijob_schema(with_job=False),
    ),
    MCPTool(
        name="arm_abort_ci_job",
        description="PUT /api/cijobs/v1/abort/{ciJobName}/{buildNumber?}. Aborts ongoing CI job.",
        input_schema=_cijob_schema(with_job=True),
    ),
    MCPTool(
        name="arm_call_api",
        description=(
            "Generic ARM API request tool for additional endpoints "
            "not yet modeled as dedicated tools."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "path": {"type": "string", "description": "Endpoint path starting with /api/..."},
                "method": {"type": "string", "enum": ["GET", "POST", "PUT", "PATCH", "DELETE"]},
                "query": {"type": "object", "additionalProperties": True},
                "body": {"type": "object", "additionalProperties": True},
                "headers": {"type": "object", "additionalProperties": True},
            },
            "required": ["path", "method"],
            "additionalProperties": False,
        },
    ),
]

_REGISTERED_RESOURCES: Final[list[MCPResource]] = [
    MCPResource(
        uri="arm://docs/overview",
        name="ARM MCP Overview",
        description="Current ARM API tool mappings and utilities",
        mime_type="application/json",
    ),
    MCPResource(
        uri="arm://docs/cijobs-v1",
        name="ARM CIJobs v1 APIs",
        description="Modeled APIs from /api/cijobs/v1",
        mime_type="application/json",
    ),
    MCPResource(
        uri="arm://docs/auth",
        name="ARM Auth Guide",
        description="Required environment variables and request headers",
        mime_type="text/markdown",
    ),
]

_REGISTERED_PROMPTS: Final[list[MCPPrompt]] = [
    MCPPrompt(
        name="arm_quick_deploy_guide",
        description="Guide the model to execute quick deploy via ARM CI Jobs APIs",
        arguments=[
            MCPPromptArgument("ci_job_name", "Case-sensitive CI job name"),
            MCPPromptArgument("project_name", "Case-sensitive CI project name"),
            MCPPromptArgument("title", "Build label"),
            MCPPromptArgument("build_number", "Optional build number", required=False),
        ],
    ),
    MCPPrompt(
        name="arm_rollback_guide",
        description="Guide the model to decide and execute rollback via ARM APIs",
        arguments=[
            MCPPromptArgument("project_name", "Case-sensitive CI project name"),
            MCPPromptArgument("title", "Build label"),
        ],
    ),
]


def registered_tools() -> list[MCPTool]:
    """Return all ARM MCP tools."""
    return list(_REGISTERED_TOOLS)


def registered_resources() -> list[MCPResource]:
    """Return all ARM MCP resources."""
    return list(_REGISTERED_RESOURCES)


def registered_prompts() -> list[MCPPrompt]:
    """Return all ARM MCP prompts."""
    return list(_REGISTERED_PROMPTS)


def find_tool(name: str) -> MCPTool | None:
    """Look up one MCP tool by name."""
    for tool in _REGISTERED_TOOLS:
        if tool.name == name:
            return tool
    return None


def find_resource(uri: str) -> MCPResource | None:
    for resource in _REGISTERED_RESOURCES:
        if resource.uri == uri:
            return resource
    return None


def find_prompt(name: str) -> MCPPrompt | None:
    for prompt in _REGISTERED_PROMPTS:
        if prompt.name == name:
            return prompt
    return None
