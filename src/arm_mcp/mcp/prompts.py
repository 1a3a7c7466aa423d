"""Guided workflow prompts served over MCP."""

from __future__ import annotations

from typing import Any

from arm_mcp.mcp.server import find_prompt


class UnknownPrompt(LookupError):
    """Raised when no prompt is registered under a name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown prompt: {name}")
        self.name = name


def get_prompt(name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return the MCP `prompts/get` payload for one prompt.

    String arguments are substituted; anything else renders as a placeholder.
    """
    if find_prompt(name) is None:
        raise UnknownPrompt(name)
    args = arguments or {}

    if name == "arm_quick_deploy_guide":
        lines = [
            "Execute quick deploy for this ARM CI job:",
            f"- ci_job_name: {_text(args, 'ci_job_name')}",
            f"- project_name: {_text(args, 'project_name')}",
            f"- title: {_text(args, 'title')}",
            f"- build_number: {_text(args, 'build_number', '<optional_build_number>')}",
            "",
            "Use tool `arm_quick_deploy` and summarize:",
            "- HTTP status",
            "- deployment initiation message",
            "- rollback validation flag",
        ]
        return _prompt("Quick deploy execution flow", lines)

    lines = [
        "Attempt rollback for this ARM CI job payload:",
        f"- project_name: {_text(args, 'project_name')}",
        f"- title: {_text(args, 'title')}",
        "",
        "Call `arm_start_rollback` and classify result as:",
        "- rollback initiated",
        "- not eligible",
        "- unknown",
        "",
        "Then provide next action recommendation.",
    ]
    return _prompt("Rollback decision and execution flow", lines)


def _text(args: dict[str, Any], key: str, placeholder: str | None = None) -> str:
    value = args.get(key)
    if isinstance(value, str):
        return value
    return placeholder or f"<{key}>"


def _prompt(description: str, lines: list[str]) -> dict[str, Any]:
    return {
        "description": description,
        "messages": [
            {
                "role": "user",
                "content": {"type": "text", "text": "\n".join(lines)},
            }
        ],
    }
