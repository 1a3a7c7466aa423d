from __future__ import annotations

import json

import pytest

from arm_mcp.mcp.prompts import UnknownPrompt, get_prompt
from arm_mcp.mcp.resources import UnknownResource, read_resource


def test_read_overview_resource() -> None:
    payload = read_resource("arm://docs/overview")

    content = payload["contents"][0]
    assert content["uri"] == "arm://docs/overview"
    assert content["mimeType"] == "application/json"
    overview = json.loads(content["text"])
    assert overview["server"] == "arm-mcp-server"
    assert overview["version"] == "0.2.0"
    assert "POST /api/cijobs/v1/rollback" in overview["modeledApis"]
    assert "arm_call_api" in overview["tools"]


def test_read_cijobs_resource_lists_modeled_endpoints() -> None:
    content = read_resource("arm://docs/cijobs-v1")["contents"][0]
    apis = json.loads(content["text"])

    assert [api["tool"] for api in apis] == [
        "arm_quick_deploy",
        "arm_start_rollback",
        "arm_abort_ci_job",
    ]
    assert all(api["body"] == ["projectName", "title"] for api in apis)


def test_read_auth_resource_is_markdown() -> None:
    content = read_resource("arm://docs/auth")["contents"][0]
    assert content["mimeType"] == "text/markdown"
    assert content["text"].startswith("# ARM Auth")
    assert "ARM_API_TOKEN" in content["text"]


def test_read_unknown_resource() -> None:
    with pytest.raises(UnknownResource, match="Unknown resource URI: arm://nope"):
        read_resource("arm://nope")


def test_quick_deploy_prompt_substitutes_arguments() -> None:
    prompt = get_prompt(
        "arm_quick_deploy_guide",
        {"ci_job_name": "MyJob", "project_name": "Core", "title": "R1", "build_number": 9},
    )

    assert prompt["description"] == "Quick deploy execution flow"
    message = prompt["messages"][0]
    assert message["role"] == "user"
    text = message["content"]["text"]
    assert "- ci_job_name: MyJob" in text
    assert "- build_number: <optional_build_number>" in text
    assert "arm_quick_deploy" in text


def test_rollback_prompt_uses_placeholders() -> None:
    text = get_prompt("arm_rollback_guide")["messages"][0]["content"]["text"]
    assert "- project_name: <project_name>" in text
    assert "- title: <title>" in text
    assert "arm_start_rollback" in text


def test_unknown_prompt() -> None:
    with pytest.raises(UnknownPrompt, match="Unknown prompt: other"):
        get_prompt("other")
