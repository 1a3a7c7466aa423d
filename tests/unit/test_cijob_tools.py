from __future__ import annotations

from typing import Any

import pytest

from arm_mcp.mcp.tools.cijob_tools import InvalidArgument, parse_cijob_tool_call

JOB_ARGS: dict[str, Any] = {"ciJobName": "MyJob", "projectName": "Core", "title": "Release 1"}


def test_parse_quick_deploy_without_build_number() -> None:
    call = parse_cijob_tool_call("arm_quick_deploy", dict(JOB_ARGS))
    assert call is not None
    assert call.operation == "quick_deploy"
    assert call.method == "POST"
    assert call.path == "/api/cijobs/v1/triggerquickdeploy/MyJob"
    assert call.body == {"projectName": "Core", "title": "Release 1"}
    assert call.headers is None


def test_parse_quick_deploy_with_build_number() -> None:
    call = parse_cijob_tool_call("arm_quick_deploy", {**JOB_ARGS, "buildNumber": 7})
    assert call is not None
    assert call.path == "/api/cijobs/v1/triggerquickdeploy/MyJob/7"


def test_parse_quick_deploy_renders_integral_float_build_number() -> None:
    call = parse_cijob_tool_call("arm_quick_deploy", {**JOB_ARGS, "buildNumber": 12.0})
    assert call is not None
    assert call.path.endswith("/MyJob/12")


def test_parse_quick_deploy_encodes_job_name_and_trims_strings() -> None:
    call = parse_cijob_tool_call(
        "arm_quick_deploy",
        {"ciJobName": " Nightly Build/EU ", "projectName": " Core ", "title": " R1 "},
    )
    assert call is not None
    assert call.path == "/api/cijobs/v1/triggerquickdeploy/Nightly%20Build%2FEU"
    assert call.body == {"projectName": "Core", "title": "R1"}


def test_parse_quick_deploy_blank_title_names_field() -> None:
    with pytest.raises(InvalidArgument, match="title must be a non-empty string") as excinfo:
        parse_cijob_tool_call("arm_quick_deploy", {**JOB_ARGS, "title": "   "})
    assert excinfo.value.field == "title"


def test_parse_quick_deploy_wrong_typed_job_name() -> None:
    with pytest.raises(InvalidArgument) as excinfo:
        parse_cijob_tool_call("arm_quick_deploy", {**JOB_ARGS, "ciJobName": 42})
    assert excinfo.value.field == "ciJobName"


@pytest.mark.parametrize("build_number", ["7", True, float("nan"), float("inf")])
def test_parse_quick_deploy_rejects_non_numeric_build_number(build_number: Any) -> None:
    with pytest.raises(InvalidArgument) as excinfo:
        parse_cijob_tool_call("arm_quick_deploy", {**JOB_ARGS, "buildNumber": build_number})
    assert excinfo.value.field == "buildNumber"


def test_parse_rollback() -> None:
    call = parse_cijob_tool_call(
        "arm_start_rollback",
        {"projectName": "Core", "title": "R1", "headers": {"X-Request-Id": "r-1"}},
    )
    assert call is not None
    assert call.operation == "rollback"
    assert call.method == "POST"
    assert call.path == "/api/cijobs/v1/rollback"
    assert call.body == {"projectName": "Core", "title": "R1"}
    assert call.headers == {"X-Request-Id": "r-1"}


def test_parse_rollback_requires_project_name() -> None:
    with pytest.raises(InvalidArgument, match="projectName"):
        parse_cijob_tool_call("arm_start_rollback", {"title": "R1"})


def test_parse_abort_with_build_number() -> None:
    call = parse_cijob_tool_call("arm_abort_ci_job", {**JOB_ARGS, "buildNumber": 3})
    assert call is not None
    assert call.operation == "abort"
    assert call.method == "PUT"
    assert call.path == "/api/cijobs/v1/abort/MyJob/3"


def test_parse_abort_without_build_number() -> None:
    call = parse_cijob_tool_call("arm_abort_ci_job", {**JOB_ARGS, "buildNumber": None})
    assert call is not None
    assert call.path == "/api/cijobs/v1/abort/MyJob"


def test_parse_headers_must_be_object() -> None:
    with pytest.raises(InvalidArgument, match="headers must be a JSON object"):
        parse_cijob_tool_call("arm_abort_ci_job", {**JOB_ARGS, "headers": ["x"]})


def test_parse_generic_call_normalizes_method() -> None:
    call = parse_cijob_tool_call(
        "arm_call_api",
        {
            "path": "/api/cijobs/v1/status",
            "method": "get",
            "query": {"jobs": ["a", "b"]},
            "headers": {"X-Env": "prod"},
        },
    )
    assert call is not None
    assert call.operation == "call"
    assert call.method == "GET"
    assert call.query == {"jobs": ["a", "b"]}
    assert call.body is None
    assert call.headers == {"X-Env": "prod"}


def test_parse_generic_call_rejects_unsupported_method() -> None:
    with pytest.raises(InvalidArgument, match="Invalid method") as excinfo:
        parse_cijob_tool_call("arm_call_api", {"path": "/api/x", "method": "head"})
    assert excinfo.value.field == "method"


@pytest.mark.parametrize(
    ("arguments", "field"),
    [
        ({"method": "GET"}, "path"),
        ({"path": "/api/x"}, "method"),
        ({"path": " ", "method": "GET"}, "path"),
    ],
)
def test_parse_generic_call_requires_path_and_method(arguments: dict[str, Any], field: str) -> None:
    with pytest.raises(InvalidArgument, match="path and method are required") as excinfo:
        parse_cijob_tool_call("arm_call_api", arguments)
    assert excinfo.value.field == field


def test_parse_generic_call_body_must_be_object() -> None:
    with pytest.raises(InvalidArgument, match="body must be a JSON object"):
        parse_cijob_tool_call("arm_call_api", {"path": "/api/x", "method": "POST", "body": "x"})


def test_parse_non_arm_tool_returns_none() -> None:
    assert parse_cijob_tool_call("arm_unknown", {}) is None


@pytest.mark.parametrize(
    "path",
    ["http://[bad", "//evil.example/api/x", "https://evil.example/api/x"],
)
def test_parse_generic_call_rejects_non_relative_path(path: str) -> None:
    with pytest.raises(InvalidArgument, match="relative API path") as excinfo:
        parse_cijob_tool_call("arm_call_api", {"path": path, "method": "GET"})
    assert excinfo.value.field == "path"
