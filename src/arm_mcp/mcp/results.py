"""MCP tool result rendering."""

from __future__ import annotations

import json
from typing import Any

from arm_mcp.core.request_executor import RequestOutcome


def format_tool_result(outcome: RequestOutcome | Any) -> dict[str, Any]:
    """Wrap a result as a single indented-JSON text content item."""
    payload = outcome.to_dict() if isinstance(outcome, RequestOutcome) else outcome
    return {
        "content": [
            {
                "type": "text",
                "text": json.dumps(payload, indent=2, ensure_ascii=False),
            }
        ]
    }
