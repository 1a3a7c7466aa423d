"""Route named ARM operations onto the request executor."""

from __future__ import annotations

from typing import Any

from arm_mcp.core.config import ArmConfig
from arm_mcp.core.request_executor import RequestExecutor, RequestOutcome
from arm_mcp.mcp.tools.cijob_tools import ArmToolCall, parse_cijob_tool_call
from arm_mcp.observability.logging import get_logger

logger = get_logger(__name__)


class UnknownOperation(LookupError):
    """Raised when no ARM operation is registered under a tool name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class OperationDispatcher:
    """Validate tool arguments and execute the matching ARM request."""

    def __init__(self, executor: RequestExecutor | None = None) -> None:
        self._executor = executor or RequestExecutor()

    def prepare(self, name: str, arguments: dict[str, Any]) -> ArmToolCall:
        """Shape one operation into a request descriptor without sending it."""
        call = parse_cijob_tool_call(name, arguments)
        if call is None:
            raise UnknownOperation(name)
        return call

    async def dispatch(
        self,
        config: ArmConfig,
        name: str,
        arguments: dict[str, Any],
    ) -> RequestOutcome:
        call = self.prepare(name, arguments)
        logger.info(
            "Dispatching ARM operation",
            tool=name,
            operation=call.operation,
            method=call.method,
            path=call.path,
        )
        return await self._executor.execute(
            config,
            call.path,
            call.method,
            query=call.query,
            body=call.body,
            headers=call.headers,
        )
