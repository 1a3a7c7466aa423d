"""FastAPI app entrypoint."""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from arm_mcp.api.routes.mcp_transport import router as mcp_transport_router
from arm_mcp.core.config import ArmConfig, resolve_config, resolve_server_settings
from arm_mcp.mcp.server import SERVER_NAME, SERVER_VERSION
from arm_mcp.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(config: ArmConfig | None = None) -> FastAPI:
    app = FastAPI(title="ARM MCP", version=SERVER_VERSION)
    app.state.arm_config = config
    app.include_router(mcp_transport_router)

    @app.get("/api/v1/health", tags=["system"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/v1/mcp/.well-known", tags=["system"])
    async def mcp_discovery() -> dict[str, str]:
        return {
            "name": SERVER_NAME,
            "transport": "streamable-http",
            "endpoint": "/mcp",
        }

    return app


def run() -> None:
    settings = resolve_server_settings()
    setup_logging(settings.log_level, settings.log_format)
    config = resolve_config()
    logger.info(
        "Starting ARM MCP server",
        base_url=config.base_url,
        timeout_ms=config.timeout_ms,
        max_retries=config.max_retries,
        host=settings.host,
        port=settings.port,
    )
    uvicorn.run(create_app(config), host=settings.host, port=settings.port, log_config=None)
