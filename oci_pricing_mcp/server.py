"""
MCP stdio server.

Builds the cache, catalog loader and real-time client from configuration,
registers every pricing tool and serves them over stdin/stdout.
"""
import asyncio
import json
import sys
from typing import List, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from oci_pricing_mcp.data.cache import PricingCache
from oci_pricing_mcp.data.loader import PricingDataError, PricingDataLoader
from oci_pricing_mcp.data.realtime import RealTimePricingClient
from oci_pricing_mcp.tools.registry import ToolDispatchError, ToolRegistry, build_registry
from oci_pricing_mcp.utils.config import Config, config as default_config
from oci_pricing_mcp.utils.logger import logger, setup_logger


def create_registry(cfg: Optional[Config] = None) -> ToolRegistry:
    """Wire cache, loader and real-time client from configuration."""
    cfg = cfg or default_config
    cache = PricingCache(default_ttl_minutes=cfg.pricing.cache_ttl_minutes)
    loader = PricingDataLoader(
        cache=cache,
        data_file=cfg.pricing.data_path,
        catalog_ttl_minutes=cfg.pricing.catalog_ttl_minutes,
    )
    realtime = RealTimePricingClient(
        cache=cache,
        api_url=cfg.pricing.realtime_api_url,
        timeout=cfg.pricing.realtime_timeout_seconds,
        ttl_minutes=cfg.pricing.realtime_ttl_minutes,
        default_currency=cfg.pricing.default_currency,
    )
    return build_registry(loader, realtime)


def create_server(registry: ToolRegistry, cfg: Optional[Config] = None) -> Server:
    cfg = cfg or default_config
    server = Server(cfg.app.name, version=cfg.app.version)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return [
            types.Tool(name=t.name, description=t.description, inputSchema=t.input_schema())
            for t in registry.list_tools()
        ]

    # Registered directly on the request table: the call_tool decorator folds
    # every exception into an isError result and the error code is lost.
    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        try:
            result = await registry.call(req.params.name, req.params.arguments)
        except ToolDispatchError as e:
            raise McpError(types.ErrorData(code=e.code, message=e.message)) from e
        content = [types.TextContent(type="text", text=json.dumps(result, indent=2, default=str))]
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve(cfg: Optional[Config] = None) -> None:
    cfg = cfg or default_config
    registry = create_registry(cfg)
    # Load eagerly so a broken catalog fails at startup, not on the first call
    registry.loader.get_pricing_data()
    server = create_server(registry, cfg)

    logger.info(
        f"{cfg.app.name} v{cfg.app.version} running on stdio with {len(registry)} tools",
        extra={"event_type": "startup", "tool_count": len(registry)},
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run() -> None:
    """Console script entry point."""
    setup_logger("oci_pricing_mcp", default_config.app.log_level, default_config.app.log_json)
    try:
        asyncio.run(serve())
    except PricingDataError as e:
        logger.error(f"Failed to load pricing catalog: {e}", extra={"event_type": "startup_error"})
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Server stopped", extra={"event_type": "shutdown"})
