"""
MCP tool definitions
====================
Input schemas and the registry that dispatches tool calls to the pricing servers.
"""
from oci_pricing_mcp.tools.registry import ToolDispatchError, ToolRegistry, ToolSpec, build_registry

__all__ = [
    "ToolDispatchError",
    "ToolRegistry",
    "ToolSpec",
    "build_registry",
]
