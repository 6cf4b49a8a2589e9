"""
OCI Pricing MCP Server v1.0.0
Main entry point: serves the pricing tools over MCP stdio.
"""

from oci_pricing_mcp.server import run


if __name__ == "__main__":
    run()
