"""
OCI Pricing MCP Server
======================
Oracle Cloud Infrastructure pricing lookups and cost estimates exposed as
Model Context Protocol tools.
"""

__version__ = "1.0.0"
