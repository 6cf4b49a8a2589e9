"""Category pricing servers"""

from oci_pricing_mcp.mcp_servers.base import BasePricingServer
from oci_pricing_mcp.mcp_servers.calculator_server import PRESETS, CalculatorServer
from oci_pricing_mcp.mcp_servers.compute_server import ComputeServer
from oci_pricing_mcp.mcp_servers.core_server import CoreServer
from oci_pricing_mcp.mcp_servers.database_server import DatabaseServer
from oci_pricing_mcp.mcp_servers.kubernetes_server import KubernetesServer
from oci_pricing_mcp.mcp_servers.multicloud_server import MulticloudServer
from oci_pricing_mcp.mcp_servers.networking_server import NetworkingServer
from oci_pricing_mcp.mcp_servers.services_server import ServicesServer
from oci_pricing_mcp.mcp_servers.storage_server import StorageServer

__all__ = [
    "BasePricingServer",
    "CalculatorServer",
    "ComputeServer",
    "CoreServer",
    "DatabaseServer",
    "KubernetesServer",
    "MulticloudServer",
    "NetworkingServer",
    "PRESETS",
    "ServicesServer",
    "StorageServer",
]
