"""
Tool registry: the fixed list of MCP tools and their dispatch.

Every tool is a ToolSpec pairing a pydantic input model with a bound method
on one of the category servers. ToolRegistry.call() validates arguments,
awaits coroutine handlers, records per-server call metrics and maps every
failure onto a JSON-RPC error code.
"""
import inspect
import time
from typing import Any, Callable, Dict, List, Optional, Type

from mcp.types import INTERNAL_ERROR, METHOD_NOT_FOUND
from pydantic import BaseModel, ConfigDict, ValidationError

from oci_pricing_mcp.data.loader import PricingDataLoader
from oci_pricing_mcp.data.realtime import RealTimePricingClient
from oci_pricing_mcp.mcp_servers import (
    BasePricingServer,
    CalculatorServer,
    ComputeServer,
    CoreServer,
    DatabaseServer,
    KubernetesServer,
    MulticloudServer,
    NetworkingServer,
    ServicesServer,
    StorageServer,
)
from oci_pricing_mcp.tools import schemas as s
from oci_pricing_mcp.utils.logger import log_error, log_tool_call


class ToolDispatchError(Exception):
    """A tool call failed; carries the JSON-RPC error code to report."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class ToolSpec(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str
    input_model: Type[BaseModel]
    handler: Callable[..., Any]
    server: BasePricingServer

    def __init__(self, name: str, description: str, input_model: Type[BaseModel],
                 handler: Callable[..., Any], server: BasePricingServer):
        super().__init__(name=name, description=description, input_model=input_model,
                         handler=handler, server=server)

    def input_schema(self) -> Dict[str, Any]:
        return self.input_model.model_json_schema(by_alias=False)


class ToolRegistry:
    def __init__(self, tools: Optional[List[ToolSpec]] = None, loader: Optional[PricingDataLoader] = None):
        self.loader = loader
        self._tools: Dict[str, ToolSpec] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: ToolSpec) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Optional[ToolSpec]:
        return self._tools.get(name)

    def list_tools(self) -> List[ToolSpec]:
        return list(self._tools.values())

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    async def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """
        Validate arguments and run a tool.

        Raises:
            ToolDispatchError: METHOD_NOT_FOUND for an unknown tool name,
                INTERNAL_ERROR for invalid arguments or a failing handler
        """
        tool = self._tools.get(name)
        if tool is None:
            log_error("UnknownTool", f"Unknown tool: {name}", name)
            raise ToolDispatchError(METHOD_NOT_FOUND, f"Unknown tool: {name}")

        start = time.time()
        try:
            params = tool.input_model.model_validate(arguments or {})
            result = tool.handler(**params.model_dump(exclude_none=True))
            if inspect.isawaitable(result):
                result = await result
        except ValidationError as e:
            self._fail(tool, start, "ValidationError", str(e))
            raise ToolDispatchError(INTERNAL_ERROR, f"Invalid arguments for {name}: {e}") from e
        except Exception as e:
            self._fail(tool, start, type(e).__name__, str(e))
            raise ToolDispatchError(INTERNAL_ERROR, str(e) or type(e).__name__) from e

        duration_ms = (time.time() - start) * 1000
        tool.server._record_call(duration_ms)
        log_tool_call(name, "success", duration_ms)
        return result

    @staticmethod
    def _fail(tool: ToolSpec, start: float, error_type: str, message: str) -> None:
        duration_ms = (time.time() - start) * 1000
        tool.server._record_call(duration_ms, success=False)
        log_tool_call(tool.name, "error", duration_ms)
        log_error(error_type, message, tool.name)


def build_registry(
    loader: PricingDataLoader,
    realtime: Optional[RealTimePricingClient] = None,
) -> ToolRegistry:
    """Construct every category server around one loader and register its tools."""
    compute = ComputeServer(loader)
    storage = StorageServer(loader)
    database = DatabaseServer(loader)
    networking = NetworkingServer(loader)
    kubernetes = KubernetesServer(loader, compute=compute)
    multicloud = MulticloudServer(loader)
    services = ServicesServer(loader)
    calculator = CalculatorServer(loader, compute=compute, storage=storage, database=database, networking=networking)
    core = CoreServer(loader, realtime=realtime)
    core.peers = [compute, storage, database, networking, kubernetes, multicloud, services, calculator]

    tools = [
        # Core
        ToolSpec("get_pricing",
                 "Get OCI pricing for a resource category (compute, storage, database, networking, kubernetes), "
                 "optionally filtered by type, shape or description.",
                 s.GetPricingInput, core.get_pricing, core),
        ToolSpec("list_services", "List OCI services with their pricing types, optionally by category.",
                 s.ListServicesInput, core.list_services, core),
        ToolSpec("compare_regions",
                 "Compare the price of a resource across OCI commercial regions. OCI prices are uniform globally.",
                 s.CompareRegionsInput, core.compare_regions, core),
        ToolSpec("list_regions", "List OCI regions with location and region type.",
                 s.NoInput, core.list_regions, core),
        ToolSpec("get_free_tier", "Get details about OCI Always Free tier resources.",
                 s.NoInput, core.get_free_tier, core),
        ToolSpec("get_pricing_info", "Get metadata about the pricing data (last updated, source, counts, cache).",
                 s.NoInput, core.get_pricing_info, core),
        ToolSpec("search_products", "Search the bundled OCI price list products by category and text.",
                 s.SearchProductsInput, core.search_products, core),
        ToolSpec("get_realtime_pricing",
                 "Fetch live pay-as-you-go prices from the Oracle price list API in a given currency.",
                 s.RealtimePricingInput, core.get_realtime_pricing, core),
        ToolSpec("list_realtime_categories", "List service categories present in the live Oracle price list.",
                 s.RealtimeCategoriesInput, core.list_realtime_categories, core),
        ToolSpec("refresh_pricing_data", "Reload the bundled pricing catalog from disk.",
                 s.NoInput, core.refresh_pricing_data, core),
        ToolSpec("get_server_health", "Call counts, success rates and latency for every pricing server.",
                 s.NoInput, core.get_server_health, core),

        # Compute
        ToolSpec("list_compute_shapes",
                 "List OCI compute shapes with OCPU and memory pricing and an example monthly cost.",
                 s.ListComputeShapesInput, compute.list_compute_shapes, compute),
        ToolSpec("get_compute_shape_details", "Get pricing details and sample configurations for one compute shape.",
                 s.ComputeShapeDetailsInput, compute.get_compute_shape_details, compute),
        ToolSpec("calculate_compute_cost", "Calculate the monthly cost of compute instances.",
                 s.CalculateComputeInput, compute.calculate_compute_cost, compute),
        ToolSpec("compare_compute_shapes", "Compare monthly costs of several compute shapes at 4 OCPU / 32 GB.",
                 s.CompareComputeInput, compute.compare_compute_shapes, compute),

        # Storage
        ToolSpec("list_storage_options", "List block, object, file and archive storage pricing.",
                 s.ListStorageInput, storage.list_storage_options, storage),
        ToolSpec("calculate_storage_cost", "Calculate the monthly cost of block, object and file storage.",
                 s.CalculateStorageInput, storage.calculate_storage_cost, storage),
        ToolSpec("compare_storage_tiers", "Compare the monthly cost of one capacity across all storage tiers.",
                 s.CompareStorageInput, storage.compare_storage_tiers, storage),

        # Database
        ToolSpec("list_database_options", "List OCI database services with compute and storage pricing.",
                 s.ListDatabaseInput, database.list_database_options, database),
        ToolSpec("calculate_database_cost",
                 "Calculate the monthly cost of a database, including BYOL savings where a BYOL rate exists.",
                 s.CalculateDatabaseInput, database.calculate_database_cost, database),
        ToolSpec("compare_database_options", "Compare database services for a workload type.",
                 s.CompareDatabaseInput, database.compare_database_options, database),

        # Networking
        ToolSpec("list_networking_options",
                 "List load balancer, FastConnect, VPN, gateway and data transfer pricing.",
                 s.ListNetworkingInput, networking.list_networking_options, networking),
        ToolSpec("calculate_networking_cost",
                 "Calculate monthly networking cost with free allowances deducted.",
                 s.CalculateNetworkingInput, networking.calculate_networking_cost, networking),
        ToolSpec("compare_data_egress", "Compare outbound data transfer cost on OCI, AWS, Azure and Google Cloud.",
                 s.CompareEgressInput, networking.compare_data_egress, networking),

        # Kubernetes
        ToolSpec("list_kubernetes_options", "List OKE cluster and virtual node pricing.",
                 s.ListKubernetesInput, kubernetes.list_kubernetes_options, kubernetes),
        ToolSpec("calculate_kubernetes_cost",
                 "Calculate the monthly cost of an OKE cluster, its worker nodes and virtual nodes.",
                 s.CalculateKubernetesInput, kubernetes.calculate_kubernetes_cost, kubernetes),
        ToolSpec("compare_kubernetes_providers", "Compare OKE with EKS, AKS and GKE for the same node pool.",
                 s.CompareKubernetesInput, kubernetes.compare_kubernetes_providers, kubernetes),

        # Multicloud
        ToolSpec("list_multicloud_databases",
                 "List Oracle databases available on Azure, AWS and Google Cloud with their pricing.",
                 s.ListMulticloudInput, multicloud.list_multicloud_databases, multicloud),
        ToolSpec("get_multicloud_availability", "Availability matrix of Oracle databases by cloud provider.",
                 s.NoInput, multicloud.get_multicloud_availability, multicloud),
        ToolSpec("calculate_multicloud_database_cost",
                 "Calculate the monthly cost of an Oracle database on Azure, AWS or Google Cloud.",
                 s.CalculateMulticloudInput, multicloud.calculate_multicloud_database_cost, multicloud),
        ToolSpec("compare_multicloud_vs_oci", "Compare an Oracle database on OCI with each partner cloud.",
                 s.CompareMulticloudInput, multicloud.compare_multicloud_vs_oci, multicloud),

        # Secondary services
        ToolSpec("list_ai_ml_services", "List Generative AI, Vision, Speech, Language and Document Understanding pricing.",
                 s.ListAIMLInput, services.list_ai_ml_services, services),
        ToolSpec("list_observability_services", "List Logging, Monitoring, Notifications, APM and Log Analytics pricing.",
                 s.TypeFilterInput, services.list_observability_services, services),
        ToolSpec("list_integration_services", "List Oracle Integration, GoldenGate, Streaming and Data Integration pricing.",
                 s.TypeFilterInput, services.list_integration_services, services),
        ToolSpec("list_security_services", "List Vault, WAF, Data Safe, Network Firewall and other security pricing.",
                 s.TypeFilterInput, services.list_security_services, services),
        ToolSpec("list_analytics_services", "List Analytics Cloud, Data Flow and Big Data Service pricing.",
                 s.TypeFilterInput, services.list_analytics_services, services),
        ToolSpec("list_developer_services", "List Functions, API Gateway, Container Instances and APEX pricing.",
                 s.TypeFilterInput, services.list_developer_services, services),
        ToolSpec("list_media_services", "List Media Flow and Media Streams pricing.",
                 s.TypeFilterInput, services.list_media_services, services),
        ToolSpec("list_vmware_services", "List Oracle Cloud VMware Solution host pricing.",
                 s.TypeFilterInput, services.list_vmware_services, services),
        ToolSpec("list_edge_services", "List DNS, Email Delivery, Health Checks and Traffic Management pricing.",
                 s.TypeFilterInput, services.list_edge_services, services),
        ToolSpec("list_governance_services", "List Access Governance, Fleet Application Management and License Manager pricing.",
                 s.TypeFilterInput, services.list_governance_services, services),
        ToolSpec("list_exadata_services", "List Exadata infrastructure, ECPU and Exascale storage pricing.",
                 s.TypeFilterInput, services.list_exadata_services, services),
        ToolSpec("list_cache_services", "List OCI Cache (Redis-compatible) pricing.",
                 s.TypeFilterInput, services.list_cache_services, services),
        ToolSpec("list_disaster_recovery_services", "List Full Stack Disaster Recovery pricing.",
                 s.TypeFilterInput, services.list_disaster_recovery_services, services),
        ToolSpec("list_additional_services", "List Blockchain, Visual Builder, WebLogic and Java SE pricing.",
                 s.TypeFilterInput, services.list_additional_services, services),
        ToolSpec("get_services_summary", "Pricing item counts for every service category.",
                 s.NoInput, services.get_services_summary, services),
        ToolSpec("calculate_service_cost",
                 "Calculate the monthly cost of one platform service with its free allowance deducted.",
                 s.CalculateServiceInput, services.calculate_service_cost, services),
        ToolSpec("compare_service_options", "Rank the services of one category by monthly cost.",
                 s.CompareServiceInput, services.compare_service_options, services),

        # Calculator
        ToolSpec("calculate_monthly_cost",
                 "Estimate the monthly cost of a deployment combining compute, storage, database and networking.",
                 s.MonthlyCostInput, calculator.calculate_monthly_cost, calculator),
        ToolSpec("quick_estimate",
                 "Monthly cost estimate for a common deployment preset: small-web-app, medium-api-server, "
                 "large-database, ml-training or kubernetes-cluster.",
                 s.QuickEstimateInput, calculator.quick_estimate, calculator),
    ]
    return ToolRegistry(tools, loader=loader)
