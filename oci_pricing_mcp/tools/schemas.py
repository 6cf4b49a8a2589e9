"""
Input models for every MCP tool.

Each model doubles as the tool's published JSON schema and as the validator
for incoming arguments. Keys are published in snake_case; camelCase keys are
accepted as well.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from oci_pricing_mcp.models.estimate import (
    HOURS_PER_MONTH,
    ComputeConfig,
    DatabaseConfig,
    NetworkingConfig,
    StorageConfig,
)

Region = Literal[
    "us-ashburn-1", "us-phoenix-1", "us-sanjose-1", "us-chicago-1",
    "ca-montreal-1", "ca-toronto-1",
    "eu-frankfurt-1", "eu-amsterdam-1", "eu-zurich-1", "eu-madrid-1", "eu-marseille-1",
    "eu-milan-1", "eu-paris-1", "eu-stockholm-1", "uk-london-1", "uk-cardiff-1",
    "ap-tokyo-1", "ap-osaka-1", "ap-seoul-1", "ap-chuncheon-1", "ap-mumbai-1", "ap-hyderabad-1",
    "ap-singapore-1", "ap-sydney-1", "ap-melbourne-1",
    "sa-saopaulo-1", "sa-santiago-1", "sa-vinhedo-1",
    "me-jeddah-1", "me-dubai-1", "af-johannesburg-1", "il-jerusalem-1", "mx-queretaro-1",
    "us-langley-1", "us-luke-1", "us-gov-ashburn-1",
    "eu-frankfurt-2", "eu-madrid-2",
]
CoreService = Literal["compute", "storage", "database", "networking", "kubernetes"]
ServiceCategory = Literal[
    "compute", "storage", "database", "networking", "kubernetes", "ai-ml", "analytics",
    "security", "observability", "integration", "developer-services",
]
SecondaryCategory = Literal[
    "ai-ml", "observability", "integration", "security", "analytics", "developer", "media",
    "vmware", "edge", "governance", "exadata", "cache", "disaster-recovery", "additional",
]
LicenseType = Literal["included", "byol"]
Provider = Literal["azure", "aws", "gcp"]
MulticloudDatabase = Literal["autonomous-serverless", "autonomous-dedicated", "exadata", "exascale", "base-db"]
Preset = Literal["small-web-app", "medium-api-server", "large-database", "ml-training", "kubernetes-cluster"]


class ToolInput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class NoInput(ToolInput):
    pass


class TypeFilterInput(ToolInput):
    type: Optional[str] = Field(default=None, description="Filter by service type (substring match)")


# ── Core ─────────────────────────────────────────────────────────────────────

class GetPricingInput(ToolInput):
    service: CoreService = Field(description="Resource category to look up")
    type: Optional[str] = Field(default=None, description="Filter by type, shape or description, e.g. 'E5' or 'block'")
    region: Optional[Region] = Field(default=None, description="OCI region (pricing is uniform across commercial regions)")


class ListServicesInput(ToolInput):
    category: Optional[ServiceCategory] = Field(default=None, description="Only list services in this category")


class CompareRegionsInput(ToolInput):
    service: CoreService = Field(description="Resource category")
    type: str = Field(description="Type or shape to compare, e.g. 'VM.Standard.E5.Flex'")


class SearchProductsInput(ToolInput):
    category: Optional[str] = Field(default=None, description="Service category substring, e.g. 'Storage'")
    search: Optional[str] = Field(default=None, description="Substring over display name and part number")


class RealtimePricingInput(ToolInput):
    currency: Optional[str] = Field(
        default=None, description="ISO currency code, e.g. USD, EUR, GBP (defaults to the configured currency)"
    )
    category: Optional[str] = Field(default=None, description="Service category substring")
    search: Optional[str] = Field(default=None, description="Substring over display name and part number")


class RealtimeCategoriesInput(ToolInput):
    currency: Optional[str] = Field(default=None, description="ISO currency code (defaults to the configured currency)")


# ── Compute ──────────────────────────────────────────────────────────────────

class ListComputeShapesInput(ToolInput):
    family: Optional[str] = Field(default=None, description="Shape family substring, e.g. 'E5' or 'A1'")
    type: Optional[str] = Field(default=None, description="Filter by type, e.g. 'gpu' or 'bare-metal'")
    max_ocpu_price: Optional[float] = Field(default=None, ge=0, description="Maximum price per OCPU-hour")


class ComputeShapeDetailsInput(ToolInput):
    shape_family: str = Field(description="Exact shape name, e.g. 'VM.Standard.E5.Flex'")


class CalculateComputeInput(ToolInput):
    shape: str = Field(description="Shape name, e.g. 'VM.Standard.E5.Flex'")
    ocpus: float = Field(gt=0, description="OCPUs per instance")
    memory_gb: float = Field(ge=0, description="Memory per instance in GB")
    hours_per_month: float = Field(default=HOURS_PER_MONTH, gt=0, le=744, description="Running hours per month")
    instance_count: int = Field(default=1, ge=1, description="Number of identical instances")


class CompareComputeInput(ToolInput):
    shapes: List[str] = Field(min_length=1, description="Shape names to compare")


# ── Storage ──────────────────────────────────────────────────────────────────

class ListStorageInput(ToolInput):
    type: Optional[Literal["block", "object", "file", "archive"]] = Field(default=None, description="Storage type")


class CalculateStorageInput(ToolInput):
    block_volume_gb: float = Field(default=0, ge=0)
    block_performance_tier: Literal["basic", "balanced", "high", "ultra"] = "balanced"
    object_storage_gb: float = Field(default=0, ge=0)
    object_storage_tier: Literal["standard", "infrequent", "archive"] = "standard"
    file_storage_gb: float = Field(default=0, ge=0)


class CompareStorageInput(ToolInput):
    size_gb: float = Field(gt=0, description="Capacity to price on every tier")


# ── Database ─────────────────────────────────────────────────────────────────

class ListDatabaseInput(ToolInput):
    type: Optional[Literal["autonomous", "mysql", "postgresql", "nosql", "base-db", "exadata"]] = None
    license_type: Optional[LicenseType] = None


class CalculateDatabaseInput(ToolInput):
    type: str = Field(description="Database type, e.g. 'autonomous-transaction-processing' or 'mysql'")
    compute_units: float = Field(gt=0, description="ECPUs, OCPUs or nodes, depending on the service")
    storage_gb: float = Field(default=0, ge=0)
    license_type: LicenseType = "included"
    hours_per_month: float = Field(default=HOURS_PER_MONTH, gt=0, le=744)


class CompareDatabaseInput(ToolInput):
    workload_type: Literal["oltp", "analytics", "document", "general"] = "general"


# ── Networking ───────────────────────────────────────────────────────────────

class ListNetworkingInput(ToolInput):
    type: Optional[Literal["load-balancer", "fastconnect", "vpn", "egress", "gateway"]] = None


class CalculateNetworkingInput(ToolInput):
    flexible_load_balancers: int = Field(default=0, ge=0)
    load_balancer_bandwidth_mbps: float = Field(default=0, ge=0, description="Bandwidth per load balancer")
    network_load_balancers: int = Field(default=0, ge=0)
    outbound_data_gb: float = Field(default=0, ge=0)
    fast_connect_gbps: Optional[Literal[1, 10, 100]] = None
    vpn_connections: int = Field(default=0, ge=0)
    nat_gateways: int = Field(default=0, ge=0)
    hours_per_month: float = Field(default=HOURS_PER_MONTH, gt=0, le=744)


class CompareEgressInput(ToolInput):
    monthly_gb: float = Field(ge=0, description="Outbound data per month in GB")


# ── Kubernetes ───────────────────────────────────────────────────────────────

ClusterType = Literal["basic", "enhanced", "virtual-nodes"]


class ListKubernetesInput(ToolInput):
    cluster_type: Optional[ClusterType] = None


class VirtualNodesInput(ToolInput):
    pod_ocpus: float = Field(default=0, ge=0)
    pod_memory_gb: float = Field(default=0, ge=0)
    hours_per_month: float = Field(default=HOURS_PER_MONTH, gt=0, le=744)


class CalculateKubernetesInput(ToolInput):
    cluster_type: ClusterType = "basic"
    node_count: int = Field(default=0, ge=0)
    node_shape: str = "VM.Standard.E5.Flex"
    node_ocpus: float = Field(default=2, gt=0)
    node_memory_gb: float = Field(default=16, ge=0)
    virtual_nodes: Optional[VirtualNodesInput] = None
    hours_per_month: float = Field(default=HOURS_PER_MONTH, gt=0, le=744)


class CompareKubernetesInput(ToolInput):
    node_count: int = Field(default=3, ge=1)
    node_ocpus: float = Field(default=2, gt=0)
    node_memory_gb: float = Field(default=16, ge=0)


# ── Multicloud ───────────────────────────────────────────────────────────────

class ListMulticloudInput(ToolInput):
    provider: Optional[Provider] = None
    database_type: Optional[Literal["autonomous", "exadata", "base-db"]] = None


class CalculateMulticloudInput(ToolInput):
    provider: Provider
    database_type: MulticloudDatabase
    compute_units: float = Field(gt=0)
    storage_gb: float = Field(default=0, ge=0)
    license_type: LicenseType = "included"
    hours_per_month: float = Field(default=HOURS_PER_MONTH, gt=0, le=744)


class CompareMulticloudInput(ToolInput):
    database_type: MulticloudDatabase
    compute_units: float = Field(gt=0)
    storage_gb: float = Field(default=0, ge=0)


# ── Secondary services ───────────────────────────────────────────────────────

class ListAIMLInput(TypeFilterInput):
    model: Optional[str] = Field(default=None, description="Model name substring, e.g. 'llama' or 'cohere'")


class CalculateServiceInput(ToolInput):
    category: SecondaryCategory
    service: str = Field(description="Service name, type or part number")
    quantity: float = Field(ge=0, description="Usage in the service's own unit")
    hours_per_month: float = Field(default=HOURS_PER_MONTH, gt=0, le=744)


class CompareServiceInput(ToolInput):
    category: SecondaryCategory
    type: Optional[str] = None
    quantity: float = Field(default=1, ge=0)


# ── Calculator ───────────────────────────────────────────────────────────────

class MonthlyCostInput(ToolInput):
    compute: Optional[ComputeConfig] = None
    storage: Optional[StorageConfig] = None
    database: Optional[DatabaseConfig] = None
    networking: Optional[NetworkingConfig] = None
    region: Optional[Region] = None


class QuickEstimateInput(ToolInput):
    preset: Preset
    region: Optional[Region] = None
