"""MCP Server: whole-deployment monthly cost calculator and quick-estimate presets."""
from typing import Any, Dict, Optional

from oci_pricing_mcp.mcp_servers.base import BasePricingServer
from oci_pricing_mcp.mcp_servers.compute_server import ComputeServer
from oci_pricing_mcp.mcp_servers.database_server import DatabaseServer
from oci_pricing_mcp.mcp_servers.networking_server import NetworkingServer
from oci_pricing_mcp.mcp_servers.storage_server import StorageServer
from oci_pricing_mcp.models.estimate import (
    ComputeConfig,
    CostEstimate,
    CostEstimateInput,
    DatabaseConfig,
    NetworkingConfig,
    StorageConfig,
)
from oci_pricing_mcp.utils.config import config


PRESETS: Dict[str, CostEstimateInput] = {
    "small-web-app": CostEstimateInput(
        compute=ComputeConfig(shape="VM.Standard.E4.Flex", ocpus=1, memory_gb=8),
        storage=StorageConfig(block_volume_gb=100, object_storage_gb=50),
        networking=NetworkingConfig(load_balancer_bandwidth_mbps=10, outbound_data_gb=500),
    ),
    "medium-api-server": CostEstimateInput(
        compute=ComputeConfig(shape="VM.Standard.E5.Flex", ocpus=4, memory_gb=32),
        storage=StorageConfig(block_volume_gb=500, object_storage_gb=200),
        networking=NetworkingConfig(load_balancer_bandwidth_mbps=100, outbound_data_gb=2000),
    ),
    "large-database": CostEstimateInput(
        compute=ComputeConfig(shape="VM.Standard.E5.Flex", ocpus=8, memory_gb=128),
        storage=StorageConfig(block_volume_gb=2000),
        database=DatabaseConfig(
            type="autonomous-transaction-processing", ecpus=4, storage_gb=1000, license_type="included"
        ),
    ),
    "ml-training": CostEstimateInput(
        # part-time usage
        compute=ComputeConfig(shape="BM.GPU.A100-v2.8", ocpus=128, memory_gb=2048, hours_per_month=160),
        storage=StorageConfig(block_volume_gb=5000, object_storage_gb=10000),
    ),
    "kubernetes-cluster": CostEstimateInput(
        # 3 nodes x 4 OCPUs / 32 GB / 100 GB boot volume
        compute=ComputeConfig(shape="VM.Standard.E5.Flex", ocpus=12, memory_gb=96),
        storage=StorageConfig(block_volume_gb=300, object_storage_gb=500),
        networking=NetworkingConfig(load_balancer_bandwidth_mbps=100, outbound_data_gb=5000),
    ),
}

PRESET_DESCRIPTIONS = {
    "small-web-app": "Single small VM behind a load balancer with modest storage and traffic",
    "medium-api-server": "4 OCPU API server with load balancer and moderate egress",
    "large-database": "Application server plus Autonomous Transaction Processing database",
    "ml-training": "8x A100 GPU bare metal node used 160 hours/month with a large dataset",
    "kubernetes-cluster": "Three 4 OCPU worker nodes with load balancer and object storage",
}


class CalculatorServer(BasePricingServer):
    SERVER_NAME = "calculator"
    VERSION = "1.0.0"

    def __init__(self, loader, compute: Optional[ComputeServer] = None,
                 storage: Optional[StorageServer] = None,
                 database: Optional[DatabaseServer] = None,
                 networking: Optional[NetworkingServer] = None):
        super().__init__(loader)
        self.compute = compute or ComputeServer(loader)
        self.storage = storage or StorageServer(loader)
        self.database = database or DatabaseServer(loader)
        self.networking = networking or NetworkingServer(loader)

    def estimate(self, request: CostEstimateInput) -> CostEstimate:
        """
        Price a whole deployment by combining the per-category estimates.

        Unknown or incomplete sub-resources are skipped with a note rather
        than failing the whole estimate.
        """
        estimate = CostEstimate(region=request.region or config.pricing.default_region)

        if request.compute is not None:
            c = request.compute
            estimate.merge(self.compute.estimate_compute(c.shape, c.ocpus, c.memory_gb, c.hours_per_month))

        if request.storage is not None:
            s = request.storage
            estimate.merge(self.storage.estimate_storage(
                block_volume_gb=s.block_volume_gb,
                object_storage_gb=s.object_storage_gb,
                file_storage_gb=s.file_storage_gb,
                archive_storage_gb=s.archive_storage_gb,
            ))

        if request.database is not None:
            d = request.database
            if d.ecpus > 0:
                estimate.merge(self.database.estimate_database(d.type, d.ecpus, d.storage_gb, d.license_type))
            else:
                estimate.notes.append(f'Warning: ECPUs not specified for database "{d.type}". Database costs not calculated.')

        if request.networking is not None:
            n = request.networking
            estimate.merge(self.networking.estimate_networking(
                flexible_load_balancers=1 if n.load_balancer_bandwidth_mbps > 0 else 0,
                load_balancer_bandwidth_mbps=n.load_balancer_bandwidth_mbps,
                outbound_data_gb=n.outbound_data_gb,
            ))

        estimate.notes.append(self._free_tier_note())
        return estimate

    def _free_tier_note(self) -> str:
        compute = self.loader.get_free_tier().get("compute") or {}
        if compute.get("arm"):
            return f"OCI Always Free tier may reduce costs further ({compute['arm']}, 200 GB block storage)."
        return "OCI Always Free tier may reduce costs further."

    def calculate_monthly_cost(self, **params: Any) -> Dict[str, Any]:
        request = CostEstimateInput.model_validate(params)
        return self.estimate(request).to_dict()

    def quick_estimate(self, preset: str, region: Optional[str] = None) -> Dict[str, Any]:
        request = PRESETS.get(preset)
        if request is None:
            raise ValueError(f"Unknown preset: {preset}. Valid presets: {', '.join(PRESETS)}")
        request = request.model_copy(update={"region": region})

        estimate = self.estimate(request)
        estimate.notes.insert(0, f"Preset: {preset}")
        return estimate.to_dict(
            preset=preset,
            description=PRESET_DESCRIPTIONS[preset],
            configuration=request.model_dump(exclude_none=True),
        )
