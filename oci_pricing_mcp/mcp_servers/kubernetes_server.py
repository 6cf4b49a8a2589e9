"""MCP Server: Container Engine for Kubernetes (OKE) pricing."""
from typing import Any, Dict, Optional

from oci_pricing_mcp.mcp_servers.base import BasePricingServer, group_by_type, hours_note
from oci_pricing_mcp.mcp_servers.compute_server import ComputeServer
from oci_pricing_mcp.models.estimate import HOURS_PER_MONTH, CostEstimate, LineItem, round2
from oci_pricing_mcp.models.pricing import KubernetesPricing

DEFAULT_NODE_SHAPE = "VM.Standard.E5.Flex"
CONTROL_PLANE_MONTHLY = 73.0

# provider -> (per vCPU-hour, per GB-hour, control plane per month)
PROVIDER_RATES = {
    "AWS EKS": (0.048, 0.006, CONTROL_PLANE_MONTHLY),
    "Azure AKS": (0.045, 0.005, 0.0),
    "Google GKE": (0.044, 0.006, CONTROL_PLANE_MONTHLY),
}

CLUSTER_FEATURES = {
    "basic": ["Managed control plane", "No control plane charge", "Best-effort SLA"],
    "enhanced": ["Financially backed SLA", "Virtual nodes support", "Workload identity", "Cluster add-on management"],
    "virtual-nodes": ["Serverless pods", "No node management", "Pay per pod OCPU and memory"],
}


class KubernetesServer(BasePricingServer):
    SERVER_NAME = "kubernetes"
    VERSION = "1.0.0"

    def __init__(self, loader, compute: Optional[ComputeServer] = None):
        super().__init__(loader)
        self.compute = compute or ComputeServer(loader)

    def _item(self, type: str) -> Optional[KubernetesPricing]:
        return next((k for k in self.loader.get_kubernetes_pricing() if k.type == type), None)

    def _cluster_monthly(self, cluster_type: str, hours_per_month: float = HOURS_PER_MONTH) -> float:
        cluster = self._item(f"oke-{cluster_type}-cluster")
        if cluster is None:
            return 0.0
        fee = cluster.cluster_management_fee if cluster.cluster_management_fee is not None else cluster.price_per_unit
        return round2(fee * hours_per_month)

    def list_kubernetes_options(self, cluster_type: Optional[str] = None) -> Dict[str, Any]:
        items = self.loader.get_kubernetes_pricing()
        if cluster_type:
            items = [k for k in items if k.cluster_type == cluster_type]
        return {
            "options": [k.to_dict() for k in items],
            "total_count": len(items),
            "by_type": group_by_type(items),
            "cluster_types": {
                name: {"features": features} for name, features in CLUSTER_FEATURES.items()
                if not cluster_type or name == cluster_type
            },
            "notes": [
                "Basic clusters: free control plane, pay only for worker nodes",
                "Enhanced clusters: $0.10/cluster/hour with SLA and advanced features",
                "Virtual Nodes: serverless pods, pay per OCPU and memory used",
                "Worker nodes are billed as regular compute instances",
            ],
            "last_updated": self.loader.get_last_updated(),
        }

    def estimate_kubernetes(
        self,
        cluster_type: str = "basic",
        node_count: int = 0,
        node_shape: str = DEFAULT_NODE_SHAPE,
        node_ocpus: float = 2,
        node_memory_gb: float = 16,
        virtual_nodes: Optional[Dict[str, float]] = None,
        hours_per_month: float = HOURS_PER_MONTH,
    ) -> CostEstimate:
        shape = self.compute.find_shape(node_shape) if node_count > 0 else None
        if node_count > 0 and shape is None:
            return CostEstimate.not_found(
                f'Node shape "{node_shape}" not found. Use list_compute_shapes to see available shapes.'
            )

        estimate = CostEstimate()
        control_plane = "enhanced" if cluster_type in ("enhanced", "virtual-nodes") else "basic"
        cluster = self._item(f"oke-{control_plane}-cluster")
        if cluster is not None:
            fee = cluster.cluster_management_fee if cluster.cluster_management_fee is not None else cluster.price_per_unit
            estimate.add(LineItem.build("kubernetes", f"OKE {control_plane} cluster management", 1,
                                        cluster.unit, fee, hours_per_month))
        if control_plane == "basic":
            estimate.notes.append("Basic clusters have no control plane charge.")

        if shape is not None:
            estimate.add(
                LineItem.build("kubernetes", f"Worker node OCPUs ({shape.shape_family})", node_ocpus * node_count,
                               "OCPU per hour", shape.ocpu_price, hours_per_month),
                LineItem.build("kubernetes", f"Worker node memory ({shape.shape_family})", node_memory_gb * node_count,
                               "GB per hour", shape.memory_price_per_gb, hours_per_month),
            )

        if virtual_nodes:
            vn_ocpu = self._item("oke-virtual-node")
            vn_memory = self._item("oke-virtual-node-memory")
            vn_hours = virtual_nodes.get("hours_per_month", HOURS_PER_MONTH)
            if vn_ocpu and vn_memory:
                estimate.add(
                    LineItem.build("kubernetes", "Virtual node pod OCPUs", virtual_nodes.get("pod_ocpus", 0),
                                   vn_ocpu.unit, vn_ocpu.price_per_unit, vn_hours),
                    LineItem.build("kubernetes", "Virtual node pod memory", virtual_nodes.get("pod_memory_gb", 0),
                                   vn_memory.unit, vn_memory.price_per_unit, vn_hours),
                )
                estimate.notes.append(f"Virtual nodes calculated for {vn_hours:g} hours/month.")
            if control_plane != "enhanced":
                estimate.notes.append("Virtual nodes require an enhanced cluster.")

        note = hours_note(hours_per_month, "Cluster")
        if note:
            estimate.notes.append(note)
        return estimate

    def calculate_kubernetes_cost(
        self,
        cluster_type: str = "basic",
        node_count: int = 0,
        node_shape: str = DEFAULT_NODE_SHAPE,
        node_ocpus: float = 2,
        node_memory_gb: float = 16,
        virtual_nodes: Optional[Dict[str, float]] = None,
        hours_per_month: float = HOURS_PER_MONTH,
    ) -> Dict[str, Any]:
        estimate = self.estimate_kubernetes(
            cluster_type, node_count, node_shape, node_ocpus, node_memory_gb, virtual_nodes, hours_per_month
        )
        node_lines = [li for li in estimate.breakdown if li.item.startswith("Worker node")]
        per_node = round2(sum(li.monthly_total for li in node_lines) / node_count) if node_count and node_lines else 0.0
        return estimate.to_dict(
            cluster_type=cluster_type,
            node_count=node_count,
            per_node_monthly=per_node,
        )

    def compare_kubernetes_providers(
        self,
        node_count: int = 3,
        node_ocpus: float = 2,
        node_memory_gb: float = 16,
    ) -> Dict[str, Any]:
        shape = self.compute.find_shape(DEFAULT_NODE_SHAPE)
        nodes_monthly = self.compute.monthly_cost(shape, node_ocpus, node_memory_gb) * node_count if shape else 0.0
        nodes_monthly = round2(nodes_monthly)
        vcpus = node_ocpus * 2 * node_count
        memory = node_memory_gb * node_count

        providers = [
            {"provider": "OCI OKE (basic)", "control_plane": self._cluster_monthly("basic"),
             "nodes": nodes_monthly},
            {"provider": "OCI OKE (enhanced)", "control_plane": self._cluster_monthly("enhanced"),
             "nodes": nodes_monthly},
        ]
        for name, (vcpu_rate, gb_rate, control_plane) in PROVIDER_RATES.items():
            providers.append({
                "provider": name,
                "control_plane": control_plane,
                "nodes": round2((vcpus * vcpu_rate + memory * gb_rate) * HOURS_PER_MONTH),
            })
        for p in providers:
            p["monthly_total"] = round2(p["control_plane"] + p["nodes"])
        providers.sort(key=lambda p: p["monthly_total"])

        return {
            "configuration": {
                "node_count": node_count,
                "ocpus_per_node": node_ocpus,
                "vcpus_total": vcpus,
                "memory_gb_per_node": node_memory_gb,
                "oci_node_shape": DEFAULT_NODE_SHAPE,
            },
            "comparison": providers,
            "cheapest": providers[0]["provider"],
            "notes": [
                "1 OCPU = 2 vCPUs; other providers are priced on equivalent general-purpose instances",
                "Other providers' rates are approximate on-demand list prices",
            ],
            "last_updated": self.loader.get_last_updated(),
        }
