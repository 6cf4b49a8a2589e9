"""MCP Server: compute shape pricing."""
from typing import Any, Dict, List, Optional

from oci_pricing_mcp.mcp_servers.base import BasePricingServer, hours_note
from oci_pricing_mcp.models.estimate import HOURS_PER_MONTH, CostEstimate, LineItem, round2
from oci_pricing_mcp.models.pricing import ComputeShapePricing

EXAMPLE_OCPUS = 4
EXAMPLE_MEMORY_GB = 32

# (ocpus, memory_gb) shown by get_compute_shape_details
DETAIL_CONFIGS = [(1, 8), (2, 16), (4, 32), (8, 64), (16, 128)]

COMPUTE_TIPS = [
    "VM.Standard.A1.Flex (Arm) offers the best value at $0.01/OCPU/hr",
    "VM.Standard.E5.Flex is recommended for new x86 deployments",
    "1 OCPU = 2 vCPUs for x86 architectures",
    "Preemptible instances are 50% cheaper for fault-tolerant workloads",
    "Memory pricing is separate from OCPU pricing for Flex shapes",
]


class ComputeServer(BasePricingServer):
    SERVER_NAME = "compute"
    VERSION = "1.0.0"

    def find_shape(self, name: str) -> Optional[ComputeShapePricing]:
        """Exact shape family match first, then substring."""
        shapes = self.loader.get_compute_pricing()
        exact = next((s for s in shapes if s.identifies(name)), None)
        if exact is not None:
            return exact
        return next((s for s in shapes if s.matches(name)), None)

    @staticmethod
    def monthly_cost(shape: ComputeShapePricing, ocpus: float, memory_gb: float,
                     hours_per_month: float = HOURS_PER_MONTH) -> float:
        ocpu_cost = round2(shape.ocpu_price * ocpus * hours_per_month)
        memory_cost = round2(shape.memory_price_per_gb * memory_gb * hours_per_month)
        return round2(ocpu_cost + memory_cost)

    def _free_tier_note(self) -> str:
        compute = self.loader.get_free_tier().get("compute") or {}
        return f"Always Free: {compute['arm']}" if compute.get("arm") else "Always Free tier available"

    def list_compute_shapes(
        self,
        family: Optional[str] = None,
        type: Optional[str] = None,
        max_ocpu_price: Optional[float] = None,
    ) -> Dict[str, Any]:
        shapes = self.loader.get_compute_pricing()
        if family:
            shapes = [s for s in shapes if family.lower() in s.shape_family.lower()]
        if type:
            shapes = [s for s in shapes if s.matches(type)]
        if max_ocpu_price is not None:
            shapes = [s for s in shapes if s.ocpu_price <= max_ocpu_price]

        listed = []
        for s in shapes:
            ocpus, memory = s.clamp(EXAMPLE_OCPUS, EXAMPLE_MEMORY_GB)
            entry = s.to_dict()
            entry.update({
                "ocpu_range": f"{s.min_ocpu:g}-{s.max_ocpu:g} OCPUs",
                "memory_range": f"{s.min_memory_gb:g}-{s.max_memory_gb:g} GB",
                "example_configuration": f"{ocpus:g} OCPU, {memory:g} GB",
                "example_monthly_cost": self.monthly_cost(s, ocpus, memory),
            })
            listed.append(entry)

        return {
            "shapes": listed,
            "total_count": len(listed),
            "free_tier_note": self._free_tier_note(),
            "tips": COMPUTE_TIPS,
            "last_updated": self.loader.get_last_updated(),
        }

    def get_compute_shape_details(self, shape_family: str) -> Dict[str, Any]:
        shape = next((s for s in self.loader.get_compute_pricing() if s.identifies(shape_family)), None)
        if shape is None:
            return {
                "shape": None,
                "note": f'Shape "{shape_family}" not found. Use list_compute_shapes to see available shapes.',
            }

        configs = [(o, m) for o, m in DETAIL_CONFIGS if shape.supports(o, m)]
        if not configs:
            configs = [(shape.min_ocpu, shape.min_memory_gb)]
        estimates = [
            {
                "configuration": f"{o:g} OCPU, {m:g} GB",
                "ocpus": o,
                "memory_gb": m,
                "hourly_cost": round(shape.hourly_cost(o, m), 4),
                "monthly_cost": self.monthly_cost(shape, o, m),
            }
            for o, m in configs
        ]

        return {
            "shape": shape.to_dict(),
            "hourly_pricing": {
                "per_ocpu": shape.ocpu_price,
                "per_gb_memory": shape.memory_price_per_gb,
            },
            "monthly_estimates": estimates,
            "recommendations": self._recommendations(shape),
            "last_updated": self.loader.get_last_updated(),
        }

    @staticmethod
    def _recommendations(shape: ComputeShapePricing) -> List[str]:
        family = shape.shape_family
        recs = []
        if ".A1." in family:
            recs.append("Included in Always Free tier (4 OCPUs + 24 GB)")
            recs.append("Best price-performance for Arm-compatible workloads")
        if ".A2." in family:
            recs.append("Higher core density Arm shape for scale-out services")
        if ".E5." in family or ".E6." in family:
            recs.append("Latest AMD generation, recommended for new x86 workloads")
        if ".E4." in family:
            recs.append("Previous generation - consider E5 for new workloads")
        if "Optimized3" in family:
            recs.append("High clock speed for HPC and latency-sensitive workloads")
        if "GPU" in family:
            recs.append("Billed per GPU; stop instances when idle")
            recs.append("Consider preemptible capacity for fault-tolerant training jobs")
        if family.startswith("BM."):
            recs.append("Bare metal shapes are billed for the whole server")
        return recs or ["General purpose shape"]

    def estimate_compute(
        self,
        shape: str,
        ocpus: float,
        memory_gb: float,
        hours_per_month: float = HOURS_PER_MONTH,
        instance_count: int = 1,
    ) -> CostEstimate:
        found = self.find_shape(shape)
        if found is None:
            return CostEstimate.not_found(
                f'Compute shape "{shape}" not found. Use list_compute_shapes to see available shapes.'
            )

        estimate = CostEstimate()
        estimate.add(
            LineItem.build("compute", f"{found.shape_family} OCPUs", ocpus * instance_count,
                           "OCPU per hour", found.ocpu_price, hours_per_month),
            LineItem.build("compute", f"{found.shape_family} Memory", memory_gb * instance_count,
                           "GB per hour", found.memory_price_per_gb, hours_per_month),
        )

        if not found.supports(ocpus, memory_gb):
            estimate.notes.append(
                f"Warning: {ocpus:g} OCPU / {memory_gb:g} GB is outside the supported range "
                f"({found.min_ocpu:g}-{found.max_ocpu:g} OCPUs, {found.min_memory_gb:g}-{found.max_memory_gb:g} GB)."
            )
        ratio = memory_gb / ocpus if ocpus else 0
        if found.memory_per_ocpu_ratio and ratio > found.memory_per_ocpu_ratio:
            estimate.notes.append(
                f"Warning: Memory-to-OCPU ratio ({ratio:g}) exceeds maximum "
                f"({found.memory_per_ocpu_ratio:g}). Configuration may not be valid."
            )
        note = hours_note(hours_per_month)
        if note:
            estimate.notes.append(note)
        return estimate

    def calculate_compute_cost(
        self,
        shape: str,
        ocpus: float,
        memory_gb: float,
        hours_per_month: float = HOURS_PER_MONTH,
        instance_count: int = 1,
    ) -> Dict[str, Any]:
        estimate = self.estimate_compute(shape, ocpus, memory_gb, hours_per_month, instance_count)
        return estimate.to_dict(
            configuration={
                "shape": shape,
                "ocpus": ocpus,
                "memory_gb": memory_gb,
                "hours_per_month": hours_per_month,
                "instance_count": instance_count,
            },
        )

    def compare_compute_shapes(self, shapes: List[str]) -> Dict[str, Any]:
        comparison, missing = [], []
        for name in shapes:
            shape = self.find_shape(name)
            if shape is None:
                missing.append(name)
                continue
            ocpus, memory = shape.clamp(EXAMPLE_OCPUS, EXAMPLE_MEMORY_GB)
            comparison.append({
                "shape": shape.shape_family,
                "description": shape.description,
                "ocpu_price": shape.ocpu_price,
                "memory_price_per_gb": shape.memory_price_per_gb,
                "configuration": f"{ocpus:g} OCPU, {memory:g} GB",
                "monthly_cost": self.monthly_cost(shape, ocpus, memory),
            })
        comparison.sort(key=lambda c: c["monthly_cost"])

        result: Dict[str, Any] = {
            "comparison": comparison,
            "baseline": f"{EXAMPLE_OCPUS} OCPU, {EXAMPLE_MEMORY_GB} GB, {HOURS_PER_MONTH} hours/month",
            "not_found": missing,
        }
        if comparison:
            cheapest = comparison[0]
            result["cheapest"] = cheapest["shape"]
            result["recommendation"] = (
                f"{cheapest['shape']} is the cheapest option at ${cheapest['monthly_cost']:.2f}/month"
            )
        else:
            result["cheapest"] = None
            result["recommendation"] = "None of the requested shapes were found."
        return result
