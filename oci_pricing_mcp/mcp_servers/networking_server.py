"""MCP Server: networking pricing (load balancers, egress, FastConnect, VPN, gateways)."""
from typing import Any, Dict, Optional

from oci_pricing_mcp.mcp_servers.base import BasePricingServer, group_by_type
from oci_pricing_mcp.models.estimate import HOURS_PER_MONTH, CostEstimate, LineItem, round2
from oci_pricing_mcp.models.pricing import NetworkingPricing

FREE_EGRESS_GB = 10240
FREE_LB_BANDWIDTH_MBPS = 10
FREE_FLEXIBLE_LBS = 1

# list_networking_options type -> networking_type
TYPE_FILTERS = {
    "load-balancer": "load-balancer",
    "fastconnect": "fastconnect",
    "vpn": "vpn",
    "egress": "egress",
    "gateway": "gateway",
}

# provider -> (price per GB, free GB per month)
EGRESS_REFERENCE = {
    "AWS": (0.09, 100),
    "Azure": (0.087, 100),
    "Google Cloud": (0.12, 0),
}


class NetworkingServer(BasePricingServer):
    SERVER_NAME = "networking"
    VERSION = "1.0.0"

    def _item(self, type: str) -> Optional[NetworkingPricing]:
        return next((n for n in self.loader.get_networking_pricing() if n.type == type), None)

    def list_networking_options(self, type: Optional[str] = None) -> Dict[str, Any]:
        items = self.loader.get_networking_pricing()
        if type:
            wanted = TYPE_FILTERS.get(type, type)
            items = [n for n in items if n.networking_type == wanted or n.matches(wanted)]
        return {
            "options": [n.to_dict() for n in items],
            "total_count": len(items),
            "by_type": group_by_type(items),
            "free_allowances": [
                {"service": "Outbound data transfer", "allowance": f"{FREE_EGRESS_GB:,} GB/month"},
                {"service": "Flexible Load Balancer", "allowance": f"{FREE_FLEXIBLE_LBS} instance with {FREE_LB_BANDWIDTH_MBPS} Mbps"},
                {"service": "Inbound data transfer", "allowance": "Always free"},
            ],
            "notes": [
                "VCNs, internet gateways, NAT gateways and service gateways carry no charge",
                "Site-to-Site VPN connections are free; FastConnect is billed per port hour",
            ],
            "last_updated": self.loader.get_last_updated(),
        }

    def estimate_networking(
        self,
        flexible_load_balancers: int = 0,
        load_balancer_bandwidth_mbps: float = 0,
        network_load_balancers: int = 0,
        outbound_data_gb: float = 0,
        fast_connect_gbps: Optional[int] = None,
        vpn_connections: int = 0,
        nat_gateways: int = 0,
        hours_per_month: float = HOURS_PER_MONTH,
    ) -> CostEstimate:
        """
        Price a networking configuration with free allowances deducted from
        the billable quantity: the first flexible load balancer, the first
        10 Mbps of load balancer bandwidth and the first 10,240 GB of egress.
        """
        estimate = CostEstimate()

        def add(type: str, label: str, quantity: float, hours: float = hours_per_month):
            item = self._item(type)
            if item is None:
                estimate.notes.append(f"Warning: networking item {type!r} not found in catalog.")
                return
            estimate.add(LineItem.build("networking", label, quantity, item.unit, item.price_per_unit,
                                        hours if item.is_hourly else 1))

        if flexible_load_balancers > 0:
            billable = max(0, flexible_load_balancers - FREE_FLEXIBLE_LBS)
            add("flexible-load-balancer",
                f"Flexible Load Balancer ({flexible_load_balancers} total, first {FREE_FLEXIBLE_LBS} free)", billable)
            if load_balancer_bandwidth_mbps > 0:
                total_mbps = load_balancer_bandwidth_mbps * flexible_load_balancers
                billable_mbps = max(0.0, total_mbps - FREE_LB_BANDWIDTH_MBPS)
                add("flexible-load-balancer-bandwidth",
                    f"Load Balancer Bandwidth ({total_mbps:g} Mbps, first {FREE_LB_BANDWIDTH_MBPS} Mbps free)",
                    billable_mbps)
        if network_load_balancers > 0:
            add("network-load-balancer", "Network Load Balancer", network_load_balancers)

        if outbound_data_gb > 0:
            egress = self._item("data-egress")
            included = egress.included_data_gb if egress and egress.included_data_gb is not None else FREE_EGRESS_GB
            billable_gb = max(0.0, outbound_data_gb - included)
            add("data-egress", f"Outbound Data Transfer ({outbound_data_gb:g} GB, first {included:g} GB free)",
                billable_gb)

        if fast_connect_gbps:
            add(f"fastconnect-{fast_connect_gbps}g", f"FastConnect {fast_connect_gbps} Gbps port", 1)
        if vpn_connections > 0:
            add("site-to-site-vpn", "Site-to-Site VPN", vpn_connections)
        if nat_gateways > 0:
            add("nat-gateway", "NAT Gateway", nat_gateways)

        return estimate

    def calculate_networking_cost(self, **params: Any) -> Dict[str, Any]:
        estimate = self.estimate_networking(**params)
        estimate.notes.append("Inbound data transfer is always free.")
        return estimate.to_dict()

    def compare_data_egress(self, monthly_gb: float) -> Dict[str, Any]:
        egress = self._item("data-egress")
        oci_price = egress.price_per_unit if egress else 0.0085
        oci_free = egress.included_data_gb if egress and egress.included_data_gb is not None else FREE_EGRESS_GB
        oci_cost = round2(max(0.0, monthly_gb - oci_free) * oci_price)

        providers = [{
            "provider": "OCI",
            "price_per_gb": oci_price,
            "free_gb": oci_free,
            "monthly_cost": oci_cost,
        }]
        for name, (price, free_gb) in EGRESS_REFERENCE.items():
            cost = round2(max(0.0, monthly_gb - free_gb) * price)
            providers.append({
                "provider": name,
                "price_per_gb": price,
                "free_gb": free_gb,
                "monthly_cost": cost,
                "oci_savings": round2(cost - oci_cost),
            })

        aws_cost = providers[1]["monthly_cost"]
        return {
            "monthly_gb": monthly_gb,
            "comparison": providers,
            "savings_vs_aws": round2(aws_cost - oci_cost),
            "savings_percent_vs_aws": round((aws_cost - oci_cost) / aws_cost * 100, 1) if aws_cost else 0.0,
            "notes": [
                f"OCI includes {oci_free:,.0f} GB of free outbound transfer per month",
                "Other providers' rates are first-tier list prices from North America regions",
            ],
        }
