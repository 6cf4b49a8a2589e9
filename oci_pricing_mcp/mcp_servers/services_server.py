"""
MCP Server: secondary platform services.

Covers AI/ML, observability, integration, security, analytics, developer,
media, VMware, edge, governance, Exadata, cache, disaster recovery and
additional services. Every category shares the same list, calculate and
compare operations; the per-category differences are advisory text only.
"""
from typing import Any, Dict, List, Optional

from oci_pricing_mcp.mcp_servers.base import BasePricingServer, group_by_type, unique_types
from oci_pricing_mcp.models.estimate import HOURS_PER_MONTH, CostEstimate, LineItem, round2
from oci_pricing_mcp.models.pricing import SERVICE_CATEGORIES, ServicePricing

COMPARE_QUANTITY = 1

CATEGORY_NOTES: Dict[str, List[str]] = {
    "ai-ml": [
        "Generative AI supports Cohere, Meta Llama, and xAI Grok models",
        "Pricing varies by model size and deployment type (on-demand vs dedicated)",
        "Vision, Speech, Language, and Document Understanding use transaction-based pricing",
    ],
    "observability": [
        "Many observability services include free tier allowances",
        "APM provides end-to-end application tracing",
        "Log Analytics enables log search and analysis",
    ],
    "integration": [
        "Oracle Integration provides pre-built adapters for SaaS and on-premises apps",
        "GoldenGate enables real-time data replication and streaming",
        "Streaming is compatible with Apache Kafka APIs",
    ],
    "security": [
        "Data Safe provides database security assessment and monitoring",
        "Cloud Guard detects security threats across your tenancy",
        "WAF protects web applications from attacks",
    ],
    "analytics": [
        "Analytics Cloud provides enterprise BI and visualization",
        "Big Data Service runs Apache Spark and Hadoop workloads",
        "Data Flow provides serverless Spark execution",
    ],
    "developer": [
        "Functions provides serverless compute with pay-per-execution",
        "Container Instances run containers without managing infrastructure",
        "API Gateway manages and secures API traffic",
    ],
    "media": [
        "Media Flow provides video transcoding and processing pipelines",
        "Media Streams enables live and on-demand video streaming",
        "Pricing based on minutes processed and output resolution",
    ],
    "vmware": [
        "Oracle Cloud VMware Solution (OCVS) runs VMware workloads natively",
        "Pricing is per host with hourly and committed configurations",
        "Includes VMware vSphere, vSAN, and NSX licensing",
    ],
    "edge": [
        "DNS provides global low-latency name resolution",
        "Email Delivery is a scalable outbound email service",
        "Health Checks monitor endpoint availability",
    ],
    "governance": [
        "Access Governance manages identity lifecycle and access reviews",
        "Fleet Application Management monitors and patches applications",
        "License Manager tracks Oracle license usage",
    ],
    "exadata": [
        "Exadata infrastructure is billed separately from database ECPUs",
        "BYOL ECPU pricing applies when you bring existing Oracle licenses",
        "Exascale storage is billed per GB-month",
    ],
    "cache": [
        "OCI Cache is a managed Redis-compatible service",
        "Pricing is per GB of memory per hour and depends on the memory tier",
    ],
    "disaster-recovery": [
        "Full Stack Disaster Recovery is billed per OCPU of protected compute",
        "Database and storage replication are billed by their own services",
    ],
    "additional": [
        "WebLogic BYOL carries no software charge beyond the underlying compute",
        "Java SE Universal Subscription is billed per processor",
    ],
}

FREE_ALLOWANCES: Dict[str, List[Dict[str, str]]] = {
    "observability": [
        {"service": "Logging", "allowance": "10 GB/month ingest"},
        {"service": "Monitoring", "allowance": "500 million datapoints/month"},
        {"service": "Notifications", "allowance": "1 million notifications/month"},
    ],
    "edge": [
        {"service": "DNS", "allowance": "1 million queries/month"},
        {"service": "Email Delivery", "allowance": "3,000 emails/month"},
    ],
    "ai-ml": [
        {"service": "Vision, Language, Document Understanding", "allowance": "5,000 transactions/month"},
        {"service": "Speech", "allowance": "5 transcription hours/month"},
    ],
}

FREE_SERVICES: Dict[str, List[str]] = {
    "security": [
        "Cloud Guard - threat detection (free)",
        "Vault - 20 key versions free",
        "Bastion - free service",
    ],
    "developer": [
        "Functions - 2 million invocations/month free",
        "APEX - included with Autonomous Database",
        "Resource Manager (Terraform) - free",
    ],
}

COVERAGE = {
    "core": ["compute", "storage", "database", "networking", "kubernetes"],
    "ai_ml": ["generative-ai", "vision", "speech", "language", "document-understanding"],
    "operations": ["observability", "security", "governance"],
    "platform": ["integration", "analytics", "developer", "media", "vmware", "edge"],
    "data": ["exadata", "cache", "disaster-recovery"],
    "multicloud": ["database@azure", "database@aws", "database@gcp"],
}


class ServicesServer(BasePricingServer):
    SERVER_NAME = "services"
    VERSION = "1.0.0"

    def list_category(
        self,
        category: str,
        type: Optional[str] = None,
        model: Optional[str] = None,
    ) -> Dict[str, Any]:
        items = self.loader.get_service_pricing(category, type)
        if model:
            items = [i for i in items if i.matches(model)]

        result: Dict[str, Any] = {
            "category": category,
            "services": [i.to_dict() for i in items],
            "total_count": len(items),
            "by_type": group_by_type(items),
            "available_types": unique_types(items),
        }
        if category == "ai-ml":
            result["available_models"] = list(dict.fromkeys(i.model for i in items if getattr(i, "model", None)))
        if category in FREE_ALLOWANCES:
            result["free_allowances"] = FREE_ALLOWANCES[category]
        if category in FREE_SERVICES:
            result["free_services"] = FREE_SERVICES[category]
        result["notes"] = CATEGORY_NOTES.get(category, [])
        result["last_updated"] = self.loader.get_last_updated()
        return result

    def list_ai_ml_services(self, type: Optional[str] = None, model: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("ai-ml", type, model)

    def list_observability_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("observability", type)

    def list_integration_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("integration", type)

    def list_security_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("security", type)

    def list_analytics_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("analytics", type)

    def list_developer_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("developer", type)

    def list_media_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("media", type)

    def list_vmware_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("vmware", type)

    def list_edge_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("edge", type)

    def list_governance_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("governance", type)

    def list_exadata_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("exadata", type)

    def list_cache_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("cache", type)

    def list_disaster_recovery_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("disaster-recovery", type)

    def list_additional_services(self, type: Optional[str] = None) -> Dict[str, Any]:
        return self.list_category("additional", type)

    def get_services_summary(self) -> Dict[str, Any]:
        counts = self.loader.get_service_category_counts()
        return {
            "categories": counts,
            "total_pricing_items": sum(counts.values()),
            "coverage": COVERAGE,
            "notes": [
                "Pricing data sourced from the Oracle Cloud Infrastructure price list",
                "All prices in USD, Pay-As-You-Go rates",
                "Many services include free tier allowances",
            ],
            "last_updated": self.loader.get_last_updated(),
        }

    def find_service(self, category: str, service: str) -> Optional[ServicePricing]:
        """Exact name, type or part number first, then substring."""
        items = self.loader.get_service_pricing(category)
        exact = next((i for i in items if i.identifies(service)), None)
        if exact is not None:
            return exact
        return next((i for i in items if i.matches(service)), None)

    @staticmethod
    def _line(category: str, item: ServicePricing, quantity: float,
              hours_per_month: float) -> LineItem:
        billable = max(0.0, quantity - (item.free_allowance or 0))
        hours = hours_per_month if item.is_hourly else 1
        return LineItem.build(category, item.name, billable, item.unit, item.price_per_unit, hours)

    def estimate_service(
        self,
        category: str,
        service: str,
        quantity: float,
        hours_per_month: float = HOURS_PER_MONTH,
    ) -> CostEstimate:
        if category not in SERVICE_CATEGORIES:
            return CostEstimate.not_found(
                f'Service category "{category}" not found. '
                f'Available categories: {", ".join(SERVICE_CATEGORIES)}.'
            )
        item = self.find_service(category, service)
        if item is None:
            return CostEstimate.not_found(
                f'Service "{service}" not found in {category}. '
                f'Use compare_service_options with category "{category}" to see available services.'
            )

        estimate = CostEstimate()
        estimate.add(self._line(category, item, quantity, hours_per_month))
        if item.free_allowance:
            estimate.notes.append(
                f"First {item.free_allowance:g} {item.unit} free each month; "
                f"{max(0.0, quantity - item.free_allowance):g} billable."
            )
        if item.is_hourly:
            estimate.notes.append(f"Hourly unit calculated for {hours_per_month:g} hours/month.")
        if item.notes:
            estimate.notes.append(item.notes)
        return estimate

    def calculate_service_cost(
        self,
        category: str,
        service: str,
        quantity: float,
        hours_per_month: float = HOURS_PER_MONTH,
    ) -> Dict[str, Any]:
        estimate = self.estimate_service(category, service, quantity, hours_per_month)
        return estimate.to_dict(
            configuration={
                "category": category,
                "service": service,
                "quantity": quantity,
                "hours_per_month": hours_per_month,
            },
        )

    def compare_service_options(
        self,
        category: str,
        type: Optional[str] = None,
        quantity: float = COMPARE_QUANTITY,
    ) -> Dict[str, Any]:
        if category not in SERVICE_CATEGORIES:
            return {
                "category": category,
                "options": [],
                "cheapest": None,
                "notes": [f'Service category "{category}" not found.'],
            }
        options = []
        for item in self.loader.get_service_pricing(category, type):
            line = self._line(category, item, quantity, HOURS_PER_MONTH)
            options.append({
                "name": item.name,
                "type": item.type,
                "unit": item.unit,
                "price_per_unit": item.price_per_unit,
                "free_allowance": item.free_allowance,
                "monthly_cost": line.monthly_total,
            })
        options.sort(key=lambda o: o["monthly_cost"])
        return {
            "category": category,
            "type": type,
            "quantity": quantity,
            "options": options,
            "cheapest": options[0]["name"] if options else None,
            "price_spread": round2(options[-1]["monthly_cost"] - options[0]["monthly_cost"]) if options else 0.0,
            "notes": [
                f"Each option priced for {quantity:g} of its own unit; units differ between services",
                f"Hourly units assume {HOURS_PER_MONTH} hours/month",
            ],
            "last_updated": self.loader.get_last_updated(),
        }
