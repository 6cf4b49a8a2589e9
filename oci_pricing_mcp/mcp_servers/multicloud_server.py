"""MCP Server: Oracle Database@Azure, Database@AWS and Database@Google Cloud pricing."""
from typing import Any, Dict, List, Optional, Tuple

from oci_pricing_mcp.mcp_servers.base import BasePricingServer, hours_note
from oci_pricing_mcp.models.estimate import HOURS_PER_MONTH, CostEstimate, LineItem, round2
from oci_pricing_mcp.models.pricing import MULTICLOUD_PROVIDERS, DatabasePricing, MulticloudPricing

DEFAULT_COMPUTE_PRICE = 0.1
DEFAULT_STORAGE_PRICE = 0.0255

TYPE_GROUPS = {
    "autonomous": ["autonomous-serverless", "autonomous-dedicated"],
    "exadata": ["exadata", "exascale"],
    "base-db": ["base-db"],
}

PROVIDER_NAMES = {
    "azure": "Microsoft Azure",
    "aws": "Amazon Web Services",
    "gcp": "Google Cloud Platform",
}

BRAND_NAMES = {
    "azure": "Oracle Database@Azure",
    "aws": "Oracle Database@AWS",
    "gcp": "Oracle Database@Google Cloud",
}

# multicloud database_type -> OCI-native catalog type
OCI_EQUIVALENTS = {
    "autonomous-serverless": "autonomous-db-atp",
    "autonomous-dedicated": "autonomous-db-atp",
    "exadata": "exadata-cloud",
    "exascale": "exadata-cloud",
    "base-db": "base-database-se",
}

KEY_DIFFERENCES = [
    {
        "aspect": "Billing",
        "oci": "Direct Oracle billing",
        "azure": "Azure Marketplace (consolidated with Azure services)",
        "aws": "Private offer (contact for quote)",
        "gcp": "Google Cloud Marketplace (consolidated with GCP services)",
    },
    {
        "aspect": "Support",
        "oci": "Oracle Support",
        "azure": "Joint Oracle + Microsoft support",
        "aws": "Oracle Support (via private offer terms)",
        "gcp": "Joint Oracle + Google support",
    },
    {
        "aspect": "Network Integration",
        "oci": "Native OCI networking",
        "azure": "Azure VNet integration",
        "aws": "AWS VPC integration",
        "gcp": "GCP VPC integration",
    },
]


class MulticloudServer(BasePricingServer):
    SERVER_NAME = "multicloud"
    VERSION = "1.0.0"

    def _last_updated(self) -> str:
        data = self.loader.get_multicloud_data()
        return (data.last_updated if data and data.last_updated else None) or self.loader.get_last_updated()

    def list_multicloud_databases(
        self,
        provider: Optional[str] = None,
        database_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        wanted = TYPE_GROUPS.get(database_type or "", [])
        databases = []
        for db in self.loader.get_multicloud_availability():
            if wanted and db.database_type not in wanted:
                continue
            if provider and not db.available_on(provider):
                continue
            pricing = self.loader.get_multicloud_pricing(provider=provider, database_type=db.database_type)
            entry: Dict[str, Any] = {
                "database_type": db.database_type,
                "display_name": db.display_name,
                "availability": {p: db.available_on(p) for p in MULTICLOUD_PROVIDERS},
            }
            if db.notes:
                entry["notes"] = db.notes
            if pricing:
                entry["pricing"] = [p.to_dict() for p in pricing]
            databases.append(entry)

        return {
            "databases": databases,
            "total_count": len(databases),
            "filters": {
                "provider": provider or "all",
                "database_type": database_type or "all",
            },
            "notes": [
                "Oracle maintains price parity across all cloud providers",
                "AWS offerings are primarily through private offers - contact Oracle or AWS for quotes"
                if provider == "aws"
                else "Azure and GCP offer public marketplace pricing with consolidated billing",
            ],
            "tips": [
                "Use calculate_multicloud_database_cost for specific cost estimates",
                "Use compare_multicloud_vs_oci to compare costs across deployment options",
            ],
            "last_updated": self._last_updated(),
        }

    def get_multicloud_availability(self) -> Dict[str, Any]:
        availability = self.loader.get_multicloud_availability()
        data = self.loader.get_multicloud_data()
        total = len(availability)
        matrix = []
        for db in availability:
            row: Dict[str, Any] = {"product": db.display_name, "database_type": db.database_type}
            row.update({p: db.available_on(p) for p in MULTICLOUD_PROVIDERS})
            if db.notes:
                row["notes"] = db.notes
            matrix.append(row)

        summary = {}
        for p in MULTICLOUD_PROVIDERS:
            count = sum(1 for db in availability if db.available_on(p))
            summary[p] = f"{count}/{total} products available"

        return {
            "matrix": matrix,
            "summary": summary,
            "multicloud_brands": dict(BRAND_NAMES),
            "notes": list(data.notes) if data else [],
            "last_updated": self._last_updated(),
        }

    def _record(self, provider: str, database_type: str) -> Optional[MulticloudPricing]:
        records = self.loader.get_multicloud_pricing(provider=provider, database_type=database_type)
        return records[0] if records else None

    def estimate_multicloud_database(
        self,
        provider: str,
        database_type: str,
        compute_units: float,
        storage_gb: float = 0,
        license_type: str = "included",
        hours_per_month: float = HOURS_PER_MONTH,
    ) -> Tuple[CostEstimate, Optional[MulticloudPricing]]:
        provider_name = PROVIDER_NAMES.get(provider, provider)
        record = self._record(provider, database_type)
        if record is None:
            return CostEstimate.not_found(
                f"No pricing available for {database_type} on {provider_name}. "
                f"Use get_multicloud_availability to see which products are available on each provider."
            ), None
        if not record.available:
            return CostEstimate.not_found(
                f"{database_type} is not currently available on {provider_name}. {record.billing_note}".strip()
            ), record

        byol = license_type == "byol" and record.byol_available
        unit = record.compute_unit
        estimate = CostEstimate()
        estimate.add(
            LineItem.build("database", f"Compute ({unit})", compute_units, f"{unit} per hour",
                           record.compute_price(byol), hours_per_month),
            LineItem.build("database", "Storage", storage_gb, "GB per month", record.storage_price or 0.0),
        )

        if record.pricing_model == "private-offer":
            estimate.notes.append(
                "Pricing shown is an estimate based on OCI price parity. "
                "Contact Oracle or the cloud provider for actual pricing."
            )
        else:
            estimate.notes.append("Pricing based on public marketplace rates.")
        if byol:
            estimate.notes.append("BYOL pricing applied - you must have existing Oracle licenses.")
        elif license_type == "byol":
            estimate.notes.append(f"BYOL is not offered for {database_type} on {provider_name}; license-included price used.")
        else:
            estimate.notes.append("License Included pricing applied.")
        note = hours_note(hours_per_month, "Database")
        if note:
            estimate.notes.append(note)
        return estimate, record

    def calculate_multicloud_database_cost(
        self,
        provider: str,
        database_type: str,
        compute_units: float,
        storage_gb: float = 0,
        license_type: str = "included",
        hours_per_month: float = HOURS_PER_MONTH,
    ) -> Dict[str, Any]:
        estimate, record = self.estimate_multicloud_database(
            provider, database_type, compute_units, storage_gb, license_type, hours_per_month
        )
        extra: Dict[str, Any] = {
            "provider": PROVIDER_NAMES.get(provider, provider),
            "multicloud_brand": BRAND_NAMES.get(provider, provider),
            "database_type": database_type,
            "available": record is not None and record.available,
            "configuration": {
                "compute_units": compute_units,
                "storage_gb": storage_gb,
                "license_type": license_type,
                "hours_per_month": hours_per_month,
            },
        }
        if record is not None and record.available:
            extra["pricing_model"] = record.pricing_model
            extra["billing_note"] = record.billing_note
            if record.marketplace_url:
                extra["marketplace_url"] = record.marketplace_url
        return estimate.to_dict(**extra)

    def _oci_equivalent(self, database_type: str) -> Optional[DatabasePricing]:
        wanted = OCI_EQUIVALENTS.get(database_type, database_type)
        return next(
            (d for d in self.loader.get_database_pricing()
             if not d.byol and (d.type == wanted or d.database_type == wanted)),
            None,
        )

    def reference_prices(self, database_type: str) -> Tuple[float, float, str]:
        """
        OCI-native compute and storage prices used as the parity baseline.

        Preference order: the first available multicloud record, then the
        OCI catalog entry, then fixed defaults.
        """
        reference = next(
            (p for p in self.loader.get_multicloud_pricing(database_type=database_type) if p.available),
            None,
        )
        oci = self._oci_equivalent(database_type)
        if reference is not None:
            compute = reference.compute_price() or (oci.compute_price if oci else 0) or DEFAULT_COMPUTE_PRICE
            storage = reference.storage_price or (oci.storage_price if oci else None) or DEFAULT_STORAGE_PRICE
            return compute, storage, "multicloud price parity"
        if oci is not None:
            return oci.compute_price or DEFAULT_COMPUTE_PRICE, oci.storage_price or DEFAULT_STORAGE_PRICE, "OCI catalog"
        return DEFAULT_COMPUTE_PRICE, DEFAULT_STORAGE_PRICE, "default"

    def compare_multicloud_vs_oci(
        self,
        database_type: str,
        compute_units: float,
        storage_gb: float = 0,
    ) -> Dict[str, Any]:
        compute_price, storage_price, source = self.reference_prices(database_type)
        oci_monthly = round2(
            round2(compute_units * compute_price * HOURS_PER_MONTH) + round2(storage_gb * storage_price)
        )

        comparison: List[Dict[str, Any]] = [{
            "provider": "OCI",
            "brand": "Oracle Cloud Infrastructure",
            "available": True,
            "pricing_model": "direct",
            "compute_price": compute_price,
            "storage_price": storage_price,
            "monthly_estimate": oci_monthly,
            "vs_oci": "baseline",
            "billing_note": "Direct billing from Oracle",
        }]

        for provider in MULTICLOUD_PROVIDERS:
            record = self._record(provider, database_type)
            row: Dict[str, Any] = {
                "provider": PROVIDER_NAMES[provider],
                "brand": BRAND_NAMES[provider],
                "available": False,
                "pricing_model": record.pricing_model if record else "unavailable",
                "compute_price": 0,
                "storage_price": 0,
                "monthly_estimate": 0,
                "vs_oci": "N/A",
                "billing_note": record.billing_note if record else "Not offered on this provider",
            }
            if record is not None and record.available:
                estimate, _ = self.estimate_multicloud_database(provider, database_type, compute_units, storage_gb)
                monthly = estimate.total_monthly
                row.update({
                    "available": True,
                    "compute_price": record.compute_price(),
                    "storage_price": record.storage_price or 0.0,
                    "monthly_estimate": monthly,
                    "vs_oci": self._versus(monthly, oci_monthly),
                })
                if record.marketplace_url:
                    row["marketplace_url"] = record.marketplace_url
            comparison.append(row)

        return {
            "database_type": database_type,
            "configuration": {
                "compute_units": compute_units,
                "storage_gb": storage_gb,
                "hours_per_month": HOURS_PER_MONTH,
                "license_type": "included",
            },
            "comparison": comparison,
            "summary": {
                "oci_monthly": oci_monthly,
                "reference_price_source": source,
                "price_parity": "Oracle maintains price parity across all cloud providers",
                "recommendation": "Choose based on existing cloud investments, compliance requirements, "
                                  "and operational preferences",
            },
            "key_differences": KEY_DIFFERENCES,
            "notes": [
                "Price parity means the same Oracle database costs the same regardless of cloud provider",
                "AWS pricing requires private offer - contact Oracle or AWS for specific quotes",
                "Marketplace billing allows consolidated invoicing with other cloud services",
            ],
            "last_updated": self.loader.get_last_updated(),
        }

    @staticmethod
    def _versus(monthly: float, oci_monthly: float) -> str:
        if oci_monthly <= 0:
            return "N/A"
        if monthly == oci_monthly:
            return "same price (price parity)"
        diff = round2(abs(monthly - oci_monthly))
        return f"+${diff:.2f}/mo" if monthly > oci_monthly else f"-${diff:.2f}/mo"
