"""MCP Server: database service pricing (Autonomous, Base DB, MySQL, PostgreSQL, NoSQL, Exadata)."""
from typing import Any, Dict, List, Optional

from oci_pricing_mcp.mcp_servers.base import BasePricingServer, group_by_type, hours_note
from oci_pricing_mcp.models.estimate import HOURS_PER_MONTH, CostEstimate, LineItem, round2
from oci_pricing_mcp.models.pricing import DatabasePricing

DEFAULT_STORAGE_PRICE = 0.0255

# list_database_options type -> match term
TYPE_FILTERS = {
    "autonomous": "autonomous",
    "mysql": "mysql",
    "postgresql": "postgresql",
    "nosql": "nosql",
    "base-db": "base-database",
    "exadata": "exadata",
}

WORKLOAD_DATABASES = {
    "oltp": ["autonomous-transaction-processing", "base-database-ee", "mysql", "postgresql"],
    "analytics": ["autonomous-data-warehouse", "mysql-heatwave", "exadata"],
    "document": ["autonomous-json-database", "nosql"],
    "general": ["autonomous-transaction-processing", "base-database-se", "mysql", "postgresql"],
}

USE_CASES = {
    "autonomous-transaction-processing": "Self-managing OLTP with auto-scaling and automatic patching",
    "autonomous-data-warehouse": "Self-managing analytics and data warehousing",
    "autonomous-json-database": "Document workloads with MongoDB-compatible APIs",
    "base-database-se": "Oracle Database Standard Edition with full OS access",
    "base-database-ee": "Oracle Database Enterprise Edition with full OS access",
    "mysql": "Open-source MySQL applications",
    "mysql-heatwave": "Real-time analytics on MySQL data without ETL",
    "postgresql": "Open-source PostgreSQL applications",
    "nosql": "Key-value and document workloads with predictable latency",
    "exadata": "Mission-critical Oracle workloads needing Exadata performance",
}

COMPARE_COMPUTE_UNITS = 2
COMPARE_STORAGE_GB = 100


class DatabaseServer(BasePricingServer):
    SERVER_NAME = "database"
    VERSION = "1.0.0"

    def find_database(self, type: str, byol: bool = False) -> Optional[DatabasePricing]:
        """
        Find a database offering by database_type or catalog type.

        A BYOL request prefers the BYOL variant of the same database type and
        falls back to the license-included entry when none exists.
        """
        wanted = TYPE_FILTERS.get(type.lower(), type.lower())
        compact = wanted.replace("-", "")
        candidates = [
            d for d in self.loader.get_database_pricing()
            if d.database_type == wanted or d.type == wanted or compact in d.type.replace("-", "")
        ]
        if not candidates:
            return None
        base = candidates[0]
        same_type = [d for d in self.loader.get_database_pricing() if d.database_type == base.database_type]
        preferred = [d for d in same_type if d.byol == byol]
        return (preferred or same_type or candidates)[0]

    def byol_variant(self, entry: DatabasePricing) -> Optional[DatabasePricing]:
        return next(
            (d for d in self.loader.get_database_pricing() if d.database_type == entry.database_type and d.byol),
            None,
        )

    def list_database_options(
        self,
        type: Optional[str] = None,
        license_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        items = self.loader.get_database_pricing()
        if type:
            term = TYPE_FILTERS.get(type, type)
            items = [d for d in items if d.matches(term)]
        if license_type == "byol":
            items = [d for d in items if d.byol]
        elif license_type == "included":
            items = [d for d in items if not d.byol]
        return {
            "options": [d.to_dict() for d in items],
            "total_count": len(items),
            "by_type": group_by_type(items),
            "free_tier_note": "Always Free: 2 Autonomous Databases (1 OCPU, 20 GB storage each)",
            "notes": [
                "Autonomous Database is billed per ECPU-hour with storage billed separately",
                "BYOL pricing applies when you bring existing Oracle Database licenses",
                "Base Database Service is billed per OCPU-hour",
            ],
            "last_updated": self.loader.get_last_updated(),
        }

    def estimate_database(
        self,
        type: str,
        compute_units: float,
        storage_gb: float = 0,
        license_type: str = "included",
        hours_per_month: float = HOURS_PER_MONTH,
    ) -> CostEstimate:
        byol = license_type == "byol"
        entry = self.find_database(type, byol=byol)
        if entry is None:
            return CostEstimate.not_found(
                f'Database type "{type}" not found. Use list_database_options to see available databases.'
            )

        estimate = self._price(entry, compute_units, storage_gb, hours_per_month)
        if byol:
            if entry.byol:
                estimate.notes.append("Price reflects BYOL (Bring Your Own License) rates.")
            else:
                estimate.notes.append(f"No BYOL variant exists for {entry.database_type}; license-included price used.")
        if entry.is_autonomous:
            estimate.notes.append("Autonomous Database can auto-scale up to 3x the base ECPU count; scaled usage is billed per second.")
        note = hours_note(hours_per_month, "Database")
        if note:
            estimate.notes.append(note)
        return estimate

    def _price(self, entry: DatabasePricing, compute_units: float, storage_gb: float,
               hours_per_month: float) -> CostEstimate:
        estimate = CostEstimate()
        estimate.add(LineItem.build(
            "database", f"{entry.description} ({entry.compute_unit})", compute_units,
            entry.unit, entry.compute_price, hours_per_month if entry.is_hourly else 1,
        ))
        if storage_gb > 0:
            storage_price = entry.storage_price if entry.storage_price is not None else DEFAULT_STORAGE_PRICE
            estimate.add(LineItem.build(
                "database", f"{entry.description} storage", storage_gb, "GB per month", storage_price,
            ))
        return estimate

    def calculate_database_cost(
        self,
        type: str,
        compute_units: float,
        storage_gb: float = 0,
        license_type: str = "included",
        hours_per_month: float = HOURS_PER_MONTH,
    ) -> Dict[str, Any]:
        estimate = self.estimate_database(type, compute_units, storage_gb, license_type, hours_per_month)
        extra: Dict[str, Any] = {
            "configuration": {
                "type": type,
                "compute_units": compute_units,
                "storage_gb": storage_gb,
                "license_type": license_type,
                "hours_per_month": hours_per_month,
            },
        }

        entry = self.find_database(type) if estimate.found else None
        if entry is not None and license_type != "byol" and not entry.byol:
            variant = self.byol_variant(entry)
            if variant is not None:
                byol_total = self._price(variant, compute_units, storage_gb, hours_per_month).total_monthly
                savings = round2(estimate.total_monthly - byol_total)
                percent = round(savings / estimate.total_monthly * 100, 1) if estimate.total_monthly else 0.0
                extra["savings"] = {
                    "byol_monthly": byol_total,
                    "byol_savings": savings,
                    "percent_saved": percent,
                }
                estimate.notes.append(
                    f"BYOL would cost ${byol_total:.2f}/month, saving ${savings:.2f} ({percent}%) "
                    f"if you have existing Oracle licenses."
                )
        return estimate.to_dict(**extra)

    def compare_database_options(self, workload_type: str = "general") -> Dict[str, Any]:
        wanted = WORKLOAD_DATABASES.get(workload_type, WORKLOAD_DATABASES["general"])
        options: List[Dict[str, Any]] = []
        for d in self.loader.get_database_pricing():
            if d.byol or d.database_type not in wanted:
                continue
            estimate = self._price(d, COMPARE_COMPUTE_UNITS, COMPARE_STORAGE_GB, HOURS_PER_MONTH)
            options.append({
                "type": d.type,
                "database_type": d.database_type,
                "description": d.description,
                "compute_price": d.compute_price,
                "compute_unit": d.compute_unit,
                "storage_price": d.storage_price if d.storage_price is not None else DEFAULT_STORAGE_PRICE,
                "monthly_estimate": estimate.total_monthly,
                "use_case": USE_CASES.get(d.database_type, ""),
            })
        options.sort(key=lambda o: o["monthly_estimate"])
        return {
            "workload_type": workload_type,
            "baseline": f"{COMPARE_COMPUTE_UNITS} compute units, {COMPARE_STORAGE_GB} GB storage, {HOURS_PER_MONTH} hours/month",
            "options": options,
            "cheapest": options[0]["type"] if options else None,
            "notes": [
                "ECPU and OCPU are not equivalent units; compare on workload benchmarks as well as price",
                "BYOL variants are excluded; use calculate_database_cost with license_type=byol",
            ],
            "last_updated": self.loader.get_last_updated(),
        }
