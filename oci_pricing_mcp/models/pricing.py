"""
Catalog schema for the bundled OCI pricing data.

Every record is a frozen pydantic model. Each category variant declares the
fields its match predicate searches, so filtering never has to probe for
optional attributes at runtime.
"""

from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field


def _contains(term: str, fields: Tuple[Optional[str], ...]) -> bool:
    needle = term.lower()
    return any(needle in f.lower() for f in fields if f)


class CatalogModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


# ── Priced items ─────────────────────────────────────────────────────────────

class PricingItem(CatalogModel):
    """Base pricing record shared by all categories"""
    service: str
    type: str
    description: str = ""
    unit: str
    price_per_unit: float
    currency: str = "USD"
    notes: Optional[str] = None

    def search_fields(self) -> Tuple[Optional[str], ...]:
        return (self.type, self.description)

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over this variant's fields"""
        return _contains(term, self.search_fields())

    @property
    def is_hourly(self) -> bool:
        return "per hour" in self.unit.lower()

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ComputeShapePricing(PricingItem):
    """Compute shape (flex VM, bare metal or GPU)"""
    shape_family: str
    ocpu_price: float
    memory_price_per_gb: float
    min_ocpu: float = 1
    max_ocpu: float
    min_memory_gb: float = 1
    max_memory_gb: float
    memory_per_ocpu_ratio: Optional[float] = None
    gpu_count: Optional[int] = None
    local_storage_gb: Optional[float] = None
    processor: Optional[str] = None

    def search_fields(self):
        return (self.type, self.description, self.shape_family)

    def identifies(self, name: str) -> bool:
        return self.shape_family.lower() == name.lower()

    def clamp(self, ocpus: float, memory_gb: float) -> Tuple[float, float]:
        """Fit a configuration into the shape's OCPU and memory range"""
        return (
            max(self.min_ocpu, min(ocpus, self.max_ocpu)),
            max(self.min_memory_gb, min(memory_gb, self.max_memory_gb)),
        )

    def supports(self, ocpus: float, memory_gb: float) -> bool:
        return (self.min_ocpu <= ocpus <= self.max_ocpu
                and self.min_memory_gb <= memory_gb <= self.max_memory_gb)

    def hourly_cost(self, ocpus: float, memory_gb: float) -> float:
        return ocpus * self.ocpu_price + memory_gb * self.memory_price_per_gb


class StoragePricing(PricingItem):
    storage_type: str
    performance_tier: Optional[str] = None
    vpus_per_gb: Optional[int] = None
    min_retention_days: Optional[int] = None

    def search_fields(self):
        return (self.type, self.description, self.storage_type, self.performance_tier)


class DatabasePricing(PricingItem):
    database_type: str
    ecpu_price: Optional[float] = None
    storage_price: Optional[float] = None
    license_included: bool = True
    byol: bool = False
    compute_unit: str = "ECPU"

    def search_fields(self):
        return (self.type, self.description, self.database_type)

    @property
    def compute_price(self) -> float:
        return self.ecpu_price if self.ecpu_price is not None else self.price_per_unit

    @property
    def is_autonomous(self) -> bool:
        return self.database_type.startswith("autonomous")


class NetworkingPricing(PricingItem):
    networking_type: str
    bandwidth_mbps: Optional[float] = None
    bandwidth_gbps: Optional[int] = None
    included_data_gb: Optional[float] = None

    def search_fields(self):
        return (self.type, self.description, self.networking_type)


class KubernetesPricing(PricingItem):
    cluster_type: str
    cluster_management_fee: Optional[float] = None

    def search_fields(self):
        return (self.type, self.description, self.cluster_type)


class ServicePricing(PricingItem):
    """Secondary platform service (observability, security, edge, ...)"""
    name: str
    part_number: Optional[str] = None
    free_allowance: Optional[float] = None

    def search_fields(self):
        return (self.name, self.type, self.part_number, self.description)

    def identifies(self, name: str) -> bool:
        needle = name.lower()
        return any(needle == f.lower() for f in (self.name, self.type, self.part_number) if f)


class AIMLPricing(ServicePricing):
    model: Optional[str] = None

    def search_fields(self):
        return super().search_fields() + (self.model,)


class VMwarePricing(ServicePricing):
    host_type: Optional[str] = None

    def search_fields(self):
        return super().search_fields() + (self.host_type,)


class CachePricing(ServicePricing):
    memory_tier: Optional[str] = None

    def search_fields(self):
        return super().search_fields() + (self.memory_tier,)


class LicensedServicePricing(ServicePricing):
    """Service sold license-included or BYOL (Exadata, WebLogic, ...)"""
    license_included: Optional[bool] = None
    byol: Optional[bool] = None

    def search_fields(self):
        return super().search_fields() + (("byol",) if self.byol else ())


# ── Reference data ───────────────────────────────────────────────────────────

class APIProduct(CatalogModel):
    """Normalized price-list product (bundled list and real-time feed)"""
    part_number: str
    display_name: str
    metric_name: str = ""
    service_category: str = ""
    unit_price: float = 0.0
    currency: str = "USD"
    byol: bool = False

    def matches(self, term: str) -> bool:
        return _contains(term, (self.display_name, self.part_number, self.service_category))

    def in_category(self, category: str) -> bool:
        return _contains(category, (self.service_category,))

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class RegionInfo(CatalogModel):
    name: str
    location: str
    type: str = "commercial"


class ServiceCatalogEntry(CatalogModel):
    name: str
    category: str
    description: str
    pricing_types: List[str] = Field(default_factory=list)
    documentation_url: str = ""


class PricingMetadata(CatalogModel):
    source: str
    source_url: Optional[str] = None
    last_updated: str
    fetched_at: Optional[str] = None
    currency: str = "USD"
    pricing_model: Optional[str] = None
    total_products: Optional[int] = None
    counts: Dict[str, int] = Field(default_factory=dict)


# ── Multicloud ───────────────────────────────────────────────────────────────

MULTICLOUD_PROVIDERS = ("azure", "aws", "gcp")


class MulticloudAvailability(CatalogModel):
    database_type: str
    display_name: str
    azure: bool = False
    aws: bool = False
    gcp: bool = False
    notes: Optional[str] = None

    def available_on(self, provider: str) -> bool:
        return bool(getattr(self, provider, False))


class MulticloudPricing(CatalogModel):
    database_type: str
    provider: str
    available: bool
    pricing_model: str
    ecpu_price: Optional[float] = None
    ocpu_price: Optional[float] = None
    storage_price: Optional[float] = None
    license_included_price: Optional[float] = None
    byol_price: Optional[float] = None
    license_included: bool = False
    byol_available: bool = False
    billing_note: str = ""
    marketplace_url: Optional[str] = None

    @property
    def compute_unit(self) -> str:
        return "ECPU" if self.ecpu_price else "OCPU"

    def compute_price(self, byol: bool = False) -> float:
        first = self.byol_price if byol else self.license_included_price
        return first or self.ecpu_price or self.ocpu_price or 0.0

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class MulticloudData(CatalogModel):
    availability: List[MulticloudAvailability] = Field(default_factory=list)
    pricing: List[MulticloudPricing] = Field(default_factory=list)
    last_updated: Optional[str] = None
    notes: List[str] = Field(default_factory=list)


# ── Whole catalog ────────────────────────────────────────────────────────────

class PricingCatalog(CatalogModel):
    """The bundled pricing document, one list per category"""
    metadata: PricingMetadata
    compute: List[ComputeShapePricing]
    storage: List[StoragePricing]
    database: List[DatabasePricing]
    networking: List[NetworkingPricing]
    kubernetes: List[KubernetesPricing]

    # Optional extended categories
    ai_ml: List[AIMLPricing] = Field(default_factory=list)
    observability: List[ServicePricing] = Field(default_factory=list)
    integration: List[ServicePricing] = Field(default_factory=list)
    security: List[ServicePricing] = Field(default_factory=list)
    analytics: List[ServicePricing] = Field(default_factory=list)
    developer: List[ServicePricing] = Field(default_factory=list)
    media: List[ServicePricing] = Field(default_factory=list)
    vmware: List[VMwarePricing] = Field(default_factory=list)
    edge: List[ServicePricing] = Field(default_factory=list)
    governance: List[ServicePricing] = Field(default_factory=list)
    exadata: List[LicensedServicePricing] = Field(default_factory=list)
    cache: List[CachePricing] = Field(default_factory=list)
    disaster_recovery: List[ServicePricing] = Field(default_factory=list)
    additional_services: List[LicensedServicePricing] = Field(default_factory=list)

    # Reference data
    products: List[APIProduct] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list)
    regions: List[RegionInfo] = Field(default_factory=list)
    free_tier: Dict[str, Any] = Field(default_factory=dict)
    services: List[ServiceCatalogEntry] = Field(default_factory=list)
    multicloud: Optional[MulticloudData] = None


# Secondary category name -> PricingCatalog field
SERVICE_CATEGORIES: Dict[str, str] = {
    "ai-ml": "ai_ml",
    "observability": "observability",
    "integration": "integration",
    "security": "security",
    "analytics": "analytics",
    "developer": "developer",
    "media": "media",
    "vmware": "vmware",
    "edge": "edge",
    "governance": "governance",
    "exadata": "exadata",
    "cache": "cache",
    "disaster-recovery": "disaster_recovery",
    "additional": "additional_services",
}
