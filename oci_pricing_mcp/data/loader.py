"""
Bundled pricing catalog loader.

The catalog is read from a static JSON document, validated into a
PricingCatalog and cached. Every accessor goes through get_pricing_data()
so the file is re-read at most once per catalog TTL window.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from oci_pricing_mcp.data.cache import CacheKeys, PricingCache
from oci_pricing_mcp.models.pricing import (
    AIMLPricing,
    APIProduct,
    CachePricing,
    ComputeShapePricing,
    DatabasePricing,
    KubernetesPricing,
    LicensedServicePricing,
    MulticloudAvailability,
    MulticloudData,
    MulticloudPricing,
    NetworkingPricing,
    PricingCatalog,
    PricingMetadata,
    RegionInfo,
    ServiceCatalogEntry,
    ServicePricing,
    SERVICE_CATEGORIES,
    StoragePricing,
    VMwarePricing,
)
from oci_pricing_mcp.utils.logger import logger

BUNDLED_DATA_FILE = Path(__file__).with_name("pricing-data.json")


class PricingDataError(Exception):
    """The pricing catalog could not be read or failed validation"""


def _filter_type(items: List[Any], type_filter: Optional[str]) -> List[Any]:
    if not type_filter:
        return list(items)
    needle = type_filter.lower()
    return [i for i in items if needle in i.type.lower()]


class PricingDataLoader:
    """Typed, cache-backed access to the bundled pricing catalog"""

    def __init__(
        self,
        cache: Optional[PricingCache] = None,
        data_file: Optional[Union[str, Path]] = None,
        catalog_ttl_minutes: float = 24 * 60,
    ):
        self.cache = cache or PricingCache()
        self.data_file = Path(data_file) if data_file else BUNDLED_DATA_FILE
        self.catalog_ttl_minutes = catalog_ttl_minutes

    def _read_catalog(self) -> PricingCatalog:
        try:
            raw = self.data_file.read_text(encoding="utf-8")
        except OSError as e:
            raise PricingDataError(f"Cannot read pricing data file {self.data_file}: {e}") from e
        try:
            return PricingCatalog.model_validate(json.loads(raw))
        except json.JSONDecodeError as e:
            raise PricingDataError(f"Malformed pricing data file {self.data_file}: {e}") from e
        except ValidationError as e:
            raise PricingDataError(
                f"Pricing data file {self.data_file} failed validation: "
                f"{e.error_count()} error(s), first: {e.errors()[0]['loc']} {e.errors()[0]['msg']}"
            ) from e

    def _load(self) -> PricingCatalog:
        catalog = self._read_catalog()
        self.cache.set(CacheKeys.PRICING_DATA, catalog, self.catalog_ttl_minutes)
        logger.info(
            f"Loaded pricing catalog from {self.data_file.name}",
            extra={
                "event_type": "catalog_load",
                "last_updated": catalog.metadata.last_updated,
                "compute_shapes": len(catalog.compute),
            },
        )
        return catalog

    def get_pricing_data(self) -> PricingCatalog:
        catalog = self.cache.get(CacheKeys.PRICING_DATA)
        if catalog is not None:
            return catalog
        return self._load()

    def refresh_cache(self) -> Dict[str, Any]:
        """
        Reload the catalog from disk, replacing the cached copy.

        The cached catalog is only replaced once the file has been read and
        validated; on PricingDataError the previous catalog keeps serving.
        """
        catalog = self._load()
        return {
            "refreshed": True,
            "data_file": str(self.data_file),
            "last_updated": catalog.metadata.last_updated,
            "counts": self.get_category_counts(),
            "cache": self.cache.stats(),
        }

    # ── Core categories ──────────────────────────────────────────────────────

    def get_compute_pricing(self) -> List[ComputeShapePricing]:
        return list(self.get_pricing_data().compute)

    def get_storage_pricing(self) -> List[StoragePricing]:
        return list(self.get_pricing_data().storage)

    def get_database_pricing(self) -> List[DatabasePricing]:
        return list(self.get_pricing_data().database)

    def get_networking_pricing(self) -> List[NetworkingPricing]:
        return list(self.get_pricing_data().networking)

    def get_kubernetes_pricing(self) -> List[KubernetesPricing]:
        return list(self.get_pricing_data().kubernetes)

    # ── Reference data ───────────────────────────────────────────────────────

    def get_metadata(self) -> PricingMetadata:
        return self.get_pricing_data().metadata

    def get_last_updated(self) -> str:
        return self.get_pricing_data().metadata.last_updated

    def get_regions(self) -> List[RegionInfo]:
        return list(self.get_pricing_data().regions)

    def get_free_tier(self) -> Dict[str, Any]:
        return dict(self.get_pricing_data().free_tier)

    def get_services_catalog(self) -> List[ServiceCatalogEntry]:
        return list(self.get_pricing_data().services)

    def get_all_products(self) -> List[APIProduct]:
        return list(self.get_pricing_data().products)

    def get_categories(self) -> List[str]:
        return list(self.get_pricing_data().categories)

    def search_products(self, category: Optional[str] = None, search: Optional[str] = None) -> List[APIProduct]:
        products = self.get_all_products()
        if category:
            products = [p for p in products if p.in_category(category)]
        if search:
            products = [p for p in products if p.matches(search)]
        return products

    # ── Extended categories ──────────────────────────────────────────────────

    def get_service_pricing(self, category: str, type_filter: Optional[str] = None) -> List[ServicePricing]:
        """Items of a secondary category such as 'security' or 'ai-ml'."""
        field = SERVICE_CATEGORIES.get(category)
        if field is None:
            raise KeyError(f"Unknown service category: {category}")
        return _filter_type(getattr(self.get_pricing_data(), field), type_filter)

    def get_ai_ml_pricing(self, type_filter: Optional[str] = None) -> List[AIMLPricing]:
        return self.get_service_pricing("ai-ml", type_filter)

    def get_observability_pricing(self, type_filter: Optional[str] = None) -> List[ServicePricing]:
        return self.get_service_pricing("observability", type_filter)

    def get_integration_pricing(self, type_filter: Optional[str] = None) -> List[ServicePricing]:
        return self.get_service_pricing("integration", type_filter)

    def get_security_pricing(self, type_filter: Optional[str] = None) -> List[ServicePricing]:
        return self.get_service_pricing("security", type_filter)

    def get_analytics_pricing(self, type_filter: Optional[str] = None) -> List[ServicePricing]:
        return self.get_service_pricing("analytics", type_filter)

    def get_developer_pricing(self, type_filter: Optional[str] = None) -> List[ServicePricing]:
        return self.get_service_pricing("developer", type_filter)

    def get_media_pricing(self, type_filter: Optional[str] = None) -> List[ServicePricing]:
        return self.get_service_pricing("media", type_filter)

    def get_vmware_pricing(self, type_filter: Optional[str] = None) -> List[VMwarePricing]:
        return self.get_service_pricing("vmware", type_filter)

    def get_edge_pricing(self, type_filter: Optional[str] = None) -> List[ServicePricing]:
        return self.get_service_pricing("edge", type_filter)

    def get_governance_pricing(self, type_filter: Optional[str] = None) -> List[ServicePricing]:
        return self.get_service_pricing("governance", type_filter)

    def get_exadata_pricing(self, type_filter: Optional[str] = None) -> List[LicensedServicePricing]:
        return self.get_service_pricing("exadata", type_filter)

    def get_cache_pricing(self, type_filter: Optional[str] = None) -> List[CachePricing]:
        return self.get_service_pricing("cache", type_filter)

    def get_disaster_recovery_pricing(self, type_filter: Optional[str] = None) -> List[ServicePricing]:
        return self.get_service_pricing("disaster-recovery", type_filter)

    def get_additional_services_pricing(self, type_filter: Optional[str] = None) -> List[LicensedServicePricing]:
        return self.get_service_pricing("additional", type_filter)

    def get_service_category_counts(self) -> Dict[str, int]:
        catalog = self.get_pricing_data()
        return {name: len(getattr(catalog, field)) for name, field in SERVICE_CATEGORIES.items()}

    def get_category_counts(self) -> Dict[str, int]:
        catalog = self.get_pricing_data()
        counts = {
            "compute": len(catalog.compute),
            "storage": len(catalog.storage),
            "database": len(catalog.database),
            "networking": len(catalog.networking),
            "kubernetes": len(catalog.kubernetes),
        }
        counts.update(self.get_service_category_counts())
        return counts

    # ── Multicloud ───────────────────────────────────────────────────────────

    def get_multicloud_data(self) -> Optional[MulticloudData]:
        return self.get_pricing_data().multicloud

    def get_multicloud_availability(self) -> List[MulticloudAvailability]:
        data = self.get_multicloud_data()
        return list(data.availability) if data else []

    def get_multicloud_pricing(
        self,
        provider: Optional[str] = None,
        database_type: Optional[str] = None,
    ) -> List[MulticloudPricing]:
        data = self.get_multicloud_data()
        pricing = list(data.pricing) if data else []
        if provider:
            pricing = [p for p in pricing if p.provider == provider]
        if database_type:
            pricing = [p for p in pricing if p.database_type == database_type]
        return pricing
