"""
Cost estimate models shared by every category calculator.

Line items are rounded when they are built; totals are the rounded sum of
already-rounded line items.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


HOURS_PER_MONTH = 730


def round2(value: float) -> float:
    return round(value, 2)


class PriceStatus(str, Enum):
    """Outcome of a calculate operation"""
    PRICED = "priced"
    FREE = "free"
    NOT_FOUND = "not_found"


class LineItem(BaseModel):
    """One priced row of an estimate"""
    category: str
    item: str
    quantity: float
    unit: str
    unit_price: float
    hours: float = 1
    monthly_total: float

    @classmethod
    def build(
        cls,
        category: str,
        item: str,
        quantity: float,
        unit: str,
        unit_price: float,
        hours: float = 1,
    ) -> "LineItem":
        return cls(
            category=category,
            item=item,
            quantity=quantity,
            unit=unit,
            unit_price=unit_price,
            hours=hours,
            monthly_total=round2(unit_price * quantity * hours),
        )


class CostEstimate(BaseModel):
    """Breakdown, total and advisory notes for one calculate call"""
    breakdown: List[LineItem] = Field(default_factory=list)
    currency: str = "USD"
    region: Optional[str] = None
    notes: List[str] = Field(default_factory=list)
    found: bool = True

    @property
    def total_monthly(self) -> float:
        return round2(sum(li.monthly_total for li in self.breakdown))

    @property
    def status(self) -> PriceStatus:
        if not self.found:
            return PriceStatus.NOT_FOUND
        return PriceStatus.PRICED if self.total_monthly > 0 else PriceStatus.FREE

    def add(self, *items: LineItem) -> "CostEstimate":
        self.breakdown.extend(items)
        return self

    def merge(self, other: "CostEstimate") -> "CostEstimate":
        self.breakdown.extend(other.breakdown)
        self.notes.extend(other.notes)
        return self

    @classmethod
    def not_found(cls, note: str, region: Optional[str] = None) -> "CostEstimate":
        return cls(notes=[note], region=region, found=False)

    def to_dict(self, **extra: Any) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "status": self.status.value,
            "breakdown": [li.model_dump() for li in self.breakdown],
            "total_monthly": self.total_monthly,
            "currency": self.currency,
        }
        if self.region:
            result["region"] = self.region
        result.update(extra)
        result["notes"] = list(self.notes)
        return result


# ── Aggregate calculator input ───────────────────────────────────────────────

class EstimateInputModel(BaseModel):
    """Accepts snake_case or camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ComputeConfig(EstimateInputModel):
    shape: str
    ocpus: float
    memory_gb: float
    hours_per_month: float = HOURS_PER_MONTH


class StorageConfig(EstimateInputModel):
    block_volume_gb: float = 0
    object_storage_gb: float = 0
    archive_storage_gb: float = 0
    file_storage_gb: float = 0


class DatabaseConfig(EstimateInputModel):
    type: str
    ecpus: float = 0
    storage_gb: float = 0
    license_type: Literal["included", "byol"] = "included"


class NetworkingConfig(EstimateInputModel):
    load_balancer_bandwidth_mbps: float = 0
    outbound_data_gb: float = 0


class CostEstimateInput(EstimateInputModel):
    """Whole-deployment request for the aggregate calculator"""
    compute: Optional[ComputeConfig] = None
    storage: Optional[StorageConfig] = None
    database: Optional[DatabaseConfig] = None
    networking: Optional[NetworkingConfig] = None
    region: Optional[str] = None
