"""
Schemas for the PC Build Configurator

Part maps to the MongoDB "part" collection (lowercased class name). The rest
are engine inputs/outputs, serialized with the camelCase keys the front-end
uses (ramType, minPSUWatt, discountAmount, ...).
"""
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    CPU = "CPU"
    MOTHERBOARD = "Motherboard"
    GPU = "GPU"
    RAM = "RAM"
    STORAGE = "Storage"
    PSU = "PSU"
    CASE = "Case"
    COOLER = "Cooler"
    MONITOR = "Monitor"
    SOFTWARE = "Software"
    SSD = "SSD"

    @property
    def is_base(self) -> bool:
        return self in BASE_CATEGORIES


# Display/summary order
BASE_CATEGORIES = (
    Category.CPU,
    Category.MOTHERBOARD,
    Category.GPU,
    Category.RAM,
    Category.STORAGE,
    Category.PSU,
    Category.CASE,
    Category.COOLER,
)
ADDON_CATEGORIES = (Category.MONITOR, Category.SOFTWARE, Category.SSD)


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Part(CamelModel):
    """
    Inventory catalog
    Collection: "part"
    """
    id: str = Field(..., description="Opaque unique identifier")
    name: str = Field(..., min_length=1, description="Display name")
    category: Category = Field(..., description="Base or add-on category")
    price: Decimal = Field(..., ge=0, description="Selling price")
    stock: int = Field(0, ge=0, description="Units on hand, informational only")
    cost: Optional[Decimal] = Field(None, ge=0, description="Acquisition cost, used for margin")
    attributes: Dict[str, Any] = Field(
        default_factory=dict,
        description="Category specific keys, e.g. {'socket': 'AM5', 'tdp': 65}",
    )


class AddonEntry(CamelModel):
    id: str
    product: Part
    qty: int = Field(1, ge=1)


class Selection(CamelModel):
    """In-progress build: one part per base category plus quantified add-ons."""
    base: Dict[Category, Part] = Field(default_factory=dict)
    addons: List[AddonEntry] = Field(default_factory=list)


class FilterSet(CamelModel):
    """Soft constraints for categories not chosen yet. None means unconstrained."""
    socket: Optional[str] = None
    ram_type: Optional[str] = Field(None, alias="ramType")
    form_factor: Optional[str] = Field(None, alias="formFactor")
    storage_interface: Optional[str] = Field(None, alias="storageInterface")
    cooler_socket: Optional[str] = Field(None, alias="coolerSocket")
    min_psu_watt: Optional[float] = Field(None, ge=0, alias="minPSUWatt")


class NoteLevel(str, Enum):
    OK = "ok"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self]


_LEVEL_RANK = {NoteLevel.OK: 0, NoteLevel.WARN: 1, NoteLevel.ERROR: 2}


class CompatibilityNote(CamelModel):
    rule: str
    level: NoteLevel
    message: str


class CompatibilityReport(CamelModel):
    notes: List[CompatibilityNote] = Field(default_factory=list)
    level: Optional[NoteLevel] = None
    estimated_wattage: float = Field(0, alias="estimatedWattage")


class DiscountType(str, Enum):
    NONE = "none"
    PERCENT = "percent"
    FIXED = "fixed"


class PricingConfig(CamelModel):
    discount_type: DiscountType = Field(DiscountType.NONE, alias="discountType")
    discount_value: Decimal = Field(Decimal("0"), alias="discountValue")
    vat_enabled: bool = Field(True, alias="vatEnabled")
    vat_percent: Decimal = Field(Decimal("7"), alias="vatPercent")
    include_cost: bool = Field(True, alias="includeCost")


class QuoteLine(CamelModel):
    category: Category
    part_id: str = Field(..., alias="partId")
    name: str
    qty: int
    unit_price: Decimal = Field(..., alias="unitPrice")
    line_total: Decimal = Field(..., alias="lineTotal")


class Quote(CamelModel):
    lines: List[QuoteLine] = Field(default_factory=list)
    subtotal: Decimal
    discount_amount: Decimal = Field(..., alias="discountAmount")
    net_before_tax: Decimal = Field(..., alias="netBeforeTax")
    tax_amount: Decimal = Field(..., alias="taxAmount")
    total: Decimal
    cost_total: Optional[Decimal] = Field(None, alias="costTotal")
    profit: Optional[Decimal] = None
    margin_percent: Optional[Decimal] = Field(None, alias="marginPercent")
    missing_required: List[Category] = Field(default_factory=list, alias="missingRequired")
