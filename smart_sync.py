"""Smart Sync: derive attribute filters from the parts already chosen.

Derivation merges into the previous FilterSet. A field is only overwritten
when some chosen part implies a value for it; everything else persists.
"""
from typing import Any, Dict, Mapping, Optional

import structlog

from attributes import attr_list, attr_str
from compatibility import estimate_wattage
from schemas import Category, FilterSet, Part

logger = structlog.get_logger(__name__)


def merge_filters(previous: FilterSet, updates: Mapping[str, Any]) -> FilterSet:
    """Return a copy of ``previous`` with the non-None ``updates`` applied."""
    changes = {name: value for name, value in updates.items() if value is not None}
    return previous.model_copy(update=changes)


def derive_filters(parts: Mapping[Category, Part], previous: Optional[FilterSet] = None) -> FilterSet:
    if previous is None:
        previous = FilterSet()
    cpu = parts.get(Category.CPU)
    mb = parts.get(Category.MOTHERBOARD)
    storage = parts.get(Category.STORAGE)
    psu = parts.get(Category.PSU)

    updates: Dict[str, Any] = {}

    # Motherboard first so a chosen CPU's socket wins
    if attr_str(mb, "socket"):
        updates["socket"] = attr_str(mb, "socket")
    if attr_str(cpu, "socket"):
        updates["socket"] = attr_str(cpu, "socket")

    updates["ram_type"] = attr_str(mb, "ramType")
    updates["form_factor"] = attr_str(mb, "formFactor")

    mb_storage = attr_list(mb, "storage")
    if attr_str(storage, "interface"):
        updates["storage_interface"] = attr_str(storage, "interface")
    elif mb_storage:
        updates["storage_interface"] = mb_storage[0]

    # Coolers follow the CPU, not the board
    updates["cooler_socket"] = attr_str(cpu, "socket")

    if psu is not None:
        updates["min_psu_watt"] = max(estimate_wattage(parts), 0.0)

    derived = merge_filters(previous, updates)
    logger.debug("filters_derived", filters=derived.model_dump(by_alias=True, exclude_none=True))
    return derived


def sync_filters(
    parts: Mapping[Category, Part],
    previous: Optional[FilterSet] = None,
    enabled: bool = True,
) -> FilterSet:
    """Run derivation only while Smart Sync is switched on."""
    if previous is None:
        previous = FilterSet()
    if not enabled:
        return previous
    return derive_filters(parts, previous)


def clear_filters(filters: FilterSet, field: Optional[str] = None) -> FilterSet:
    """Drop one field (by name or camelCase alias), or every field when ``field`` is None."""
    if field is None:
        return FilterSet()
    name = _field_name(field)
    if name is None:
        raise ValueError(f"Unknown filter field: {field}")
    return filters.model_copy(update={name: None})


def _field_name(field: str) -> Optional[str]:
    for name, info in FilterSet.model_fields.items():
        if field in (name, info.alias):
            return name
    return None
