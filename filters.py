"""Candidate filtering for the part pickers.

A FilterSet constraint only restricts the categories listed in CONSTRAINTS.
A candidate missing the attribute a constraint reads fails that constraint.
"""
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import structlog

from attributes import attr_list, attr_number, attr_str
from schemas import BASE_CATEGORIES, Category, FilterSet, Part

logger = structlog.get_logger(__name__)

Check = Callable[[Part, object], bool]


def _equals(key: str) -> Check:
    return lambda part, value: attr_str(part, key) == value


def _member_of(key: str) -> Check:
    return lambda part, value: value in (attr_list(part, key) or [])


def _at_least(key: str) -> Check:
    def check(part: Part, value) -> bool:
        number = attr_number(part, key)
        return number is not None and number >= value

    return check


# filter field -> ((category, check), ...)
CONSTRAINTS: Dict[str, Tuple[Tuple[Category, Check], ...]] = {
    "socket": (
        (Category.CPU, _equals("socket")),
        (Category.MOTHERBOARD, _equals("socket")),
    ),
    "ram_type": (
        (Category.MOTHERBOARD, _equals("ramType")),
        (Category.RAM, _equals("type")),
    ),
    "form_factor": (
        (Category.MOTHERBOARD, _equals("formFactor")),
        (Category.CASE, _member_of("formFactorSupport")),
    ),
    "storage_interface": (
        (Category.STORAGE, _equals("interface")),
        (Category.SSD, _equals("interface")),
        (Category.MOTHERBOARD, _member_of("storage")),
    ),
    "min_psu_watt": ((Category.PSU, _at_least("wattage")),),
    "cooler_socket": ((Category.COOLER, _member_of("socketSupport")),),
}


def _checks_for(category: Category, filters: FilterSet) -> List[Tuple[Check, object]]:
    checks = []
    for field, targets in CONSTRAINTS.items():
        value = getattr(filters, field)
        # Blank strings are treated as unset
        if value is None or value == "":
            continue
        for target, check in targets:
            if target == category:
                checks.append((check, value))
    return checks


def apply_filters(category: Category, candidates: Iterable[Part], filters: FilterSet) -> List[Part]:
    candidates = list(candidates)
    checks = _checks_for(category, filters)
    if not checks:
        return candidates
    kept = [part for part in candidates if all(check(part, value) for check, value in checks)]
    logger.debug(
        "candidates_filtered",
        category=category.value,
        before=len(candidates),
        after=len(kept),
    )
    return kept


class SortMode(str, Enum):
    DEFAULT = "default"
    PRICE_ASC = "priceAsc"
    PRICE_DESC = "priceDesc"
    NAME_ASC = "nameAsc"
    STOCK_DESC = "stockDesc"


def sort_parts(parts: Iterable[Part], mode: SortMode = SortMode.DEFAULT) -> List[Part]:
    parts = list(parts)
    if mode == SortMode.PRICE_ASC:
        return sorted(parts, key=lambda p: p.price)
    if mode == SortMode.PRICE_DESC:
        return sorted(parts, key=lambda p: p.price, reverse=True)
    if mode == SortMode.NAME_ASC:
        return sorted(parts, key=lambda p: p.name.casefold())
    if mode == SortMode.STOCK_DESC:
        return sorted(parts, key=lambda p: p.stock, reverse=True)
    return parts


def search_parts(parts: Iterable[Part], query: Optional[str]) -> List[Part]:
    """Case-insensitive match against name, category and attribute values."""
    parts = list(parts)
    needle = (query or "").strip().lower()
    if not needle:
        return parts

    def haystack(part: Part) -> str:
        values = " ".join(str(value) for value in part.attributes.values())
        return " ".join([part.name, part.category.value, values]).lower()

    return [part for part in parts if needle in haystack(part)]


def in_stock(parts: Iterable[Part]) -> List[Part]:
    return [part for part in parts if part.stock > 0]


def is_low_stock(part: Part, threshold: int) -> bool:
    return 0 < part.stock <= threshold


def candidates_by_category(
    catalog: Iterable[Part],
    filters: FilterSet,
    categories: Iterable[Category] = BASE_CATEGORIES,
    sort: SortMode = SortMode.DEFAULT,
) -> Dict[Category, List[Part]]:
    """In-stock candidates per category, narrowed by ``filters`` and sorted."""
    available = in_stock(catalog)
    result: Dict[Category, List[Part]] = {}
    for category in categories:
        raw = [part for part in available if part.category == category]
        result[category] = sort_parts(apply_filters(category, raw, filters), sort)
    return result


def filter_options(catalog: Iterable[Part]) -> Dict[str, List[str]]:
    """Distinct attribute values seen in the catalog, for filter chips."""
    options: Dict[str, List[str]] = {
        "socket": [],
        "ramType": [],
        "formFactor": [],
        "storageInterface": [],
    }

    def add(key: str, value: Optional[str]) -> None:
        if value and value not in options[key]:
            options[key].append(value)

    for part in catalog:
        add("socket", attr_str(part, "socket"))
        add("ramType", attr_str(part, "ramType"))
        add("formFactor", attr_str(part, "formFactor"))
        for interface in attr_list(part, "storage") or []:
            add("storageInterface", interface)
    return options
