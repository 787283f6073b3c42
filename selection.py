"""Selection transitions.

Every function returns a new Selection and leaves its input untouched, so a
caller can keep the previous state for undo or comparison.
"""
import uuid
from typing import Optional

from schemas import AddonEntry, Category, Part, Selection


def _new_entry_id() -> str:
    return uuid.uuid4().hex[:8]


def select_part(selection: Selection, category: Category, part: Optional[Part]) -> Selection:
    """Put ``part`` in the base slot for ``category``, or clear the slot when part is None."""
    if not category.is_base:
        raise ValueError(f"{category.value} is not a base category")
    if part is not None and part.category != category:
        raise ValueError(f"{part.name} is a {part.category.value}, not a {category.value}")

    base = dict(selection.base)
    if part is None:
        base.pop(category, None)
    else:
        base[category] = part
    return selection.model_copy(update={"base": base})


def add_addon(selection: Selection, product: Part, qty: int = 1) -> Selection:
    """Add an add-on; a product already present has its quantity increased."""
    if product.category.is_base:
        raise ValueError(f"{product.category.value} is a base category, not an add-on")
    if qty < 1:
        raise ValueError("Quantity must be at least 1")

    addons = []
    merged = False
    for entry in selection.addons:
        if entry.product.id == product.id:
            entry = entry.model_copy(update={"qty": entry.qty + qty})
            merged = True
        addons.append(entry)
    if not merged:
        addons.append(AddonEntry(id=_new_entry_id(), product=product, qty=qty))
    return selection.model_copy(update={"addons": addons})


def update_addon_qty(selection: Selection, entry_id: str, qty: int) -> Selection:
    if qty < 1:
        raise ValueError("Quantity must be at least 1")
    addons = [
        entry.model_copy(update={"qty": qty}) if entry.id == entry_id else entry
        for entry in selection.addons
    ]
    return selection.model_copy(update={"addons": addons})


def remove_addon(selection: Selection, entry_id: str) -> Selection:
    addons = [entry for entry in selection.addons if entry.id != entry_id]
    return selection.model_copy(update={"addons": addons})


def reset_selection() -> Selection:
    return Selection()
