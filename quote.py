"""Quote calculator: subtotal, discount, VAT and margin for a selection."""
from decimal import Decimal
from typing import Iterable, List, Optional

import structlog

from schemas import (
    BASE_CATEGORIES,
    Category,
    DiscountType,
    PricingConfig,
    Quote,
    QuoteLine,
    Selection,
)

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def build_lines(selection: Selection) -> List[QuoteLine]:
    """Base parts in category order, then add-ons in the order they were added."""
    lines: List[QuoteLine] = []
    for category in BASE_CATEGORIES:
        part = selection.base.get(category)
        if part is None:
            continue
        lines.append(
            QuoteLine(
                category=category,
                part_id=part.id,
                name=part.name,
                qty=1,
                unit_price=part.price,
                line_total=part.price,
            )
        )
    for entry in selection.addons:
        lines.append(
            QuoteLine(
                category=entry.product.category,
                part_id=entry.product.id,
                name=entry.product.name,
                qty=entry.qty,
                unit_price=entry.product.price,
                line_total=entry.product.price * entry.qty,
            )
        )
    return lines


def compute_discount(subtotal: Decimal, pricing: PricingConfig) -> Decimal:
    value = pricing.discount_value or ZERO
    if pricing.discount_type == DiscountType.PERCENT:
        discount = subtotal * value / HUNDRED
    elif pricing.discount_type == DiscountType.FIXED:
        discount = value
    else:
        return ZERO
    # Never more than the subtotal, never a surcharge
    return max(ZERO, min(subtotal, discount))


def compute_cost_total(selection: Selection) -> Decimal:
    base_cost = sum((part.cost or ZERO for part in selection.base.values()), ZERO)
    addon_cost = sum(((entry.product.cost or ZERO) * entry.qty for entry in selection.addons), ZERO)
    return base_cost + addon_cost


def missing_required(selection: Selection, required: Iterable[Category]) -> List[Category]:
    missing: List[Category] = []
    for category in required:
        if selection.base.get(category) is None and category not in missing:
            missing.append(category)
    return missing


def compute_quote(
    selection: Selection,
    pricing: Optional[PricingConfig] = None,
    required: Iterable[Category] = (),
) -> Quote:
    if pricing is None:
        pricing = PricingConfig()

    lines = build_lines(selection)
    subtotal = sum((line.line_total for line in lines), ZERO)
    discount = compute_discount(subtotal, pricing)
    net = max(ZERO, subtotal - discount)
    tax = net * (pricing.vat_percent or ZERO) / HUNDRED if pricing.vat_enabled else ZERO

    quote = Quote(
        lines=lines,
        subtotal=subtotal,
        discount_amount=discount,
        net_before_tax=net,
        tax_amount=tax,
        total=net + tax,
        missing_required=missing_required(selection, required),
    )

    if pricing.include_cost:
        cost_total = compute_cost_total(selection)
        profit = net - cost_total
        quote.cost_total = cost_total
        quote.profit = profit
        # Margin is measured on the pre-tax net
        quote.margin_percent = profit / net * HUNDRED if net > 0 else ZERO

    logger.debug(
        "quote_computed",
        subtotal=str(subtotal),
        total=str(quote.total),
        missing_required=[c.value for c in quote.missing_required],
    )
    return quote
