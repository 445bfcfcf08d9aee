from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable


_DECIMAL_PLACES = Decimal("0.01")
_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

# Wire keys first, then the Python attribute names.
_LINE_FIELDS = {
    "quantity": ("quantity",),
    "unit_price": ("unitPrice", "unit_price"),
    "discount_percent": ("discount", "discountPercent", "discount_percent"),
    "tax_percent": ("taxPercent", "tax_percent"),
}


def to_number(value: Any) -> Decimal:
    """Coerce a form value to Decimal; anything unusable becomes 0."""
    if value is None or isinstance(value, bool):
        return _ZERO
    if isinstance(value, Decimal):
        number = value
    else:
        raw = str(value).strip()
        if not raw:
            return _ZERO
        try:
            number = Decimal(raw)
        except InvalidOperation:
            return _ZERO
    if not number.is_finite():
        return _ZERO
    return number


def round_for_display(value: Any) -> Decimal:
    return to_number(value).quantize(_DECIMAL_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class LineBreakdown:
    line_total: Decimal
    discount_amount: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal
    net_amount: Decimal


@dataclass(frozen=True)
class DocumentTotals:
    subtotal: Decimal = _ZERO
    total_discount: Decimal = _ZERO
    tax_amount: Decimal = _ZERO
    total_amount: Decimal = _ZERO

    def rounded(self) -> "DocumentTotals":
        return DocumentTotals(
            subtotal=round_for_display(self.subtotal),
            total_discount=round_for_display(self.total_discount),
            tax_amount=round_for_display(self.tax_amount),
            total_amount=round_for_display(self.total_amount),
        )

    def as_payload(self) -> dict[str, float]:
        return {
            "subtotal": float(self.subtotal),
            "totalDiscount": float(self.total_discount),
            "taxAmount": float(self.tax_amount),
            "totalAmount": float(self.total_amount),
        }


def compute_line_breakdown(
    quantity: Any,
    unit_price: Any,
    discount_percent: Any,
    tax_percent: Any,
) -> LineBreakdown:
    qty = to_number(quantity)
    price = to_number(unit_price)
    discount = to_number(discount_percent)
    tax = to_number(tax_percent)

    line_total = qty * price
    discount_amount = line_total * discount / _HUNDRED
    taxable_amount = line_total - discount_amount
    tax_amount = taxable_amount * tax / _HUNDRED
    return LineBreakdown(
        line_total=line_total,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        tax_amount=tax_amount,
        net_amount=taxable_amount + tax_amount,
    )


def compute_line_net(
    quantity: Any,
    unit_price: Any,
    discount_percent: Any,
    tax_percent: Any,
) -> Decimal:
    return compute_line_breakdown(quantity, unit_price, discount_percent, tax_percent).net_amount


def _line_value(item: Any, field: str) -> Any:
    for key in _LINE_FIELDS[field]:
        if isinstance(item, Mapping):
            if key in item:
                return item[key]
        elif hasattr(item, key):
            return getattr(item, key)
    return None


def breakdown_for(item: Any) -> LineBreakdown:
    return compute_line_breakdown(
        _line_value(item, "quantity"),
        _line_value(item, "unit_price"),
        _line_value(item, "discount_percent"),
        _line_value(item, "tax_percent"),
    )


def compute_document_totals(items: Iterable[Any] | None) -> DocumentTotals:
    """Aggregate line items into document totals.

    Items may be ``LineItem`` models or plain mappings using either the
    backend's camelCase keys or snake_case keys. Nothing is rounded here;
    use ``DocumentTotals.rounded()`` for display.
    """
    subtotal = _ZERO
    total_discount = _ZERO
    tax_amount = _ZERO

    for item in items or []:
        line = breakdown_for(item)
        subtotal += line.line_total
        total_discount += line.discount_amount
        tax_amount += line.tax_amount

    return DocumentTotals(
        subtotal=subtotal,
        total_discount=total_discount,
        tax_amount=tax_amount,
        total_amount=subtotal - total_discount + tax_amount,
    )


def catalog_tax_amount(selling_price: Any, tax_percent: Any, is_tax_included: bool) -> Decimal:
    """Tax contained in (or added to) a catalog selling price.

    Only for catalog entries; document line items always treat the unit
    price as tax-exclusive.
    """
    price = to_number(selling_price)
    rate = to_number(tax_percent)
    if is_tax_included:
        divisor = _HUNDRED + rate
        if divisor == 0:
            return _ZERO
        return price * rate / divisor
    return price * rate / _HUNDRED


def catalog_gross_price(selling_price: Any, tax_percent: Any, is_tax_included: bool) -> Decimal:
    price = to_number(selling_price)
    if is_tax_included:
        return price
    return price + catalog_tax_amount(price, tax_percent, False)


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(value: Any, symbol: str = "₹") -> str:
    amount = round_for_display(value)
    sign = "-" if amount < 0 else ""
    integer_part, fraction = f"{abs(amount):.2f}".split(".")
    return f"{sign}{symbol}{_group_indian(integer_part)}.{fraction}"
