from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any, Iterable, Optional

from invoice_swift.errors import DocumentValidationError
from invoice_swift.invoice_calculations import DocumentTotals, compute_document_totals
from invoice_swift.models import NOTE_REASONS, CatalogItem, DocumentKind, LineItem, reference_id


_EDITABLE_FIELDS = {
    "item_name",
    "description",
    "quantity",
    "unit_price",
    "discount_percent",
    "tax_percent",
}

_WIRE_FIELD_NAMES = {
    "itemName": "item_name",
    "unitPrice": "unit_price",
    "discount": "discount_percent",
    "discountPercent": "discount_percent",
    "taxPercent": "tax_percent",
}

_PARTY_SUFFIXES = ("Id", "Name", "Email", "Phone", "Address")

# Kinds that point back at the document they correct: (id key, number key, source number key).
_SOURCE_REFERENCES = {
    DocumentKind.CREDIT_NOTE: ("originalInvoiceId", "originalInvoiceNumber", "invoiceNumber"),
    DocumentKind.DEBIT_NOTE: ("originalPurchaseId", "originalPurchaseNumber", "purchaseNumber"),
}

_REQUIRED_MESSAGES = {
    "companyId": "Please select a company",
    "customerName": "Customer name is required",
    "vendorName": "Please enter vendor name",
    "validUntil": "Please select a valid until date",
    "expectedDeliveryDate": "Please select expected delivery date",
    "originalInvoiceId": "Please select an original invoice",
    "originalPurchaseId": "Please select an original purchase",
    "deliveryAddress": "Please enter delivery address",
}

_KIND_MESSAGES = {
    (DocumentKind.DELIVERY_CHALLAN, "customerName"): "Please enter customer name",
}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    # An address object with only empty parts counts as missing.
    if isinstance(value, Mapping):
        return all(_is_blank(part) for part in value.values())
    return False


def _as_line_item(item: LineItem | Mapping[str, Any]) -> LineItem:
    if isinstance(item, LineItem):
        return item.model_copy(deep=True)
    return LineItem.model_validate(dict(item))


class DocumentDraft:
    """In-memory state of a commercial document being edited.

    Holds the header fields and the ordered line items. Totals are never
    stored; ``totals`` walks the current item list on every access.
    """

    def __init__(
        self,
        kind: DocumentKind | str,
        header: Optional[Mapping[str, Any]] = None,
        items: Optional[Iterable[LineItem | Mapping[str, Any]]] = None,
    ) -> None:
        self.kind = DocumentKind(kind)
        self.header: dict[str, Any] = dict(header or {})
        self.items: list[LineItem] = [_as_line_item(item) for item in items or []]

    @property
    def totals(self) -> DocumentTotals:
        return compute_document_totals(self.items)

    def set_header(self, **fields: Any) -> None:
        self.header.update(fields)

    def add_item(self, item: LineItem | Mapping[str, Any] | None = None) -> LineItem:
        line = LineItem() if item is None else _as_line_item(item)
        self.items.append(line)
        return line

    def add_catalog_item(self, catalog_item: CatalogItem, quantity: Any = 1) -> LineItem:
        line = catalog_item.to_line_item(quantity)
        self.items.append(line)
        return line

    def update_item(self, index: int, field: str, value: Any) -> LineItem:
        name = _WIRE_FIELD_NAMES.get(field, field)
        if name not in _EDITABLE_FIELDS:
            raise ValueError(f"Unknown line item field: {field}")
        line = self.items[index]
        setattr(line, name, value)
        return line

    def remove_item(self, index: int) -> LineItem:
        return self.items.pop(index)

    def clear_items(self) -> None:
        self.items.clear()

    def copy_items_from(self, source: Mapping[str, Any]) -> None:
        """Seed this draft from an existing document fetched from the backend."""
        self.items = [_as_line_item(item) for item in source.get("items") or []]

        party = self.kind.party
        for suffix in _PARTY_SUFFIXES:
            key = f"{party}{suffix}"
            value = source.get(key)
            if suffix == "Id":
                value = reference_id(value)
            if not _is_blank(value):
                self.header[key] = value

        company_id = reference_id(source.get("companyId"))
        if not _is_blank(company_id):
            self.header["companyId"] = company_id

        reference = _SOURCE_REFERENCES.get(self.kind)
        if reference and source.get("_id"):
            id_key, number_key, source_number_key = reference
            self.header[id_key] = source["_id"]
            self.header[number_key] = source.get(source_number_key) or ""

    def validate(self) -> None:
        for field in self.kind.required_fields:
            if _is_blank(self.header.get(field)):
                if field == "reason":
                    message = f"Please select a reason for the {self.kind.value.replace('-', ' ')}"
                else:
                    message = _KIND_MESSAGES.get((self.kind, field)) or _REQUIRED_MESSAGES.get(
                        field, f"{field} is required"
                    )
                raise DocumentValidationError(message, field=field)

        if "reason" in self.kind.required_fields and self.header["reason"] not in NOTE_REASONS:
            raise DocumentValidationError(f"Unknown reason: {self.header['reason']}", field="reason")

        if not self.items:
            raise DocumentValidationError("Please add at least one item", field="items")

        for line in self.items:
            if not line.label or line.quantity <= 0 or line.unit_price <= 0:
                raise DocumentValidationError("Please fill in all item details correctly", field="items")

    def to_payload(self, status: Optional[str] = None) -> dict[str, Any]:
        payload = {
            key: value.isoformat() if isinstance(value, date) else value
            for key, value in self.header.items()
            if not _is_blank(value)
        }
        payload["items"] = [line.to_payload() for line in self.items]
        payload.update(self.totals.as_payload())
        if status:
            payload["status"] = status
        return payload
