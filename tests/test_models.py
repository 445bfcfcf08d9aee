from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from invoice_swift.models import CatalogItem, DocumentKind, Expense, LineItem


def test_line_item_reads_wire_keys_and_derives_net_amount() -> None:
    item = LineItem.model_validate(
        {
            "itemName": "Widget",
            "quantity": "2",
            "unitPrice": 100,
            "discount": 10,
            "taxPercent": 18,
            "netAmount": 999,
            "_id": "ignored",
        }
    )
    assert item.item_name == "Widget"
    assert item.quantity == Decimal("2")
    assert item.net_amount == Decimal("212.4")


def test_line_item_payload_uses_numbers_and_aliases() -> None:
    payload = LineItem(item_name="Widget", quantity=2, unit_price=100, discount_percent=10, tax_percent=18).to_payload()
    assert payload == {
        "itemName": "Widget",
        "description": "",
        "quantity": 2.0,
        "unitPrice": 100.0,
        "discount": 10.0,
        "taxPercent": 18.0,
        "netAmount": pytest.approx(212.4),
    }


def test_line_item_accepts_discount_percent_key() -> None:
    item = LineItem.model_validate({"description": "Service", "unitPrice": 50, "discountPercent": 5})
    assert item.discount_percent == Decimal("5")
    assert item.quantity == Decimal("1")


def test_line_item_assignment_is_coerced() -> None:
    item = LineItem(description="Service", quantity=3, unit_price=10)
    item.quantity = ""
    assert item.quantity == Decimal("0")
    assert item.net_amount == Decimal("0")

    item.quantity = "4"
    item.unit_price = "abc"
    assert item.unit_price == Decimal("0")


def test_line_item_null_text_becomes_empty() -> None:
    item = LineItem.model_validate({"itemName": None, "description": None})
    assert item.item_name == ""
    assert item.label == ""


def test_line_item_reduces_populated_item_reference() -> None:
    item = LineItem.model_validate({"itemId": {"_id": "it1", "itemName": "Widget"}, "itemName": "Widget"})
    assert item.item_id == "it1"

    assert LineItem.model_validate({"itemId": "it2"}).item_id == "it2"
    assert LineItem.model_validate({"itemId": None}).item_id is None


def test_catalog_item_tax_rules() -> None:
    inclusive = CatalogItem.model_validate(
        {"_id": "it1", "itemName": "Lamp", "sellingPrice": 118, "taxPercent": 18, "isTaxIncluded": True}
    )
    exclusive = CatalogItem.model_validate(
        {"_id": "it2", "itemName": "Lamp", "sellingPrice": 118, "taxPercent": 18, "isTaxIncluded": False}
    )
    assert inclusive.tax_amount == Decimal("18")
    assert inclusive.gross_price == Decimal("118")
    assert exclusive.tax_amount == Decimal("21.24")
    assert exclusive.gross_price == Decimal("139.24")


def test_catalog_defaults() -> None:
    item = CatalogItem(item_name="Bolt")
    assert item.item_type == "product"
    assert item.tax_percent == Decimal("18")
    assert item.primary_unit == "piece"
    assert item.is_tax_included is False


def test_catalog_item_prefills_tax_exclusive_line() -> None:
    catalog = CatalogItem.model_validate(
        {
            "_id": "it1",
            "itemName": "Lamp",
            "itemType": "product",
            "sellingPrice": 118,
            "taxPercent": 18,
            "isTaxIncluded": True,
            "primaryUnit": "box",
        }
    )
    line = catalog.to_line_item()
    assert line.item_id == "it1"
    assert line.quantity == Decimal("1")
    assert line.unit_price == Decimal("118")
    assert line.discount_percent == Decimal("0")
    assert line.primary_unit == "box"
    # Unit price is treated as tax-exclusive on documents.
    assert line.net_amount == Decimal("139.24")


@pytest.mark.parametrize(
    ("kind", "collection", "required"),
    [
        (DocumentKind.INVOICE, "invoices", ("companyId", "customerName")),
        (DocumentKind.QUOTATION, "quotations", ("companyId", "customerName", "validUntil")),
        (DocumentKind.PURCHASE_ORDER, "purchase-orders", ("companyId", "vendorName", "expectedDeliveryDate")),
        (DocumentKind.CREDIT_NOTE, "credit-notes", ("companyId", "customerName", "originalInvoiceId", "reason")),
        (DocumentKind.DEBIT_NOTE, "debit-notes", ("companyId", "vendorName", "originalPurchaseId", "reason")),
    ],
)
def test_document_kind_metadata(kind: DocumentKind, collection: str, required: tuple[str, ...]) -> None:
    assert kind.collection == collection
    assert kind.required_fields == required


def test_document_kind_conversion_and_statuses() -> None:
    assert DocumentKind("delivery-challan").convertible_to_invoice
    assert not DocumentKind.INVOICE.convertible_to_invoice
    assert "paid" in DocumentKind.INVOICE.statuses
    assert DocumentKind.CREDIT_NOTE.statuses == ()


def test_expense_payload() -> None:
    expense = Expense.model_validate(
        {"companyId": {"_id": "c1"}, "amount": "1500", "expenseDate": "2024-04-02", "category": "Printing", "paidDate": ""}
    )
    payload = expense.to_payload()
    assert payload["companyId"] == "c1"
    assert payload["amount"] == pytest.approx(1500.0)
    assert payload["expenseDate"] == "2024-04-02"
    assert payload["isPaid"] is False
    assert payload["paidDate"] == ""

    expense.is_paid = True
    assert expense.to_payload()["paidDate"] == "2024-04-02"

    expense.paid_date = date(2024, 4, 5)
    assert expense.to_payload()["paidDate"] == "2024-04-05"
