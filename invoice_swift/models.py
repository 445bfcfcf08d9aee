from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Dict, Optional, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    computed_field,
    field_validator,
)

from invoice_swift.invoice_calculations import (
    catalog_gross_price,
    catalog_tax_amount,
    compute_line_net,
    to_number,
)


# The backend expects JSON numbers, not pydantic's default Decimal strings.
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class WireModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        validate_assignment=True,
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def reference_id(value: Any) -> Any:
    # Populated references arrive as nested objects.
    if isinstance(value, Mapping):
        return value.get("_id")
    return value


class DocumentKind(str, Enum):
    INVOICE = "invoice"
    QUOTATION = "quotation"
    PROFORMA = "proforma"
    PURCHASE = "purchase"
    PURCHASE_ORDER = "purchase-order"
    CREDIT_NOTE = "credit-note"
    DEBIT_NOTE = "debit-note"
    DELIVERY_CHALLAN = "delivery-challan"

    @property
    def collection(self) -> str:
        return _COLLECTIONS[self]

    @property
    def party(self) -> str:
        return "vendor" if self in _VENDOR_KINDS else "customer"

    @property
    def required_fields(self) -> Tuple[str, ...]:
        return ("companyId", f"{self.party}Name") + _EXTRA_REQUIRED.get(self, ())

    @property
    def statuses(self) -> Tuple[str, ...]:
        return _STATUSES.get(self, ())

    @property
    def convertible_to_invoice(self) -> bool:
        return self in _CONVERTIBLE


_COLLECTIONS = {
    DocumentKind.INVOICE: "invoices",
    DocumentKind.QUOTATION: "quotations",
    DocumentKind.PROFORMA: "proformas",
    DocumentKind.PURCHASE: "purchases",
    DocumentKind.PURCHASE_ORDER: "purchase-orders",
    DocumentKind.CREDIT_NOTE: "credit-notes",
    DocumentKind.DEBIT_NOTE: "debit-notes",
    DocumentKind.DELIVERY_CHALLAN: "delivery-challans",
}

_VENDOR_KINDS = {
    DocumentKind.PURCHASE,
    DocumentKind.PURCHASE_ORDER,
    DocumentKind.DEBIT_NOTE,
}

_EXTRA_REQUIRED: Dict[DocumentKind, Tuple[str, ...]] = {
    DocumentKind.QUOTATION: ("validUntil",),
    DocumentKind.PURCHASE_ORDER: ("expectedDeliveryDate",),
    DocumentKind.CREDIT_NOTE: ("originalInvoiceId", "reason"),
    DocumentKind.DEBIT_NOTE: ("originalPurchaseId", "reason"),
    DocumentKind.DELIVERY_CHALLAN: ("deliveryAddress",),
}

_STATUSES: Dict[DocumentKind, Tuple[str, ...]] = {
    DocumentKind.INVOICE: ("draft", "sent", "paid", "pending", "cancelled", "overdue"),
    DocumentKind.PROFORMA: ("draft", "sent", "accepted", "rejected", "expired", "converted"),
    DocumentKind.PURCHASE_ORDER: (
        "draft",
        "sent",
        "accepted",
        "partially_received",
        "received",
        "cancelled",
    ),
    DocumentKind.DEBIT_NOTE: ("draft", "issued", "applied", "cancelled"),
    DocumentKind.DELIVERY_CHALLAN: ("draft", "sent", "delivered", "returned", "cancelled"),
}

_CONVERTIBLE = {
    DocumentKind.QUOTATION,
    DocumentKind.PROFORMA,
    DocumentKind.DELIVERY_CHALLAN,
}

NOTE_REASONS = (
    "Return of Goods",
    "Defective Product",
    "Wrong Product",
    "Overcharged",
    "Cancellation",
    "Discount Adjustment",
    "Other",
)


class LineItem(WireModel):
    item_name: str = Field(default="", alias="itemName")
    description: str = ""
    quantity: Amount = Decimal("1")
    unit_price: Amount = Field(default=Decimal("0"), alias="unitPrice")
    discount_percent: Amount = Field(
        default=Decimal("0"),
        alias="discount",
        validation_alias=AliasChoices("discount", "discountPercent", "discount_percent"),
    )
    tax_percent: Amount = Field(default=Decimal("0"), alias="taxPercent")
    item_id: Optional[str] = Field(default=None, alias="itemId")
    item_type: Optional[str] = Field(default=None, alias="itemType")
    primary_unit: Optional[str] = Field(default=None, alias="primaryUnit")

    @field_validator("item_name", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("quantity", "unit_price", "discount_percent", "tax_percent", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Decimal:
        return to_number(value)

    @field_validator("item_id", mode="before")
    @classmethod
    def _coerce_item_ref(cls, value: Any) -> Optional[str]:
        value = reference_id(value)
        return None if value is None else str(value)

    @computed_field(alias="netAmount")
    @property
    def net_amount(self) -> Amount:
        return compute_line_net(self.quantity, self.unit_price, self.discount_percent, self.tax_percent)

    @property
    def label(self) -> str:
        return (self.item_name or self.description).strip()

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CatalogItem(WireModel):
    id: Optional[str] = Field(default=None, alias="_id")
    item_type: str = Field(default="product", alias="itemType")
    item_name: str = Field(default="", alias="itemName")
    description: str = ""
    base_price: Amount = Field(default=Decimal("0"), alias="basePrice")
    selling_price: Amount = Field(default=Decimal("0"), alias="sellingPrice")
    tax_percent: Amount = Field(default=Decimal("18"), alias="taxPercent")
    is_tax_included: bool = Field(default=False, alias="isTaxIncluded")
    primary_unit: str = Field(default="piece", alias="primaryUnit")

    @field_validator("item_name", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("base_price", "selling_price", "tax_percent", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Decimal:
        return to_number(value)

    @property
    def tax_amount(self) -> Decimal:
        return catalog_tax_amount(self.selling_price, self.tax_percent, self.is_tax_included)

    @property
    def gross_price(self) -> Decimal:
        return catalog_gross_price(self.selling_price, self.tax_percent, self.is_tax_included)

    def to_line_item(self, quantity: Any = 1) -> LineItem:
        return LineItem(
            item_id=self.id,
            item_name=self.item_name,
            item_type=self.item_type,
            description=self.description,
            quantity=quantity,
            unit_price=self.selling_price,
            discount_percent=0,
            tax_percent=self.tax_percent,
            primary_unit=self.primary_unit,
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class BankDetails(WireModel):
    bank_name: str = Field(default="", alias="bankName")
    account_number: str = Field(default="", alias="accountNumber")
    ifsc_code: str = Field(default="", alias="ifscCode")
    upi_id: str = Field(default="", alias="upiId")


PAYMENT_METHODS = ("Cash", "UPI", "Bank Transfer", "Cheque", "Credit Card", "Other")
PAYMENT_TYPES = ("Received", "Paid")
REFERENCE_TYPES = ("manual", "invoice", "purchase", "refund")


class Payment(WireModel):
    customer_id: str = Field(default="", alias="customerId")
    payment_date: date = Field(default_factory=date.today, alias="paymentDate")
    amount: Amount = Decimal("0")
    payment_method: str = Field(default="Cash", alias="paymentMethod")
    payment_type: str = Field(default="Received", alias="paymentType")
    reference_type: str = Field(default="manual", alias="referenceType")
    reference_number: str = Field(default="", alias="referenceNumber")
    description: str = ""
    notes: str = ""
    bank_details: BankDetails = Field(default_factory=BankDetails, alias="bankDetails")

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Decimal:
        return to_number(value)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class StockMovement(WireModel):
    item_id: str = Field(alias="itemId")
    quantity: Amount
    reason: str
    notes: str = ""

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Decimal:
        return to_number(value)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


EXPENSE_CATEGORIES = (
    "Bank Fee and Charges",
    "Electricity Bill",
    "Employee Salaries",
    "Printing",
    "Raw Material",
    "Rent Expense",
    "Repair and Maintenance",
    "Telephone and Internet Bills",
    "Others",
)
EXPENSE_PAYMENT_TYPES = ("UPI", "Cash", "Card", "Net Banking", "Cheque")


class Expense(WireModel):
    company_id: str = Field(default="", alias="companyId")
    amount: Amount = Decimal("0")
    expense_date: date = Field(default_factory=date.today, alias="expenseDate")
    category: str = ""
    description: str = ""
    payment_type: str = Field(default="Cash", alias="paymentType")
    is_paid: bool = Field(default=False, alias="isPaid")
    paid_date: Optional[date] = Field(default=None, alias="paidDate")
    notes: str = ""

    @field_validator("company_id", mode="before")
    @classmethod
    def _coerce_company_ref(cls, value: Any) -> str:
        return _text(reference_id(value))

    @field_validator("category", "description", "notes", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("paid_date", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Decimal:
        return to_number(value)

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True)
        if not self.is_paid:
            payload["paidDate"] = ""
        elif payload["paidDate"] is None:
            payload["paidDate"] = self.expense_date.isoformat()
        return payload
