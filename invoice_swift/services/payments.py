from __future__ import annotations

import logging
from typing import Any

from invoice_swift.api_client import ApiClient, build_list_params
from invoice_swift.errors import DocumentValidationError
from invoice_swift.models import PAYMENT_METHODS, PAYMENT_TYPES, REFERENCE_TYPES, Payment

logger = logging.getLogger(__name__)


def validate_payment(payment: Payment) -> None:
    if not payment.customer_id.strip():
        raise DocumentValidationError("Please select a customer", field="customerId")
    if payment.amount <= 0:
        raise DocumentValidationError("Please enter a valid amount", field="amount")
    if payment.payment_method not in PAYMENT_METHODS:
        raise DocumentValidationError(f"Unknown payment method '{payment.payment_method}'", field="paymentMethod")
    if payment.payment_type not in PAYMENT_TYPES:
        raise DocumentValidationError(f"Unknown payment type '{payment.payment_type}'", field="paymentType")
    if payment.reference_type not in REFERENCE_TYPES:
        raise DocumentValidationError(f"Unknown reference type '{payment.reference_type}'", field="referenceType")


def record_payment(client: ApiClient, payment: Payment) -> Any:
    validate_payment(payment)
    result = client.payments.create(payment.to_payload())
    logger.info(
        "payments.record.done",
        extra={"customer_id": payment.customer_id, "amount": str(payment.amount)},
    )
    return result


def customer_statement(client: ApiClient, customer_id: str, **filters: Any) -> Any:
    """Payments of one customer, as shown on the customer statement screen."""
    path = f"{client.payments.path}/customer/{customer_id}"
    return client.request("GET", path, params=build_list_params(**filters))
