from __future__ import annotations

import logging
from datetime import date
from typing import Any

from invoice_swift.api_client import ApiClient
from invoice_swift.errors import DocumentValidationError
from invoice_swift.models import EXPENSE_CATEGORIES, EXPENSE_PAYMENT_TYPES, Expense

logger = logging.getLogger(__name__)


def validate_expense(expense: Expense) -> None:
    if not expense.company_id.strip():
        raise DocumentValidationError("Please select a company", field="companyId")
    if expense.amount <= 0:
        raise DocumentValidationError("Please enter a valid amount", field="amount")
    if not expense.category.strip():
        raise DocumentValidationError("Please select a category", field="category")
    if expense.category not in EXPENSE_CATEGORIES:
        raise DocumentValidationError(f"Unknown expense category '{expense.category}'", field="category")
    if expense.payment_type not in EXPENSE_PAYMENT_TYPES:
        raise DocumentValidationError(f"Unknown payment type '{expense.payment_type}'", field="paymentType")
    if expense.is_paid and expense.paid_date and expense.paid_date < expense.expense_date:
        raise DocumentValidationError("Paid date cannot be before the expense date", field="paidDate")


def record_expense(client: ApiClient, expense: Expense) -> Any:
    validate_expense(expense)
    result = client.expenses.create(expense.to_payload())
    logger.info(
        "expenses.record.done",
        extra={"category": expense.category, "amount": str(expense.amount)},
    )
    return result


def list_expenses(client: ApiClient, category: str | None = None, **filters: Any) -> Any:
    """Expense list with the same filters as the expenses screen."""
    return client.expenses.list(category=category, **filters)


def expense_stats(client: ApiClient, start_date: date | str | None = None, end_date: date | str | None = None) -> Any:
    return client.expenses.stats(start_date=start_date, end_date=end_date)


def delete_expense(client: ApiClient, expense_id: str) -> Any:
    result = client.expenses.delete(expense_id)
    logger.info("expenses.delete.done", extra={"expense_id": expense_id})
    return result
