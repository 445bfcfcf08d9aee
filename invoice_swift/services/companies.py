from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from invoice_swift.api_client import ApiClient

logger = logging.getLogger(__name__)


def pick_default(records: Iterable[dict[str, Any]] | None) -> Optional[dict[str, Any]]:
    """Return the record flagged ``isDefault``, else the first one."""
    records = list(records or [])
    for record in records:
        if record.get("isDefault"):
            return record
    return records[0] if records else None


def default_company(client: ApiClient) -> Optional[dict[str, Any]]:
    data = client.companies.list()
    if isinstance(data, dict):
        data = data.get("companies")
    return pick_default(data if isinstance(data, list) else None)


def make_default_company(client: ApiClient, company_id: str) -> Any:
    result = client.companies.set_default(company_id)
    logger.info("companies.set_default.done", extra={"company_id": company_id})
    return result


def default_bank_account(client: ApiClient) -> Optional[dict[str, Any]]:
    data = client.bank_accounts.list()
    if isinstance(data, dict):
        data = data.get("bankAccounts")
    return pick_default(data if isinstance(data, list) else None)


def make_default_bank_account(client: ApiClient, account_id: str) -> Any:
    result = client.bank_accounts.set_default(account_id)
    logger.info("companies.bank_account_default.done", extra={"account_id": account_id})
    return result
