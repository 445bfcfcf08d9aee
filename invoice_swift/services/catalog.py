from __future__ import annotations

import logging
from typing import Any, Optional

from invoice_swift.api_client import ApiClient
from invoice_swift.errors import DocumentValidationError
from invoice_swift.models import CatalogItem, LineItem

logger = logging.getLogger(__name__)


def _records(data: Any, key: str) -> list[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        records = data.get(key)
        if isinstance(records, list):
            return records
    return []


def search_items(client: ApiClient, search: Optional[str] = None, **filters: Any) -> list[CatalogItem]:
    data = client.items.list(search=search, **filters)
    return [CatalogItem.model_validate(record) for record in _records(data, "items")]


def validate_catalog_item(item: CatalogItem) -> None:
    if not item.item_name.strip():
        raise DocumentValidationError("Item name is required", field="itemName")
    if item.base_price < 0 or item.selling_price < 0:
        raise DocumentValidationError("Prices must not be negative", field="sellingPrice")
    if not 0 <= item.tax_percent <= 100:
        raise DocumentValidationError("Tax percent must be between 0 and 100", field="taxPercent")


def create_item(client: ApiClient, item: CatalogItem) -> CatalogItem:
    validate_catalog_item(item)
    payload = item.to_payload()
    payload.pop("_id", None)
    data = client.items.create(payload)
    logger.info("catalog.create_item.done", extra={"item_name": item.item_name})
    if isinstance(data, dict) and isinstance(data.get("item"), dict):
        return CatalogItem.model_validate(data["item"])
    return item


def line_item_for(item: CatalogItem, quantity: Any = 1) -> LineItem:
    return item.to_line_item(quantity)
