from __future__ import annotations

import logging
from typing import Any

from invoice_swift.api_client import ApiClient
from invoice_swift.errors import DocumentValidationError
from invoice_swift.models import StockMovement

logger = logging.getLogger(__name__)


STOCK_IN_REASONS = ("purchase", "return", "adjustment", "transfer", "other")
STOCK_OUT_REASONS = ("sale", "damage", "adjustment", "transfer", "other")


def _move(client: ApiClient, endpoint: str, reasons: tuple[str, ...], movement: StockMovement) -> Any:
    if not movement.item_id.strip():
        raise DocumentValidationError("Please select an item", field="itemId")
    if movement.quantity <= 0:
        raise DocumentValidationError("Quantity must be greater than zero", field="quantity")
    if movement.reason not in reasons:
        raise DocumentValidationError(f"Invalid reason '{movement.reason}'", field="reason")

    result = client.inventory.action(endpoint, movement.to_payload())
    logger.info(
        "inventory.movement.done",
        extra={"endpoint": endpoint, "item_id": movement.item_id, "quantity": str(movement.quantity)},
    )
    return result


def stock_in(client: ApiClient, item_id: str, quantity: Any, reason: str, notes: str = "") -> Any:
    movement = StockMovement(item_id=item_id, quantity=quantity, reason=reason, notes=notes)
    return _move(client, "stock-in", STOCK_IN_REASONS, movement)


def stock_out(client: ApiClient, item_id: str, quantity: Any, reason: str, notes: str = "") -> Any:
    movement = StockMovement(item_id=item_id, quantity=quantity, reason=reason, notes=notes)
    return _move(client, "stock-out", STOCK_OUT_REASONS, movement)
