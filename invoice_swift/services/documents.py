from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from invoice_swift.api_client import ApiClient
from invoice_swift.document_editor import DocumentDraft
from invoice_swift.errors import DocumentValidationError
from invoice_swift.models import DocumentKind

logger = logging.getLogger(__name__)


def _validated(draft: DocumentDraft) -> None:
    try:
        draft.validate()
    except DocumentValidationError as exc:
        logger.warning(
            "documents.submit.invalid",
            extra={"kind": draft.kind.value, "field": exc.field, "error_message": exc.message},
        )
        raise


def submit_document(client: ApiClient, draft: DocumentDraft, status: Optional[str] = None) -> Any:
    """Validate a draft and create it on the backend.

    Validation errors never reach the network. Backend errors propagate
    unchanged so the caller can show them and keep the draft for a retry.
    """
    _validated(draft)
    payload = draft.to_payload(status=status)
    logger.info(
        "documents.submit.start",
        extra={"kind": draft.kind.value, "items": len(draft.items), "total": payload["totalAmount"]},
    )
    result = client.documents(draft.kind).create(payload)
    logger.info("documents.submit.done", extra={"kind": draft.kind.value})
    return result


def update_document(client: ApiClient, draft: DocumentDraft, document_id: str) -> Any:
    _validated(draft)
    result = client.documents(draft.kind).update(document_id, draft.to_payload())
    logger.info("documents.update.done", extra={"kind": draft.kind.value, "document_id": document_id})
    return result


def list_documents(client: ApiClient, kind: DocumentKind | str, **filters: Any) -> Any:
    return client.documents(kind).list(**filters)


def delete_document(client: ApiClient, kind: DocumentKind | str, document_id: str) -> Any:
    result = client.documents(kind).delete(document_id)
    logger.info("documents.delete.done", extra={"kind": DocumentKind(kind).value, "document_id": document_id})
    return result


def change_status(client: ApiClient, kind: DocumentKind | str, document_id: str, status: str) -> Any:
    kind = DocumentKind(kind)
    if not kind.statuses:
        raise DocumentValidationError(f"Status changes are not supported for {kind.value}", field="status")
    if status not in kind.statuses:
        raise DocumentValidationError(f"Invalid status '{status}' for {kind.value}", field="status")
    return client.documents(kind).set_status(document_id, status)


def convert_to_invoice(client: ApiClient, kind: DocumentKind | str, document_id: str) -> Any:
    kind = DocumentKind(kind)
    if not kind.convertible_to_invoice:
        raise DocumentValidationError(f"A {kind.value} cannot be converted to an invoice", field="kind")
    result = client.documents(kind).convert_to_invoice(document_id)
    logger.info("documents.convert.done", extra={"kind": kind.value, "document_id": document_id})
    return result


def draft_from_document(kind: DocumentKind | str, source: Mapping[str, Any]) -> DocumentDraft:
    """Start a new draft whose items and party come from an existing document."""
    draft = DocumentDraft(kind)
    draft.copy_items_from(source)
    return draft
