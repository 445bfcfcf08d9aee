from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

import httpx

from invoice_swift.env import api_base_url, load_env, request_timeout
from invoice_swift.errors import ApiConnectionError, ApiError
from invoice_swift.models import DocumentKind
from invoice_swift.session import SessionContext

logger = logging.getLogger(__name__)


def _date_param(value: date | str | None) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, date):
        return value.isoformat()
    value = value.strip()
    return value or None


def build_list_params(
    *,
    search: Optional[str] = None,
    status: Optional[str] = None,
    start_date: date | str | None = None,
    end_date: date | str | None = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    **extra: Any,
) -> dict[str, str]:
    params: dict[str, Any] = {
        "page": page,
        "limit": limit,
        "search": (search or "").strip() or None,
        "status": None if status in (None, "", "all") else status,
        "startDate": _date_param(start_date),
        "endDate": _date_param(end_date),
    }
    for key, value in extra.items():
        if value not in (None, "", "all"):
            params[key] = value
    return {key: str(value) for key, value in params.items() if value is not None}


def _error_message(response: httpx.Response) -> tuple[str, Any]:
    payload: Any = None
    try:
        payload = response.json()
    except ValueError:
        payload = response.text or None
    if isinstance(payload, dict):
        message = payload.get("message") or payload.get("error")
        if isinstance(message, str) and message.strip():
            return message.strip(), payload
    return f"Request failed with status {response.status_code}", payload


class ResourceClient:
    """CRUD access to one ``/api/<name>`` collection."""

    def __init__(self, client: "ApiClient", name: str) -> None:
        self._client = client
        self.name = name

    @property
    def path(self) -> str:
        return f"/api/{self.name}"

    def _item_path(self, resource_id: str, *suffix: str) -> str:
        parts = [self.path, str(resource_id), *suffix]
        return "/".join(parts)

    def list(self, **filters: Any) -> Any:
        return self._client.request("GET", self.path, params=build_list_params(**filters))

    def get(self, resource_id: str) -> Any:
        return self._client.request("GET", self._item_path(resource_id))

    def create(self, payload: dict[str, Any]) -> Any:
        return self._client.request("POST", self.path, json=payload)

    def update(self, resource_id: str, payload: dict[str, Any]) -> Any:
        return self._client.request("PUT", self._item_path(resource_id), json=payload)

    def delete(self, resource_id: str) -> Any:
        return self._client.request("DELETE", self._item_path(resource_id))

    def stats(self, start_date: date | str | None = None, end_date: date | str | None = None) -> Any:
        params = build_list_params(start_date=start_date, end_date=end_date)
        return self._client.request("GET", f"{self.path}/stats", params=params)

    def set_status(self, resource_id: str, status: str) -> Any:
        return self._client.request(
            "PATCH", self._item_path(resource_id, "status"), json={"status": status}
        )

    def set_default(self, resource_id: str) -> Any:
        return self._client.request("PATCH", self._item_path(resource_id, "set-default"))

    def convert_to_invoice(self, resource_id: str) -> Any:
        return self._client.request("POST", self._item_path(resource_id, "convert-to-invoice"))

    def action(self, name: str, payload: Optional[dict[str, Any]] = None) -> Any:
        return self._client.request("POST", f"{self.path}/{name}", json=payload)


class ApiClient:
    """Synchronous JSON client for the invoicing backend.

    Every request is sent with the bearer token of the injected session.
    Failures are raised as ``ApiError`` (non-2xx) or ``ApiConnectionError``
    (no response); nothing is retried.
    """

    def __init__(
        self,
        session: SessionContext,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        load_env()
        self.session = session
        self.base_url = (base_url or api_base_url()).rstrip("/")
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else request_timeout(),
            transport=transport,
        )

        self.companies = ResourceClient(self, "company")
        self.customers = ResourceClient(self, "customers")
        self.vendors = ResourceClient(self, "vendors")
        self.items = ResourceClient(self, "items")
        self.expenses = ResourceClient(self, "expenses")
        self.payments = ResourceClient(self, "payments")
        self.inventory = ResourceClient(self, "inventory")
        self.bank_accounts = ResourceClient(self, "bank-accounts")
        self.chatbot = ResourceClient(self, "chatbot")

    def documents(self, kind: DocumentKind | str) -> ResourceClient:
        return ResourceClient(self, DocumentKind(kind).collection)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self.session.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, str]] = None,
        json: Any = None,
    ) -> Any:
        context = {"method": method, "path": path}
        logger.debug("api_client.request", extra=context)
        try:
            response = self._http.request(
                method,
                path,
                params=params or None,
                json=json,
                headers=self._headers(),
            )
        except httpx.RequestError as exc:
            logger.error("api_client.request_failed", exc_info=exc, extra=context)
            raise ApiConnectionError(f"Network error while calling {path}") from exc

        if response.is_error:
            message, payload = _error_message(response)
            logger.warning(
                "api_client.error_response",
                extra={**context, "status_code": response.status_code, "error_message": message},
            )
            raise ApiError(response.status_code, message, payload)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def login(self, email: str, password: str) -> Any:
        data = self.request(
            "POST",
            "/api/auth/login",
            json={"email": (email or "").strip().lower(), "password": password},
        )
        self._store_session(data)
        return data

    def signup(self, name: str, email: str, password: str) -> Any:
        data = self.request(
            "POST",
            "/api/auth/signup",
            json={"name": (name or "").strip(), "email": (email or "").strip().lower(), "password": password},
        )
        self._store_session(data)
        return data

    def _store_session(self, data: Any) -> None:
        if isinstance(data, dict) and data.get("token"):
            user = data.get("user")
            self.session.store(str(data["token"]), user if isinstance(user, dict) else None)
            logger.info("api_client.session_started")

    def logout(self) -> None:
        self.session.logout()

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
