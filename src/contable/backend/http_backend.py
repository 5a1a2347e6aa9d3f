"""httpx implementation of the backend interface."""

import logging
from typing import Any, Optional

import httpx

from contable.backend.base import Backend
from contable.backend.mappers import (
    account_to_domain,
    balance_to_domain,
    filter_to_params,
    map_records,
    party_to_domain,
    party_to_payload,
    transaction_to_domain,
)
from contable.domain.entities import (
    Account,
    BalanceRecord,
    Party,
    Transaction,
    TransactionFilter,
)
from contable.domain.errors import (
    GENERIC_BACKEND_ERROR,
    BackendNotFound,
    BackendRejection,
    TransportError,
    extract_backend_message,
)

logger = logging.getLogger(__name__)


class HttpBackend(Backend):
    """REST client for the accounting backend."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the HTTP backend.

        Args:
            base_url: Backend base URL (e.g., 'http://localhost:8080/api')
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        """Get current client, creating one if needed."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None

    def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None if empty).

        Raises:
            TransportError: If the backend cannot be reached
            BackendNotFound: On 404
            BackendRejection: On any other non-2xx response
        """
        client = self._get_client()
        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = client.request(method, path, json=json, params=params or None)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise TransportError(f"Could not reach backend at {self.base_url}: {e}") from e

        if response.is_error:
            detail = extract_backend_message(_safe_json(response))
            logger.info(
                "%s %s rejected with status %s: %s",
                method,
                path,
                response.status_code,
                detail,
            )
            error_class = BackendNotFound if response.status_code == 404 else BackendRejection
            raise error_class(
                detail or GENERIC_BACKEND_ERROR,
                status_code=response.status_code,
                detail=detail,
            )

        return _safe_json(response)

    def _list(self, path: str, params: Optional[dict] = None) -> list[dict]:
        data = self._request("GET", path, params=params)
        return data if isinstance(data, list) else []

    def ping(self) -> bool:
        self._request("GET", "/test")
        return True

    # Party operations
    def list_parties(self) -> list[Party]:
        return map_records(self._list("/terceros"), party_to_domain, "party")

    def get_party(self, party_id: int) -> Party:
        return party_to_domain(self._request("GET", f"/terceros/{party_id}"))

    def create_party(self, name: str, document_type: str, document_number: str) -> Party:
        data = self._request(
            "POST", "/terceros", json=party_to_payload(name, document_type, document_number)
        )
        return party_to_domain(data)

    def update_party(
        self, party_id: int, name: str, document_type: str, document_number: str
    ) -> Party:
        data = self._request(
            "PUT",
            f"/terceros/{party_id}",
            json=party_to_payload(name, document_type, document_number),
        )
        return party_to_domain(data)

    def delete_party(self, party_id: int) -> None:
        self._request("DELETE", f"/terceros/{party_id}")

    # Account operations
    def list_accounts(self) -> list[Account]:
        return map_records(self._list("/cuentas"), account_to_domain, "account")

    def list_active_accounts(self) -> list[Account]:
        return map_records(self._list("/cuentas/activas"), account_to_domain, "account")

    def get_account(self, account_id: int) -> Account:
        return account_to_domain(self._request("GET", f"/cuentas/{account_id}"))

    def create_account(self, account: dict) -> Account:
        return account_to_domain(self._request("POST", "/cuentas", json=account))

    def update_account(self, account_id: int, account: dict) -> Account:
        return account_to_domain(
            self._request("PUT", f"/cuentas/{account_id}", json=account)
        )

    def delete_account(self, account_id: int) -> None:
        self._request("DELETE", f"/cuentas/{account_id}")

    def toggle_account_active(self, account_id: int) -> Optional[Account]:
        data = self._request("PATCH", f"/cuentas/{account_id}/toggle-activo")
        return account_to_domain(data) if isinstance(data, dict) else None

    # Transaction operations
    def list_transactions(
        self, filters: Optional[TransactionFilter] = None
    ) -> list[Transaction]:
        items = self._list("/transacciones", params=filter_to_params(filters))
        return map_records(items, transaction_to_domain, "transaction")

    def get_transaction(self, transaction_id: int) -> Transaction:
        return transaction_to_domain(
            self._request("GET", f"/transacciones/{transaction_id}")
        )

    def create_transaction(self, payload: dict) -> Transaction:
        return transaction_to_domain(
            self._request("POST", "/transacciones", json=payload)
        )

    def update_transaction(self, transaction_id: int, payload: dict) -> Transaction:
        return transaction_to_domain(
            self._request("PUT", f"/transacciones/{transaction_id}", json=payload)
        )

    def delete_transaction(self, transaction_id: int) -> None:
        self._request("DELETE", f"/transacciones/{transaction_id}")

    # Balance operations
    def list_balances(self) -> list[BalanceRecord]:
        return map_records(self._list("/saldos"), balance_to_domain, "balance")

    def get_account_balance(self, account_id: int) -> BalanceRecord:
        return balance_to_domain(self._request("GET", f"/saldos/cuenta/{account_id}"))


def _safe_json(response: httpx.Response) -> Any:
    """Decode a JSON body, returning None for empty or non-JSON bodies."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
