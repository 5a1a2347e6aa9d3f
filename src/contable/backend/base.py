"""Abstract backend interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from contable.domain.entities import (
    Account,
    BalanceRecord,
    Party,
    Transaction,
    TransactionFilter,
)


class Backend(ABC):
    """Abstract interface to the accounting REST backend.

    The backend owns every persisted entity; implementations only transfer
    data and translate failures into domain errors.
    """

    @abstractmethod
    def close(self) -> None:
        """Release any open connections."""
        pass

    @abstractmethod
    def ping(self) -> bool:
        """Check that the backend is reachable."""
        pass

    # Party operations
    @abstractmethod
    def list_parties(self) -> list[Party]:
        """List all parties."""
        pass

    @abstractmethod
    def get_party(self, party_id: int) -> Party:
        """Get party by ID."""
        pass

    @abstractmethod
    def create_party(self, name: str, document_type: str, document_number: str) -> Party:
        """Create a party. Returns the stored party."""
        pass

    @abstractmethod
    def update_party(
        self, party_id: int, name: str, document_type: str, document_number: str
    ) -> Party:
        """Replace a party's fields."""
        pass

    @abstractmethod
    def delete_party(self, party_id: int) -> None:
        """Delete a party."""
        pass

    # Account operations
    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    @abstractmethod
    def list_active_accounts(self) -> list[Account]:
        """List accounts that may receive new entries."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Account:
        """Get account by ID."""
        pass

    @abstractmethod
    def create_account(self, account: dict) -> Account:
        """Create an account from a backend-shaped payload."""
        pass

    @abstractmethod
    def update_account(self, account_id: int, account: dict) -> Account:
        """Replace an account's fields from a backend-shaped payload."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def toggle_account_active(self, account_id: int) -> Optional[Account]:
        """Flip an account's active flag."""
        pass

    # Transaction operations
    @abstractmethod
    def list_transactions(
        self, filters: Optional[TransactionFilter] = None
    ) -> list[Transaction]:
        """List transactions, optionally filtered server-side."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Transaction:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def create_transaction(self, payload: dict) -> Transaction:
        """Submit a validated transaction payload."""
        pass

    @abstractmethod
    def update_transaction(self, transaction_id: int, payload: dict) -> Transaction:
        """Replace a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    # Balance operations
    @abstractmethod
    def list_balances(self) -> list[BalanceRecord]:
        """List balances of every account."""
        pass

    @abstractmethod
    def get_account_balance(self, account_id: int) -> BalanceRecord:
        """Get the balance of one account."""
        pass
