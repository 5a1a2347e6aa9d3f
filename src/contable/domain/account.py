"""Account domain service."""

import logging
from typing import Optional

from contable.backend.base import Backend
from contable.backend.mappers import account_to_payload
from contable.domain.entities import Account, AccountType, LoadResult
from contable.domain.errors import DomainError, ValidationError

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, backend: Backend):
        """Initialize account service.

        Args:
            backend: Backend instance
        """
        self.backend = backend

    def create_account(
        self,
        code: str,
        name: str,
        account_type: str,
        allow_negative_balance: bool = False,
        active: bool = True,
    ) -> Account:
        """Create a new account.

        Account codes are human-assigned and not required to be unique here.

        Args:
            code: Account code (e.g., "1105")
            name: Account name
            account_type: Account type (ACTIVO, PASIVO, PATRIMONIO, INGRESO, GASTO
                or their English names)
            allow_negative_balance: Whether postings may drive the balance below zero
            active: Whether the account accepts new entries

        Returns:
            The account as stored by the backend

        Raises:
            ValidationError: If code or name is empty or the type is unknown
        """
        payload = self._payload(code, name, account_type, allow_negative_balance, active)
        return self.backend.create_account(payload)

    def update_account(
        self,
        account_id: int,
        code: Optional[str] = None,
        name: Optional[str] = None,
        account_type: Optional[str] = None,
        allow_negative_balance: Optional[bool] = None,
        active: Optional[bool] = None,
    ) -> Account:
        """Update an account. Fields left as None keep their current value."""
        current = self.backend.get_account(account_id)
        payload = self._payload(
            code if code is not None else current.code,
            name if name is not None else current.name,
            account_type if account_type is not None else current.type.value,
            allow_negative_balance
            if allow_negative_balance is not None
            else current.allow_negative_balance,
            active if active is not None else current.active,
        )
        return self.backend.update_account(account_id, payload)

    def _payload(
        self,
        code: str,
        name: str,
        account_type: str,
        allow_negative_balance: bool,
        active: bool,
    ) -> dict:
        code = (code or "").strip()
        name = (name or "").strip()
        if not code:
            raise ValidationError("Account code is required")
        if not name:
            raise ValidationError("Account name is required")
        return account_to_payload(
            code, name, AccountType.parse(account_type), allow_negative_balance, active
        )

    def get_account(self, account_id: int) -> Account:
        return self.backend.get_account(account_id)

    def list_accounts(self, active_only: bool = False) -> list[Account]:
        """List accounts.

        Args:
            active_only: If True, only accounts that accept new entries

        Returns:
            List of account entities
        """
        if active_only:
            return self.backend.list_active_accounts()
        return self.backend.list_accounts()

    def load_active_accounts(self) -> LoadResult[Account]:
        """Load active accounts, reporting any failure in the result instead of raising."""
        try:
            return LoadResult(items=self.backend.list_active_accounts())
        except DomainError as e:
            logger.warning("Could not load active accounts: %s", e)
            return LoadResult.failure(e)

    def toggle_active(self, account_id: int) -> Optional[Account]:
        """Flip an account between active and inactive."""
        return self.backend.toggle_account_active(account_id)

    def delete_account(self, account_id: int) -> None:
        self.backend.delete_account(account_id)
