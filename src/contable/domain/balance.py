"""Balance domain service."""

from typing import Optional

from contable.backend.base import Backend
from contable.domain.balances import filter_by_type, summarize
from contable.domain.entities import AccountType, BalanceRecord, BalanceSummary


class BalanceService:
    """Service for reading backend-computed account balances."""

    def __init__(self, backend: Backend):
        """Initialize balance service.

        Args:
            backend: Backend instance
        """
        self.backend = backend

    def list_balances(self, account_type: Optional[str] = None) -> list[BalanceRecord]:
        """List balances, optionally restricted to one account type.

        Raises:
            ValidationError: If account_type is not a known type
        """
        records = self.backend.list_balances()
        if account_type:
            return filter_by_type(records, AccountType.parse(account_type))
        return records

    def get_account_balance(self, account_id: int) -> BalanceRecord:
        return self.backend.get_account_balance(account_id)

    def get_summary(self, account_type: Optional[str] = None) -> BalanceSummary:
        """Summarize balances, optionally restricted to one account type."""
        return summarize(self.list_balances(account_type))
