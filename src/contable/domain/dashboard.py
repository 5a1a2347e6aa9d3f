"""Home screen statistics."""

from contable.backend.base import Backend
from contable.domain.balances import total_balance
from contable.domain.entities import DashboardStats


class DashboardService:
    """Collects the headline counts shown on the home screen."""

    def __init__(self, backend: Backend):
        self.backend = backend

    def get_stats(self) -> DashboardStats:
        """Count parties, accounts and transactions and total every balance.

        Any backend failure propagates; partial statistics are never returned.
        """
        parties = self.backend.list_parties()
        accounts = self.backend.list_accounts()
        transactions = self.backend.list_transactions()
        balances = self.backend.list_balances()
        return DashboardStats(
            parties=len(parties),
            accounts=len(accounts),
            transactions=len(transactions),
            total_balance=total_balance(balances),
        )
