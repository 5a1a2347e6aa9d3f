"""Domain layer for contable application."""

__all__ = [
    "PartyService",
    "AccountService",
    "TransactionService",
    "BalanceService",
    "DashboardService",
]

_SERVICES = {
    "PartyService": "contable.domain.party",
    "AccountService": "contable.domain.account",
    "TransactionService": "contable.domain.transaction",
    "BalanceService": "contable.domain.balance",
    "DashboardService": "contable.domain.dashboard",
}


# Services import the backend layer, which imports entities from this
# package, so they are resolved lazily to avoid circular dependencies
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
