"""Client-side filtering of transaction lists."""

from typing import Optional, Sequence

from contable.domain.entities import Transaction, TransactionFilter, normalize_id
from contable.utils.date_parser import date_only


def _bound(value) -> Optional[str]:
    if value is None:
        return None
    text = date_only(value)
    return text or None


def filter_transactions(
    transactions: Sequence[Transaction], criteria: Optional[TransactionFilter] = None
) -> list[Transaction]:
    """Narrow a transaction list by date range and party.

    When ``date_from`` equals ``date_to`` only that exact day is kept.
    Otherwise dates are compared as ISO strings, which sort chronologically.
    Empty criteria fields impose no constraint and the source list is never
    modified.

    Args:
        transactions: Full transaction list
        criteria: Optional filter; None keeps everything

    Returns:
        New list with matching transactions in their original order
    """
    filtered = list(transactions)
    if criteria is None:
        return filtered

    date_from = _bound(criteria.date_from)
    date_to = _bound(criteria.date_to)

    if date_from is not None and date_from == date_to:
        filtered = [t for t in filtered if date_only(t.date) == date_from]
    else:
        if date_from is not None:
            filtered = [t for t in filtered if date_only(t.date) >= date_from]
        if date_to is not None:
            filtered = [t for t in filtered if date_only(t.date) <= date_to]

    party_id = normalize_id(criteria.party_id)
    if party_id is not None:
        filtered = [t for t in filtered if normalize_id(t.party_id) == party_id]

    return filtered


class TransactionBrowser:
    """View state for a filterable transaction list.

    Holds the full list as loaded from the backend alongside the currently
    visible subset, so clearing the filter restores everything without a
    reload.
    """

    def __init__(self, transactions: Sequence[Transaction] = ()):
        self._all: list[Transaction] = list(transactions)
        self.criteria = TransactionFilter()
        self.visible: list[Transaction] = list(self._all)

    @property
    def all_transactions(self) -> list[Transaction]:
        return list(self._all)

    def replace(self, transactions: Sequence[Transaction]) -> None:
        """Swap in a freshly loaded list, keeping the current criteria."""
        self._all = list(transactions)
        self.visible = filter_transactions(self._all, self.criteria)

    def apply(self, criteria: TransactionFilter) -> list[Transaction]:
        self.criteria = criteria
        self.visible = filter_transactions(self._all, criteria)
        return self.visible

    def clear(self) -> list[Transaction]:
        self.criteria = TransactionFilter()
        self.visible = list(self._all)
        return self.visible
