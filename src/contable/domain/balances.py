"""Read-only aggregates over backend balance records."""

from decimal import Decimal
from typing import Optional, Sequence, Union

from contable.domain.entities import AccountType, BalanceRecord, BalanceSummary


def _type_key(value: Optional[str]) -> str:
    if value is None:
        return ""
    if isinstance(value, AccountType):
        return value.value
    return str(value).strip().upper()


def total_balance(records: Sequence[BalanceRecord]) -> Decimal:
    """Sum of net balances."""
    return sum((r.balance for r in records), Decimal("0"))


def subtotals_by_type(records: Sequence[BalanceRecord]) -> dict[AccountType, Decimal]:
    """Sum net balances per account type.

    All five types are always present. Types are matched case-insensitively;
    records with an unrecognized type count toward no subtotal.
    """
    subtotals = {account_type: Decimal("0") for account_type in AccountType}
    for record in records:
        key = _type_key(record.type)
        for account_type in AccountType:
            if account_type.value == key:
                subtotals[account_type] += record.balance
                break
    return subtotals


def classify(records: Sequence[BalanceRecord]) -> tuple[int, int, int]:
    """Count records with positive, negative and exactly zero balance."""
    positive = sum(1 for r in records if r.balance > 0)
    negative = sum(1 for r in records if r.balance < 0)
    zero = sum(1 for r in records if r.balance == 0)
    return positive, negative, zero


def filter_by_type(
    records: Sequence[BalanceRecord], account_type: Optional[Union[AccountType, str]]
) -> list[BalanceRecord]:
    """Keep records of one account type; an empty type keeps everything."""
    key = _type_key(account_type)
    if not key:
        return list(records)
    return [r for r in records if _type_key(r.type) == key]


def summarize(records: Sequence[BalanceRecord]) -> BalanceSummary:
    """Build every aggregate shown on the balance screen."""
    positive, negative, zero = classify(records)
    return BalanceSummary(
        count=len(records),
        total=total_balance(records),
        subtotals_by_type=subtotals_by_type(records),
        positive=positive,
        negative=negative,
        zero=zero,
    )
