"""Utility for resolving account references to IDs."""

from typing import Iterable

from contable.domain.entities import Account, Identifier, normalize_id
from contable.domain.errors import NotFoundError, account_not_found


def resolve_account(accounts: Iterable[Account], account: Identifier) -> int:
    """Resolve an account ID or account code to the account ID.

    An exact ID match wins over a code match, so "1" resolves to account 1
    even if another account carries code "1".

    Args:
        accounts: Known accounts
        account: Account ID (int or numeric string) or account code

    Returns:
        Account ID

    Raises:
        NotFoundError: If no account matches
    """
    accounts = list(accounts)
    wanted = normalize_id(account)

    for acc in accounts:
        if acc.id == wanted:
            return acc.id

    code = str(account).strip()
    for acc in accounts:
        if acc.code == code:
            return acc.id

    raise NotFoundError(account_not_found(account))
