"""Double-entry validation of transaction drafts.

Every check here is a pure function of its inputs, so a draft can be
validated without touching the backend. Validation stops at the first
violation found; rules are checked in this order:

1. party selected
2. date present
3. description not blank
4. active entries carry a positive amount
5. at least one debit and one credit
6. debits equal credits within BALANCE_TOLERANCE
7. every referenced account is a known active account
8. accounts and parties exist at all
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from contable.domain.entities import (
    Account,
    EntryLine,
    EntryRole,
    Party,
    TransactionDraft,
    normalize_id,
)
from contable.domain.errors import ValidationError, unknown_accounts
from contable.utils.amount_parser import try_parse_amount
from contable.utils.date_parser import date_only

BALANCE_TOLERANCE = Decimal("0.01")


class ViolationCode(str, Enum):
    MISSING_PARTY = "missing_party"
    MISSING_DATE = "missing_date"
    MISSING_DESCRIPTION = "missing_description"
    INVALID_AMOUNT = "invalid_amount"
    MISSING_SIDE = "missing_side"
    UNBALANCED = "unbalanced"
    UNKNOWN_ACCOUNTS = "unknown_accounts"
    NO_ACCOUNTS = "no_accounts"
    NO_PARTIES = "no_parties"


@dataclass(frozen=True)
class Violation:
    """First rule a draft breaks, with the message shown to the user."""

    code: ViolationCode
    message: str


@dataclass(frozen=True)
class ActiveEntry:
    """An entry row complete enough to be validated and submitted."""

    account_id: object
    role: EntryRole
    amount: Decimal


def active_entries(draft: TransactionDraft) -> list[ActiveEntry]:
    """Return the rows that have both an account and a numeric amount.

    Incomplete rows are skipped, not reported.
    """
    result = []
    for line in draft.entries:
        account_id = normalize_id(line.account_id)
        if account_id is None:
            continue
        amount = try_parse_amount(line.amount)
        if amount is None:
            continue
        result.append(ActiveEntry(account_id=account_id, role=line.role, amount=amount))
    return result


def draft_totals(draft: TransactionDraft) -> tuple[Decimal, Decimal]:
    """Return running (debits, credits) totals of a draft.

    Only the amount is required here; the account may still be unset while
    the user is composing the entry.
    """
    debits = Decimal("0")
    credits = Decimal("0")
    for line in draft.entries:
        amount = try_parse_amount(line.amount)
        if amount is None:
            continue
        if line.role == EntryRole.DEBITO:
            debits += amount
        else:
            credits += amount
    return debits, credits


def is_balanced(debits: Decimal, credits: Decimal) -> bool:
    """Return True if both sides match within BALANCE_TOLERANCE (inclusive)."""
    return abs(debits - credits) <= BALANCE_TOLERANCE


def find_violation(
    draft: TransactionDraft,
    accounts: Iterable[Account],
    parties: Iterable[Party],
) -> Optional[Violation]:
    """Check a draft against the double-entry rules.

    Args:
        draft: Transaction being composed
        accounts: Active accounts entries may reference
        parties: Known parties

    Returns:
        The first violation found, or None if the draft may be submitted
    """
    accounts = list(accounts)
    parties = list(parties)

    if normalize_id(draft.party_id) is None:
        return Violation(ViolationCode.MISSING_PARTY, "A party must be selected")

    if not date_only(draft.date).strip():
        return Violation(ViolationCode.MISSING_DATE, "A date must be selected")

    if not (draft.description or "").strip():
        return Violation(ViolationCode.MISSING_DESCRIPTION, "A description is required")

    entries = active_entries(draft)

    for entry in entries:
        if entry.amount <= 0:
            return Violation(
                ViolationCode.INVALID_AMOUNT,
                f"Entry amounts must be positive (account {entry.account_id}: {entry.amount})",
            )

    debits = [e for e in entries if e.role == EntryRole.DEBITO]
    credits = [e for e in entries if e.role == EntryRole.CREDITO]
    if not debits or not credits:
        return Violation(
            ViolationCode.MISSING_SIDE,
            "There must be at least one debit entry and one credit entry",
        )

    total_debits = sum((e.amount for e in debits), Decimal("0"))
    total_credits = sum((e.amount for e in credits), Decimal("0"))
    if not is_balanced(total_debits, total_credits):
        return Violation(
            ViolationCode.UNBALANCED,
            f"Unbalanced entry: debits {total_debits} and credits {total_credits} must be equal",
        )

    known = {normalize_id(acc.id) for acc in accounts}
    unknown = []
    for entry in entries:
        if entry.account_id not in known and entry.account_id not in unknown:
            unknown.append(entry.account_id)
    if unknown:
        return Violation(ViolationCode.UNKNOWN_ACCOUNTS, unknown_accounts(unknown))

    # Unreachable after the unknown-account check: any active entry against an
    # empty account set is reported as unknown first
    if not accounts:
        return Violation(
            ViolationCode.NO_ACCOUNTS,
            "No accounts available. Create accounts first.",
        )

    if not parties:
        return Violation(
            ViolationCode.NO_PARTIES,
            "No parties available. Create parties first.",
        )

    return None


def validate_draft(
    draft: TransactionDraft,
    accounts: Iterable[Account],
    parties: Iterable[Party],
) -> None:
    """Validate a draft, raising on the first violation.

    Raises:
        ValidationError: Carrying the violation as ``error.violation``
    """
    violation = find_violation(draft, accounts, parties)
    if violation is not None:
        raise ValidationError(violation.message, violation=violation)


def build_payload(draft: TransactionDraft) -> dict:
    """Build the backend create/update payload for a draft.

    Only active entries are sent. Amounts are converted to JSON numbers.
    """
    return {
        "tercero": {"id": normalize_id(draft.party_id)},
        "fecha": date_only(draft.date),
        "descripcion": (draft.description or "").strip(),
        "partidas": [
            {
                "cuentaContableId": entry.account_id,
                "tipo": entry.role.value,
                "valor": float(entry.amount),
            }
            for entry in active_entries(draft)
        ],
    }


def new_draft_entries() -> tuple[EntryLine, ...]:
    """Return the two blank rows a new draft starts with."""
    return (EntryLine(role=EntryRole.DEBITO), EntryLine(role=EntryRole.CREDITO))
