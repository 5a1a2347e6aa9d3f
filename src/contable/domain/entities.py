"""Domain model entities for contable.

These are pure data classes representing accounting concepts, independent of
the JSON shapes the backend sends. Everything here is a transient copy of
backend state: the backend owns persistence and balance computation.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, Optional, TypeVar, Union

from contable.domain.errors import ValidationError


class DocumentType(str, Enum):
    """Identity document kinds accepted for parties."""

    CC = "CC"
    CE = "CE"
    NIT = "NIT"
    TI = "TI"
    PP = "PP"

    @property
    def label(self) -> str:
        return _DOCUMENT_LABELS[self]

    @classmethod
    def parse(cls, value: str) -> "DocumentType":
        """Parse a document type code (case-insensitive)."""
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValidationError(
                f"Unknown document type '{value}'. Expected one of: {choices}"
            )


_DOCUMENT_LABELS = {
    DocumentType.CC: "Cedula de Ciudadania",
    DocumentType.CE: "Cedula de Extranjeria",
    DocumentType.NIT: "NIT",
    DocumentType.TI: "Tarjeta de Identidad",
    DocumentType.PP: "Pasaporte",
}


class AccountType(str, Enum):
    """The five ledger account classes."""

    ACTIVO = "ACTIVO"
    PASIVO = "PASIVO"
    PATRIMONIO = "PATRIMONIO"
    INGRESO = "INGRESO"
    GASTO = "GASTO"

    @property
    def label(self) -> str:
        return _ACCOUNT_TYPE_LABELS[self]

    @classmethod
    def parse(cls, value: str) -> "AccountType":
        """Parse an account type, accepting Spanish codes or English names."""
        key = str(value).strip().upper()
        if key in _ACCOUNT_TYPE_ALIASES:
            return _ACCOUNT_TYPE_ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValidationError(
                f"Unknown account type '{value}'. Expected one of: {choices}"
            )


_ACCOUNT_TYPE_LABELS = {
    AccountType.ACTIVO: "Asset",
    AccountType.PASIVO: "Liability",
    AccountType.PATRIMONIO: "Equity",
    AccountType.INGRESO: "Income",
    AccountType.GASTO: "Expense",
}

_ACCOUNT_TYPE_ALIASES = {
    label.upper(): account_type
    for account_type, label in _ACCOUNT_TYPE_LABELS.items()
}


class EntryRole(str, Enum):
    """Side of a double-entry line."""

    DEBITO = "DEBITO"
    CREDITO = "CREDITO"

    @classmethod
    def parse(cls, value: str) -> "EntryRole":
        key = str(value).strip().upper()
        aliases = {"DEBIT": cls.DEBITO, "D": cls.DEBITO, "CREDIT": cls.CREDITO, "C": cls.CREDITO}
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise ValidationError(
                f"Unknown entry role '{value}'. Expected DEBITO or CREDITO"
            )


# Raw identifiers as typed by a user or sent by the backend
Identifier = Union[int, str]


@dataclass(frozen=True)
class Party:
    """Third party (customer or supplier) a transaction is attributed to."""

    id: int
    name: str
    document_type: str
    document_number: str


@dataclass(frozen=True)
class Account:
    """Ledger account of the chart of accounts."""

    id: int
    code: str
    name: str
    type: AccountType
    allow_negative_balance: bool = False
    active: bool = True


@dataclass(frozen=True)
class Entry:
    """A committed debit or credit line of a transaction."""

    account_id: int
    role: EntryRole
    amount: Decimal

    def __post_init__(self):
        if self.amount <= 0:
            raise ValidationError(
                f"Entry amount must be positive, got {self.amount}"
            )


@dataclass(frozen=True)
class EntryLine:
    """Editable entry row of a draft.

    Rows may be incomplete: an empty account or amount simply means the row
    is ignored by validation and submission.
    """

    account_id: Optional[Identifier] = None
    role: EntryRole = EntryRole.DEBITO
    amount: Optional[Union[str, Decimal, int, float]] = None


@dataclass(frozen=True)
class TransactionDraft:
    """In-progress transaction, before the backend assigns an identifier."""

    party_id: Optional[Identifier]
    date: Optional[Union[date, str]]
    description: str
    entries: tuple[EntryLine, ...] = ()


@dataclass(frozen=True)
class Transaction:
    """Transaction accepted by the backend."""

    id: int
    party_id: Optional[Identifier]
    date: Union[date, str]
    description: str
    entries: tuple[Entry, ...] = ()
    party_name: Optional[str] = None

    @property
    def total_debits(self) -> Decimal:
        return sum(
            (e.amount for e in self.entries if e.role == EntryRole.DEBITO),
            Decimal("0"),
        )

    @property
    def total_credits(self) -> Decimal:
        return sum(
            (e.amount for e in self.entries if e.role == EntryRole.CREDITO),
            Decimal("0"),
        )


@dataclass(frozen=True)
class BalanceRecord:
    """Backend-computed balance of one account. Read-only."""

    account_id: int
    code: str
    name: str
    type: str
    valid: bool
    total_debits: Decimal
    total_credits: Decimal
    balance: Decimal
    allow_negative_balance: bool = False


@dataclass(frozen=True)
class TransactionFilter:
    """Criteria for narrowing a transaction list. Absent fields are no-ops."""

    date_from: Optional[Union[date, str]] = None
    date_to: Optional[Union[date, str]] = None
    party_id: Optional[Identifier] = None

    @classmethod
    def from_strings(
        cls,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        party_id: Optional[str] = None,
    ) -> "TransactionFilter":
        """Build a filter from form-like input, treating blank strings as absent."""

        def blank_to_none(value):
            if isinstance(value, str) and value.strip() == "":
                return None
            return value

        return cls(
            date_from=blank_to_none(date_from),
            date_to=blank_to_none(date_to),
            party_id=blank_to_none(party_id),
        )

    @property
    def is_empty(self) -> bool:
        return self.date_from is None and self.date_to is None and self.party_id is None


@dataclass(frozen=True)
class BalanceSummary:
    """Aggregates over a list of balance records."""

    count: int
    total: Decimal
    subtotals_by_type: dict[AccountType, Decimal]
    positive: int
    negative: int
    zero: int


@dataclass(frozen=True)
class DashboardStats:
    """Headline numbers for the home screen."""

    parties: int
    accounts: int
    transactions: int
    total_balance: Decimal


T = TypeVar("T")


@dataclass(frozen=True)
class LoadResult(Generic[T]):
    """Outcome of a secondary data load.

    Callers decide whether to degrade gracefully or surface the error.
    """

    items: list[T] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: Exception) -> "LoadResult[Any]":
        return cls(items=[], error=error)


def normalize_id(value: Optional[Identifier]) -> Optional[Identifier]:
    """Normalize an identifier for comparison.

    Integers and digit strings compare as ``int``; other strings compare
    stripped. Empty values normalize to None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    if text.lstrip("-").isdigit():
        return int(text)
    return text
