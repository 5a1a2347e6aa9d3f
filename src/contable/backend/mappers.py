"""Mapper functions to convert between backend JSON and domain entities.

This layer isolates the conversion logic, so the backend's Spanish field
names stay out of the domain code.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Optional, TypeVar

from contable.domain import entities as domain
from contable.domain.entities import normalize_id
from contable.utils.amount_parser import try_parse_amount
from contable.utils.date_parser import date_only

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _decimal(value: Any) -> Decimal:
    amount = try_parse_amount(value) if value is not None else None
    return amount if amount is not None else Decimal("0")


def _date(value: Any):
    """Parse an ISO date, keeping the raw text when it is not one."""
    text = date_only(value)
    try:
        return date.fromisoformat(text)
    except ValueError:
        return text


def party_to_domain(data: dict) -> domain.Party:
    """Convert a backend party object to a Party entity."""
    return domain.Party(
        id=data["id"],
        name=data.get("nombre") or "",
        document_type=data.get("tipoDocumento") or "",
        document_number=str(data.get("numeroDocumento") or ""),
    )


def party_to_payload(name: str, document_type: str, document_number: str) -> dict:
    return {
        "nombre": name,
        "tipoDocumento": document_type,
        "numeroDocumento": document_number,
    }


def account_to_domain(data: dict) -> domain.Account:
    """Convert a backend account object to an Account entity."""
    return domain.Account(
        id=data["id"],
        code=str(data.get("codigo") or ""),
        name=data.get("nombre") or "",
        type=domain.AccountType.parse(data.get("tipo") or ""),
        allow_negative_balance=bool(data.get("permiteSaldoNegativo", False)),
        active=bool(data.get("activo", True)),
    )


def account_to_payload(
    code: str,
    name: str,
    account_type: domain.AccountType,
    allow_negative_balance: bool = False,
    active: bool = True,
) -> dict:
    return {
        "codigo": code,
        "nombre": name,
        "tipo": account_type.value,
        "permiteSaldoNegativo": allow_negative_balance,
        "activo": active,
    }


def entry_to_domain(data: dict) -> domain.Entry:
    """Convert a backend entry ("partida") to an Entry entity.

    The backend names the account reference ``cuentaContableId`` on input and
    sometimes ``cuentaId`` or a nested ``cuentaContable`` on output.
    """
    account_id = data.get("cuentaContableId", data.get("cuentaId"))
    if account_id is None and isinstance(data.get("cuentaContable"), dict):
        account_id = data["cuentaContable"].get("id")
    return domain.Entry(
        account_id=normalize_id(account_id),
        role=domain.EntryRole.parse(data.get("tipo") or ""),
        amount=_decimal(data.get("valor")),
    )


def _entries(data: dict) -> tuple[domain.Entry, ...]:
    """Map a transaction's entries, dropping rows that are not valid entries.

    A row with a missing, zero or unknown amount or role carries nothing to
    post, so it is logged and left out rather than failing the transaction.
    """
    entries = []
    for row in data.get("partidas") or []:
        try:
            entries.append(entry_to_domain(row))
        except (ValueError, AttributeError) as e:
            logger.warning(
                "Skipping entry of transaction %s: %s", data.get("id"), e
            )
    return tuple(entries)


def transaction_to_domain(data: dict) -> domain.Transaction:
    """Convert a backend transaction object to a Transaction entity."""
    party = data.get("tercero") if isinstance(data.get("tercero"), dict) else {}
    party_id: Optional[Any] = party.get("id") or data.get("terceroId")
    return domain.Transaction(
        id=data["id"],
        party_id=normalize_id(party_id),
        party_name=party.get("nombre"),
        date=_date(data.get("fecha")),
        description=data.get("descripcion") or "",
        entries=_entries(data),
    )


def balance_to_domain(data: dict) -> domain.BalanceRecord:
    """Convert a backend balance ("saldo") object to a BalanceRecord."""
    return domain.BalanceRecord(
        account_id=data.get("cuentaId"),
        code=str(data.get("codigo") or ""),
        name=data.get("nombre") or "",
        type=str(data.get("tipo") or ""),
        valid=bool(data.get("saldoValido", True)),
        total_debits=_decimal(data.get("totalDebitos")),
        total_credits=_decimal(data.get("totalCreditos")),
        balance=_decimal(data.get("saldo")),
        allow_negative_balance=bool(data.get("permiteSaldoNegativo", False)),
    )


def map_records(
    items: list[Any], mapper: Callable[[dict], T], kind: str
) -> list[T]:
    """Map a backend list, skipping records that cannot be converted.

    One malformed record (an unknown account type, a missing id) is logged
    and dropped so it does not hide the rest of the list.
    """
    mapped = []
    for item in items:
        try:
            mapped.append(mapper(item))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Skipping malformed %s record %r: %s", kind, item, e)
    return mapped


def filter_to_params(filters: Optional[domain.TransactionFilter]) -> dict[str, str]:
    """Convert filter criteria to query parameters, sending only set fields."""
    params: dict[str, str] = {}
    if filters is None:
        return params
    if filters.date_from:
        params["fechaDesde"] = date_only(filters.date_from)
    if filters.date_to:
        params["fechaHasta"] = date_only(filters.date_to)
    party_id = normalize_id(filters.party_id)
    if party_id is not None:
        params["terceroId"] = str(party_id)
    return params
