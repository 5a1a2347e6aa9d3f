"""Shared domain error messages and error types."""

import re
from typing import Any, Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    def __init__(self, message: str, violation: Any = None):
        super().__init__(message)
        self.violation = violation


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class BackendError(DomainError):
    """The backend could not complete a request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class TransportError(BackendError):
    """Backend unreachable or the connection failed mid-request."""


class BackendRejection(BackendError):
    """Backend answered with a non-2xx status."""


class BackendNotFound(BackendRejection, NotFoundError):
    """Backend answered 404."""


GENERIC_BACKEND_ERROR = "The backend could not process the request"
NEGATIVE_BALANCE_PREFIX = "Accounting policy violation: "

_NEGATIVE_BALANCE_PATTERN = re.compile(
    r"saldo negativo|no permite saldo|negative balance", re.IGNORECASE
)


def party_not_found(party_id: Any) -> str:
    """Return message for missing party."""
    return f"Party {party_id} not found"


def account_not_found(account_id: Any) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def transaction_not_found(transaction_id: Any) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def unknown_accounts(account_ids: list[Any]) -> str:
    """Return message listing account references that are not known."""
    return f"Unknown account(s): {', '.join(str(i) for i in account_ids)}"


def extract_backend_message(body: Any) -> Optional[str]:
    """Pull the user-facing message out of a backend error body.

    The backend reports errors as ``{"message": ...}`` or ``{"error": ...}``.
    """
    if not isinstance(body, dict):
        return None
    for key in ("message", "error"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def is_negative_balance_message(message: Optional[str]) -> bool:
    """Return True if a backend message reports a negative-balance policy breach."""
    if not message:
        return False
    return _NEGATIVE_BALANCE_PATTERN.search(message) is not None


def describe_submission_failure(
    error: Exception, fallback: str = GENERIC_BACKEND_ERROR
) -> str:
    """Turn a failed submission into the message shown to the user.

    Backend rejections carrying a message are passed through verbatim, flagged
    when they report a negative-balance violation. Anything else falls back to
    the generic message.
    """
    detail = getattr(error, "detail", None)
    if not isinstance(error, BackendRejection) or not detail:
        return fallback
    if is_negative_balance_message(detail):
        return f"{NEGATIVE_BALANCE_PREFIX}{detail}"
    return detail
