"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re
from typing import Optional, Union


def parse_amount(amount: Union[str, Decimal, int, float]) -> Decimal:
    """Parse an entry amount into a Decimal.

    Accepts numbers as well as strings such as:
    - "100"
    - "99.99"
    - "$1,250.00"
    - "(15.00)" (negative in parentheses)

    Floats are converted through ``str`` so 0.1 stays 0.1.

    Args:
        amount: Amount value or string

    Returns:
        Decimal amount

    Raises:
        ValueError: If the amount is empty, not numeric or not finite
    """
    if isinstance(amount, bool):
        raise ValueError(f"Could not parse amount {amount!r}")
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, (int, float)):
        value = Decimal(str(amount))
    else:
        if amount is None or not str(amount).strip():
            raise ValueError("Empty amount")

        text = str(amount).strip()

        is_negative = False
        if text.startswith("(") and text.endswith(")"):
            is_negative = True
            text = text[1:-1]

        text = re.sub(r"[$€£¥]", "", text).replace(",", "").strip()

        try:
            value = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"Could not parse amount '{amount}'")
        if is_negative:
            value = -value

    if not value.is_finite():
        raise ValueError(f"Amount must be a finite number, got '{amount}'")
    return value


def try_parse_amount(amount) -> Optional[Decimal]:
    """Parse an amount, returning None for empty or non-numeric input."""
    try:
        return parse_amount(amount)
    except ValueError:
        return None
