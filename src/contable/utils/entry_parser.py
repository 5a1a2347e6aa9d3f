"""Parsing of ``ACCOUNT:ROLE:AMOUNT`` entry specifications."""

from contable.domain.entities import EntryLine, EntryRole
from contable.domain.errors import ValidationError


def parse_entry(spec: str) -> EntryLine:
    """Parse an entry such as ``1105:DEBITO:100.00``.

    The amount is kept as typed; numeric checks happen during draft
    validation, where non-numeric rows are treated as incomplete.

    Raises:
        ValidationError: If the entry does not have three parts or
            the role is unknown
    """
    parts = spec.rsplit(":", 2)
    if len(parts) != 3:
        raise ValidationError(
            f"Invalid entry '{spec}'. Expected ACCOUNT:ROLE:AMOUNT, e.g. 1105:DEBITO:100"
        )
    account, role, amount = (part.strip() for part in parts)
    return EntryLine(account_id=account, role=EntryRole.parse(role), amount=amount)
