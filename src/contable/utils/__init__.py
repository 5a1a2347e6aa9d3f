"""Utility functions for contable."""

from contable.utils.date_parser import parse_date, get_date_range, date_only
from contable.utils.amount_parser import parse_amount
from contable.utils.account_resolver import resolve_account

__all__ = ["parse_date", "get_date_range", "date_only", "parse_amount", "resolve_account"]
