"""Utility functions for ledgerbook."""

from ledgerbook.utils.date_parser import parse_date, parse_iso_date, get_date_range
from ledgerbook.utils.amount_parser import parse_amount, parse_amount_or_zero

__all__ = ["parse_date", "parse_iso_date", "get_date_range", "parse_amount", "parse_amount_or_zero"]
