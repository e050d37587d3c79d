#!/usr/bin/env python3
"""
Per-Bank Locale Settings

Each converter declares one BankFormat instead of relying on process-wide
locale state: the timestamp pattern, the decimal convention and the UTC offset
of the bank's local time.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from bankmerge.core.currency import parse_amount
from bankmerge.core.dates import fixed_offset, parse_local_datetime


@dataclass(frozen=True)
class BankFormat:
    """Locale tuple for one bank export format."""

    date_pattern: str
    utc_offset_hours: float = 0
    decimal_separator: str = "."
    thousands_separator: str | None = ","

    @property
    def tz(self) -> timezone:
        return fixed_offset(self.utc_offset_hours)

    def parse_date(self, text: str) -> datetime:
        """Parse a bank timestamp into an aware datetime."""
        return parse_local_datetime(text, self.date_pattern, self.tz)

    def parse_amount(self, text: str) -> Decimal:
        """Parse a bank amount using this format's separators."""
        return parse_amount(text, self.decimal_separator, self.thousands_separator)
