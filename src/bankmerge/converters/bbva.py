#!/usr/bin/env python3
"""
BBVA XLSX Converter

Fixed layout: header on row 5, transactions from row 6. Dates are US-style
(MM/DD/YYYY); a blank transaction date falls back to the effective date.
"""

from openpyxl.worksheet.worksheet import Worksheet

from bankmerge.core.errors import FormatError
from bankmerge.core.formats import BankFormat
from bankmerge.core.models import Transaction
from bankmerge.converters.base import SpreadsheetConverter, contains_casefold, normalize_whitespace

HEADER_ROW = 5
DATA_START_ROW = 6

EFFECTIVE_DATE_COLUMN = 2  # B
DATE_COLUMN = 3  # C
PAYEE_COLUMN = 4  # D
AMOUNT_COLUMN = 6  # F
CURRENCY_COLUMN = 7  # G
COMMENTS_COLUMN = 10  # J

TRANSFER_KEYWORD = "transfer"
DEFAULT_CURRENCY = "EUR"


class BbvaConverter(SpreadsheetConverter):
    """Converter for BBVA XLSX statements."""

    key = "bbva"
    bank_format = BankFormat(date_pattern="%m/%d/%Y", utc_offset_hours=1)

    def find_data_start(self, worksheet: Worksheet, last_row: int) -> int:
        if last_row < HEADER_ROW:
            raise FormatError(f"{self.key} export has {last_row} rows, expected a header on row {HEADER_ROW}")
        return DATA_START_ROW

    def parse_row(self, worksheet: Worksheet, row: int, account: str) -> Transaction | None:
        # Only a blank transaction date falls back; an unreadable one skips the row
        date_column = DATE_COLUMN if self.cell_text(worksheet, row, DATE_COLUMN) else EFFECTIVE_DATE_COLUMN
        date = self.cell_date(worksheet, row, date_column)
        if date is None:
            return None

        payee = normalize_whitespace(self.cell_text(worksheet, row, PAYEE_COLUMN))
        if not payee:
            return None

        currency = self.cell_text(worksheet, row, CURRENCY_COLUMN) or DEFAULT_CURRENCY
        description = normalize_whitespace(self.cell_text(worksheet, row, COMMENTS_COLUMN))

        return Transaction(
            bank=self.key,
            account=account,
            payee=payee,
            amount=self.cell_amount(worksheet, row, AMOUNT_COLUMN),
            date=date,
            currency=currency.upper(),
            description=description or None,
            is_transfer=contains_casefold(payee, TRANSFER_KEYWORD),
        )
