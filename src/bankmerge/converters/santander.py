#!/usr/bin/env python3
"""
Santander XLSX Converter

Fixed layout: header on row 7, transactions from row 8. The "Concepto"
column is the only text; for transfers it names the counterparty, so the
payee is replaced by a direction-specific label and the concepto is kept as
the description.
"""

from openpyxl.worksheet.worksheet import Worksheet

from bankmerge.core.errors import FormatError
from bankmerge.core.formats import BankFormat
from bankmerge.core.models import Transaction
from bankmerge.converters.base import SpreadsheetConverter, contains_casefold, normalize_whitespace

HEADER_ROW = 7
DATA_START_ROW = 8

DATE_COLUMN = 1  # A - operation date
CONCEPTO_COLUMN = 3  # C
AMOUNT_COLUMN = 4  # D - amount in EUR

TRANSFER_KEYWORD = "transferencia"
TRANSFER_RECEIVED = "Transfer received"
TRANSFER_COMPLETED = "Transfer completed"
CURRENCY = "EUR"


class SantanderConverter(SpreadsheetConverter):
    """Converter for Santander XLSX statements."""

    key = "santander"
    bank_format = BankFormat(date_pattern="%d/%m/%Y", utc_offset_hours=1)

    def find_data_start(self, worksheet: Worksheet, last_row: int) -> int:
        if last_row < HEADER_ROW:
            raise FormatError(f"{self.key} export has {last_row} rows, expected a header on row {HEADER_ROW}")
        return DATA_START_ROW

    def parse_row(self, worksheet: Worksheet, row: int, account: str) -> Transaction | None:
        date = self.cell_date(worksheet, row, DATE_COLUMN)
        if date is None:
            return None

        concepto = normalize_whitespace(self.cell_text(worksheet, row, CONCEPTO_COLUMN))
        if not concepto:
            return None

        amount = self.cell_amount(worksheet, row, AMOUNT_COLUMN)
        is_transfer = contains_casefold(concepto, TRANSFER_KEYWORD)

        if is_transfer:
            payee = TRANSFER_RECEIVED if amount >= 0 else TRANSFER_COMPLETED
        else:
            payee = concepto

        return Transaction(
            bank=self.key,
            account=account,
            payee=payee,
            amount=amount,
            date=date,
            currency=CURRENCY,
            description=concepto,
            is_transfer=is_transfer,
        )
