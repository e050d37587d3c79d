#!/usr/bin/env python3
"""
IDBank XLSX Converter

IDBank statements have a variable-length preamble. The transaction table
starts on the row after the "Document number" header cell in column A and
ends at the "Balance at the end" footer. Debits and credits are separate
columns; amounts are in AMD. The account column, when filled, overrides the
caller's account label.
"""

import logging

from openpyxl.worksheet.worksheet import Worksheet

from bankmerge.core.errors import FormatError
from bankmerge.core.formats import BankFormat
from bankmerge.core.models import Transaction
from bankmerge.converters.base import SpreadsheetConverter, contains_casefold, normalize_whitespace

logger = logging.getLogger(__name__)

HEADER_MARKER = "Document number"
END_MARKER = "Balance at the end"
TRANSFER_KEYWORD = "transfer"
CURRENCY = "AMD"

DOCUMENT_NUMBER_COLUMN = 1  # A
DATE_COLUMN = 3  # C
DEBIT_COLUMN = 4  # D
CREDIT_COLUMN = 5  # E
ADDITIONAL_INFO_COLUMN = 6  # F
ACCOUNT_COLUMN = 7  # G
PAYEE_COLUMN = 8  # H
DESCRIPTION_COLUMN = 9  # I


class IdBankConverter(SpreadsheetConverter):
    """Converter for IDBank XLSX statements."""

    key = "idbank"
    bank_format = BankFormat(date_pattern="%d/%m/%Y %H:%M:%S", utc_offset_hours=4)

    def find_data_start(self, worksheet: Worksheet, last_row: int) -> int:
        for row in range(1, last_row + 1):
            value = normalize_whitespace(self.cell_text(worksheet, row, DOCUMENT_NUMBER_COLUMN))
            if contains_casefold(value, HEADER_MARKER):
                return row + 1

        raise FormatError(f"Could not find the '{HEADER_MARKER}' header in the {self.key} export")

    def is_end_row(self, worksheet: Worksheet, row: int) -> bool:
        return contains_casefold(self.cell_text(worksheet, row, DOCUMENT_NUMBER_COLUMN), END_MARKER)

    def parse_row(self, worksheet: Worksheet, row: int, account: str) -> Transaction | None:
        date = self.cell_date(worksheet, row, DATE_COLUMN)
        if date is None:
            return None

        payee = normalize_whitespace(self.cell_text(worksheet, row, PAYEE_COLUMN))
        if not payee:
            return None

        debit = self.cell_amount(worksheet, row, DEBIT_COLUMN)
        credit = self.cell_amount(worksheet, row, CREDIT_COLUMN)
        # Debit is an expense (negative), credit is income (positive)
        amount = -debit if debit > 0 else credit

        description = normalize_whitespace(self.cell_text(worksheet, row, DESCRIPTION_COLUMN))
        additional_info = self.cell_text(worksheet, row, ADDITIONAL_INFO_COLUMN)
        if additional_info:
            description = f"{description} {additional_info}" if description else additional_info

        # Column G names the IDBank account; blank cells keep the caller's label
        row_account = normalize_whitespace(self.cell_text(worksheet, row, ACCOUNT_COLUMN)) or account

        return Transaction(
            bank=self.key,
            account=row_account,
            payee=payee,
            amount=amount,
            date=date,
            currency=CURRENCY,
            description=description or None,
            is_transfer=contains_casefold(payee, TRANSFER_KEYWORD),
        )
