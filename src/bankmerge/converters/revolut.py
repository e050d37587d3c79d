#!/usr/bin/env python3
"""
Revolut CSV Converter

Revolut account statements are comma-separated with one row per operation.
Relevant columns: Type, Started Date, Description, Amount, Currency.
Rows whose Type is TRANSFER move money between the user's own accounts.
"""

from typing import Any

from bankmerge.core.formats import BankFormat
from bankmerge.core.models import Transaction
from bankmerge.converters.base import DelimitedConverter

TRANSFER_TYPE = "TRANSFER"


class RevolutConverter(DelimitedConverter):
    """Converter for Revolut CSV statements."""

    key = "revolut"
    bank_format = BankFormat(date_pattern="%Y-%m-%d %H:%M:%S", utc_offset_hours=0)
    delimiter = ","
    required_columns = ("Type", "Started Date", "Description", "Amount", "Currency")

    def parse_record(self, record: dict[str, Any], account: str) -> Transaction:
        transaction_type = self.optional(record, "Type")
        return Transaction(
            bank=self.key,
            account=account,
            payee=self.require(record, "Description"),
            amount=self.bank_format.parse_amount(self.require(record, "Amount")),
            date=self.bank_format.parse_date(self.require(record, "Started Date")),
            currency=self.require(record, "Currency").upper(),
            is_transfer=transaction_type is not None and transaction_type.upper() == TRANSFER_TYPE,
        )
