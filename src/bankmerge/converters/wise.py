#!/usr/bin/env python3
"""
Wise CSV Converter

Wise statements identify each row by a "TransferWise ID"; IDs with the
TRANSFER- prefix are transfers between the user's own balances. The merchant
column ends with a location word, which is dropped from the payee.
"""

from typing import Any

from bankmerge.core.formats import BankFormat
from bankmerge.core.models import Transaction
from bankmerge.converters.base import DelimitedConverter, remove_last_word

TRANSFER_ID_PREFIX = "TRANSFER-"


class WiseConverter(DelimitedConverter):
    """Converter for Wise CSV statements."""

    key = "wise"
    bank_format = BankFormat(date_pattern="%d-%m-%Y %H:%M:%S.%f", utc_offset_hours=0)
    delimiter = ","
    required_columns = ("TransferWise ID", "Date Time", "Amount", "Currency", "Description", "Merchant")

    def parse_record(self, record: dict[str, Any], account: str) -> Transaction:
        transfer_id = self.optional(record, "TransferWise ID") or ""
        merchant = str(record.get("Merchant", "")).strip()

        return Transaction(
            bank=self.key,
            account=account,
            payee=remove_last_word(merchant),
            amount=self.bank_format.parse_amount(self.require(record, "Amount")),
            date=self.bank_format.parse_date(self.require(record, "Date Time")),
            currency=self.require(record, "Currency").upper(),
            description=self.optional(record, "Description"),
            is_transfer=transfer_id.upper().startswith(TRANSFER_ID_PREFIX),
        )
