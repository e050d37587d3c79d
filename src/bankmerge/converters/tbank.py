#!/usr/bin/env python3
"""
T-Bank Converter (CSV and OFX)

T-Bank offers two export formats and this converter accepts both, detecting
which one it was given from the leading characters of the decoded stream:

- CSV: semicolon-separated, Russian locale (decimal comma), UTF-8 or
  Windows-1251, amounts in RUB
- OFX: a statement per account (checking, savings, credit line); all of them
  are flattened into one sequence under the caller's account label

Transfers between the user's own accounts are recognised by the conjunction
of the "transfers" category and a description phrase. The two formats use
different phrases.
"""

import logging
from typing import Any, BinaryIO

from bankmerge.core.cancellation import CancellationToken, check_cancelled
from bankmerge.core.encoding import detect_encoding
from bankmerge.core.errors import FormatError
from bankmerge.core.formats import BankFormat
from bankmerge.core.models import Transaction
from bankmerge.converters.base import DelimitedConverter, contains_casefold
from bankmerge.converters.ofx_reader import OfxRecord, looks_like_ofx, parse_ofx_datetime, read_ofx_statements

logger = logging.getLogger(__name__)

TRANSFER_CATEGORY = "Переводы"
CSV_TRANSFER_PHRASE = "Перевод между счетами"
OFX_TRANSFER_PHRASE = "Между своими счетами"

DEFAULT_CURRENCY = "RUB"

# Characters inspected to tell OFX from CSV
DETECTION_PREFIX_LENGTH = 10

DATE_COLUMN = "Дата операции"
AMOUNT_COLUMN = "Сумма операции"
CATEGORY_COLUMN = "Категория"
DESCRIPTION_COLUMN = "Описание"


def _is_category(value: str | None, expected: str) -> bool:
    return value is not None and value.casefold() == expected.casefold()


class TBankConverter(DelimitedConverter):
    """Converter for T-Bank CSV and OFX statements."""

    key = "tbank"
    bank_format = BankFormat(
        date_pattern="%d.%m.%Y %H:%M:%S",
        utc_offset_hours=3,
        decimal_separator=",",
        thousands_separator=None,
    )
    ofx_format = BankFormat(date_pattern="%Y%m%d%H%M%S", utc_offset_hours=3, thousands_separator=None)
    delimiter = ";"
    required_columns = (DATE_COLUMN, AMOUNT_COLUMN, CATEGORY_COLUMN, DESCRIPTION_COLUMN)

    def convert(
        self,
        stream: BinaryIO,
        account: str,
        cancel_token: CancellationToken | None = None,
    ) -> list[Transaction]:
        encoding = detect_encoding(stream)
        text = stream.read().decode(encoding, errors="replace")

        if looks_like_ofx(text[:DETECTION_PREFIX_LENGTH]):
            logger.debug("Detected OFX T-Bank export (%s)", encoding)
            return self.convert_ofx(text, account, cancel_token)

        logger.debug("Detected CSV T-Bank export (%s)", encoding)
        return self.convert_text(text, account, cancel_token)

    def parse_record(self, record: dict[str, Any], account: str) -> Transaction:
        category = self.optional(record, CATEGORY_COLUMN)
        description = self.optional(record, DESCRIPTION_COLUMN)

        return Transaction(
            bank=self.key,
            account=account,
            payee=description or "",
            amount=self.bank_format.parse_amount(self.require(record, AMOUNT_COLUMN)),
            date=self.bank_format.parse_date(self.require(record, DATE_COLUMN)),
            currency=DEFAULT_CURRENCY,
            category=category,
            description=description,
            is_transfer=_is_category(category, TRANSFER_CATEGORY)
            and contains_casefold(description, CSV_TRANSFER_PHRASE),
        )

    def convert_ofx(
        self,
        text: str,
        account: str,
        cancel_token: CancellationToken | None = None,
    ) -> list[Transaction]:
        """Flatten every statement of an OFX export into one transaction list."""
        transactions: list[Transaction] = []

        for statement in read_ofx_statements(text, cancel_token):
            default_currency = statement.currency or DEFAULT_CURRENCY
            for record in statement.records:
                check_cancelled(cancel_token)
                transaction = self._parse_ofx_record(record, account, default_currency)
                if transaction is not None:
                    transactions.append(transaction)

        logger.info("Converted %d %s OFX transactions", len(transactions), self.key)
        return transactions

    def _parse_ofx_record(self, record: OfxRecord, account: str, default_currency: str) -> Transaction | None:
        if not record.trnamt or not record.dtposted or not record.name:
            logger.debug("Skipping incomplete OFX transaction: %s", record)
            return None

        try:
            date = parse_ofx_datetime(record.dtposted, self.ofx_format.tz)
            amount = self.ofx_format.parse_amount(record.trnamt)
        except ValueError as e:
            raise FormatError(f"Invalid {self.key} OFX transaction '{record.name}': {e}") from e

        return Transaction(
            bank=self.key,
            account=account,
            payee=record.name,
            amount=amount,
            date=date,
            currency=(record.currency or default_currency).upper(),
            category=record.memo,
            description=record.name,
            is_transfer=_is_category(record.memo, TRANSFER_CATEGORY)
            and contains_casefold(record.name, OFX_TRANSFER_PHRASE),
        )
