#!/usr/bin/env python3
"""
Converter Base Classes

Every bank converter turns one raw export stream into canonical Transactions.
Two families share most of their mechanics and get a base class each:

- DelimitedConverter: CSV-like text read with pandas. Any malformed record is
  fatal for the whole file, since it usually means the file has the wrong shape.
- SpreadsheetConverter: XLSX read with openpyxl by fixed cell coordinates.
  A malformed row is logged and skipped; conversion continues.
"""

import io
import logging
import re
import zipfile
from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Any, BinaryIO

import pandas as pd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from bankmerge.core.cancellation import CancellationToken, check_cancelled
from bankmerge.core.currency import parse_amount
from bankmerge.core.dates import attach_offset
from bankmerge.core.encoding import detect_encoding
from bankmerge.core.errors import FormatError, RowError
from bankmerge.core.formats import BankFormat
from bankmerge.core.models import Transaction

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(value: str | None) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    if not value or not value.strip():
        return ""
    return _WHITESPACE.sub(" ", value).strip()


def remove_last_word(value: str) -> str:
    """
    Drop the last space-separated word.

    Example:
        remove_last_word("Department Store Madrid") -> "Department Store"
        remove_last_word("Single") -> ""
    """
    index = value.rfind(" ")
    return "" if index == -1 else value[:index]


def contains_casefold(haystack: str | None, needle: str) -> bool:
    """Case-insensitive substring test that treats None as no match."""
    if not haystack:
        return False
    return needle.casefold() in haystack.casefold()


class TransactionsConverter(ABC):
    """
    Converter interface: one implementation per bank export format.

    Subclasses set ``key`` (the bank key used on the command line) and
    ``bank_format`` (date pattern, decimal convention, UTC offset).
    """

    key: str
    bank_format: BankFormat

    @abstractmethod
    def convert(
        self,
        stream: BinaryIO,
        account: str,
        cancel_token: CancellationToken | None = None,
    ) -> list[Transaction]:
        """
        Convert a raw export into canonical transactions.

        Args:
            stream: Seekable binary stream holding the whole export
            account: Account label attached to every transaction
            cancel_token: Optional token checked once per record

        Returns:
            Transactions in file order

        Raises:
            FormatError: If the stream does not match the expected layout
            OperationCancelled: If cancellation was requested mid-parse
        """
        ...


class DelimitedConverter(TransactionsConverter):
    """
    Base for delimited-text exports.

    Subclasses declare the delimiter and required header columns, and map one
    record (column name -> raw text) to a Transaction in ``parse_record``.
    An empty file yields no transactions.
    """

    delimiter: str = ","
    required_columns: tuple[str, ...] = ()

    def convert(
        self,
        stream: BinaryIO,
        account: str,
        cancel_token: CancellationToken | None = None,
    ) -> list[Transaction]:
        encoding = detect_encoding(stream)
        text = stream.read().decode(encoding, errors="replace")
        return self.convert_text(text, account, cancel_token)

    def convert_text(
        self,
        text: str,
        account: str,
        cancel_token: CancellationToken | None = None,
    ) -> list[Transaction]:
        """Convert already-decoded export text."""
        frame = self._read_frame(text)
        if frame is None:
            logger.info("%s export is empty", self.key)
            return []

        self._validate_header(frame)

        transactions: list[Transaction] = []
        for number, record in enumerate(frame.to_dict("records"), start=1):
            check_cancelled(cancel_token)
            try:
                transactions.append(self.parse_record(record, account))
            except (ValueError, KeyError) as e:
                raise FormatError(f"Invalid {self.key} record {number}: {e}") from e

        logger.info("Converted %d %s transactions", len(transactions), self.key)
        return transactions

    def _read_frame(self, text: str) -> pd.DataFrame | None:
        if not text.strip():
            return None
        try:
            frame = pd.read_csv(
                io.StringIO(text),
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError:
            return None
        except pd.errors.ParserError as e:
            raise FormatError(f"Malformed {self.key} export: {e}") from e

        frame.columns = [str(column).strip() for column in frame.columns]
        return frame.fillna("")

    def _validate_header(self, frame: pd.DataFrame) -> None:
        missing = [column for column in self.required_columns if column not in frame.columns]
        if missing:
            raise FormatError(f"{self.key} export is missing header columns: {', '.join(missing)}")

    @staticmethod
    def require(record: dict[str, Any], column: str) -> str:
        """Return a non-empty trimmed field or raise ValueError."""
        value = str(record.get(column, "")).strip()
        if not value:
            raise ValueError(f"missing value for '{column}'")
        return value

    @staticmethod
    def optional(record: dict[str, Any], column: str) -> str | None:
        """Return a trimmed field, or None when it is empty."""
        value = str(record.get(column, "")).strip()
        return value or None

    @abstractmethod
    def parse_record(self, record: dict[str, Any], account: str) -> Transaction:
        """Map one record to a Transaction; raise ValueError if it is malformed."""
        ...


class SpreadsheetConverter(TransactionsConverter):
    """
    Base for XLSX exports read cell-by-cell from the first worksheet.

    Subclasses locate the first data row (``find_data_start``), optionally stop
    at a footer (``is_end_row``) and map a row to a Transaction (``parse_row``).
    ``parse_row`` returns None for rows that carry no transaction and raises
    RowError for malformed rows, which are logged and skipped.
    """

    def convert(
        self,
        stream: BinaryIO,
        account: str,
        cancel_token: CancellationToken | None = None,
    ) -> list[Transaction]:
        worksheet = self._open_first_sheet(stream)
        last_row = worksheet.max_row
        start_row = self.find_data_start(worksheet, last_row)

        transactions: list[Transaction] = []
        skipped = 0
        for row in range(start_row, last_row + 1):
            check_cancelled(cancel_token)

            if self.is_end_row(worksheet, row):
                break

            try:
                transaction = self.parse_row(worksheet, row, account)
            except RowError as e:
                logger.warning("Skipping %s row %d: %s", self.key, row, e)
                skipped += 1
                continue

            if transaction is not None:
                transactions.append(transaction)

        logger.info("Converted %d %s transactions (%d rows skipped)", len(transactions), self.key, skipped)
        return transactions

    def _open_first_sheet(self, stream: BinaryIO) -> Worksheet:
        data = stream.read()
        if not data:
            raise FormatError(f"{self.key} export is empty")

        try:
            workbook = load_workbook(io.BytesIO(data), data_only=True)
        except (zipfile.BadZipFile, InvalidFileException, KeyError, OSError, ValueError) as e:
            raise FormatError(f"{self.key} export is not a valid spreadsheet: {e}") from e

        if not workbook.worksheets:
            raise FormatError("Could not find the worksheet in the file.")
        return workbook.worksheets[0]

    @abstractmethod
    def find_data_start(self, worksheet: Worksheet, last_row: int) -> int:
        """Return the 1-based row number of the first data row, or raise FormatError."""
        ...

    def is_end_row(self, worksheet: Worksheet, row: int) -> bool:
        return False

    @abstractmethod
    def parse_row(self, worksheet: Worksheet, row: int, account: str) -> Transaction | None:
        ...

    # Cell helpers

    @staticmethod
    def cell_text(worksheet: Worksheet, row: int, column: int) -> str:
        """Cell value as trimmed text ("" for empty cells)."""
        value = worksheet.cell(row=row, column=column).value
        if value is None:
            return ""
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()

    def cell_date(self, worksheet: Worksheet, row: int, column: int) -> datetime | None:
        """
        Read a date cell using the bank's pattern and UTC offset.

        Returns None when the cell is empty or does not hold a date in the
        expected pattern; such rows are not transaction rows.
        """
        value = worksheet.cell(row=row, column=column).value
        if isinstance(value, datetime):
            return attach_offset(value, self.bank_format.tz)
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=self.bank_format.tz)

        text = "" if value is None else str(value).strip()
        if not text:
            return None
        try:
            return self.bank_format.parse_date(text)
        except ValueError:
            logger.debug("Row %d: '%s' is not a %s date", row, text, self.key)
            return None

    def cell_amount(self, worksheet: Worksheet, row: int, column: int) -> Decimal:
        """
        Read an amount cell; empty cells are zero.

        Raises:
            RowError: If the cell holds text that is not a number
        """
        value = worksheet.cell(row=row, column=column).value
        if value is None:
            return Decimal("0")
        if isinstance(value, bool):
            raise RowError(row, f"unexpected boolean amount in column {column}")
        if isinstance(value, (int, float)):
            return Decimal(str(value))

        text = str(value).strip()
        if not text:
            return Decimal("0")
        try:
            return parse_amount(
                text,
                decimal_separator=self.bank_format.decimal_separator,
                thousands_separator=self.bank_format.thousands_separator,
            )
        except ValueError as e:
            raise RowError(row, str(e)) from e
