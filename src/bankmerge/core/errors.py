#!/usr/bin/env python3
"""
Error Types for Statement Conversion

All fatal conditions raised by converters, exporters and the processing
service derive from BankMergeError so the CLI can report them uniformly.

Taxonomy:
- FormatError: the input does not have the expected structure (fatal per file)
- RowError: one malformed spreadsheet row (recovered by skipping the row)
- NotFoundError: unknown bank/format key, missing input file or store record
- ExportValidationError: the exporter cannot represent the given input
- OperationCancelled: a cancellation request was observed
"""


class BankMergeError(Exception):
    """Base class for all bankmerge errors."""

    pass


class FormatError(BankMergeError, ValueError):
    """Raised when an input file does not match its converter's expected layout."""

    pass


class RowError(FormatError):
    """Raised for a single malformed row inside a spreadsheet."""

    def __init__(self, row: int, message: str):
        super().__init__(f"row {row}: {message}")
        self.row = row


class NotFoundError(BankMergeError, LookupError):
    """Raised when a converter, exporter, input file or store record does not exist."""

    pass


class DuplicateRecordError(BankMergeError, ValueError):
    """Raised when adding a payee or category whose name is already taken."""

    pass


class ExportValidationError(BankMergeError, ValueError):
    """Raised when transactions cannot be exported in the requested format."""

    pass


class OperationCancelled(BankMergeError):
    """Raised when a conversion or export observes a cancellation request."""

    pass
