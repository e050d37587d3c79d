"""
Core Utilities Package

Shared data models and utilities used by converters, enrichment and exporters.

This package provides:
- Canonical transaction, payee and category models
- Decimal amount parsing and formatting
- Timezone-aware date parsing and OFX date formats
- Stream encoding detection
- Configuration management for environment-specific settings
- The error taxonomy and cooperative cancellation
"""

from .cancellation import CancellationToken, check_cancelled
from .config import Config, Environment, get_config, get_data_dir, reload_config
from .currency import format_amount, parse_amount, sum_amounts
from .encoding import detect_encoding
from .errors import (
    BankMergeError,
    DuplicateRecordError,
    ExportValidationError,
    FormatError,
    NotFoundError,
    OperationCancelled,
    RowError,
)
from .formats import BankFormat
from .models import (
    BankStatementFile,
    Category,
    ConversionSummary,
    Payee,
    Transaction,
    TransactionType,
)

__all__ = [
    "BankFormat",
    "BankMergeError",
    "BankStatementFile",
    "CancellationToken",
    "Category",
    # Configuration
    "Config",
    "ConversionSummary",
    "DuplicateRecordError",
    "Environment",
    "ExportValidationError",
    "FormatError",
    "NotFoundError",
    "OperationCancelled",
    "Payee",
    "RowError",
    # Data models
    "Transaction",
    "TransactionType",
    "check_cancelled",
    "detect_encoding",
    # Amount utilities
    "format_amount",
    "get_config",
    "get_data_dir",
    "parse_amount",
    "reload_config",
    "sum_amounts",
]
