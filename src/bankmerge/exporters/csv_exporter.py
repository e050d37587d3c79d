#!/usr/bin/env python3
"""
CSV Exporter

Writes one row per transaction under a fixed header. Dates are ISO 8601 with
their UTC offset; amounts carry two fractional digits.
"""

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

from bankmerge.core.cancellation import CancellationToken, check_cancelled
from bankmerge.core.currency import format_amount
from bankmerge.core.models import Transaction
from bankmerge.exporters.base import TransactionExporter

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "Bank",
    "Account",
    "Payee",
    "Amount",
    "Category",
    "Description",
    "Date",
    "Currency",
    "IsTransfer",
    "Type",
]


def transaction_to_row(transaction: Transaction) -> list[str]:
    """Flatten a transaction into CSV cells in header order."""
    return [
        transaction.bank,
        transaction.account,
        transaction.payee,
        format_amount(transaction.amount),
        transaction.category or "",
        transaction.description or "",
        transaction.date.isoformat(),
        transaction.currency,
        "true" if transaction.is_transfer else "false",
        transaction.transaction_type.value,
    ]


class CsvExporter(TransactionExporter):
    """Exporter for comma-separated output."""

    key = "csv"
    file_extension = ".csv"

    def export(
        self,
        transactions: Sequence[Transaction],
        output_path: Path,
        cancel_token: CancellationToken | None = None,
    ) -> None:
        rows = []
        for transaction in transactions:
            check_cancelled(cancel_token)
            rows.append(transaction_to_row(transaction))

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", newline="", encoding="utf-8") as csvfile:
            writer = csv.writer(csvfile)
            writer.writerow(CSV_HEADER)
            writer.writerows(rows)

        logger.info("Wrote %d transactions to %s", len(rows), output_path)
