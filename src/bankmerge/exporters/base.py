#!/usr/bin/env python3
"""
Exporter Base Class

An exporter serializes the final transaction list to one output file.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from bankmerge.core.cancellation import CancellationToken
from bankmerge.core.models import Transaction


class TransactionExporter(ABC):
    """
    Exporter interface: one implementation per output format.

    Subclasses set ``key`` (the ``--format`` value) and ``file_extension``
    (including the leading dot).
    """

    key: str
    file_extension: str

    @abstractmethod
    def export(
        self,
        transactions: Sequence[Transaction],
        output_path: Path,
        cancel_token: CancellationToken | None = None,
    ) -> None:
        """
        Write transactions to a file, replacing any existing content.

        Args:
            transactions: Transactions in output order
            output_path: Destination file
            cancel_token: Optional token checked once per transaction

        Raises:
            ExportValidationError: If the transactions cannot be exported
            OperationCancelled: If cancellation was requested
        """
        ...

    def default_output_path(self, base_name: str, directory: Path | None = None) -> Path:
        """Default destination: ``<directory>/<base_name><extension>``."""
        return (directory or Path(".")) / f"{base_name}{self.file_extension}"
