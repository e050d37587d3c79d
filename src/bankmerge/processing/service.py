#!/usr/bin/env python3
"""
Transaction Processing Service

Runs a conversion end to end: resolve a converter for every input file,
convert the files in the given order, concatenate the results and enrich them
against one snapshot of the payee/category store.

Every input is validated before the first file is opened, so a typo in the
last --file argument never leaves a half-finished run behind.
"""

import logging
from collections.abc import Callable, Sequence

from bankmerge.converters import get_converter
from bankmerge.converters.base import TransactionsConverter
from bankmerge.core.cancellation import CancellationToken, check_cancelled
from bankmerge.core.errors import NotFoundError
from bankmerge.core.models import BankStatementFile, Category, Payee, Transaction
from bankmerge.enrichment.matcher import TransactionEnricher

logger = logging.getLogger(__name__)

EnrichmentSource = Callable[[], tuple[list[Payee], list[Category]]]


class TransactionProcessingService:
    """
    Conversion pipeline over a list of bank statement files.

    Args:
        load_enrichment: Returns a (payees, categories) snapshot, typically
            ``EnrichmentStore.load``
        resolve_converter: Bank key -> converter lookup
    """

    def __init__(
        self,
        load_enrichment: EnrichmentSource,
        resolve_converter: Callable[[str], TransactionsConverter] = get_converter,
    ):
        self.load_enrichment = load_enrichment
        self.resolve_converter = resolve_converter

    def _prepare(self, files: Sequence[BankStatementFile]) -> list[tuple[BankStatementFile, TransactionsConverter]]:
        """Check every file exists and every bank key resolves."""
        missing = [str(file.path) for file in files if not file.path.is_file()]
        if missing:
            raise NotFoundError(f"Input file not found: {', '.join(missing)}")

        return [(file, self.resolve_converter(file.bank)) for file in files]

    def process_files(
        self,
        files: Sequence[BankStatementFile],
        cancel_token: CancellationToken | None = None,
    ) -> list[Transaction]:
        """
        Convert and enrich a list of bank statement files.

        Args:
            files: Inputs in output order
            cancel_token: Optional token observed by the converters

        Returns:
            Enriched transactions, file by file in input order

        Raises:
            NotFoundError: If an input file is missing or a bank key is unknown
            FormatError: If any file does not match its converter's layout
            OperationCancelled: If cancellation was requested
        """
        prepared = self._prepare(files)

        transactions: list[Transaction] = []
        for file, converter in prepared:
            check_cancelled(cancel_token)
            logger.info("Converting %s as %s (account '%s')", file.path, converter.key, file.account)

            with open(file.path, "rb") as stream:
                converted = converter.convert(stream, file.account, cancel_token)

            logger.debug("%s: %d transactions", file.path, len(converted))
            transactions.extend(converted)

        payees, categories = self.load_enrichment()
        enricher = TransactionEnricher(payees, categories)
        return enricher.enrich(transactions)
