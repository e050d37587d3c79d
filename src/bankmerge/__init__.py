"""
bankmerge - Bank Statement Normalizer

Converts transaction exports from several banks into one canonical
transaction list, renames payees and categories against a local list, and
writes the result as CSV or OFX.

Domain Packages:
- core: Data models, amounts, dates, encodings, configuration, errors
- converters: One converter per bank export format
- enrichment: Payee/category store and matcher
- processing: Conversion pipeline over several input files
- exporters: CSV and OFX writers
- cli: Command-line interface

Example Usage:
    from pathlib import Path

    from bankmerge.core.models import BankStatementFile
    from bankmerge.enrichment import EnrichmentStore
    from bankmerge.exporters import get_exporter
    from bankmerge.processing import TransactionProcessingService

    store = EnrichmentStore(Path("~/.bankmerge").expanduser())
    service = TransactionProcessingService(store.load)
    transactions = service.process_files([BankStatementFile.parse("revolut.csv:revolut:Main")])
    get_exporter("ofx").export(transactions, Path("out.ofx"))
"""

__version__ = "0.3.0"
__author__ = "Karl Davis"

from .core.models import BankStatementFile, Category, Payee, Transaction, TransactionType

__all__ = [
    "BankStatementFile",
    "Category",
    "Payee",
    "Transaction",
    "TransactionType",
    "__author__",
    "__version__",
]
