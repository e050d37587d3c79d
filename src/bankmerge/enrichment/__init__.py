"""
Enrichment Package

Payee/category knowledge base and the matcher that applies it to converted
transactions.
"""

from bankmerge.enrichment.datastore import EnrichmentStore
from bankmerge.enrichment.matcher import TransactionEnricher, build_lookup

__all__ = [
    "EnrichmentStore",
    "TransactionEnricher",
    "build_lookup",
]
