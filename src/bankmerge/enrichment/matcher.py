#!/usr/bin/env python3
"""
Transaction Enrichment Matcher

Rewrites converted transactions against the user's known payees and
categories:

1. Payee match - the payee (or one of its synonyms) is known: the payee is
   renamed to the canonical name and category/description are taken from the
   payee's expense or top-up fields, depending on the transaction direction
2. Category match - the transaction category (or a synonym) is known: the
   category is renamed to the canonical name
3. No match - the transaction passes through unchanged

All lookups are case-insensitive.
"""

import logging
from dataclasses import replace
from typing import Iterable, TypeVar

from bankmerge.core.models import Category, Payee, Transaction

logger = logging.getLogger(__name__)

_Record = TypeVar("_Record", Payee, Category)


def build_lookup(records: Iterable[_Record], kind: str) -> dict[str, _Record]:
    """
    Index records by the casefolded name and every casefolded synonym.

    The first record to claim a key keeps it; later collisions are logged.
    """
    lookup: dict[str, _Record] = {}
    for record in records:
        for key in (record.name, *record.synonyms):
            folded = key.casefold()
            existing = lookup.get(folded)
            if existing is None:
                lookup[folded] = record
            elif existing is not record:
                logger.warning(
                    "%s key '%s' of '%s' already belongs to '%s', ignoring",
                    kind,
                    key,
                    record.name,
                    existing.name,
                )
    return lookup


class TransactionEnricher:
    """
    Enrichment matcher over a snapshot of payees and categories.

    The lookup maps are built once at construction; ``enrich`` never touches
    the store.
    """

    def __init__(self, payees: Iterable[Payee], categories: Iterable[Category]):
        """
        Initialize the enricher.

        Args:
            payees: Known payees with their synonyms
            categories: Known categories with their synonyms
        """
        self.payees = build_lookup(payees, "Payee")
        self.categories = build_lookup(categories, "Category")

    def enrich_transaction(self, transaction: Transaction) -> Transaction:
        """Apply the first matching rule to one transaction."""
        payee = self.payees.get(transaction.payee.casefold())
        if payee is not None:
            transaction_type = transaction.transaction_type
            return replace(
                transaction,
                payee=payee.name,
                category=payee.category_for(transaction_type),
                description=payee.description_for(transaction_type),
            )

        if transaction.category is not None:
            category = self.categories.get(transaction.category.casefold())
            if category is not None:
                return replace(transaction, category=category.name)

        return transaction

    def enrich(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        """
        Enrich a sequence of transactions.

        Args:
            transactions: Transactions in output order

        Returns:
            New list of the same length and order
        """
        enriched = [self.enrich_transaction(transaction) for transaction in transactions]
        logger.debug("Enriched %d transactions", len(enriched))
        return enriched
