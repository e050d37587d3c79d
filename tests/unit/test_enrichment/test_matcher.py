#!/usr/bin/env python3
"""Tests for the transaction enrichment matcher."""

import logging
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from bankmerge.core.models import Category, Payee, Transaction
from bankmerge.enrichment.matcher import TransactionEnricher, build_lookup


def make_transaction(payee: str, amount: str, category: str | None = None, description: str | None = None):
    return Transaction(
        bank="revolut",
        account="Main",
        payee=payee,
        amount=Decimal(amount),
        date=datetime(2025, 3, 1, tzinfo=timezone.utc),
        currency="EUR",
        category=category,
        description=description,
    )


@pytest.mark.enrichment
class TestTransactionEnricher:
    """Test payee and category enrichment rules."""

    def test_payee_match_sets_canonical_name_and_expense_fields(self, sample_payees, sample_categories):
        """Test an expense matched by synonym."""
        enricher = TransactionEnricher(sample_payees, sample_categories)

        enriched = enricher.enrich_transaction(make_transaction("STARBUCKS #123", "-4.50"))

        assert enriched.payee == "Starbucks"
        assert enriched.category == "Coffee"
        assert enriched.description == "Coffee shop"

    def test_top_up_uses_top_up_fields(self, sample_payees, sample_categories):
        """Test a positive amount takes the top-up category/description."""
        enricher = TransactionEnricher(sample_payees, sample_categories)

        enriched = enricher.enrich_transaction(make_transaction("employer inc payroll", "3000.00"))

        assert enriched.payee == "Employer Inc"
        assert enriched.category == "Salary"
        assert enriched.description == "Monthly salary"

    def test_payee_match_overwrites_with_missing_fields(self, sample_payees, sample_categories):
        """Test the payee's empty fields replace the original values."""
        enricher = TransactionEnricher(sample_payees, sample_categories)

        # Starbucks has no top-up data
        enriched = enricher.enrich_transaction(make_transaction("Starbucks", "4.50", "Refunds", "Original"))

        assert enriched.category is None
        assert enriched.description is None

    def test_no_payee_match_normalizes_category(self, sample_payees, sample_categories):
        """Test category synonyms resolve to the canonical name."""
        enricher = TransactionEnricher(sample_payees, sample_categories)

        enriched = enricher.enrich_transaction(make_transaction("Unknown Store", "-20.00", "supermarkets", "Weekly"))

        assert enriched.payee == "Unknown Store"
        assert enriched.category == "Groceries"
        assert enriched.description == "Weekly"

    def test_cyrillic_category_synonym(self, sample_payees, sample_categories):
        """Test case-insensitive matching of non-ASCII synonyms."""
        enricher = TransactionEnricher(sample_payees, sample_categories)

        enriched = enricher.enrich_transaction(make_transaction("Магнит", "-300.00", "СУПЕРМАРКЕТЫ"))

        assert enriched.category == "Groceries"

    def test_no_match_leaves_transaction_unchanged(self, sample_payees, sample_categories):
        """Test pass-through returns an equal transaction."""
        enricher = TransactionEnricher(sample_payees, sample_categories)
        transaction = make_transaction("Random Merchant", "-1.00", "Unknown Category", "Original description")

        assert enricher.enrich_transaction(transaction) == transaction

    def test_payee_match_takes_precedence_over_category(self):
        """Test a matched payee never keeps its original category."""
        enricher = TransactionEnricher(
            [Payee(name="Amazon", expense_category="Shopping", expense_description="Online shopping")],
            [Category(name="Groceries")],
        )

        enriched = enricher.enrich_transaction(make_transaction("AMAZON", "-10.00", "Groceries", "Food"))

        assert enriched.payee == "Amazon"
        assert enriched.category == "Shopping"
        assert enriched.description == "Online shopping"

    def test_enrich_preserves_order_and_count(self, sample_payees, sample_categories):
        """Test enrichment is total over the input sequence."""
        enricher = TransactionEnricher(sample_payees, sample_categories)
        transactions = [
            make_transaction("Unknown", "-1.00"),
            make_transaction("Starbucks Coffee", "-2.00"),
            make_transaction("Unknown", "-3.00"),
        ]

        enriched = enricher.enrich(transactions)

        assert len(enriched) == 3
        assert [t.amount for t in enriched] == [Decimal("-1.00"), Decimal("-2.00"), Decimal("-3.00")]
        assert [t.payee for t in enriched] == ["Unknown", "Starbucks", "Unknown"]

    def test_enrich_accepts_generators(self, sample_payees, sample_categories):
        enricher = TransactionEnricher(sample_payees, sample_categories)

        enriched = enricher.enrich(make_transaction("Unknown", f"-{n}.00") for n in range(1, 4))

        assert len(enriched) == 3

    def test_empty_knowledge_base(self):
        transaction = make_transaction("Anything", "-1.00", "Any")

        assert TransactionEnricher([], []).enrich([transaction]) == [transaction]


@pytest.mark.enrichment
class TestBuildLookup:
    """Test case-insensitive lookup construction."""

    def test_first_writer_wins_and_collision_is_logged(self, caplog):
        """Test duplicate synonyms keep the first record."""
        first = Payee(name="Uber", synonyms=("RIDE",))
        second = Payee(name="Lyft", synonyms=("ride",))

        with caplog.at_level(logging.WARNING):
            lookup = build_lookup([first, second], "Payee")

        assert lookup["ride"] is first
        assert "already belongs to 'Uber'" in caplog.text

    def test_synonym_equal_to_own_name_is_not_a_collision(self, caplog):
        payee = Payee(name="Netflix", synonyms=("NETFLIX",))

        with caplog.at_level(logging.WARNING):
            lookup = build_lookup([payee], "Payee")

        assert lookup == {"netflix": payee}
        assert caplog.text == ""
