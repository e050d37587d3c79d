#!/usr/bin/env python3
"""Tests for the CSV exporter."""

import csv
import dataclasses
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from bankmerge.core.cancellation import CancellationToken
from bankmerge.core.errors import OperationCancelled
from bankmerge.core.models import Transaction
from bankmerge.exporters import CSV_HEADER, CsvExporter, get_exporter

TRANSFER = Transaction(
    bank="wise",
    account="EUR",
    payee="Own account",
    amount=Decimal("1900.00"),
    date=datetime(2025, 3, 3, 11, 45, 10, tzinfo=timezone.utc),
    currency="EUR",
    is_transfer=True,
)


def read_rows(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


@pytest.mark.exporters
class TestCsvExporter:
    """Test CSV output."""

    def test_key_and_extension(self):
        exporter = CsvExporter()

        assert exporter.key == "csv"
        assert exporter.file_extension == ".csv"

    def test_empty_transactions_write_header_only(self, temp_dir):
        """Test zero transactions still produce a valid file."""
        output = temp_dir / "out.csv"

        CsvExporter().export([], output)

        assert read_rows(output) == [CSV_HEADER]

    def test_header_order(self):
        assert CSV_HEADER == [
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

    def test_single_transaction(self, temp_dir, sample_transaction):
        """Test every column of one row."""
        output = temp_dir / "out.csv"

        CsvExporter().export([sample_transaction], output)

        rows = read_rows(output)
        assert rows[1] == [
            "tbank",
            "checking",
            "Test Payee",
            "-100.50",
            "Food",
            "Test Description",
            "2025-10-11T14:30:45+00:00",
            "USD",
            "false",
            "Expense",
        ]

    def test_multiple_transactions_keep_order(self, temp_dir, sample_transaction):
        output = temp_dir / "out.csv"
        transactions = [dataclasses.replace(sample_transaction, payee=f"Payee {n}") for n in range(1, 4)]

        CsvExporter().export(transactions, output)

        assert [row[2] for row in read_rows(output)[1:]] == ["Payee 1", "Payee 2", "Payee 3"]

    def test_null_fields_and_top_up(self, temp_dir):
        """Test missing category/description become empty cells."""
        output = temp_dir / "out.csv"

        CsvExporter().export([TRANSFER], output)

        row = read_rows(output)[1]
        assert row[4] == ""
        assert row[5] == ""
        assert row[8] == "true"
        assert row[9] == "TopUp"

    def test_quotes_embedded_delimiters(self, temp_dir, sample_transaction):
        output = temp_dir / "out.csv"
        transaction = dataclasses.replace(sample_transaction, payee='Shop, "The" Best')

        CsvExporter().export([transaction], output)

        assert read_rows(output)[1][2] == 'Shop, "The" Best'

    def test_cancellation_leaves_no_file(self, temp_dir, sample_transaction):
        """Test cancellation aborts before anything is written."""
        output = temp_dir / "out.csv"
        token = CancellationToken()
        token.cancel()

        with pytest.raises(OperationCancelled):
            CsvExporter().export([sample_transaction], output, token)

        assert not output.exists()

    def test_registry_lookup(self):
        assert isinstance(get_exporter("CSV"), CsvExporter)
