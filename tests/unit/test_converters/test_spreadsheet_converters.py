#!/usr/bin/env python3
"""Tests for the XLSX converters (IDBank, BBVA, Santander)."""

import io
import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from bankmerge.converters.bbva import BbvaConverter
from bankmerge.converters.idbank import IdBankConverter
from bankmerge.converters.santander import SantanderConverter
from bankmerge.core.cancellation import CancellationToken
from bankmerge.core.errors import FormatError, OperationCancelled
from tests.fixtures.statements import bbva_rows, build_workbook, idbank_rows, santander_rows

UTC_PLUS_1 = timezone(timedelta(hours=1))
UTC_PLUS_4 = timezone(timedelta(hours=4))


def convert(converter, rows, account: str = "testAccount"):
    return converter.convert(io.BytesIO(build_workbook(rows)), account)


@pytest.mark.converters
class TestIdBankConverter:
    """Test IDBank statement conversion."""

    def test_reads_rows_between_header_and_footer(self):
        """Test data rows after the marker and before the footer are converted."""
        transactions = convert(IdBankConverter(), idbank_rows())

        # Row without a payee is skipped; the row after the footer is never read
        assert [t.payee for t in transactions] == ["SAS Supermarket", "Incoming transfer"]

    def test_debit_is_negative_credit_is_positive(self):
        """Test debit/credit columns become one signed amount."""
        transactions = convert(IdBankConverter(), idbank_rows())

        assert [t.amount for t in transactions] == [Decimal("-1500"), Decimal("250000")]

    def test_maps_fields(self):
        """Test date offset, currency and description concatenation."""
        first = convert(IdBankConverter(), idbank_rows(), account="Card")[0]

        assert first.bank == "idbank"
        assert first.currency == "AMD"
        assert first.date == datetime(2025, 3, 15, 10, 20, 30, tzinfo=UTC_PLUS_4)
        assert first.description == "Purchase Card *1234"

    def test_account_column_overrides_label(self):
        """Test the account column wins; a blank cell keeps the caller's label."""
        transactions = convert(IdBankConverter(), idbank_rows(), account="Card")

        assert [t.account for t in transactions] == ["2470000000001", "Card"]

    def test_whitespace_account_cell_keeps_label(self):
        """Test an account cell holding only spaces counts as blank."""
        rows = idbank_rows()
        rows[6][6] = "   "

        first = convert(IdBankConverter(), rows, account="Card")[0]

        assert first.account == "Card"

    def test_transfer_detected_from_payee(self):
        """Test payees mentioning a transfer are flagged."""
        transactions = convert(IdBankConverter(), idbank_rows())

        assert [t.is_transfer for t in transactions] == [False, True]

    def test_missing_header_marker_raises_format_error(self):
        """Test a sheet without the table header is rejected."""
        rows = {1: ["Something else"], 2: [1, None, "15/03/2025 10:20:30", 10]}

        with pytest.raises(FormatError, match="Document number"):
            convert(IdBankConverter(), rows)

    def test_empty_stream_raises_format_error(self):
        """Test an empty input is not a spreadsheet."""
        with pytest.raises(FormatError):
            IdBankConverter().convert(io.BytesIO(b""), "testAccount")

    def test_non_spreadsheet_raises_format_error(self):
        """Test CSV bytes are rejected by a spreadsheet converter."""
        with pytest.raises(FormatError):
            IdBankConverter().convert(io.BytesIO(b"a,b,c\n1,2,3\n"), "testAccount")


@pytest.mark.converters
class TestBbvaConverter:
    """Test BBVA statement conversion."""

    def test_converts_valid_rows_and_skips_malformed(self, caplog):
        """Test a malformed amount row is logged and skipped."""
        with caplog.at_level(logging.WARNING):
            transactions = convert(BbvaConverter(), bbva_rows())

        assert [t.payee for t in transactions] == ["Mercadona Valencia", "Transfer from Test Holder"]
        assert "row 8" in caplog.text

    def test_maps_fields(self):
        """Test US-style date, amount and comments."""
        first = convert(BbvaConverter(), bbva_rows())[0]

        assert first.bank == "bbva"
        assert first.date == datetime(2025, 3, 15, tzinfo=UTC_PLUS_1)
        assert first.amount == Decimal("-45.3")
        assert first.currency == "EUR"
        assert first.description == "Weekly shopping"
        assert first.is_transfer is False

    def test_falls_back_to_effective_date_and_default_currency(self):
        """Test empty date and currency cells."""
        second = convert(BbvaConverter(), bbva_rows())[1]

        assert second.date == datetime(2025, 3, 16, tzinfo=UTC_PLUS_1)
        assert second.currency == "EUR"
        assert second.description is None
        assert second.is_transfer is True

    def test_unreadable_date_does_not_fall_back(self):
        """Test a filled but unparseable date skips the row instead of using the effective date."""
        rows = bbva_rows()
        rows[6][2] = "15.03.2025"

        transactions = convert(BbvaConverter(), rows)

        assert [t.payee for t in transactions] == ["Transfer from Test Holder"]

    def test_both_dates_blank_skips_row(self):
        rows = bbva_rows()
        rows[7][1] = None

        transactions = convert(BbvaConverter(), rows)

        assert [t.payee for t in transactions] == ["Mercadona Valencia"]

    def test_header_only_sheet_returns_empty_list(self):
        """Test a statement with no movements."""
        rows = {5: [None, "Fecha valor", "Fecha", "Concepto"]}

        assert convert(BbvaConverter(), rows) == []

    def test_sheet_shorter_than_header_raises_format_error(self):
        """Test a sheet that ends before the header row."""
        with pytest.raises(FormatError):
            convert(BbvaConverter(), {1: ["Movimientos de cuenta"]})

    def test_cancellation_propagates(self):
        """Test cancellation is not swallowed as a row error."""
        token = CancellationToken()
        token.cancel()

        with pytest.raises(OperationCancelled):
            BbvaConverter().convert(io.BytesIO(build_workbook(bbva_rows())), "testAccount", token)


@pytest.mark.converters
class TestSantanderConverter:
    """Test Santander statement conversion."""

    def test_transfer_payees_by_direction(self):
        """Test transfers get direction labels and keep the concepto."""
        transactions = convert(SantanderConverter(), santander_rows())

        assert [t.payee for t in transactions] == [
            "Transfer received",
            "Transfer completed",
            "Pago en MERCADONA VALENCIA",
        ]
        assert transactions[0].description == "TRANSFERENCIA RECIBIDA DE TEST HOLDER"
        assert [t.is_transfer for t in transactions] == [True, True, False]

    def test_maps_amount_date_and_currency(self):
        """Test amount, date offset and constant currency."""
        third = convert(SantanderConverter(), santander_rows())[2]

        assert third.amount == Decimal("-23.45")
        assert third.date == datetime(2025, 3, 17, tzinfo=UTC_PLUS_1)
        assert third.currency == "EUR"

    def test_rows_without_date_are_skipped(self):
        """Test non-transaction rows (no date) are ignored."""
        transactions = convert(SantanderConverter(), santander_rows())

        assert "Subtotal" not in [t.payee for t in transactions]
        assert len(transactions) == 3
