#!/usr/bin/env python3
"""
OFX Exporter

Writes an OFX 1.0.2 style document: the plain-text ``KEY:VALUE`` header, a
blank line, then the element tree. Transactions are grouped into one bank
statement per (bank, account, currency), in order of first appearance; each
statement lists its transactions by date and closes with a ledger balance
equal to the exact sum of its amounts.

Each transaction gets a deterministic FITID derived from its content, so
re-exporting the same statement lets finance tools recognise duplicates.
"""

import hashlib
import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from lxml import etree

from bankmerge.core.cancellation import CancellationToken, check_cancelled
from bankmerge.core.currency import format_amount, sum_amounts
from bankmerge.core.dates import to_ofx_date, to_ofx_timestamp
from bankmerge.core.errors import ExportValidationError
from bankmerge.core.models import Transaction
from bankmerge.exporters.base import TransactionExporter

logger = logging.getLogger(__name__)

OFX_HEADER_LINES = (
    "OFXHEADER:100",
    "DATA:OFXSGML",
    "VERSION:102",
    "SECURITY:NONE",
    "ENCODING:UTF-8",
    "CHARSET:NONE",
    "COMPRESSION:NONE",
    "OLDFILEUID:NONE",
    "NEWFILEUID:NONE",
)

FITID_LENGTH = 32
ACCOUNT_TYPE = "CHECKING"

StatementKey = tuple[str, str, str]


def fitid(transaction: Transaction) -> str:
    """
    Deterministic transaction identifier.

    The first 32 upper-case hex characters of the SHA-256 of
    ``bank|account|YYYYMMDDHHMMSS|payee|amount|currency``.
    """
    source = "|".join(
        [
            transaction.bank,
            transaction.account,
            to_ofx_timestamp(transaction.date),
            transaction.payee,
            format_amount(transaction.amount),
            transaction.currency,
        ]
    )
    return hashlib.sha256(source.encode("utf-8")).hexdigest().upper()[:FITID_LENGTH]


def transaction_type_code(transaction: Transaction) -> str:
    if transaction.is_transfer:
        return "XFER"
    return "DEBIT" if transaction.amount < 0 else "CREDIT"


def group_statements(transactions: Sequence[Transaction]) -> dict[StatementKey, list[Transaction]]:
    """Group by (bank, account, currency), keeping first-appearance order."""
    groups: dict[StatementKey, list[Transaction]] = {}
    for transaction in transactions:
        key = (transaction.bank, transaction.account, transaction.currency)
        groups.setdefault(key, []).append(transaction)
    return groups


def _sub(parent: etree._Element, tag: str, text: str | None = None) -> etree._Element:
    element = etree.SubElement(parent, tag)
    if text is not None:
        element.text = text
    return element


def _status(parent: etree._Element) -> None:
    status = _sub(parent, "STATUS")
    _sub(status, "CODE", "0")
    _sub(status, "SEVERITY", "INFO")


class OfxExporter(TransactionExporter):
    """Exporter for OFX bank statements."""

    key = "ofx"
    file_extension = ".ofx"

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        """
        Initialize the exporter.

        Args:
            clock: Source of the server timestamp (DTSERVER)
        """
        self.clock = clock

    def export(
        self,
        transactions: Sequence[Transaction],
        output_path: Path,
        cancel_token: CancellationToken | None = None,
    ) -> None:
        content = self.render(transactions, cancel_token)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)

        logger.info("Wrote %d transactions to %s", len(transactions), output_path)

    def render(
        self,
        transactions: Sequence[Transaction],
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """
        Build the complete document text.

        Raises:
            ExportValidationError: If there are no transactions
            OperationCancelled: If cancellation was requested
        """
        if not transactions:
            raise ExportValidationError("No transactions to export to OFX")

        root = etree.Element("OFX")

        signon = _sub(_sub(root, "SIGNONMSGSRSV1"), "SONRS")
        _status(signon)
        _sub(signon, "DTSERVER", to_ofx_timestamp(self.clock()))
        _sub(signon, "LANGUAGE", "ENG")

        bank_messages = _sub(root, "BANKMSGSRSV1")
        for (bank, account, currency), group in group_statements(transactions).items():
            self._add_statement(bank_messages, bank, account, currency, group, cancel_token)

        body = etree.tostring(root, pretty_print=True, encoding="unicode")
        return "\n".join(OFX_HEADER_LINES) + "\n\n" + body

    def _add_statement(
        self,
        parent: etree._Element,
        bank: str,
        account: str,
        currency: str,
        group: list[Transaction],
        cancel_token: CancellationToken | None,
    ) -> None:
        ordered = sorted(group, key=lambda t: t.date)
        start_date = ordered[0].date
        end_date = ordered[-1].date
        balance: Decimal = sum_amounts([t.amount for t in ordered])

        response = _sub(parent, "STMTTRNRS")
        _sub(response, "TRNUID", "1")
        _status(response)

        statement = _sub(response, "STMTRS")
        _sub(statement, "CURDEF", currency)

        account_from = _sub(statement, "BANKACCTFROM")
        _sub(account_from, "BANKID", bank)
        _sub(account_from, "ACCTID", account)
        _sub(account_from, "ACCTTYPE", ACCOUNT_TYPE)

        transaction_list = _sub(statement, "BANKTRANLIST")
        _sub(transaction_list, "DTSTART", to_ofx_date(start_date))
        _sub(transaction_list, "DTEND", to_ofx_date(end_date))

        for transaction in ordered:
            check_cancelled(cancel_token)
            self._add_transaction(transaction_list, transaction)

        ledger_balance = _sub(statement, "LEDGERBAL")
        _sub(ledger_balance, "BALAMT", format_amount(balance))
        _sub(ledger_balance, "DTASOF", to_ofx_date(end_date))

        logger.debug("OFX statement %s/%s/%s: %d transactions", bank, account, currency, len(ordered))

    def _add_transaction(self, parent: etree._Element, transaction: Transaction) -> None:
        element = _sub(parent, "STMTTRN")
        _sub(element, "TRNTYPE", transaction_type_code(transaction))
        _sub(element, "DTPOSTED", to_ofx_timestamp(transaction.date))
        _sub(element, "TRNAMT", format_amount(transaction.amount))
        _sub(element, "FITID", fitid(transaction))
        _sub(element, "NAME", transaction.payee)
        if transaction.description:
            _sub(element, "MEMO", transaction.description)
