#!/usr/bin/env python3
"""
OFX Statement Reader

Reads ledger-exchange documents in either flavour banks actually produce:

- OFX 2.x: a well-formed XML document, optionally with an XML declaration
- OFX 1.x: a plain-text ``KEY:VALUE`` header followed by an SGML body whose
  leaf elements are not closed (``<TRNAMT>-100.00`` with no ``</TRNAMT>``)

The SGML body is normalized by closing leaf elements and then parsed with
BeautifulSoup's XML parser. The document is returned as a forest of statement
fragments (one per account), each with its raw transaction records.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from bs4 import BeautifulSoup, Tag

from bankmerge.core.cancellation import CancellationToken, check_cancelled
from bankmerge.core.errors import FormatError

logger = logging.getLogger(__name__)

# An opening tag followed by text that is not immediately closed by the same tag
_UNCLOSED_LEAF = re.compile(r"<([A-Za-z][\w.]*)>\s*([^<\s][^<]*?)\s*(?=<(?!/\1>)|\Z)")

# An opening tag with no text before the next tag (or the end of the body)
_EMPTY_LEAF = re.compile(r"<([A-Za-z][\w.]*)>(?=\s*(?:<(?!/\1>)|\Z))")

_CLOSING_TAG = re.compile(r"</([A-Za-z][\w.]*)>")
_TRANSACTION_TAG = re.compile(r"<STMTTRN>")

# 20251009120249.000[+3:MSK] -> timestamp digits, optional fraction, optional offset
_OFX_DATETIME = re.compile(r"^(\d{8})(\d{6})?(?:\.\d+)?(?:\[([+-]?\d+(?:\.\d+)?)(?::[^\]]*)?\])?$")

STATEMENT_WRAPPERS = ("STMTTRNRS", "CCSTMTTRNRS")
STATEMENT_RESPONSES = ("STMTRS", "CCSTMTRS")
ACCOUNT_ELEMENTS = ("BANKACCTFROM", "CCACCTFROM")


@dataclass(frozen=True)
class OfxRecord:
    """Raw text of one STMTTRN element."""

    trntype: str | None
    dtposted: str | None
    trnamt: str | None
    name: str | None
    memo: str | None
    currency: str | None


@dataclass
class OfxStatement:
    """One per-account statement fragment."""

    account_id: str
    account_type: str
    currency: str | None
    records: list[OfxRecord] = field(default_factory=list)


def looks_like_ofx(leading_text: str) -> bool:
    """Classify the first characters of a decoded export as OFX or not."""
    head = leading_text.lstrip("\ufeff").lstrip()
    return head.lower().startswith("<?xml") or "ofx" in head.lower()


def close_sgml_leaves(body: str) -> str:
    """
    Close SGML leaf elements so the body becomes well-formed XML.

    Aggregates are the elements that carry a closing tag somewhere in the
    body. Any other element with no value (``<MEMO>`` directly followed by the
    next tag) is an empty leaf and gets closed in place.
    """
    aggregates = set(_CLOSING_TAG.findall(body))
    closed = _UNCLOSED_LEAF.sub(r"<\1>\2</\1>", body)

    def close_empty(match: re.Match) -> str:
        name = match.group(1)
        return match.group(0) if name in aggregates else f"<{name}></{name}>"

    return _EMPTY_LEAF.sub(close_empty, closed)


def _child_text(parent: Tag | None, name: str) -> str | None:
    if parent is None:
        return None
    child = parent.find(name, recursive=False)
    if child is None:
        return None
    text = child.get_text().strip()
    return text or None


def parse_ofx_datetime(text: str, default_tz: timezone) -> datetime:
    """
    Parse an OFX date/time value.

    Accepts YYYYMMDD and YYYYMMDDHHMMSS with optional fractional seconds and
    an optional bracketed offset such as ``[+3:MSK]``; without an offset the
    bank's default timezone is used.

    Raises:
        ValueError: If the value is not an OFX date
    """
    match = _OFX_DATETIME.match(text.strip())
    if not match:
        raise ValueError(f"Invalid OFX date: {text!r}")

    day_part, time_part, offset_part = match.groups()
    value = datetime.strptime(day_part + (time_part or "000000"), "%Y%m%d%H%M%S")
    tz = timezone(timedelta(hours=float(offset_part))) if offset_part else default_tz
    return value.replace(tzinfo=tz)


def read_ofx_statements(text: str, cancel_token: CancellationToken | None = None) -> list[OfxStatement]:
    """
    Parse an OFX document into its statement fragments.

    Args:
        text: Decoded OFX document (header included)
        cancel_token: Optional token checked once per transaction element

    Returns:
        Statement fragments in document order

    Raises:
        FormatError: If the document has no OFX root element, or some of its
            transaction elements could not be read
    """
    start = text.find("<")
    if start == -1:
        raise FormatError("OFX document has no body")

    body = close_sgml_leaves(text[start:])
    soup = BeautifulSoup(body, "xml")
    if soup.find("OFX") is None:
        raise FormatError("OFX document has no <OFX> root element")

    statements: list[OfxStatement] = []
    for wrapper in soup.find_all(list(STATEMENT_WRAPPERS)):
        response = wrapper.find(list(STATEMENT_RESPONSES), recursive=False)
        if response is None:
            continue

        account = response.find(list(ACCOUNT_ELEMENTS), recursive=False)
        statement = OfxStatement(
            account_id=_child_text(account, "ACCTID") or "Unknown",
            account_type=_child_text(account, "ACCTTYPE") or "Unknown",
            currency=_child_text(response, "CURDEF"),
        )

        transaction_list = response.find("BANKTRANLIST", recursive=False)
        if transaction_list is None:
            continue

        for element in transaction_list.find_all("STMTTRN", recursive=False):
            check_cancelled(cancel_token)
            currency_element = element.find("CURRENCY", recursive=False)
            statement.records.append(
                OfxRecord(
                    trntype=_child_text(element, "TRNTYPE"),
                    dtposted=_child_text(element, "DTPOSTED"),
                    trnamt=_child_text(element, "TRNAMT"),
                    name=_child_text(element, "NAME"),
                    memo=_child_text(element, "MEMO"),
                    currency=_child_text(currency_element, "CURSYM"),
                )
            )

        logger.debug(
            "OFX statement %s (%s): %d records",
            statement.account_id,
            statement.account_type,
            len(statement.records),
        )
        statements.append(statement)

    expected = len(_TRANSACTION_TAG.findall(body))
    found = sum(len(statement.records) for statement in statements)
    if found != expected:
        raise FormatError(f"OFX document has {expected} transaction elements, but only {found} could be read")

    return statements
