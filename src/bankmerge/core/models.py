#!/usr/bin/env python3
"""
Core Data Models for Statement Conversion

Canonical, bank-agnostic data structures shared by converters, the enrichment
matcher and exporters. All models are immutable; updates produce new values.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any


class TransactionType(Enum):
    """Direction of a transaction, derived from the sign of its amount."""

    EXPENSE = "Expense"
    TOP_UP = "TopUp"


@dataclass(frozen=True)
class Transaction:
    """
    Canonical transaction produced by every converter and consumed by every exporter.

    The sign of ``amount`` is the only source of truth for the transaction type:
    negative amounts are expenses, zero and positive amounts are top-ups.

    Note: ``date`` must be timezone-aware; converters attach the bank's UTC offset.
    """

    bank: str
    account: str
    payee: str
    amount: Decimal
    date: datetime
    currency: str

    # Optional fields
    category: str | None = None
    description: str | None = None
    is_transfer: bool = False

    @property
    def transaction_type(self) -> TransactionType:
        """Determine transaction type based on amount."""
        return TransactionType.EXPENSE if self.amount < 0 else TransactionType.TOP_UP

    @property
    def is_expense(self) -> bool:
        return self.transaction_type is TransactionType.EXPENSE


def _contains_casefold(values: tuple[str, ...], candidate: str) -> bool:
    key = candidate.casefold()
    return any(value.casefold() == key for value in values)


@dataclass(frozen=True)
class Payee:
    """
    Canonical payee with per-direction enrichment data.

    A payee carries separate category/description pairs for expenses and
    top-ups, plus synonyms that are matched case-insensitively.
    """

    name: str
    expense_category: str | None = None
    expense_description: str | None = None
    top_up_category: str | None = None
    top_up_description: str | None = None
    synonyms: tuple[str, ...] = ()

    def has_synonym(self, synonym: str) -> bool:
        """Check whether the synonym is already present (case-insensitive)."""
        return _contains_casefold(self.synonyms, synonym)

    def with_synonym(self, synonym: str) -> "Payee":
        """
        Return a new Payee with the synonym appended.

        Returns self unchanged if the synonym is already present.
        """
        if self.has_synonym(synonym):
            return self
        return replace(self, synonyms=(*self.synonyms, synonym))

    def category_for(self, transaction_type: TransactionType) -> str | None:
        if transaction_type is TransactionType.EXPENSE:
            return self.expense_category
        return self.top_up_category

    def description_for(self, transaction_type: TransactionType) -> str | None:
        if transaction_type is TransactionType.EXPENSE:
            return self.expense_description
        return self.top_up_description

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "expense_category": self.expense_category,
            "expense_description": self.expense_description,
            "top_up_category": self.top_up_category,
            "top_up_description": self.top_up_description,
            "synonyms": list(self.synonyms),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Payee":
        """Create Payee from dictionary."""
        return cls(
            name=data["name"],
            expense_category=data.get("expense_category"),
            expense_description=data.get("expense_description"),
            top_up_category=data.get("top_up_category"),
            top_up_description=data.get("top_up_description"),
            synonyms=tuple(data.get("synonyms") or ()),
        )


@dataclass(frozen=True)
class Category:
    """Canonical category name with case-insensitive synonyms."""

    name: str
    synonyms: tuple[str, ...] = ()

    def has_synonym(self, synonym: str) -> bool:
        return _contains_casefold(self.synonyms, synonym)

    def with_synonym(self, synonym: str) -> "Category":
        """Return a new Category with the synonym appended (no-op if present)."""
        if self.has_synonym(synonym):
            return self
        return replace(self, synonyms=(*self.synonyms, synonym))

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "synonyms": list(self.synonyms)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        return cls(name=data["name"], synonyms=tuple(data.get("synonyms") or ()))


@dataclass(frozen=True)
class BankStatementFile:
    """One input unit of a conversion run: a file, its bank key and an account label."""

    path: Path
    bank: str
    account: str

    @classmethod
    def parse(cls, value: str) -> "BankStatementFile":
        """
        Parse a ``<path>:<bank>:<account>`` argument.

        Args:
            value: Argument text from the command line

        Returns:
            BankStatementFile

        Raises:
            ValueError: If the argument does not have exactly three parts
        """
        parts = value.split(":")
        if len(parts) != 3:
            raise ValueError("Each --file argument must be in the format <path>:<bank>:<account>")
        path, bank, account = (part.strip() for part in parts)
        if not bank:
            raise ValueError("The bank parameter is required.")
        return cls(path=Path(path), bank=bank, account=account)


@dataclass
class ConversionSummary:
    """Per-run statistics reported by the CLI after a conversion."""

    files_processed: int = 0
    transactions: int = 0
    transfers: int = 0
    currencies: list[str] = field(default_factory=list)

    @classmethod
    def from_transactions(cls, files_processed: int, transactions: list[Transaction]) -> "ConversionSummary":
        currencies: list[str] = []
        for transaction in transactions:
            if transaction.currency not in currencies:
                currencies.append(transaction.currency)
        return cls(
            files_processed=files_processed,
            transactions=len(transactions),
            transfers=sum(1 for t in transactions if t.is_transfer),
            currencies=currencies,
        )
