#!/usr/bin/env python3
"""
Enrichment DataStore

JSON-backed store for the payees and categories used by the enrichment
matcher, together with the administration operations exposed on the command
line. Records are immutable; every update rewrites the affected file.
"""

import logging
from pathlib import Path

from bankmerge.core.datastore_mixin import DataStoreMixin
from bankmerge.core.errors import DuplicateRecordError, NotFoundError
from bankmerge.core.json_utils import read_json, write_json
from bankmerge.core.models import Category, Payee

logger = logging.getLogger(__name__)


def _find_index(records: list, name: str) -> int | None:
    key = name.casefold()
    for index, record in enumerate(records):
        if record.name.casefold() == key:
            return index
    return None


class EnrichmentStore(DataStoreMixin):
    """
    DataStore for payees and categories.

    Manages ``payees.json`` and ``categories.json`` in the store directory.
    Missing files read as empty collections.
    """

    def __init__(
        self,
        store_dir: Path,
        payees_file_name: str = "payees.json",
        categories_file_name: str = "categories.json",
    ):
        """
        Initialize enrichment store.

        Args:
            store_dir: Directory holding the store files
            payees_file_name: File name of the payee list
            categories_file_name: File name of the category list
        """
        self.store_dir = store_dir
        self.payees_file = store_dir / payees_file_name
        self.categories_file = store_dir / categories_file_name

    @classmethod
    def from_config(cls, config) -> "EnrichmentStore":
        """Create the store described by a Config's ``store`` section."""
        return cls(
            config.store.store_dir,
            payees_file_name=config.store.payees_file_name,
            categories_file_name=config.store.categories_file_name,
        )

    def backing_files(self) -> list[Path]:
        return [self.payees_file, self.categories_file]

    # Loading and saving

    def load_payees(self) -> list[Payee]:
        """Load all payees in stored order."""
        if not self.payees_file.exists():
            return []
        return [Payee.from_dict(item) for item in read_json(self.payees_file)]

    def load_categories(self) -> list[Category]:
        """Load all categories in stored order."""
        if not self.categories_file.exists():
            return []
        return [Category.from_dict(item) for item in read_json(self.categories_file)]

    def load(self) -> tuple[list[Payee], list[Category]]:
        """
        Load a consistent snapshot of the whole store.

        Returns:
            Tuple of (payees, categories)
        """
        return self.load_payees(), self.load_categories()

    def save_payees(self, payees: list[Payee]) -> None:
        write_json(self.payees_file, [payee.to_dict() for payee in payees])

    def save_categories(self, categories: list[Category]) -> None:
        write_json(self.categories_file, [category.to_dict() for category in categories])

    # Metadata

    def item_count(self) -> int | None:
        """Get count of payees plus categories."""
        if not self.exists():
            return None
        return len(self.load_payees()) + len(self.load_categories())

    def summary_text(self) -> str:
        """Get human-readable summary."""
        if not self.exists():
            return "No enrichment data found"
        return f"Enrichment data: {len(self.load_payees())} payees, {len(self.load_categories())} categories"

    # Payee administration

    def get_payee(self, name: str) -> Payee:
        """
        Look up a payee by name (case-insensitive).

        Raises:
            NotFoundError: If no payee has this name
        """
        payees = self.load_payees()
        index = _find_index(payees, name)
        if index is None:
            raise NotFoundError(f"Payee '{name}' not found")
        return payees[index]

    def add_payee(self, payee: Payee) -> Payee:
        """
        Add a new payee.

        Raises:
            DuplicateRecordError: If a payee with the same name exists
        """
        payees = self.load_payees()
        if _find_index(payees, payee.name) is not None:
            raise DuplicateRecordError(f"Payee '{payee.name}' already exists")

        payees.append(payee)
        self.save_payees(payees)
        logger.info("Added payee '%s'", payee.name)
        return payee

    def remove_payee(self, name: str) -> Payee:
        """
        Remove a payee by name.

        Returns:
            The removed payee

        Raises:
            NotFoundError: If no payee has this name
        """
        payees = self.load_payees()
        index = _find_index(payees, name)
        if index is None:
            raise NotFoundError(f"Payee '{name}' not found")

        removed = payees.pop(index)
        self.save_payees(payees)
        logger.info("Removed payee '%s'", removed.name)
        return removed

    def add_payee_synonym(self, name: str, synonym: str) -> bool:
        """
        Append a synonym to a payee.

        Returns:
            True if the synonym was added, False if it was already present

        Raises:
            NotFoundError: If no payee has this name
        """
        payees = self.load_payees()
        index = _find_index(payees, name)
        if index is None:
            raise NotFoundError(f"Payee '{name}' not found")

        updated = payees[index].with_synonym(synonym)
        if updated is payees[index]:
            return False

        payees[index] = updated
        self.save_payees(payees)
        logger.info("Added synonym '%s' to payee '%s'", synonym, updated.name)
        return True

    # Category administration

    def add_category(self, category: Category) -> Category:
        """
        Add a new category.

        Raises:
            DuplicateRecordError: If a category with the same name exists
        """
        categories = self.load_categories()
        if _find_index(categories, category.name) is not None:
            raise DuplicateRecordError(f"Category '{category.name}' already exists")

        categories.append(category)
        self.save_categories(categories)
        logger.info("Added category '%s'", category.name)
        return category

    def remove_category(self, name: str) -> Category:
        """
        Remove a category by name.

        Raises:
            NotFoundError: If no category has this name
        """
        categories = self.load_categories()
        index = _find_index(categories, name)
        if index is None:
            raise NotFoundError(f"Category '{name}' not found")

        removed = categories.pop(index)
        self.save_categories(categories)
        logger.info("Removed category '%s'", removed.name)
        return removed

    def add_category_synonym(self, name: str, synonym: str) -> bool:
        """
        Append a synonym to a category.

        Returns:
            True if the synonym was added, False if it was already present

        Raises:
            NotFoundError: If no category has this name
        """
        categories = self.load_categories()
        index = _find_index(categories, name)
        if index is None:
            raise NotFoundError(f"Category '{name}' not found")

        updated = categories[index].with_synonym(synonym)
        if updated is categories[index]:
            return False

        categories[index] = updated
        self.save_categories(categories)
        logger.info("Added synonym '%s' to category '%s'", synonym, updated.name)
        return True
