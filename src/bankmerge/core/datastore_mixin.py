#!/usr/bin/env python3
"""
DataStore Mixin - Common functionality for file-backed stores.

Provides shared metadata helpers (age, size, latest modification) over a
fixed set of backing files.
"""

from abc import abstractmethod
from datetime import datetime
from pathlib import Path


class DataStoreMixin:
    """
    Mixin providing common DataStore functionality.

    Subclasses must implement:
    - backing_files() -> list[Path]
    - item_count() -> int | None
    - summary_text() -> str
    """

    @abstractmethod
    def backing_files(self) -> list[Path]:
        """Files that make up this store (existing or not)."""
        ...

    @abstractmethod
    def item_count(self) -> int | None:
        """Get count of records in stored data."""
        ...

    @abstractmethod
    def summary_text(self) -> str:
        """Get human-readable summary of current data state."""
        ...

    def _existing_files(self) -> list[Path]:
        return [f for f in self.backing_files() if f.exists()]

    def exists(self) -> bool:
        """Check if any backing file exists."""
        return bool(self._existing_files())

    def last_modified(self) -> datetime | None:
        """
        Get timestamp of most recent data modification.

        Returns:
            datetime of last modification, or None if no data exists
        """
        files = self._existing_files()
        if not files:
            return None
        return datetime.fromtimestamp(max(f.stat().st_mtime for f in files))

    def size_bytes(self) -> int | None:
        """Get total storage size in bytes, or None if no data exists."""
        files = self._existing_files()
        if not files:
            return None
        return sum(f.stat().st_size for f in files)

    def age_days(self) -> int | None:
        """
        Get age of data in days since last modification.

        Returns:
            Number of days since last modification, or None if data doesn't exist
        """
        last_mod = self.last_modified()
        if last_mod is None:
            return None
        return (datetime.now() - last_mod).days
