"""
Exporters Package

Output formats for converted transactions, resolved by format key.
"""

from bankmerge.core.errors import NotFoundError
from bankmerge.exporters.base import TransactionExporter
from bankmerge.exporters.csv_exporter import CSV_HEADER, CsvExporter
from bankmerge.exporters.ofx_exporter import OfxExporter

EXPORTERS: dict[str, type[TransactionExporter]] = {
    exporter.key: exporter for exporter in (CsvExporter, OfxExporter)
}


def supported_formats() -> list[str]:
    """Format keys accepted by ``get_exporter``."""
    return list(EXPORTERS)


def get_exporter(key: str) -> TransactionExporter:
    """
    Create the exporter registered for a format key.

    Raises:
        NotFoundError: If the format is not supported
    """
    exporter_class = EXPORTERS.get(key.strip().lower())
    if exporter_class is None:
        raise NotFoundError(f"Unsupported format '{key}'. Supported formats: {', '.join(EXPORTERS)}")
    return exporter_class()


__all__ = [
    "CSV_HEADER",
    "EXPORTERS",
    "CsvExporter",
    "OfxExporter",
    "TransactionExporter",
    "get_exporter",
    "supported_formats",
]
