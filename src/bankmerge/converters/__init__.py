"""
Bank Converters Package

One converter per supported bank export, resolved by bank key.

This package provides:
- Delimited-text converters (Revolut, Wise, T-Bank CSV/OFX)
- Spreadsheet converters (IDBank, BBVA, Santander)
- ``get_converter`` to look a converter up by its command-line key
"""

from bankmerge.converters.base import DelimitedConverter, SpreadsheetConverter, TransactionsConverter
from bankmerge.converters.bbva import BbvaConverter
from bankmerge.converters.idbank import IdBankConverter
from bankmerge.converters.revolut import RevolutConverter
from bankmerge.converters.santander import SantanderConverter
from bankmerge.converters.tbank import TBankConverter
from bankmerge.converters.wise import WiseConverter
from bankmerge.core.errors import NotFoundError

CONVERTERS: dict[str, type[TransactionsConverter]] = {
    converter.key: converter
    for converter in (
        RevolutConverter,
        WiseConverter,
        TBankConverter,
        IdBankConverter,
        BbvaConverter,
        SantanderConverter,
    )
}


def supported_banks() -> list[str]:
    """Bank keys accepted by ``get_converter``, in registration order."""
    return list(CONVERTERS)


def get_converter(key: str) -> TransactionsConverter:
    """
    Create the converter registered for a bank key.

    Args:
        key: Bank key, matched case-insensitively

    Returns:
        A new converter instance

    Raises:
        NotFoundError: If no converter is registered for the key
    """
    converter_class = CONVERTERS.get(key.strip().lower())
    if converter_class is None:
        raise NotFoundError(f"Unsupported bank '{key}'. Supported banks: {', '.join(CONVERTERS)}")
    return converter_class()


__all__ = [
    "CONVERTERS",
    "BbvaConverter",
    "DelimitedConverter",
    "IdBankConverter",
    "RevolutConverter",
    "SantanderConverter",
    "SpreadsheetConverter",
    "TBankConverter",
    "TransactionsConverter",
    "WiseConverter",
    "get_converter",
    "supported_banks",
]
