"""
Processing Package

Orchestrates conversion of several bank statement files into one enriched
transaction list.
"""

from bankmerge.processing.service import TransactionProcessingService

__all__ = ["TransactionProcessingService"]
