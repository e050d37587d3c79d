#!/usr/bin/env python3
"""
Cooperative cancellation for long-running conversions.

Converters check the token once per row (or ledger element) and exporters once
per transaction, so a cancel request aborts the current file promptly instead
of silently truncating its output.
"""

import threading

from bankmerge.core.errors import OperationCancelled


class CancellationToken:
    """Thread-safe flag that can be set from a signal handler or another thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """
        Raise OperationCancelled if cancellation was requested.

        Raises:
            OperationCancelled: If cancel() has been called
        """
        if self._event.is_set():
            raise OperationCancelled("Operation was cancelled")


def check_cancelled(token: CancellationToken | None) -> None:
    """Raise OperationCancelled if an optional token has been cancelled."""
    if token is not None:
        token.raise_if_cancelled()
