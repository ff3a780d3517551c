"""Cooperative cancellation shared between the host and the providers."""

import threading

from .errors import OperationCancelledError


class CancellationToken:
    """Thread-safe cancellation flag.

    The host calls ``cancel()``; operations poll the token at their suspension
    points and abandon their work without producing a partial result.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def throw_if_cancellation_requested(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancellation_requested})"
