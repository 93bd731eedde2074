"""Correlation ID generation for classification requests.

Engines broadcast completions on a shared channel, so every submission is
tagged with a request identifier that the coordinator uses to match the
completion back to the pending request.
"""

import itertools
import threading
import uuid
from abc import ABC, abstractmethod


class CorrelationProvider(ABC):
    """Base class for request correlation ID generators."""

    @abstractmethod
    def get_correlation_id(self) -> str:
        """Return a new correlation ID, unique for this provider."""
        message = "Subclasses must implement this method"
        raise NotImplementedError(message)


class UuidCorrelationProvider(CorrelationProvider):
    """Generates random UUID4 hex correlation IDs."""

    def get_correlation_id(self) -> str:
        """Return a random hex UUID."""
        return uuid.uuid4().hex


class SequentialCorrelationProvider(CorrelationProvider):
    """Generates predictable IDs of the form ``<prefix>-<n>``.

    Useful where log output needs to be reproducible between runs.
    """

    def __init__(self, prefix: str = "request") -> None:
        """Initialize the counter.

        Args:
            prefix: Text prepended to every generated ID.

        """
        self.prefix = prefix
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def get_correlation_id(self) -> str:
        """Return the next ID in the sequence."""
        with self._lock:
            return f"{self.prefix}-{next(self._counter)}"
