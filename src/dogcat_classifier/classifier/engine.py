"""Boundary to the external inference engine.

Engines do not return results to the caller of ``submit``. Instead they
publish a ``CompletionSignal`` on a ``CompletionChannel`` shared by every
listener in the process, in the same way a notification centre broadcasts
events. The coordinator subscribes for the duration of one request and
filters signals by request ID.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from dogcat_classifier.classifier.models import (
    NormalizedTensor,
    RawClassification,
)


@dataclass(frozen=True)
class CompletionSignal:
    """Notification that an inference has finished.

    Attributes:
        request_id: Correlation ID given to ``InferenceEngine.submit``.
        classifications: Predictions sorted by descending score. May be
            empty or None when the engine produced nothing.
        error: Set when the engine failed after accepting the request.

    """

    request_id: str
    classifications: list[RawClassification] | None = None
    error: BaseException | None = None


CompletionHandler = Callable[[CompletionSignal], None]


class Subscription:
    """Handle returned by ``CompletionChannel.subscribe``."""

    def __init__(
        self, channel: "CompletionChannel", handler: CompletionHandler
    ) -> None:
        """Initialize the handle.

        Args:
            channel: The channel the handler is registered on.
            handler: The registered handler.

        """
        self.channel = channel
        self.handler = handler

    @property
    def active(self) -> bool:
        """Whether the handler still receives signals."""
        return self.channel.is_subscribed(self)

    def cancel(self) -> None:
        """Stop receiving signals. Safe to call more than once."""
        self.channel.unsubscribe(self)


class CompletionChannel:
    """Thread-safe broadcast channel for completion signals.

    Engines may publish from worker threads, so handlers are invoked on the
    publishing thread.
    """

    def __init__(self) -> None:
        """Initialize an empty channel."""
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._subscriptions: list[Subscription] = []

    def subscribe(self, handler: CompletionHandler) -> Subscription:
        """Register a handler for every subsequent signal."""
        subscription = Subscription(self, handler)
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a handler. Unknown subscriptions are ignored."""
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)

    def is_subscribed(self, subscription: Subscription) -> bool:
        """Whether the subscription is registered on this channel."""
        with self._lock:
            return subscription in self._subscriptions

    @property
    def subscriber_count(self) -> int:
        """Number of registered handlers."""
        with self._lock:
            return len(self._subscriptions)

    def publish(self, signal: CompletionSignal) -> int:
        """Deliver a signal to every registered handler.

        Returns:
            The number of handlers the signal was delivered to.

        """
        with self._lock:
            subscriptions = list(self._subscriptions)

        if not subscriptions:
            self.logger.debug(
                "No listeners for completion of request %s", signal.request_id
            )

        for subscription in subscriptions:
            subscription.handler(signal)
        return len(subscriptions)


default_channel = CompletionChannel()


class InferenceEngine(ABC):
    """An opaque image classifier with a fixed class vocabulary.

    Subclasses wrap a concrete model runtime. ``submit`` hands the tensor to
    the runtime and returns immediately; the result is published later,
    exactly once per accepted request, through ``complete``.
    """

    def __init__(self, completions: CompletionChannel | None = None) -> None:
        """Initialize the engine.

        Args:
            completions: Channel to publish completion signals on. Defaults
                to the process-wide ``default_channel``.

        """
        self.completions = completions or default_channel

    def load(self) -> None:  # noqa: B027 - optional hook
        """Load the model. Raise if the engine cannot be used."""

    @abstractmethod
    def submit(self, tensor: NormalizedTensor, request_id: str) -> None:
        """Start inference on a tensor.

        Args:
            tensor: The preprocessed input image.
            request_id: Correlation ID to echo back in the completion signal.

        Raises:
            Exception: Any error raised here is treated as a synchronous
                rejection of the request.

        """
        message = "Subclasses must implement this method"
        raise NotImplementedError(message)

    def complete(
        self,
        request_id: str,
        classifications: list[RawClassification] | None = None,
        error: BaseException | None = None,
    ) -> int:
        """Publish the outcome of a request on the completion channel."""
        return self.completions.publish(
            CompletionSignal(
                request_id=request_id,
                classifications=classifications,
                error=error,
            )
        )

    def close(self) -> None:  # noqa: B027 - optional hook
        """Release any resources held by the engine."""
