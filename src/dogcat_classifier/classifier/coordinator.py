"""The Classification Coordinator Class."""

import asyncio
import logging
import types

from dogcat_classifier.classifier.classifier_options import ClassifierOptions
from dogcat_classifier.classifier.engine import (
    CompletionHandler,
    CompletionSignal,
    InferenceEngine,
)
from dogcat_classifier.classifier.exceptions import (
    ClassificationTimeoutError,
    EngineUnavailableError,
    ImageProcessingError,
    InferenceFailedError,
    InvalidInputError,
    ResourceExhaustedError,
    SubmissionFailedError,
)
from dogcat_classifier.classifier.label_mapper import map_label
from dogcat_classifier.classifier.models import ClassificationResult, RawImage
from dogcat_classifier.classifier.resources import (
    ResourceMonitor,
    StaticResourceMonitor,
    ThermalState,
)
from dogcat_classifier.classifier.transformers import normalize_async


class PendingRequest:
    """A submitted request waiting for its completion signal.

    The future is a settle-once cell: whichever of the completion listener
    or the deadline gets to it first decides the outcome, and every later
    attempt is a no-op.
    """

    def __init__(
        self, request_id: str, loop: asyncio.AbstractEventLoop
    ) -> None:
        """Initialize the pending request.

        Args:
            request_id: Correlation ID the engine will echo back.
            loop: The event loop the caller is suspended on.

        """
        self.request_id = request_id
        self.loop = loop
        self.future: asyncio.Future[CompletionSignal] = loop.create_future()

    @property
    def settled(self) -> bool:
        """Whether the outcome has been fixed."""
        return self.future.done()

    def settle(self, signal: CompletionSignal) -> bool:
        """Resolve with a completion signal. Must run on ``loop``.

        Returns:
            True if this call settled the request, False if it was already
            settled.

        """
        if self.future.done():
            return False
        self.future.set_result(signal)
        return True

    def abandon(self) -> None:
        """Settle without a result so later signals are discarded."""
        if not self.future.done():
            self.future.cancel()


class ClassificationCoordinator:
    """The Classification Coordinator Class.

    This class turns the engine's broadcast completion signal into a single
    awaited ``ClassificationResult`` per call, bounded by a deadline.
    Requests are processed one at a time, in the order they were made.
    """

    def __init__(
        self,
        engine: InferenceEngine,
        options: ClassifierOptions | None = None,
        resource_monitor: ResourceMonitor | None = None,
    ) -> None:
        """Initialize the coordinator and load the engine.

        Args:
            engine: The inference engine to submit images to. The
                coordinator owns it for its whole lifetime.
            options: Configuration options for the coordinator.
            resource_monitor: Source of device pressure readings consulted
                before each submission. Defaults to always nominal.

        Raises:
            EngineUnavailableError: If the engine fails to load.

        """
        self.logger = logging.getLogger(__name__)
        self.options = options or ClassifierOptions()
        self.engine = engine
        self.resource_monitor = resource_monitor or StaticResourceMonitor()
        self.correlation_provider = self.options.correlation_provider()
        self._lock = asyncio.Lock()
        self._pending: PendingRequest | None = None

        try:
            self.engine.load()
        except Exception as e:
            err = f"Failed to load the classification model: {e}"
            raise EngineUnavailableError(err) from e

    @property
    def pending_request(self) -> PendingRequest | None:
        """The request currently in flight, if any."""
        return self._pending

    async def classify(self, image: RawImage) -> ClassificationResult:
        """Classify an image as a dog or a cat.

        Args:
            image: The image to classify. It is not retained after the call.

        Returns:
            The mapped label and the engine's confidence in its top class.

        Raises:
            ResourceExhaustedError: The device reports critical pressure.
            InvalidInputError: The image is empty or cannot be normalized.
            SubmissionFailedError: The engine rejected the request.
            ClassificationTimeoutError: No completion signal arrived in time.
            InferenceFailedError: The engine produced no usable result.

        """
        async with self._lock:
            return await self._classify(image)

    async def _classify(self, image: RawImage) -> ClassificationResult:
        state = self.resource_monitor.thermal_state()
        if state >= ThermalState.CRITICAL:
            self.logger.warning(
                "Refusing classification under %s resource pressure",
                state.name,
            )
            raise ResourceExhaustedError(ResourceExhaustedError.default_message)

        if image.is_empty:
            raise InvalidInputError(InvalidInputError.default_message)

        try:
            tensor = await normalize_async(image)
        except ImageProcessingError as e:
            raise InvalidInputError(str(e)) from e

        loop = asyncio.get_running_loop()
        pending = PendingRequest(
            self.correlation_provider.get_correlation_id(), loop
        )
        subscription = self.engine.completions.subscribe(
            self._create_listener(pending)
        )
        self._pending = pending
        start_time = loop.time()

        try:
            try:
                self.engine.submit(tensor, pending.request_id)
            except Exception as e:
                err = f"The classification engine rejected the request: {e}"
                raise SubmissionFailedError(err) from e

            self.logger.debug("Submitted request %s", pending.request_id)

            try:
                signal = await asyncio.wait_for(
                    pending.future, self.options.timeout
                )
            except asyncio.TimeoutError as e:
                self.logger.warning(
                    "Request %s timed out after %.1fs",
                    pending.request_id,
                    self.options.timeout,
                )
                err = (
                    "Classification timed out after "
                    f"{self.options.timeout:.1f}s"
                )
                raise ClassificationTimeoutError(err) from e
        finally:
            pending.abandon()
            subscription.cancel()
            self._pending = None
            self.logger.debug(
                "Released listener for request %s after %.2fs",
                pending.request_id,
                loop.time() - start_time,
            )

        return self._to_result(signal)

    def _create_listener(self, pending: PendingRequest) -> CompletionHandler:
        """Create a channel handler scoped to one pending request."""

        def on_completion(signal: CompletionSignal) -> None:
            # May run on an engine worker thread
            if signal.request_id != pending.request_id:
                self.logger.debug(
                    "Ignoring completion for request %s while waiting for %s",
                    signal.request_id,
                    pending.request_id,
                )
                return
            try:
                pending.loop.call_soon_threadsafe(
                    self._deliver, pending, signal
                )
            except RuntimeError:
                # Event loop already closed; the caller is long gone
                self.logger.debug(
                    "Discarding completion for request %s, loop closed",
                    signal.request_id,
                )

        return on_completion

    def _deliver(
        self, pending: PendingRequest, signal: CompletionSignal
    ) -> None:
        if not pending.settle(signal):
            self.logger.debug(
                "Discarding late completion for request %s",
                signal.request_id,
            )

    def _to_result(self, signal: CompletionSignal) -> ClassificationResult:
        """Map the engine's top classification onto the result."""
        if signal.error is not None:
            err = f"Failed to classify the image: {signal.error}"
            raise InferenceFailedError(err) from signal.error

        if not signal.classifications:
            err = "The classification engine returned no classifications"
            raise InferenceFailedError(err)

        # Engines report classifications sorted by descending score
        top = signal.classifications[0]
        # Also rejects NaN
        if not 0.0 <= top.score <= 1.0:
            err = f"Score {top.score} for {top.identifier!r} is outside [0, 1]"
            raise InferenceFailedError(err)

        label = map_label(top.identifier)

        self.logger.info(
            "Request %s: raw classification %r (%.3f) mapped to %s",
            signal.request_id,
            top.identifier,
            top.score,
            label,
        )
        return ClassificationResult(
            label=label,
            confidence=float(top.score),
            identifier=top.identifier,
        )

    async def close(self) -> None:
        """Release the engine."""
        self.engine.close()

    async def __aenter__(self) -> "ClassificationCoordinator":
        """Context manager entry point."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        """Context manager exit point."""
        await self.close()
