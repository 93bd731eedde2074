"""Options object for the classification coordinator."""

from dataclasses import dataclass

from dogcat_classifier.classifier.consts import DEFAULT_TIMEOUT
from dogcat_classifier.classifier.correlation import (
    CorrelationProvider,
    UuidCorrelationProvider,
)


@dataclass
class ClassifierOptions:
    """Options for configuring the classification coordinator.

    Attributes:
        timeout: Seconds to wait for the engine's completion signal before
            giving up on a request.
            Defaults to 5 seconds.
        correlation_provider: Class that generates correlation IDs used to
            match completion signals to requests.
            Defaults to UuidCorrelationProvider.

    """

    timeout: float = DEFAULT_TIMEOUT
    correlation_provider: type[CorrelationProvider] = UuidCorrelationProvider
