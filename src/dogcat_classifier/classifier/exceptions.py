"""Base classes for all classifier exceptions."""


class ClassifierError(Exception):
    """Base class for all classifier exceptions."""

    default_message = "Classification error"

    def __init__(self, message: str | None = None) -> None:
        """Initialize with a human readable message.

        Args:
            message: Message to show to the user. Falls back to the class's
                default_message when omitted.

        """
        super().__init__(message or self.default_message)


class EngineUnavailableError(ClassifierError):
    """Raised when the classification engine fails to load."""

    default_message = "Failed to load the classification model"


class ImageProcessingError(ClassifierError):
    """Raised when an image cannot be normalized for the engine."""

    default_message = "Failed to process the input image"


class InvalidInputError(ClassifierError):
    """Raised when the input image is empty or unusable."""

    default_message = "Invalid input image"


class SubmissionFailedError(ClassifierError):
    """Raised when the engine rejects a request synchronously."""

    default_message = "The classification engine rejected the request"


class ClassificationTimeoutError(ClassifierError):
    """Raised when no completion signal arrives before the deadline."""

    default_message = "Classification timed out"


class InferenceFailedError(ClassifierError):
    """Raised when the engine completes without a usable classification."""

    default_message = "Failed to classify the image"


class ResourceExhaustedError(ClassifierError):
    """Raised when the device is under critical resource pressure."""

    default_message = "Insufficient resources to process image"
