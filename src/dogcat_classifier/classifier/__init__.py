"""Dog/Cat Classifier.

This module provides a coordinator that classifies images as dogs or cats
using a general purpose inference engine.
"""

from dogcat_classifier.classifier.classifier_options import ClassifierOptions
from dogcat_classifier.classifier.coordinator import ClassificationCoordinator
from dogcat_classifier.classifier.engine import (
    CompletionChannel,
    CompletionSignal,
    InferenceEngine,
)
from dogcat_classifier.classifier.exceptions import (
    ClassificationTimeoutError,
    ClassifierError,
    EngineUnavailableError,
    ImageProcessingError,
    InferenceFailedError,
    InvalidInputError,
    ResourceExhaustedError,
    SubmissionFailedError,
)
from dogcat_classifier.classifier.label_mapper import map_label
from dogcat_classifier.classifier.models import (
    ClassificationResult,
    NormalizedTensor,
    RawClassification,
    RawImage,
)
from dogcat_classifier.classifier.resources import (
    ResourceMonitor,
    ThermalState,
)
from dogcat_classifier.classifier.transformers import normalize

__all__ = [
    "ClassificationCoordinator",
    "ClassificationResult",
    "ClassificationTimeoutError",
    "ClassifierError",
    "ClassifierOptions",
    "CompletionChannel",
    "CompletionSignal",
    "EngineUnavailableError",
    "ImageProcessingError",
    "InferenceEngine",
    "InferenceFailedError",
    "InvalidInputError",
    "NormalizedTensor",
    "RawClassification",
    "RawImage",
    "ResourceExhaustedError",
    "ResourceMonitor",
    "SubmissionFailedError",
    "ThermalState",
    "map_label",
    "normalize",
]
