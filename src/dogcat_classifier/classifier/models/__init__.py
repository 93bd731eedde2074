"""Package containing data models for the dog/cat classifier.

This package contains the image containers and classification payloads that
flow between callers, the preprocessor and the inference engine.
"""

from .classification import ClassificationResult, RawClassification
from .image import NormalizedTensor, RawImage

__all__ = [
    "ClassificationResult",
    "NormalizedTensor",
    "RawClassification",
    "RawImage",
]
