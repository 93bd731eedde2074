"""Image transformers for the classification pipeline."""

from dogcat_classifier.classifier.transformers.image_normalizer import (
    normalize,
    normalize_async,
)

__all__ = [
    "normalize",
    "normalize_async",
]
