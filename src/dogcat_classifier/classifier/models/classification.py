"""Classification payloads produced by engines and returned to callers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RawClassification:
    """A single prediction from the engine's fixed vocabulary.

    Attributes:
        identifier: Free-form class name, e.g. "tabby, tabby cat".
        score: Confidence in [0, 1]. The coordinator rejects scores
            outside this range as an inference failure.

    """

    identifier: str
    score: float


@dataclass(frozen=True)
class ClassificationResult:
    """The simplified result handed back to callers.

    Attributes:
        label: "Dog", "Cat" or "Unknown(<identifier>)".
        confidence: Score of the engine's top prediction, in [0, 1].
        identifier: The engine class name the label was derived from.

    """

    label: str
    confidence: float
    identifier: str = ""
