#!/usr/bin/env python3
"""Example script demonstrating the classify method.

A real deployment wraps an on-device model runtime in an InferenceEngine.
This example uses a stand-in engine that reports a fixed ImageNet class
name from a worker thread, so the coordinator can be exercised end to end
without model weights.
"""

import asyncio
import logging
import os
import sys
import threading
from io import BytesIO
from pathlib import Path

from dotenv import load_dotenv
from PIL import Image, ImageDraw

from dogcat_classifier.classifier.classifier_options import ClassifierOptions
from dogcat_classifier.classifier.coordinator import ClassificationCoordinator
from dogcat_classifier.classifier.engine import InferenceEngine
from dogcat_classifier.classifier.exceptions import ClassifierError
from dogcat_classifier.classifier.models import (
    NormalizedTensor,
    RawClassification,
    RawImage,
)
from dogcat_classifier.classifier.resources import LoadAverageResourceMonitor


def create_test_image(width: int = 320, height: int = 240) -> bytes:
    """Create a PNG with a coloured rectangle on a plain background."""
    image = Image.new("RGB", (width, height), (40, 90, 160))
    draw = ImageDraw.Draw(image)
    draw.rectangle(
        [width // 4, height // 4, (width * 3) // 4, (height * 3) // 4],
        fill=(215, 165, 95),
    )
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class FixedLabelEngine(InferenceEngine):
    """Engine that answers every request with the same class name."""

    def __init__(self, identifier: str, score: float, latency: float) -> None:
        super().__init__()
        self.identifier = identifier
        self.score = score
        self.latency = latency

    def submit(self, tensor: NormalizedTensor, request_id: str) -> None:
        logging.getLogger(__name__).debug(
            "Running inference on %s tensor", tensor.shape
        )
        threading.Timer(
            self.latency,
            self.complete,
            args=(
                request_id,
                [RawClassification(self.identifier, self.score)],
            ),
        ).start()


async def classify_image_example(
    logger: logging.Logger,
    options: ClassifierOptions,
    engine: InferenceEngine,
    image_path: str | None = None,
) -> bool:
    """Demonstrate single image classification.

    Args:
        logger: Logger instance for output
        options: Configuration options for the coordinator
        engine: Engine performing the inference
        image_path: Path to image file to classify (optional)

    Returns:
        True if classification was successful, False otherwise

    """
    async with ClassificationCoordinator(
        engine, options, LoadAverageResourceMonitor()
    ) as coordinator:
        if image_path and Path(image_path).exists():
            logger.info("Loading image from: %s", image_path)
            image_bytes = Path(image_path).read_bytes()
        else:
            # Create a simple test image if no path provided
            logger.info("Creating synthetic test image")
            image_bytes = create_test_image()

        try:
            image = RawImage.from_encoded(image_bytes)
            logger.info("Image loaded: %dx%d", image.width, image.height)

            result = await coordinator.classify(image)
        except ClassifierError as e:
            logger.error("Classification error: %s", e)  # noqa: TRY400
            return False

        logger.info(
            "Result: %s (confidence %.1f%%)",
            result.label,
            result.confidence * 100,
        )
        return True


async def main() -> int:
    """Run the classify example."""
    logger = logging.getLogger(__name__)
    load_dotenv()

    options = ClassifierOptions(
        timeout=float(os.getenv("DOGCAT_TIMEOUT", "5.0")),
    )
    engine = FixedLabelEngine(
        identifier=os.getenv("DOGCAT_DEMO_LABEL", "tabby, tabby cat"),
        score=float(os.getenv("DOGCAT_DEMO_SCORE", "0.91")),
        latency=float(os.getenv("DOGCAT_DEMO_LATENCY", "0.2")),
    )

    success = await classify_image_example(
        logger,
        options,
        engine,
        image_path=os.getenv("DOGCAT_IMAGE_PATH"),  # Optional image path
    )
    return 0 if success else 1


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    sys.exit(asyncio.run(main()))
