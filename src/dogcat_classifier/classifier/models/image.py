"""Image containers passed through the classification pipeline.

RawImage is what callers hand in; NormalizedTensor is what the engine
receives after preprocessing.
"""

from dataclasses import dataclass
from io import BytesIO

import numpy as np
from PIL import Image, UnidentifiedImageError

from dogcat_classifier.classifier.consts import (
    EXPECTED_CHANNELS,
    EXPECTED_HEIGHT,
    EXPECTED_WIDTH,
)
from dogcat_classifier.classifier.exceptions import ImageProcessingError

_EXPECTED_SHAPE = (EXPECTED_HEIGHT, EXPECTED_WIDTH, EXPECTED_CHANNELS)


@dataclass
class RawImage:
    """A decoded bitmap of arbitrary size and aspect ratio.

    Attributes:
        pixels: Packed pixel data laid out as Pillow expects for ``mode``.
        width: Width of the bitmap in pixels.
        height: Height of the bitmap in pixels.
        mode: Pillow mode describing the pixel layout. Defaults to "RGB".

    """

    pixels: bytes
    width: int
    height: int
    mode: str = "RGB"

    @classmethod
    def from_pil(cls, image: Image.Image) -> "RawImage":
        """Create a RawImage from a Pillow image."""
        if image.mode in ("P", "PA"):
            # Raw bytes of palette images are indices; keep the colours
            image = image.convert("RGBA")
        return cls(
            pixels=image.tobytes(),
            width=image.width,
            height=image.height,
            mode=image.mode,
        )

    @classmethod
    def from_encoded(cls, data: bytes) -> "RawImage":
        """Decode PNG, JPEG or any other Pillow supported format.

        Args:
            data: Encoded image bytes.

        Returns:
            The decoded bitmap.

        Raises:
            ImageProcessingError: If the bytes are empty, cannot be decoded
                or exceed Pillow's decompression bomb limit.

        """
        if not data:
            err = "Empty image data provided"
            raise ImageProcessingError(err)

        try:
            with Image.open(BytesIO(data)) as image:
                image.load()
                return cls.from_pil(image)
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            SyntaxError,
            ValueError,
        ) as e:
            err = f"Failed to decode image data: {e}"
            raise ImageProcessingError(err) from e

    @property
    def is_empty(self) -> bool:
        """Whether the image has no drawable content."""
        return self.width <= 0 or self.height <= 0 or not self.pixels


class NormalizedTensor:
    """A 224x224 RGB uint8 array ready for submission to an engine."""

    def __init__(self, array: np.ndarray) -> None:
        """Wrap a preprocessed array.

        Args:
            array: Array of shape (224, 224, 3).

        Raises:
            ImageProcessingError: If the array does not have the engine's
                expected input shape.

        """
        if array.shape != _EXPECTED_SHAPE:
            err = (
                f"Expected tensor of shape {_EXPECTED_SHAPE}, "
                f"got {array.shape}"
            )
            raise ImageProcessingError(err)
        self.array = array.astype(np.uint8, copy=False)

    @property
    def shape(self) -> tuple[int, ...]:
        """Shape of the underlying array, (height, width, channels)."""
        return self.array.shape

    def to_pil(self) -> Image.Image:
        """Return the tensor as a Pillow RGB image."""
        return Image.fromarray(self.array)
