"""Image normalizer that scales and center-crops images to model input size."""

import asyncio

import numpy as np
from PIL import Image

from dogcat_classifier.classifier.consts import EXPECTED_HEIGHT, EXPECTED_WIDTH
from dogcat_classifier.classifier.exceptions import ImageProcessingError
from dogcat_classifier.classifier.models import NormalizedTensor, RawImage

_target_size = (EXPECTED_WIDTH, EXPECTED_HEIGHT)


def _draw_rect(width: int, height: int) -> tuple[int, int, int, int]:
    """Compute where the scaled image lands on the target canvas.

    The image is scaled uniformly so that its shorter side fills the canvas,
    then centered. Anything falling outside the canvas is clipped.

    Returns:
        (x, y, draw_width, draw_height); x or y is negative when the scaled
        image overflows the canvas on that axis.

    """
    aspect_ratio = width / height

    if aspect_ratio > 1:
        # Wider than tall
        draw_height = EXPECTED_HEIGHT
        draw_width = max(EXPECTED_WIDTH, round(EXPECTED_HEIGHT * aspect_ratio))
    else:
        # Taller than wide, or square
        draw_width = EXPECTED_WIDTH
        draw_height = max(EXPECTED_HEIGHT, round(EXPECTED_WIDTH / aspect_ratio))

    x = (EXPECTED_WIDTH - draw_width) // 2
    y = (EXPECTED_HEIGHT - draw_height) // 2
    return x, y, draw_width, draw_height


def _source_box(width: int, height: int) -> tuple[float, float, float, float]:
    """Region of the source image that is visible on the canvas.

    Maps the canvas back through the scale and offset from ``_draw_rect``,
    so resampling this box straight to the target size gives the same
    center crop without building the oversized scaled image.
    """
    x, y, draw_width, draw_height = _draw_rect(width, height)
    scale_x = draw_width / width
    scale_y = draw_height / height

    left = max(0.0, -x / scale_x)
    top = max(0.0, -y / scale_y)
    right = min(float(width), (EXPECTED_WIDTH - x) / scale_x)
    bottom = min(float(height), (EXPECTED_HEIGHT - y) / scale_y)
    return left, top, right, bottom


def _to_rgb(image: RawImage) -> Image.Image:
    try:
        decoded = Image.frombytes(
            image.mode, (image.width, image.height), image.pixels
        )
    except (ValueError, OSError) as e:
        err = f"Unreadable pixel data: {e}"
        raise ImageProcessingError(err) from e

    if decoded.mode in ("RGBA", "LA"):
        # Flatten transparency onto black, matching the canvas
        background = Image.new("RGB", decoded.size, (0, 0, 0))
        background.paste(decoded, mask=decoded.getchannel("A"))
        return background
    if decoded.mode != "RGB":
        return decoded.convert("RGB")
    return decoded


def normalize(image: RawImage) -> NormalizedTensor:
    """Normalize an arbitrary image into the engine's input tensor.

    Args:
        image: The bitmap to normalize.

    Returns:
        A 224x224 RGB tensor, center-cropped after a uniform scale.

    Raises:
        ImageProcessingError: If the image has zero width or height, or its
            pixel data cannot be read.

    """
    if image.width <= 0 or image.height <= 0:
        err = f"Image has no area ({image.width}x{image.height})"
        raise ImageProcessingError(err)
    if not image.pixels:
        err = "Empty image data provided"
        raise ImageProcessingError(err)

    rgb_image = _to_rgb(image)

    # Early exit for already-correct images
    if rgb_image.size == _target_size:
        return NormalizedTensor(np.asarray(rgb_image, dtype=np.uint8))

    # Resample only the part of the source that lands on the canvas
    cropped = rgb_image.resize(
        _target_size,
        Image.Resampling.BILINEAR,
        box=_source_box(image.width, image.height),
    )
    return NormalizedTensor(np.asarray(cropped, dtype=np.uint8))


async def normalize_async(image: RawImage) -> NormalizedTensor:
    """Normalize an image without blocking the event loop."""
    # Use thread pool for CPU-intensive processing
    return await asyncio.to_thread(normalize, image)
