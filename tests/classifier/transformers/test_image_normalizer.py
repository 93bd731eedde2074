"""Tests for the image normalizer."""

import numpy as np
import pytest
from PIL import Image, ImageDraw

from dogcat_classifier.classifier.consts import (
    EXPECTED_CHANNELS,
    EXPECTED_HEIGHT,
    EXPECTED_WIDTH,
)
from dogcat_classifier.classifier.exceptions import ImageProcessingError
from dogcat_classifier.classifier.models import NormalizedTensor, RawImage
from dogcat_classifier.classifier.transformers.image_normalizer import (
    _draw_rect,
    _source_box,
    normalize,
    normalize_async,
)
from tests.utils.image_generation import (
    BLUE,
    GREEN,
    RED,
    create_banded_image,
    create_noise_image,
    create_solid_image,
)

EXPECTED_SHAPE = (EXPECTED_HEIGHT, EXPECTED_WIDTH, EXPECTED_CHANNELS)
# Red or blue bands must not survive the crop; bilinear blending at the
# crop edge leaves at most a faint tint
BAND_THRESHOLD = 200


@pytest.mark.parametrize(
    ("width", "height"),
    [
        (100, 100),
        (1000, 1000),
        (EXPECTED_WIDTH, EXPECTED_HEIGHT),
        (640, 480),
        (480, 640),
        (600, 100),
        (1, 1),
        (3, 1),
    ],
)
def test_normalize_always_returns_expected_shape(
    width: int, height: int
) -> None:
    """Test that every aspect ratio produces a 224x224x3 tensor."""
    tensor = normalize(create_solid_image(width, height))

    assert isinstance(tensor, NormalizedTensor)
    assert tensor.shape == EXPECTED_SHAPE
    assert tensor.array.dtype == np.uint8


def test_normalize_square_input_is_unchanged() -> None:
    """Test that an image already at model size keeps its pixels."""
    image = create_noise_image(EXPECTED_WIDTH, EXPECTED_HEIGHT, seed=7)
    expected = np.frombuffer(image.pixels, dtype=np.uint8).reshape(
        EXPECTED_SHAPE
    )

    tensor = normalize(image)

    np.testing.assert_array_equal(tensor.array, expected)


def test_normalize_wide_image_keeps_horizontal_center() -> None:
    """Test that a wide image is cropped to its horizontal center band."""
    image = create_banded_image(448, 224, horizontal=True)

    tensor = normalize(image)

    # Only the green middle half fits on the canvas
    assert (tensor.array == GREEN).all()


def test_normalize_tall_image_keeps_vertical_center() -> None:
    """Test that a tall image is cropped to its vertical center band."""
    image = create_banded_image(100, 200, horizontal=False)

    tensor = normalize(image)

    assert tuple(tensor.array[112, 112]) == GREEN
    assert tensor.array[:, :, 0].max() < BAND_THRESHOLD
    assert tensor.array[:, :, 2].max() < BAND_THRESHOLD


def test_normalize_fills_canvas_without_borders() -> None:
    """Test that the scaled image covers the whole canvas."""
    tensor = normalize(create_solid_image(300, 150, color=BLUE))

    assert (tensor.array == BLUE).all()


def test_normalize_extreme_aspect_ratio_samples_center() -> None:
    """Test that a 4000x1 strip is cropped to its middle pixels."""
    strip = Image.new("RGB", (4000, 1), RED)
    ImageDraw.Draw(strip).line([(1990, 0), (2010, 0)], fill=GREEN)

    tensor = normalize(RawImage.from_pil(strip))

    assert tensor.shape == EXPECTED_SHAPE
    assert tuple(tensor.array[112, 112]) == GREEN


@pytest.mark.parametrize(
    ("width", "height", "expected"),
    [
        (224, 224, (0.0, 0.0, 224.0, 224.0)),
        (448, 224, (112.0, 0.0, 336.0, 224.0)),
        (100, 200, (0.0, 50.0, 100.0, 150.0)),
        (4000, 1, (1999.5, 0.0, 2000.5, 1.0)),
    ],
)
def test_source_box(
    width: int, height: int, expected: tuple[float, float, float, float]
) -> None:
    """Test that only the visible part of the source is resampled."""
    assert _source_box(width, height) == pytest.approx(expected)


@pytest.mark.parametrize(
    ("width", "height", "expected"),
    [
        (224, 224, (0, 0, 224, 224)),
        (448, 224, (-112, 0, 448, 224)),
        (100, 200, (0, -112, 224, 448)),
        (112, 112, (0, 0, 224, 224)),
    ],
)
def test_draw_rect(
    width: int, height: int, expected: tuple[int, int, int, int]
) -> None:
    """Test the placement of the scaled image on the canvas."""
    assert _draw_rect(width, height) == expected


@pytest.mark.parametrize("mode", ["L", "RGBA", "LA", "P", "CMYK"])
def test_normalize_converts_modes_to_rgb(mode: str) -> None:
    """Test that non-RGB images are converted before scaling."""
    tensor = normalize(create_solid_image(64, 32, mode=mode))

    assert tensor.shape == EXPECTED_SHAPE


@pytest.mark.parametrize(
    ("width", "height"), [(0, 100), (100, 0), (0, 0), (-1, 10)]
)
def test_normalize_rejects_zero_area(width: int, height: int) -> None:
    """Test that images without area cannot be normalized."""
    image = RawImage(pixels=b"\x00" * 30, width=width, height=height)

    with pytest.raises(ImageProcessingError, match="no area"):
        normalize(image)


def test_normalize_rejects_empty_pixels() -> None:
    """Test that an image without pixel data cannot be normalized."""
    with pytest.raises(ImageProcessingError, match="Empty image data"):
        normalize(RawImage(pixels=b"", width=10, height=10))


def test_normalize_rejects_truncated_pixels() -> None:
    """Test that short pixel buffers are reported as unreadable."""
    image = RawImage(pixels=b"\x00" * 10, width=10, height=10)

    with pytest.raises(ImageProcessingError, match="Unreadable pixel data"):
        normalize(image)


def test_normalize_rejects_unknown_mode() -> None:
    """Test that an unknown pixel layout is reported as unreadable."""
    image = RawImage(pixels=b"\x00" * 300, width=10, height=10, mode="XYZ")

    with pytest.raises(ImageProcessingError, match="Unreadable pixel data"):
        normalize(image)


@pytest.mark.asyncio
async def test_normalize_async() -> None:
    """Test that the async variant returns the same tensor."""
    image = create_noise_image(320, 240, seed=3)

    result = await normalize_async(image)

    np.testing.assert_array_equal(result.array, normalize(image).array)
