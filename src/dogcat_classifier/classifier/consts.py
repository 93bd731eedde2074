"""Constants shared across the classification pipeline."""

# MobileNet-style engines expect a square RGB input of this size
EXPECTED_WIDTH = 224
EXPECTED_HEIGHT = 224
EXPECTED_CHANNELS = 3

DEFAULT_TIMEOUT = 5.0
