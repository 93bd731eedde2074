"""Tests for version information."""

import importlib
from unittest import mock

import dogcat_classifier.version
from dogcat_classifier.version import __version__


def test_version_from_metadata() -> None:
    """Test that version is correctly retrieved from package metadata."""
    with mock.patch("importlib.metadata.version") as mock_version:
        mock_version.return_value = "1.2.3"
        # Force reload of version module to get mocked value

        importlib.reload(dogcat_classifier.version)
        assert dogcat_classifier.version.__version__ == "1.2.3"
        mock_version.assert_called_once_with("dogcat_classifier")


def test_version_exists() -> None:
    """Test that version string exists and is non-empty."""
    assert isinstance(__version__, str)
    assert len(__version__) > 0
