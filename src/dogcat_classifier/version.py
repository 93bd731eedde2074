"""Single point of truth for the version of the dogcat_classifier package."""

import importlib.metadata

__version__ = importlib.metadata.version("dogcat_classifier")
