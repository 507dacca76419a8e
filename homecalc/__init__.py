"""Home affordability and mortgage analysis engine.

This module also exposes the package version for runtime display."""

from .version import __version__

__all__ = ["__version__"]
