"""Baseline feature references for source trees."""

from ._version import __version__

__all__ = ["__version__"]
