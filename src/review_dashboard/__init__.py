"""Property review normalization and approval dashboard."""

__version__ = "0.1.0"
