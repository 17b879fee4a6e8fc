"""Storage layer for the Adaptive Cards templating service."""

__version__ = "1.0.0"
