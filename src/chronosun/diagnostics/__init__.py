"""Diagnostics package (needs the `diagnostics` extra: numpy, matplotlib)."""

__all__ = ["daylight"]
