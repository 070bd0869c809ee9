"""Packaged zone catalog snapshot."""
