"""Placeholdr — placeholder image service."""

__version__ = "0.1.0"
