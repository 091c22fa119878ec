"""Exhibit: JSON API service for digital collections."""

__version__ = "0.3.0"
