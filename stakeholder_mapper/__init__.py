"""Stakeholder influence mapping API."""

__version__ = "0.1.0"
