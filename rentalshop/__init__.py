"""Rental-shop contract composition and reconciliation engine."""

__version__ = "1.0.0"
