"""LuxQuote — laser cutting instant quotes."""

__version__ = "1.0.0"
