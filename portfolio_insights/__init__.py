"""Retail risk and revenue analytics over synthetic portfolio data."""

__version__ = "0.1.0"
