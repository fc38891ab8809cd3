"""Trend-driven blog post generation."""

__version__ = "1.0.0"
