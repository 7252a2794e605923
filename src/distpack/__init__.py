"""Reproducible distribution archives built with external compression tools."""

__version__ = "0.1.0"
