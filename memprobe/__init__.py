"""Measure the memory footprint of a server process after startup."""

__version__ = "0.1.0"
