"""
Command-line interface for SneakerSecure.
"""

from .main import cli, main

__all__ = ["cli", "main"]
