"""
Identifier verification against a trusted set.
"""

from .registry import VerificationRegistry

__all__ = ["VerificationRegistry"]
