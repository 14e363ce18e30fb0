"""
Service layer for SneakerSecure.

Provides the sneaker service facade, the session capability and user-facing
error messages.
"""

from .error_messages import ServiceErrorMessages, user_message
from .session import Session
from .sneaker_service import ClaimResult, ScanResult, SneakerService

__all__ = [
    "ClaimResult",
    "ScanResult",
    "ServiceErrorMessages",
    "Session",
    "SneakerService",
    "user_message",
]
