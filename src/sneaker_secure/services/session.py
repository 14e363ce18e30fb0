"""
Session capability.

The admin capability is carried by an explicit value passed to the operations
that need it. There are no accounts, passwords or persisted sessions.
"""

from dataclasses import dataclass

from ..core.exceptions import PermissionDeniedError


@dataclass(frozen=True)
class Session:
    """The local user and what they may do."""

    username: str
    is_admin: bool = False

    @classmethod
    def for_username(cls, username: str, admin_username: str = "admin") -> "Session":
        username = (username or "").strip()
        return cls(username=username, is_admin=bool(username) and username == admin_username)

    def require_admin(self, action: str) -> None:
        """Raise PermissionDeniedError unless this session is an admin session."""
        if not self.is_admin:
            raise PermissionDeniedError(self.username or "anonymous", action)
