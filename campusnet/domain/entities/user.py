"""Domain entity representing a registered user as seen by broadcasts."""

from dataclasses import dataclass
from datetime import datetime

USER_ROLE_STUDENT = "student"
USER_ROLE_TEACHER = "teacher"


@dataclass
class UserRecord:
    """Read-only attributes of a user used to resolve broadcast cohorts."""

    id: str
    role: str | None
    is_verified: bool
    created_at: datetime | None
    name: str | None = None

    def has_role(self, role: str) -> bool:
        """Return ``True`` when the user's role matches ``role``."""

        return self.role == role


__all__ = [
    "UserRecord",
    "USER_ROLE_STUDENT",
    "USER_ROLE_TEACHER",
]
