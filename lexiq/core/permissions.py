"""
Role checks for lesson access.

Locked lessons reject submissions unless the user's role is allowed to bypass
locks (admins and content creators previewing a course).
"""
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from lexiq.core.config import settings
from lexiq.models.user import User


class RoleProvider:
    """Answers role questions about users from the ``users`` table."""

    def __init__(self, db: Session, bypass_roles: Optional[Iterable[str]] = None):
        self.db = db
        self.bypass_roles = set(bypass_roles if bypass_roles is not None else settings.LOCK_BYPASS_ROLES)

    def can_bypass_locks(self, user_id: int) -> bool:
        """
        Check if a user may submit answers in locked lessons.

        Args:
            user_id: ID of the user

        Returns:
            True for active users whose role is in LOCK_BYPASS_ROLES
        """
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None or not user.is_active:
            return False
        return user.role in self.bypass_roles
