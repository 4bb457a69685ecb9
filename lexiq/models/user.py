"""
User model consumed from the identity service.
"""
from sqlalchemy import Boolean, Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from lexiq.db.base import Base


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, unique=True, index=True, nullable=True)
    full_name = Column(String, nullable=True)
    role = Column(String, default="student")  # student, content_creator, admin
    avatar_url = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)

    # Cached sum of points_earned over completed progress rows.
    # Written only by ProgressTracker.
    total_points_earned = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    exercise_progress = relationship(
        "UserExerciseProgress", back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def display_name(self) -> str:
        return self.username or self.email or "Unknown"
