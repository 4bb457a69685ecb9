"""
Per user, per exercise progress rows.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from lexiq.db.base import Base


class UserExerciseProgress(Base):
    """
    One row per (user, exercise), created on the first submission.

    ``is_completed`` only ever goes from False to True, ``points_earned`` is
    set once on completion and ``completed_at`` is never cleared.
    """

    __tablename__ = "user_exercise_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "exercise_id", name="uq_user_exercise_progress"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    exercise_id = Column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False, index=True)

    is_completed = Column(Boolean, nullable=False, default=False)
    points_earned = Column(Integer, nullable=False, default=0)
    completed_at = Column(DateTime(timezone=True), nullable=True, index=True)

    attempts_count = Column(Integer, nullable=False, default=0)
    last_answer = Column(String, nullable=True)
    last_answer_correct = Column(Boolean, nullable=True)
    first_attempt_at = Column(DateTime(timezone=True), server_default=func.now())
    last_attempt_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", back_populates="exercise_progress")
    exercise = relationship("Exercise")
