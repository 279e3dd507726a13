"""Workout session model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle of a logged workout attempt."""

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class WorkoutSession:
    """One attempt by a user at a workout."""

    user_id: str
    workout_id: str
    status: SessionStatus = SessionStatus.ACTIVE
    user_plan_id: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    total_duration: int | None = None  # seconds
    calories_burned: int | None = None
    average_heart_rate: int | None = None
    max_heart_rate: int | None = None
    notes: str | None = None
    id: str | None = None

    @property
    def duration_minutes(self) -> int:
        """Whole minutes of the recorded duration (0 when unknown)."""
        return (self.total_duration or 0) // 60

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "workout_id": self.workout_id,
            "user_plan_id": self.user_plan_id,
            "status": self.status.value,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "total_duration": self.total_duration,
            "calories_burned": self.calories_burned,
            "average_heart_rate": self.average_heart_rate,
            "max_heart_rate": self.max_heart_rate,
            "notes": self.notes,
        }

    def get_summary(self) -> dict:
        """Compact view used in AI insight prompts."""
        return {
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration": self.total_duration,
            "status": self.status.value,
            "heart_rate": self.average_heart_rate,
            "calories": self.calories_burned,
        }


# Columns a PATCH may write directly. completed_at is only set by the
# completion transition.
UPDATABLE_SESSION_FIELDS = (
    "total_duration",
    "calories_burned",
    "average_heart_rate",
    "max_heart_rate",
    "notes",
)
