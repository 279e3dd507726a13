"""User and training profile models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class ExperienceLevel(str, Enum):
    """Basketball training experience."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    PRO = "pro"


@dataclass
class User:
    """Identity record."""

    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        if parts:
            return " ".join(parts)
        return self.email or self.id

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "profile_image_url": self.profile_image_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass
class UserProfile:
    """Training-derived counters and personal details, one per user.

    ``current_streak`` counts completed workouts and only ever grows;
    ``day_streak`` counts consecutive calendar days with a completed workout
    and resets when a day is missed.
    """

    user_id: str
    experience: ExperienceLevel = ExperienceLevel.BEGINNER
    age: int | None = None
    height: int | None = None  # cm
    weight: float | None = None  # kg
    goals: str | None = None
    preferences: dict = field(default_factory=dict)
    total_workouts: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    total_points: int = 0
    skill_level: int = 1
    recovery_score: float = 75.0
    day_streak: int = 0
    last_workout_date: date | None = None
    id: str | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "experience": self.experience.value,
            "age": self.age,
            "height": self.height,
            "weight": self.weight,
            "goals": self.goals,
            "preferences": self.preferences,
            "total_workouts": self.total_workouts,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "total_points": self.total_points,
            "skill_level": self.skill_level,
            "recovery_score": self.recovery_score,
            "day_streak": self.day_streak,
            "last_workout_date": (
                self.last_workout_date.isoformat() if self.last_workout_date else None
            ),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def get_summary(self) -> str:
        """Generate a summary for AI context."""
        summary = f"Experience: {self.experience.value}\n"
        if self.age:
            summary += f"Age: {self.age}\n"
        summary += f"Total workouts: {self.total_workouts}\n"
        summary += f"Current streak: {self.current_streak} days\n"
        summary += f"Skill level: {self.skill_level}\n"
        summary += f"Recovery score: {self.recovery_score}%\n"
        if self.goals:
            summary += f"Goals: {self.goals}\n"
        return summary


# Fields a user may edit directly; counters are owned by session bookkeeping.
EDITABLE_PROFILE_FIELDS = (
    "experience",
    "age",
    "height",
    "weight",
    "goals",
    "preferences",
    "skill_level",
    "recovery_score",
)
