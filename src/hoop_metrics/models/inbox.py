"""Workout inbox model for wearable-detected workouts awaiting triage."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class InboxStatus(str, Enum):
    """Triage state. ``pending`` is initial, the others are terminal."""

    PENDING = "pending"
    CATEGORIZED = "categorized"
    IGNORED = "ignored"

    @property
    def is_terminal(self) -> bool:
        return self != InboxStatus.PENDING


@dataclass
class WorkoutInboxItem:
    """One unreconciled workout detected by a wearable device.

    ``confidence`` and ``ai_summary`` are written once at ingestion and never
    revised.
    """

    user_id: str
    title: str
    workout_data: dict = field(default_factory=dict)
    status: InboxStatus = InboxStatus.PENDING
    category: str | None = None
    auto_detected_type: str | None = None
    confidence: str | None = None  # decimal string, e.g. "0.91"
    duration: int | None = None  # minutes
    calories_burned: int | None = None
    average_heart_rate: int | None = None
    max_heart_rate: int | None = None
    ai_summary: str | None = None
    id: str | None = None
    received_at: datetime | None = None
    processed_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "workout_data": self.workout_data,
            "status": self.status.value,
            "category": self.category,
            "auto_detected_type": self.auto_detected_type,
            "confidence": self.confidence,
            "duration": self.duration,
            "calories_burned": self.calories_burned,
            "average_heart_rate": self.average_heart_rate,
            "max_heart_rate": self.max_heart_rate,
            "ai_summary": self.ai_summary,
            "received_at": self.received_at.isoformat() if self.received_at else None,
            "processed_at": self.processed_at.isoformat() if self.processed_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict, user_id: str) -> "WorkoutInboxItem":
        """Create a pending item from ingestion data."""
        return cls(
            user_id=user_id,
            title=data["title"],
            workout_data=data.get("workout_data", {}),
            auto_detected_type=data.get("auto_detected_type"),
            confidence=data.get("confidence"),
            duration=data.get("duration"),
            calories_burned=data.get("calories_burned"),
            average_heart_rate=data.get("average_heart_rate"),
            max_heart_rate=data.get("max_heart_rate"),
            ai_summary=data.get("ai_summary"),
        )
