"""Achievements, activity feed and leaderboard models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .user import User, UserProfile


class AchievementCategory(str, Enum):
    STREAK = "streak"
    SKILL = "skill"
    MILESTONE = "milestone"
    CHALLENGE = "challenge"


class ActivityType(str, Enum):
    WORKOUT_COMPLETED = "workout_completed"
    ACHIEVEMENT_UNLOCKED = "achievement_unlocked"
    PLAN_STARTED = "plan_started"


@dataclass
class Achievement:
    """Catalog entry.

    ``requirement`` maps profile counters to thresholds, e.g.
    ``{"total_workouts": 10}``; all thresholds must be met to unlock.
    """

    name: str
    category: AchievementCategory
    description: str | None = None
    icon_url: str | None = None
    requirement: dict = field(default_factory=dict)
    points: int = 0
    is_active: bool = True
    id: str | None = None
    created_at: datetime | None = None

    def is_met_by(self, profile: UserProfile) -> bool:
        if not self.requirement:
            return False
        return all(
            (getattr(profile, counter, 0) or 0) >= threshold
            for counter, threshold in self.requirement.items()
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "icon_url": self.icon_url,
            "category": self.category.value,
            "requirement": self.requirement,
            "points": self.points,
            "is_active": self.is_active,
        }


@dataclass
class ActivityEntry:
    """Append-only activity feed row."""

    user_id: str
    activity_type: ActivityType
    title: str
    description: str | None = None
    metadata: dict = field(default_factory=dict)
    points: int = 0
    is_public: bool = True
    user: User | None = None
    id: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user": self.user.to_dict() if self.user else {"id": self.user_id},
            "activity_type": self.activity_type.value,
            "title": self.title,
            "description": self.description,
            "metadata": self.metadata,
            "points": self.points,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class LeaderboardEntry:
    user: User
    profile: UserProfile
    rank: int

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "user": self.user.to_dict(),
            "profile": self.profile.to_dict(),
        }
