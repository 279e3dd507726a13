"""Data models for hoop-metrics."""

from .inbox import InboxStatus, WorkoutInboxItem
from .plan import FitnessPlan, PlanStatus, PlanType, PlanWorkout, UserFitnessPlan
from .session import SessionStatus, WorkoutSession
from .social import Achievement, AchievementCategory, ActivityEntry, ActivityType, LeaderboardEntry
from .user import ExperienceLevel, User, UserProfile
from .workout import Difficulty, Exercise, Workout, WorkoutType

__all__ = [
    "Achievement",
    "AchievementCategory",
    "ActivityEntry",
    "ActivityType",
    "Difficulty",
    "Exercise",
    "ExperienceLevel",
    "FitnessPlan",
    "InboxStatus",
    "LeaderboardEntry",
    "PlanStatus",
    "PlanType",
    "PlanWorkout",
    "SessionStatus",
    "User",
    "UserFitnessPlan",
    "UserProfile",
    "Workout",
    "WorkoutInboxItem",
    "WorkoutSession",
    "WorkoutType",
]
