"""Database layer for hoop-metrics."""

from .engine import connect, get_db_path, init_db, seed_catalog, transaction
from .repositories import (
    AchievementRepository,
    ActivityFeedRepository,
    FitnessPlanRepository,
    SessionRepository,
    UserPlanRepository,
    UserProfileRepository,
    UserRepository,
    WorkoutInboxRepository,
    WorkoutRepository,
)

__all__ = [
    "AchievementRepository",
    "ActivityFeedRepository",
    "connect",
    "FitnessPlanRepository",
    "get_db_path",
    "init_db",
    "seed_catalog",
    "SessionRepository",
    "transaction",
    "UserPlanRepository",
    "UserProfileRepository",
    "UserRepository",
    "WorkoutInboxRepository",
    "WorkoutRepository",
]
