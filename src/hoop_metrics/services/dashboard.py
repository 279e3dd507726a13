"""Dashboard aggregation: stats, achievements, leaderboard and activity feed."""

import asyncio
from pathlib import Path

from ..config import Settings, get_settings
from ..db.engine import get_db_path
from ..db.repositories import (
    AchievementRepository,
    ActivityFeedRepository,
    SessionRepository,
    UserProfileRepository,
)
from ..models.social import LeaderboardEntry


class DashboardService:
    """Read-only views combining several repositories."""

    def __init__(self, db_path: Path | None = None, settings: Settings | None = None):
        self.db_path = db_path or get_db_path()
        self.settings = settings or get_settings()
        self.profiles = UserProfileRepository(self.db_path)
        self.sessions = SessionRepository(self.db_path)
        self.achievements = AchievementRepository(self.db_path)
        self.feed = ActivityFeedRepository(self.db_path)

    async def get_stats(self, user_id: str) -> dict:
        profile = await self.profiles.get_by_user(user_id)
        average_hr = await self.sessions.average_heart_rate(user_id)
        return {
            "total_workouts": profile.total_workouts if profile else 0,
            "current_streak": profile.current_streak if profile else 0,
            "longest_streak": profile.longest_streak if profile else 0,
            "day_streak": profile.day_streak if profile else 0,
            "total_points": profile.total_points if profile else 0,
            "average_heart_rate": round(average_hr or 0),
            "recovery_score": profile.recovery_score if profile else 0.0,
        }

    async def get_achievements(self, user_id: str) -> list[dict]:
        return [
            {**achievement.to_dict(), "unlocked_at": unlocked_at.isoformat()}
            for achievement, unlocked_at in await self.achievements.list_unlocked(user_id)
        ]

    async def get_leaderboard(self, limit: int | None = None) -> list[LeaderboardEntry]:
        limit = limit or self.settings.leaderboard_size
        return [
            LeaderboardEntry(user=user, profile=profile, rank=rank)
            for rank, (user, profile) in enumerate(
                await self.profiles.get_leaderboard(limit), start=1
            )
        ]

    async def get_dashboard(self, user_id: str) -> dict:
        stats, achievements, leaderboard, feed = await asyncio.gather(
            self.get_stats(user_id),
            self.get_achievements(user_id),
            self.get_leaderboard(),
            self.feed.list_recent(self.settings.activity_feed_size),
        )
        return {
            "stats": stats,
            "achievements": achievements,
            "leaderboard": [entry.to_dict() for entry in leaderboard],
            "activity_feed": [entry.to_dict() for entry in feed],
        }
