"""Workout session logging and completion bookkeeping."""

from datetime import datetime
from pathlib import Path

import aiosqlite
from loguru import logger

from ..config import Settings, get_settings
from ..db.engine import get_db_path, transaction
from ..db.repositories import (
    AchievementRepository,
    ActivityFeedRepository,
    SessionRepository,
    UserPlanRepository,
    UserProfileRepository,
    WorkoutRepository,
)
from ..errors import NotFoundError
from ..models.session import SessionStatus, WorkoutSession
from ..models.social import ActivityEntry, ActivityType
from ..models.user import UserProfile
from .plans import PlanService


class SessionService:
    """Service for creating and completing workout sessions.

    Completing a session updates the owner's profile counters, appends to the
    activity feed, advances a linked plan enrollment and unlocks achievements.
    All of it happens in the same write transaction as the session update, and
    only on the call that actually moves the session to ``completed``.
    """

    def __init__(self, db_path: Path | None = None, settings: Settings | None = None):
        self.db_path = db_path or get_db_path()
        self.settings = settings or get_settings()
        self.sessions = SessionRepository(self.db_path)

    async def create_session(self, user_id: str, payload: dict) -> WorkoutSession:
        """Log a new session for the user.

        Raises:
            NotFoundError: If the workout or the linked enrollment does not exist
        """
        status = SessionStatus(payload.get("status") or SessionStatus.ACTIVE)
        completed_at = payload.get("completed_at")
        counts = status == SessionStatus.COMPLETED and completed_at is not None

        async with transaction(self.db_path) as db:
            if await WorkoutRepository(self.db_path, conn=db).get(
                payload["workout_id"], include_exercises=False
            ) is None:
                raise NotFoundError("Workout not found")

            user_plan_id = payload.get("user_plan_id")
            if user_plan_id and await UserPlanRepository(
                self.db_path, conn=db
            ).get_owned(user_id, user_plan_id) is None:
                raise NotFoundError("Plan enrollment not found")

            sessions = SessionRepository(self.db_path, conn=db)
            session = WorkoutSession(
                user_id=user_id,
                workout_id=payload["workout_id"],
                user_plan_id=user_plan_id,
                # A session logged as completed goes through the same transition
                # as a PATCH so it is counted exactly once.
                status=SessionStatus.ACTIVE if counts else status,
                started_at=payload.get("started_at"),
                total_duration=payload.get("total_duration"),
                calories_burned=payload.get("calories_burned"),
                average_heart_rate=payload.get("average_heart_rate"),
                max_heart_rate=payload.get("max_heart_rate"),
                notes=payload.get("notes"),
            )
            await sessions.create(session)

            if counts:
                await self._complete(db, session, completed_at)
                session = await sessions.get_owned(user_id, session.id)

        logger.info(f"Session {session.id} created for user {user_id}")
        return session

    async def update_session(self, user_id: str, session_id: str, changes: dict) -> WorkoutSession:
        """Apply a partial update to one of the user's sessions.

        Completion bookkeeping runs only when the update carries both
        ``status="completed"`` and ``completed_at``. A bare ``completed_at``
        is ignored.

        Raises:
            NotFoundError: If the session does not exist or belongs to someone else
        """
        async with transaction(self.db_path) as db:
            sessions = SessionRepository(self.db_path, conn=db)
            if await sessions.get_owned(user_id, session_id) is None:
                raise NotFoundError("Session not found")

            await sessions.update_fields(session_id, changes)
            session = await sessions.get_owned(user_id, session_id)

            status = changes.get("status")
            if status is not None:
                status = SessionStatus(status)
                completed_at = changes.get("completed_at")
                if status == SessionStatus.COMPLETED and completed_at is not None:
                    await self._complete(db, session, completed_at)
                else:
                    await sessions.set_status(session_id, status)

            session = await sessions.get_owned(user_id, session_id)

        return session

    async def list_sessions(self, user_id: str, limit: int = 10) -> list[WorkoutSession]:
        return await self.sessions.list_for_user(user_id, limit)

    async def _complete(
        self, db: aiosqlite.Connection, session: WorkoutSession, completed_at: datetime
    ) -> bool:
        """Mark the session completed and run the bookkeeping once."""
        if not await SessionRepository(self.db_path, conn=db).mark_completed(
            session.id, completed_at
        ):
            logger.debug(f"Session {session.id} already completed")
            return False

        points = self.settings.completion_points
        profile = await UserProfileRepository(self.db_path, conn=db).record_completion(
            session.user_id, points, completed_at.date()
        )

        await ActivityFeedRepository(self.db_path, conn=db).add(
            ActivityEntry(
                user_id=session.user_id,
                activity_type=ActivityType.WORKOUT_COMPLETED,
                title="Completed workout",
                description=f"Finished a {session.duration_minutes} minute workout",
                metadata={"session_id": session.id, "workout_id": session.workout_id},
                points=points,
            )
        )

        if session.user_plan_id:
            await PlanService(self.db_path).record_workout_completed(
                db, session.user_plan_id, completed_at
            )

        await self._unlock_achievements(db, profile)

        logger.info(
            f"Session {session.id} completed: user {session.user_id} now at "
            f"{profile.total_workouts} workouts, {profile.total_points} points"
        )
        return True

    async def _unlock_achievements(self, db: aiosqlite.Connection, profile: UserProfile) -> None:
        achievements = AchievementRepository(self.db_path, conn=db)
        feed = ActivityFeedRepository(self.db_path, conn=db)

        for achievement in await achievements.list_active():
            if not achievement.is_met_by(profile):
                continue
            if not await achievements.unlock(profile.user_id, achievement.id):
                continue
            await feed.add(
                ActivityEntry(
                    user_id=profile.user_id,
                    activity_type=ActivityType.ACHIEVEMENT_UNLOCKED,
                    title=f"Unlocked {achievement.name}",
                    description=achievement.description,
                    metadata={"achievement_id": achievement.id},
                )
            )
            logger.info(f"User {profile.user_id} unlocked achievement {achievement.name}")
