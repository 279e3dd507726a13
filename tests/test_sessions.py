"""Tests for session completion bookkeeping."""

import asyncio
from datetime import datetime

import pytest

from hoop_metrics.db import (
    ActivityFeedRepository,
    UserProfileRepository,
    connect,
)
from hoop_metrics.errors import NotFoundError
from hoop_metrics.models import ActivityType, PlanStatus, SessionStatus
from hoop_metrics.services import PlanService, SessionService


async def completed_activities(db_path, user_id):
    entries = await ActivityFeedRepository(db_path).list_recent(limit=100, user_id=user_id)
    return [e for e in entries if e.activity_type == ActivityType.WORKOUT_COMPLETED]


@pytest.fixture
def service(db_path, settings):
    return SessionService(db_path, settings)


class TestCreateSession:
    async def test_create_active_session(self, service, user, workout):
        session = await service.create_session(user.id, {"workout_id": workout.id})

        assert session.status == SessionStatus.ACTIVE
        assert session.user_id == user.id
        assert session.started_at is not None

    async def test_unknown_workout(self, service, user):
        with pytest.raises(NotFoundError):
            await service.create_session(user.id, {"workout_id": "missing"})

    async def test_enrollment_must_belong_to_user(
        self, db_path, service, user, other_user, workout, plan
    ):
        enrollment = await PlanService(db_path).start_plan(other_user.id, plan.id)

        with pytest.raises(NotFoundError):
            await service.create_session(
                user.id, {"workout_id": workout.id, "user_plan_id": enrollment.id}
            )

    async def test_create_completed_session_counts_once(self, db_path, service, user, workout):
        session = await service.create_session(
            user.id,
            {
                "workout_id": workout.id,
                "status": "completed",
                "completed_at": datetime(2024, 3, 1, 18, 0),
                "total_duration": 1800,
            },
        )

        assert session.status == SessionStatus.COMPLETED
        profile = await UserProfileRepository(db_path).get_by_user(user.id)
        assert profile.total_workouts == 1
        assert len(await completed_activities(db_path, user.id)) == 1

    async def test_create_completed_without_timestamp(self, db_path, service, user, workout):
        session = await service.create_session(
            user.id, {"workout_id": workout.id, "status": "completed"}
        )

        assert session.status == SessionStatus.COMPLETED
        profile = await UserProfileRepository(db_path).get_by_user(user.id)
        assert profile.total_workouts == 0


class TestCompleteSession:
    """Completing a session updates the profile and the activity feed."""

    async def test_completion_example(self, db_path, service, user, workout):
        async with connect(db_path) as db:
            await db.execute(
                "UPDATE user_profiles SET total_workouts = 3, total_points = 100 WHERE user_id = ?",
                (user.id,),
            )
        session = await service.create_session(user.id, {"workout_id": workout.id})

        updated = await service.update_session(
            user.id,
            session.id,
            {
                "status": "completed",
                "completed_at": datetime(2024, 3, 1, 18, 0),
                "total_duration": 2700,
                "average_heart_rate": 152,
            },
        )

        assert updated.status == SessionStatus.COMPLETED
        assert updated.average_heart_rate == 152
        profile = await UserProfileRepository(db_path).get_by_user(user.id)
        assert profile.total_workouts == 4
        assert profile.total_points == 150
        assert profile.current_streak == 1

        activities = await completed_activities(db_path, user.id)
        assert len(activities) == 1
        assert activities[0].description == "Finished a 45 minute workout"
        assert activities[0].points == 50
        assert activities[0].metadata["session_id"] == session.id

    async def test_repeat_completion_does_not_double_count(self, db_path, service, user, workout):
        session = await service.create_session(user.id, {"workout_id": workout.id})
        changes = {"status": "completed", "completed_at": datetime(2024, 3, 1, 18, 0)}

        await service.update_session(user.id, session.id, changes)
        await service.update_session(user.id, session.id, changes)

        profile = await UserProfileRepository(db_path).get_by_user(user.id)
        assert profile.total_workouts == 1
        assert profile.total_points == 50
        assert len(await completed_activities(db_path, user.id)) == 1

    async def test_completion_without_timestamp_is_not_counted(
        self, db_path, service, user, workout
    ):
        session = await service.create_session(user.id, {"workout_id": workout.id})

        updated = await service.update_session(user.id, session.id, {"status": "completed"})

        assert updated.status == SessionStatus.COMPLETED
        assert updated.completed_at is None
        profile = await UserProfileRepository(db_path).get_by_user(user.id)
        assert profile.total_workouts == 0
        assert profile.total_points == 0
        assert await completed_activities(db_path, user.id) == []

    async def test_repeat_completion_keeps_first_timestamp(self, db_path, service, user, workout):
        session = await service.create_session(user.id, {"workout_id": workout.id})
        first = datetime(2024, 3, 1, 18, 0)

        await service.update_session(
            user.id, session.id, {"status": "completed", "completed_at": first}
        )
        updated = await service.update_session(
            user.id, session.id, {"status": "completed", "completed_at": datetime(2025, 1, 1)}
        )

        assert updated.completed_at == first
        profile = await UserProfileRepository(db_path).get_by_user(user.id)
        assert profile.last_workout_date == first.date()

    async def test_bare_completed_at_is_ignored(self, db_path, service, user, workout):
        session = await service.create_session(user.id, {"workout_id": workout.id})

        updated = await service.update_session(
            user.id, session.id, {"completed_at": datetime(2024, 3, 1, 18, 0), "notes": "Late"}
        )

        assert updated.status == SessionStatus.ACTIVE
        assert updated.completed_at is None
        assert updated.notes == "Late"
        profile = await UserProfileRepository(db_path).get_by_user(user.id)
        assert profile.total_workouts == 0

    async def test_concurrent_completion_counts_once(self, db_path, service, user, workout):
        session = await service.create_session(user.id, {"workout_id": workout.id})
        changes = {"status": "completed", "completed_at": datetime(2024, 3, 1, 18, 0)}

        await asyncio.gather(
            service.update_session(user.id, session.id, changes),
            service.update_session(user.id, session.id, changes),
        )

        profile = await UserProfileRepository(db_path).get_by_user(user.id)
        assert profile.total_workouts == 1

    async def test_non_completing_update(self, db_path, service, user, workout):
        session = await service.create_session(user.id, {"workout_id": workout.id})

        updated = await service.update_session(
            user.id, session.id, {"notes": "Felt sharp", "calories_burned": 420}
        )

        assert updated.notes == "Felt sharp"
        assert updated.calories_burned == 420
        assert updated.status == SessionStatus.ACTIVE
        profile = await UserProfileRepository(db_path).get_by_user(user.id)
        assert profile.total_workouts == 0

    async def test_cancel_session(self, db_path, service, user, workout):
        session = await service.create_session(user.id, {"workout_id": workout.id})
        updated = await service.update_session(user.id, session.id, {"status": "cancelled"})

        assert updated.status == SessionStatus.CANCELLED

    async def test_other_users_session_not_found(self, service, user, other_user, workout):
        session = await service.create_session(other_user.id, {"workout_id": workout.id})

        with pytest.raises(NotFoundError):
            await service.update_session(user.id, session.id, {"status": "completed"})

    async def test_first_completion_unlocks_achievement(self, db_path, service, user, workout):
        session = await service.create_session(user.id, {"workout_id": workout.id})
        await service.update_session(
            user.id, session.id, {"status": "completed", "completed_at": datetime.now()}
        )

        entries = await ActivityFeedRepository(db_path).list_recent(limit=100, user_id=user.id)
        unlocked = [e for e in entries if e.activity_type == ActivityType.ACHIEVEMENT_UNLOCKED]
        assert [e.title for e in unlocked] == ["Unlocked First Bucket"]

        # Unlocks award no profile points
        profile = await UserProfileRepository(db_path).get_by_user(user.id)
        assert profile.total_points == 50

    async def test_completion_advances_linked_plan(self, db_path, service, user, workout, plan):
        plans = PlanService(db_path)
        enrollment = await plans.start_plan(user.id, plan.id)
        session = await service.create_session(
            user.id, {"workout_id": workout.id, "user_plan_id": enrollment.id}
        )

        await service.update_session(
            user.id, session.id, {"status": "completed", "completed_at": datetime.now()}
        )

        progress = await plans.get_progress(user.id, plan.id)
        assert progress["progress_stats"]["completed_workouts"] == 1
        assert progress["progress_stats"]["completion_percentage"] == "12.50"
        assert progress["progress_stats"]["status"] == PlanStatus.ACTIVE.value
        assert [s["session"]["id"] for s in progress["completed_sessions"]] == [session.id]


class TestListSessions:
    async def test_newest_first(self, service, user, workout):
        first = await service.create_session(
            user.id, {"workout_id": workout.id, "started_at": datetime(2024, 3, 1, 9, 0)}
        )
        second = await service.create_session(
            user.id, {"workout_id": workout.id, "started_at": datetime(2024, 3, 2, 9, 0)}
        )

        sessions = await service.list_sessions(user.id)
        assert [s.id for s in sessions] == [second.id, first.id]

    async def test_limit(self, service, user, workout):
        for _ in range(3):
            await service.create_session(user.id, {"workout_id": workout.id})

        assert len(await service.list_sessions(user.id, limit=2)) == 2
