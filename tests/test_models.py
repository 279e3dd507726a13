"""Tests for data models."""

from datetime import date, datetime

import pytest

from hoop_metrics.models import (
    Achievement,
    AchievementCategory,
    ActivityEntry,
    ActivityType,
    Difficulty,
    InboxStatus,
    PlanStatus,
    SessionStatus,
    User,
    UserFitnessPlan,
    UserProfile,
    Workout,
    WorkoutInboxItem,
    WorkoutSession,
    WorkoutType,
)
from hoop_metrics.models.plan import format_percentage


class TestFormatPercentage:
    """Tests for completion percentage formatting."""

    @pytest.mark.parametrize(
        "completed,total,expected",
        [
            (0, 8, "0.00"),
            (1, 8, "12.50"),
            (1, 3, "33.33"),
            (2, 3, "66.67"),
            (8, 8, "100.00"),
            (9, 8, "100.00"),
            (3, 0, "0.00"),
        ],
    )
    def test_format(self, completed, total, expected):
        assert format_percentage(completed, total) == expected


class TestUserFitnessPlan:
    """Tests for enrollment progress."""

    def test_start_resets_counters(self):
        enrollment = UserFitnessPlan(user_id="u", plan_id="p", total_workouts_completed=4)
        enrollment.start(8)

        assert enrollment.status == PlanStatus.ACTIVE
        assert enrollment.current_week == 1
        assert enrollment.total_workouts_completed == 0
        assert enrollment.total_workouts_in_plan == 8
        assert enrollment.completion_percentage == "0.00"
        assert enrollment.start_date is not None

    def test_record_workout_advances_week(self):
        weeks = [1, 1, 2, 2]
        enrollment = UserFitnessPlan(user_id="u", plan_id="p")
        enrollment.start(len(weeks))
        completed_at = datetime(2024, 3, 1, 18, 0)

        enrollment.record_workout(weeks, completed_at)
        assert enrollment.current_week == 1
        assert enrollment.completion_percentage == "25.00"
        assert enrollment.last_workout_date == completed_at

        enrollment.record_workout(weeks, completed_at)
        assert enrollment.current_week == 2
        assert enrollment.status == PlanStatus.ACTIVE

    def test_record_final_workout_completes_plan(self):
        weeks = [1, 2]
        enrollment = UserFitnessPlan(user_id="u", plan_id="p")
        enrollment.start(2)

        enrollment.record_workout(weeks, datetime.now())
        enrollment.record_workout(weeks, datetime.now())

        assert enrollment.status == PlanStatus.COMPLETED
        assert enrollment.current_week == 2
        assert enrollment.completion_percentage == "100.00"

    def test_empty_plan_never_completes(self):
        enrollment = UserFitnessPlan(user_id="u", plan_id="p")
        enrollment.start(0)
        enrollment.record_workout([], datetime.now())

        assert enrollment.status == PlanStatus.ACTIVE
        assert enrollment.completion_percentage == "0.00"

    def test_progress_stats(self):
        enrollment = UserFitnessPlan(
            user_id="u",
            plan_id="p",
            total_workouts_completed=3,
            total_workouts_in_plan=9,
            completion_percentage="33.33",
            current_week=2,
        )
        assert enrollment.get_progress_stats() == {
            "total_workouts": 9,
            "completed_workouts": 3,
            "completion_percentage": "33.33",
            "current_week": 2,
            "status": "active",
        }


class TestWorkoutSession:
    def test_duration_minutes(self):
        session = WorkoutSession(user_id="u", workout_id="w", total_duration=2700)
        assert session.duration_minutes == 45

    def test_duration_minutes_unknown(self):
        assert WorkoutSession(user_id="u", workout_id="w").duration_minutes == 0

    def test_summary(self):
        session = WorkoutSession(
            user_id="u",
            workout_id="w",
            status=SessionStatus.COMPLETED,
            completed_at=datetime(2024, 3, 1, 18, 0),
            total_duration=1800,
            average_heart_rate=150,
            calories_burned=400,
        )
        assert session.get_summary() == {
            "completed_at": "2024-03-01T18:00:00",
            "duration": 1800,
            "status": "completed",
            "heart_rate": 150,
            "calories": 400,
        }


class TestWorkout:
    def test_from_dict_orders_exercises(self):
        workout = Workout.from_dict({
            "name": "Shooting Day",
            "difficulty": "beginner",
            "workout_type": "skills",
            "exercises": [{"name": "Form Shooting"}, {"name": "Free Throws", "reps": 50}],
        })

        assert workout.difficulty == Difficulty.BEGINNER
        assert workout.workout_type == WorkoutType.SKILLS
        assert [(e.order, e.name) for e in workout.exercises] == [
            (1, "Form Shooting"),
            (2, "Free Throws"),
        ]

    def test_to_dict_without_exercises(self):
        workout = Workout(name="W", difficulty=Difficulty.PRO, workout_type=WorkoutType.CARDIO)
        data = workout.to_dict(include_exercises=False)
        assert "exercises" not in data
        assert data["difficulty"] == "pro"


class TestAchievement:
    def test_requirement_met(self):
        achievement = Achievement(
            name="Double Digits",
            category=AchievementCategory.MILESTONE,
            requirement={"total_workouts": 10},
        )
        assert achievement.is_met_by(UserProfile(user_id="u", total_workouts=10))
        assert not achievement.is_met_by(UserProfile(user_id="u", total_workouts=9))

    def test_all_thresholds_required(self):
        achievement = Achievement(
            name="Combo",
            category=AchievementCategory.CHALLENGE,
            requirement={"total_workouts": 5, "day_streak": 2},
        )
        assert not achievement.is_met_by(UserProfile(user_id="u", total_workouts=5, day_streak=1))
        assert achievement.is_met_by(UserProfile(user_id="u", total_workouts=5, day_streak=2))

    def test_empty_requirement_never_met(self):
        achievement = Achievement(name="Hidden", category=AchievementCategory.SKILL)
        assert not achievement.is_met_by(UserProfile(user_id="u", total_workouts=100))


class TestInbox:
    def test_terminal_states(self):
        assert not InboxStatus.PENDING.is_terminal
        assert InboxStatus.CATEGORIZED.is_terminal
        assert InboxStatus.IGNORED.is_terminal

    def test_from_dict_is_pending(self):
        item = WorkoutInboxItem.from_dict(
            {"title": "Run", "confidence": "0.85", "workout_data": {"steps": 100}},
            user_id="u",
        )
        assert item.status == InboxStatus.PENDING
        assert item.confidence == "0.85"
        assert item.workout_data == {"steps": 100}


class TestUserAndActivity:
    def test_display_name(self):
        assert User(id="1", first_name="Jordan", last_name="Hale").display_name == "Jordan Hale"
        assert User(id="1", email="j@example.com").display_name == "j@example.com"

    def test_profile_defaults(self):
        profile = UserProfile(user_id="u")
        data = profile.to_dict()
        assert data["recovery_score"] == 75.0
        assert data["skill_level"] == 1
        assert data["last_workout_date"] is None

        profile.last_workout_date = date(2024, 3, 1)
        assert profile.to_dict()["last_workout_date"] == "2024-03-01"

    def test_activity_without_user(self):
        entry = ActivityEntry(
            user_id="u",
            activity_type=ActivityType.WORKOUT_COMPLETED,
            title="Completed workout",
        )
        data = entry.to_dict()
        assert data["user"] == {"id": "u"}
        assert data["activity_type"] == "workout_completed"
