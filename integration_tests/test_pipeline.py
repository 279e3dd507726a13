"""Integration tests against the live AI API.

conftest.py skips them when ANTHROPIC_API_KEY is not set.
"""

import pytest

from hoop_metrics.agents import AITrainer
from hoop_metrics.models import ExperienceLevel, SessionStatus, UserProfile, WorkoutSession


@pytest.fixture
def trainer(live_settings):
    return AITrainer(settings=live_settings)


@pytest.fixture
def sample_profile():
    return UserProfile(
        user_id="integration-user",
        experience=ExperienceLevel.INTERMEDIATE,
        age=19,
        goals="Quicker first step",
        current_streak=4,
        total_workouts=18,
        skill_level=2,
    )


class TestTrainerIntegration:
    async def test_generate_workout(self, trainer, sample_profile):
        workout = await trainer.generate_personalized_workout(
            sample_profile,
            {"total_points": 900},
            {"duration": 30, "focus_area": "footwork"},
        )

        assert workout["name"]
        assert workout["phases"]
        assert workout["ai_generated"] is True

    async def test_generate_insights(self, trainer, sample_profile):
        sessions = [
            WorkoutSession(
                user_id="integration-user",
                workout_id="w",
                status=SessionStatus.COMPLETED,
                total_duration=2400,
                average_heart_rate=150 + i,
            )
            for i in range(3)
        ]

        insights = await trainer.generate_insights(sessions, sample_profile)

        assert insights["overall_progress"]
        assert insights["recommendations"]
