"""Tests for the AI trainer adapter."""

import json

import anthropic
import httpx
import pytest

from hoop_metrics.agents import AITrainer
from hoop_metrics.agents.trainer import strip_code_fence
from hoop_metrics.errors import AIResponseInvalidError, AITrainerError
from hoop_metrics.models import ExperienceLevel, SessionStatus, UserProfile, WorkoutSession

WORKOUT_REPLY = {
    "name": "Guard Footwork Builder",
    "description": "Change-of-direction work",
    "duration": 45,
    "difficulty": "intermediate",
    "workout_type": "skills",
    "phases": [
        {
            "name": "Dynamic Warm-up",
            "duration": 8,
            "exercises": [{"name": "Walking Backwards", "duration": 2, "tips": "Stay tall"}],
        }
    ],
    "coaching_notes": "Stay low",
    "court_time": "full court",
}

INSIGHTS_REPLY = {
    "overall_progress": "Solid base",
    "performance_trends": [{"metric": "Heart Rate", "trend": "improving"}],
    "recommendations": [{"category": "Training", "priority": "high", "recommendation": "Add a rest day"}],
    "motivational_note": "Keep hooping",
}


@pytest.fixture
def profile():
    return UserProfile(
        user_id="u",
        experience=ExperienceLevel.ADVANCED,
        age=22,
        current_streak=6,
        total_workouts=40,
        skill_level=3,
        recovery_score=82.0,
    )


class TestStripCodeFence:
    def test_plain(self):
        assert strip_code_fence('{"a": 1}') == '{"a": 1}'

    def test_json_fence(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fence('```\n{"a": 1}\n```\n') == '{"a": 1}'


class TestGenerateWorkout:
    async def test_parses_and_tags_result(self, settings, fake_anthropic, profile):
        client = fake_anthropic(f"```json\n{json.dumps(WORKOUT_REPLY)}\n```")
        trainer = AITrainer(client=client, settings=settings)

        workout = await trainer.generate_personalized_workout(profile, {"total_points": 900})

        assert workout["name"] == "Guard Footwork Builder"
        assert workout["phases"][0]["exercises"][0]["name"] == "Walking Backwards"
        assert workout["court_time"] == "full court"
        assert workout["ai_generated"] is True
        assert "generated_at" in workout

    async def test_prompt_uses_profile_and_defaults(self, settings, fake_anthropic, profile):
        client = fake_anthropic(json.dumps(WORKOUT_REPLY))
        trainer = AITrainer(client=client, settings=settings)

        await trainer.generate_personalized_workout(profile, {"total_points": 900}, {})

        call = client.messages.calls[0]
        prompt = call["messages"][0]["content"]
        assert call["max_tokens"] == 2000
        assert call["model"] == settings.ai_model
        assert "Experience Level: advanced" in prompt
        assert "Current Streak: 6 days" in prompt
        assert "Total Points: 900" in prompt
        assert "Desired Duration: 45 minutes" in prompt
        assert "Intensity Level: moderate" in prompt
        assert "Focus Area: overall skills" in prompt
        assert "Available Equipment: basketball, cones, ladder" in prompt

    async def test_prompt_uses_preferences(self, settings, fake_anthropic, profile):
        client = fake_anthropic(json.dumps(WORKOUT_REPLY))
        trainer = AITrainer(client=client, settings=settings)

        await trainer.generate_personalized_workout(
            profile, {}, {"duration": 30, "focus_area": "shooting", "equipment": ["rack"]}
        )

        prompt = client.messages.calls[0]["messages"][0]["content"]
        assert "Desired Duration: 30 minutes" in prompt
        assert "Focus Area: shooting" in prompt
        assert "Available Equipment: rack" in prompt

    async def test_camel_case_reply(self, settings, fake_anthropic, profile):
        reply = {"name": "W", "workoutType": "skills", "expectedHRZone": "Zone 3",
                 "phases": [{"name": "Main"}]}
        trainer = AITrainer(client=fake_anthropic(json.dumps(reply)), settings=settings)

        workout = await trainer.generate_personalized_workout(profile)

        assert workout["workout_type"] == "skills"
        assert workout["expected_hr_zone"] == "Zone 3"

    async def test_not_json(self, settings, fake_anthropic, profile):
        trainer = AITrainer(client=fake_anthropic("Here is your workout!"), settings=settings)

        with pytest.raises(AITrainerError) as exc_info:
            await trainer.generate_personalized_workout(profile)

        assert not isinstance(exc_info.value, AIResponseInvalidError)
        assert exc_info.value.message == "Failed to generate personalized workout"

    async def test_schema_mismatch(self, settings, fake_anthropic, profile):
        trainer = AITrainer(
            client=fake_anthropic(json.dumps({"name": "No phases"})), settings=settings
        )

        with pytest.raises(AIResponseInvalidError) as exc_info:
            await trainer.generate_personalized_workout(profile)

        assert exc_info.value.retryable is True
        assert exc_info.value.status_code == 502
        assert exc_info.value.errors

    async def test_api_failure(self, settings, fake_anthropic, profile):
        error = anthropic.APIConnectionError(
            request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        )
        trainer = AITrainer(client=fake_anthropic(error=error), settings=settings)

        with pytest.raises(AITrainerError) as exc_info:
            await trainer.generate_personalized_workout(profile)

        assert exc_info.value.retryable is False

    async def test_missing_api_key(self, settings, profile):
        trainer = AITrainer(settings=settings)

        with pytest.raises(AITrainerError, match="not configured"):
            await trainer.generate_personalized_workout(profile)


class TestGenerateInsights:
    async def test_insights(self, settings, fake_anthropic, profile):
        client = fake_anthropic(json.dumps(INSIGHTS_REPLY))
        trainer = AITrainer(client=client, settings=settings)
        sessions = [
            WorkoutSession(
                user_id="u",
                workout_id="w",
                status=SessionStatus.COMPLETED,
                total_duration=1800,
                average_heart_rate=148,
            )
        ]

        insights = await trainer.generate_insights(sessions, profile)

        assert insights["overall_progress"] == "Solid base"
        assert insights["recommendations"][0]["recommendation"] == "Add a rest day"
        assert "generated_at" in insights
        assert "ai_generated" not in insights

        call = client.messages.calls[0]
        assert call["max_tokens"] == 1500
        assert '"heart_rate": 148' in call["messages"][0]["content"]

    async def test_insights_missing_recommendations(self, settings, fake_anthropic, profile):
        reply = {"overall_progress": "ok", "motivational_note": "go"}
        trainer = AITrainer(client=fake_anthropic(json.dumps(reply)), settings=settings)

        with pytest.raises(AIResponseInvalidError):
            await trainer.generate_insights([], profile)
