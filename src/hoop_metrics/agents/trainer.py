"""AI trainer: personalized workouts and training insights from a hosted model."""

import json
import re
from datetime import datetime

import anthropic
from loguru import logger
from pydantic import BaseModel, ValidationError

from ..config import Settings, get_settings
from ..errors import AIResponseInvalidError, AITrainerError
from ..models.session import WorkoutSession
from ..models.user import UserProfile
from .output_specs import GeneratedWorkout, WorkoutInsights
from .prompts import (
    TRAINING_ANALYST_SYSTEM,
    WORKOUT_COACH_SYSTEM,
    build_insights_prompt,
    build_workout_prompt,
)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding Markdown code fence, if present."""
    text = text.strip()
    match = _CODE_FENCE.match(text)
    return match.group(1) if match else text


class AITrainer:
    """Prompt-templating adapter around the Anthropic Messages API.

    Each call builds a prompt, sends it once and validates the JSON reply.
    Nothing is retried or cached.
    """

    def __init__(self, client: anthropic.AsyncAnthropic | None = None, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            if not self.settings.anthropic_api_key:
                raise AITrainerError("AI trainer is not configured")
            self._client = anthropic.AsyncAnthropic(api_key=self.settings.anthropic_api_key)
        return self._client

    async def generate_personalized_workout(
        self,
        profile: UserProfile | None,
        stats: dict | None = None,
        preferences: dict | None = None,
    ) -> dict:
        """Generate a workout tailored to the user's profile and preferences.

        Raises:
            AITrainerError: If the model call fails or the reply is not JSON
            AIResponseInvalidError: If the reply does not describe a workout
        """
        workout = await self._generate(
            system=WORKOUT_COACH_SYSTEM,
            prompt=build_workout_prompt(profile, stats, preferences),
            max_tokens=self.settings.ai_workout_max_tokens,
            output_model=GeneratedWorkout,
            failure_message="Failed to generate personalized workout",
        )
        workout["ai_generated"] = True
        workout["generated_at"] = datetime.now().isoformat()
        return workout

    async def generate_insights(
        self,
        sessions: list[WorkoutSession],
        profile: UserProfile | None,
    ) -> dict:
        """Analyze recent sessions and return trends and recommendations."""
        insights = await self._generate(
            system=TRAINING_ANALYST_SYSTEM,
            prompt=build_insights_prompt(sessions, profile),
            max_tokens=self.settings.ai_insights_max_tokens,
            output_model=WorkoutInsights,
            failure_message="Failed to generate workout insights",
        )
        insights["generated_at"] = datetime.now().isoformat()
        return insights

    async def _generate(
        self,
        system: str,
        prompt: str,
        max_tokens: int,
        output_model: type[BaseModel],
        failure_message: str,
    ) -> dict:
        try:
            response = await self.client.messages.create(
                model=self.settings.ai_model,
                max_tokens=max_tokens,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            logger.error(f"AI model call failed: {e}")
            raise AITrainerError(failure_message) from e

        text = next(
            (block.text for block in response.content if getattr(block, "type", None) == "text"),
            None,
        )
        if not text:
            logger.error("AI model returned no text content")
            raise AITrainerError(failure_message)

        try:
            data = json.loads(strip_code_fence(text))
        except json.JSONDecodeError as e:
            logger.error(f"AI model returned non-JSON content: {e}")
            raise AITrainerError(failure_message) from e

        try:
            validated = output_model.model_validate(data)
        except ValidationError as e:
            logger.warning(f"AI response failed {output_model.__name__} validation: {e}")
            raise AIResponseInvalidError(
                "AI trainer returned an invalid response",
                errors=e.errors(include_url=False, include_context=False, include_input=False),
            ) from e

        return validated.model_dump()
