"""Structured output definitions for AI trainer responses.

Model output is validated against these before it reaches a caller. Keys
may come back in snake_case or camelCase; unknown keys are kept.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _AIOutput(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class GeneratedExercise(_AIOutput):
    name: str = Field(min_length=1)
    duration: float | None = None
    sets: int | None = None
    reps: int | str | None = None
    instructions: str | None = None
    tips: str | None = None


class WorkoutPhase(_AIOutput):
    name: str = Field(min_length=1)
    duration: float | None = None
    description: str | None = None
    exercises: list[GeneratedExercise] = Field(default_factory=list)


class GeneratedWorkout(_AIOutput):
    name: str = Field(min_length=1)
    description: str | None = None
    duration: int | None = None
    difficulty: str | None = None
    workout_type: str | None = None
    intensity_level: int | None = None
    expected_hr_zone: str | None = Field(default=None, alias="expectedHRZone")
    phases: list[WorkoutPhase] = Field(min_length=1)
    coaching_notes: str | None = None
    goata_focus: str | None = None


class PerformanceTrend(_AIOutput):
    metric: str
    trend: str
    insight: str | None = None


class Recommendation(_AIOutput):
    category: str | None = None
    priority: str | None = None
    recommendation: str = Field(min_length=1)


class WorkoutInsights(_AIOutput):
    overall_progress: str
    training_consistency: str | None = None
    performance_trends: list[PerformanceTrend] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(min_length=1)
    next_week_focus: str | None = None
    motivational_note: str
