"""Request bodies. Keys are accepted in snake_case or camelCase."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.session import SessionStatus
from ..models.user import ExperienceLevel


class RequestModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SessionCreate(RequestModel):
    workout_id: str = Field(min_length=1)
    user_plan_id: str | None = None
    status: SessionStatus = SessionStatus.ACTIVE
    started_at: datetime | None = None
    completed_at: datetime | None = None
    total_duration: int | None = Field(default=None, ge=0)
    calories_burned: int | None = Field(default=None, ge=0)
    average_heart_rate: int | None = Field(default=None, ge=0)
    max_heart_rate: int | None = Field(default=None, ge=0)
    notes: str | None = None


class SessionUpdate(RequestModel):
    status: SessionStatus | None = None
    completed_at: datetime | None = None
    total_duration: int | None = Field(default=None, ge=0)
    calories_burned: int | None = Field(default=None, ge=0)
    average_heart_rate: int | None = Field(default=None, ge=0)
    max_heart_rate: int | None = Field(default=None, ge=0)
    notes: str | None = None


class ProfileUpdate(RequestModel):
    experience: ExperienceLevel | None = None
    age: int | None = Field(default=None, ge=0, le=120)
    height: int | None = Field(default=None, gt=0)
    weight: float | None = Field(default=None, gt=0)
    goals: str | None = None
    preferences: dict | None = None
    skill_level: int | None = Field(default=None, ge=1)
    recovery_score: float | None = Field(default=None, ge=0, le=100)


class CategorizeRequest(RequestModel):
    category: str = Field(min_length=1)


class StartPlanRequest(RequestModel):
    plan_id: str = Field(min_length=1)


class WorkoutPreferences(RequestModel):
    duration: int | None = Field(default=None, gt=0)
    intensity: str | None = None
    focus_area: str | None = None
    equipment: list[str] | None = None


class GenerateWorkoutRequest(RequestModel):
    preferences: WorkoutPreferences = Field(default_factory=WorkoutPreferences)
