"""Workout catalog models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Difficulty(str, Enum):
    """Workout and plan difficulty."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    PRO = "pro"


class WorkoutType(str, Enum):
    """Kind of training a workout targets."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    SKILLS = "skills"
    RECOVERY = "recovery"
    MIXED = "mixed"


@dataclass
class Exercise:
    """A single exercise within a workout template."""

    name: str
    order: int
    description: str | None = None
    sets: int | None = None
    reps: int | None = None
    duration: int | None = None  # seconds
    rest_time: int | None = None  # seconds
    instructions: str | None = None
    tips: str | None = None
    workout_id: str | None = None
    id: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "workout_id": self.workout_id,
            "name": self.name,
            "description": self.description,
            "sets": self.sets,
            "reps": self.reps,
            "duration": self.duration,
            "rest_time": self.rest_time,
            "order": self.order,
            "instructions": self.instructions,
            "tips": self.tips,
        }

    @classmethod
    def from_dict(cls, data: dict, order: int | None = None) -> "Exercise":
        return cls(
            name=data["name"],
            order=data.get("order", order if order is not None else 1),
            description=data.get("description"),
            sets=data.get("sets"),
            reps=data.get("reps"),
            duration=data.get("duration"),
            rest_time=data.get("rest_time"),
            instructions=data.get("instructions"),
            tips=data.get("tips"),
        )


@dataclass
class Workout:
    """A named exercise template. Immutable after creation."""

    name: str
    difficulty: Difficulty
    workout_type: WorkoutType
    description: str | None = None
    duration: int | None = None  # minutes
    methodology: str | None = None
    is_popular: bool = False
    ai_generated: bool = False
    created_by: str | None = None
    exercises: list[Exercise] = field(default_factory=list)
    id: str | None = None
    created_at: datetime | None = None

    def to_dict(self, include_exercises: bool = True) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "duration": self.duration,
            "difficulty": self.difficulty.value,
            "workout_type": self.workout_type.value,
            "methodology": self.methodology,
            "is_popular": self.is_popular,
            "ai_generated": self.ai_generated,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_exercises:
            data["exercises"] = [ex.to_dict() for ex in self.exercises]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Workout":
        """Create from a catalog or authoring dictionary."""
        return cls(
            name=data["name"],
            difficulty=Difficulty(data["difficulty"]),
            workout_type=WorkoutType(data["workout_type"]),
            description=data.get("description"),
            duration=data.get("duration"),
            methodology=data.get("methodology"),
            is_popular=data.get("is_popular", False),
            ai_generated=data.get("ai_generated", False),
            created_by=data.get("created_by"),
            exercises=[
                Exercise.from_dict(ex, order=i + 1)
                for i, ex in enumerate(data.get("exercises", []))
            ],
        )
