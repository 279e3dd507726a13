"""Fitness plan and enrollment models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from .workout import Difficulty, Workout


class PlanType(str, Enum):
    """Focus of a multi-week plan."""

    STRENGTH = "strength"
    BASKETBALL = "basketball"
    CONDITIONING = "conditioning"
    SKILLS = "skills"
    RECOVERY = "recovery"
    MIXED = "mixed"


class PlanStatus(str, Enum):
    """Enrollment status."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


@dataclass
class PlanWorkout:
    """A scheduled slot in a plan: which workout on which week/day."""

    plan_id: str
    workout_id: str
    week: int
    day: int  # 1-7
    order: int = 1
    is_optional: bool = False
    notes: str | None = None
    workout: Workout | None = None
    id: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "plan_id": self.plan_id,
            "workout_id": self.workout_id,
            "week": self.week,
            "day": self.day,
            "order": self.order,
            "is_optional": self.is_optional,
            "notes": self.notes,
            "workout": self.workout.to_dict(include_exercises=False) if self.workout else None,
        }


@dataclass
class FitnessPlan:
    """A named, multi-week structured program."""

    name: str
    plan_type: PlanType
    difficulty: Difficulty
    description: str | None = None
    methodology: str | None = None
    duration: int | None = None  # weeks
    workouts_per_week: int | None = None
    ai_generated: bool = False
    is_popular: bool = False
    created_by: str | None = None
    schedule: list[PlanWorkout] = field(default_factory=list)
    id: str | None = None
    created_at: datetime | None = None

    def to_dict(self, include_schedule: bool = False) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "methodology": self.methodology,
            "plan_type": self.plan_type.value,
            "difficulty": self.difficulty.value,
            "duration": self.duration,
            "workouts_per_week": self.workouts_per_week,
            "ai_generated": self.ai_generated,
            "is_popular": self.is_popular,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_schedule:
            data["plan_workouts"] = [pw.to_dict() for pw in self.schedule]
        return data


def format_percentage(completed: int, total: int) -> str:
    """Completion percentage as a two-decimal string, capped at 100."""
    if total <= 0:
        return "0.00"
    pct = min(Decimal(completed) * 100 / Decimal(total), Decimal(100))
    return str(pct.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass
class UserFitnessPlan:
    """A user's enrollment in a fitness plan.

    ``total_workouts_in_plan`` is snapshotted when the plan is started, so
    later edits to the plan schedule do not move this user's denominator.
    """

    user_id: str
    plan_id: str
    status: PlanStatus = PlanStatus.ACTIVE
    current_week: int = 1
    total_workouts_completed: int = 0
    total_workouts_in_plan: int = 0
    completion_percentage: str = "0.00"
    start_date: datetime | None = None
    last_workout_date: datetime | None = None
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def start(self, total_workouts_in_plan: int) -> None:
        """Reset counters for a fresh enrollment."""
        self.start_date = datetime.now()
        self.status = PlanStatus.ACTIVE
        self.current_week = 1
        self.total_workouts_completed = 0
        self.total_workouts_in_plan = total_workouts_in_plan
        self.completion_percentage = format_percentage(0, total_workouts_in_plan)

    def record_workout(self, scheduled_weeks: list[int], completed_at: datetime) -> None:
        """Count one completed workout against this enrollment.

        Args:
            scheduled_weeks: Week number of every scheduled workout, in
                week/day/order sequence
            completed_at: When the workout was completed
        """
        self.total_workouts_completed += 1
        self.last_workout_date = completed_at
        self.completion_percentage = format_percentage(
            self.total_workouts_completed, self.total_workouts_in_plan
        )

        if scheduled_weeks:
            next_index = min(self.total_workouts_completed, len(scheduled_weeks) - 1)
            self.current_week = scheduled_weeks[next_index]

        if 0 < self.total_workouts_in_plan <= self.total_workouts_completed:
            self.status = PlanStatus.COMPLETED

    def get_progress_stats(self) -> dict:
        return {
            "total_workouts": self.total_workouts_in_plan,
            "completed_workouts": self.total_workouts_completed,
            "completion_percentage": self.completion_percentage,
            "current_week": self.current_week,
            "status": self.status.value,
        }

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "plan_id": self.plan_id,
            "status": self.status.value,
            "current_week": self.current_week,
            "total_workouts_completed": self.total_workouts_completed,
            "total_workouts_in_plan": self.total_workouts_in_plan,
            "completion_percentage": self.completion_percentage,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "last_workout_date": (
                self.last_workout_date.isoformat() if self.last_workout_date else None
            ),
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
