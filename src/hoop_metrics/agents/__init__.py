"""AI trainer agents for hoop-metrics."""

from .output_specs import GeneratedWorkout, WorkoutInsights
from .trainer import AITrainer

__all__ = ["AITrainer", "GeneratedWorkout", "WorkoutInsights"]
