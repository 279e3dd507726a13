"""Seed data for hoop-metrics."""

from .catalog import SAMPLE_INBOX_ITEMS, SEED_ACHIEVEMENTS, SEED_PLANS, SEED_WORKOUTS

__all__ = ["SAMPLE_INBOX_ITEMS", "SEED_ACHIEVEMENTS", "SEED_PLANS", "SEED_WORKOUTS"]
