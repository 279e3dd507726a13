"""API routers."""

from . import ai, auth, dashboard, inbox, plans, profile, sessions, user_plans, workouts

__all__ = [
    "ai",
    "auth",
    "dashboard",
    "inbox",
    "plans",
    "profile",
    "sessions",
    "user_plans",
    "workouts",
]
