"""Application services for hoop-metrics."""

from .dashboard import DashboardService
from .inbox import InboxService
from .plans import PlanService
from .sessions import SessionService

__all__ = ["DashboardService", "InboxService", "PlanService", "SessionService"]
