"""Request-scoped services built from application state."""

from fastapi import Request

from ..agents import AITrainer
from ..services import DashboardService, InboxService, PlanService, SessionService


def get_session_service(request: Request) -> SessionService:
    return SessionService(request.app.state.db_path, request.app.state.settings)


def get_plan_service(request: Request) -> PlanService:
    return PlanService(request.app.state.db_path)


def get_inbox_service(request: Request) -> InboxService:
    return InboxService(request.app.state.db_path, request.app.state.settings)


def get_dashboard_service(request: Request) -> DashboardService:
    return DashboardService(request.app.state.db_path, request.app.state.settings)


def get_trainer(request: Request) -> AITrainer:
    return request.app.state.trainer
