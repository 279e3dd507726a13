"""Fitness plan enrollment and progress tracking."""

from datetime import datetime
from pathlib import Path

import aiosqlite
from loguru import logger

from ..db.engine import get_db_path, transaction
from ..db.repositories import (
    ActivityFeedRepository,
    FitnessPlanRepository,
    SessionRepository,
    UserPlanRepository,
)
from ..errors import ConflictError, NotFoundError
from ..models.plan import FitnessPlan, PlanStatus, UserFitnessPlan
from ..models.social import ActivityEntry, ActivityType


class PlanService:
    """Service for starting plans and reporting progress against them."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()
        self.plans = FitnessPlanRepository(self.db_path)
        self.enrollments = UserPlanRepository(self.db_path)

    async def list_plans(self, limit: int = 20) -> list[FitnessPlan]:
        return await self.plans.list_plans(limit)

    async def get_plan_with_workouts(self, plan_id: str) -> FitnessPlan:
        plan = await self.plans.get(plan_id, include_schedule=True)
        if plan is None:
            raise NotFoundError("Fitness plan not found")
        return plan

    async def start_plan(self, user_id: str, plan_id: str) -> UserFitnessPlan:
        """Enroll a user in a plan.

        The duplicate check and the insert share one write transaction; the
        unique index on active enrollments backs it up.

        Raises:
            NotFoundError: If the plan does not exist
            ConflictError: If the user already has an active enrollment for it
        """
        async with transaction(self.db_path) as db:
            plans = FitnessPlanRepository(self.db_path, conn=db)
            enrollments = UserPlanRepository(self.db_path, conn=db)

            plan = await plans.get(plan_id)
            if plan is None:
                raise NotFoundError("Fitness plan not found")

            if await enrollments.get_active(user_id, plan_id) is not None:
                raise ConflictError("You already have an active plan with this ID")

            enrollment = UserFitnessPlan(user_id=user_id, plan_id=plan_id)
            enrollment.start(await plans.count_workouts(plan_id))
            await enrollments.create(enrollment)

            await ActivityFeedRepository(self.db_path, conn=db).add(
                ActivityEntry(
                    user_id=user_id,
                    activity_type=ActivityType.PLAN_STARTED,
                    title="Started a fitness plan",
                    description=f"Started {plan.name}",
                    metadata={"plan_id": plan_id, "user_plan_id": enrollment.id},
                )
            )

        logger.info(
            f"User {user_id} started plan {plan_id} "
            f"({enrollment.total_workouts_in_plan} workouts)"
        )
        return enrollment

    async def get_progress(self, user_id: str, plan_id: str) -> dict:
        """Composite read-only view of a user's enrollment in a plan."""
        enrollment = await self.enrollments.get_latest_for_plan(user_id, plan_id)
        if enrollment is None:
            raise NotFoundError("Plan progress not found")

        plan = await self.plans.get(plan_id, include_schedule=True)
        completed = await SessionRepository(self.db_path).list_completed_for_enrollment(
            enrollment.id
        )

        return {
            "user_plan": enrollment.to_dict(),
            "plan": plan.to_dict(),
            "completed_sessions": [
                {
                    "session": session.to_dict(),
                    "workout": workout.to_dict(include_exercises=False) if workout else None,
                }
                for session, workout in completed
            ],
            "plan_structure": [pw.to_dict() for pw in plan.schedule],
            "progress_stats": enrollment.get_progress_stats(),
        }

    async def list_active_plans(self, user_id: str) -> list[dict]:
        return [
            {"user_plan": enrollment.to_dict(), "plan": plan.to_dict()}
            for enrollment, plan in await self.enrollments.list_active(user_id)
        ]

    async def pause_plan(self, user_id: str, user_plan_id: str) -> UserFitnessPlan:
        return await self._change_status(
            user_id, user_plan_id, PlanStatus.ACTIVE, PlanStatus.PAUSED
        )

    async def resume_plan(self, user_id: str, user_plan_id: str) -> UserFitnessPlan:
        return await self._change_status(
            user_id, user_plan_id, PlanStatus.PAUSED, PlanStatus.ACTIVE
        )

    async def _change_status(
        self,
        user_id: str,
        user_plan_id: str,
        from_status: PlanStatus,
        to_status: PlanStatus,
    ) -> UserFitnessPlan:
        async with transaction(self.db_path) as db:
            enrollments = UserPlanRepository(self.db_path, conn=db)
            enrollment = await enrollments.get_owned(user_id, user_plan_id)
            if enrollment is None:
                raise NotFoundError("Plan enrollment not found")
            if enrollment.status == to_status:
                return enrollment
            if enrollment.status != from_status:
                raise ConflictError(
                    f"Cannot change a {enrollment.status.value} plan to {to_status.value}"
                )
            await enrollments.transition(user_plan_id, from_status, to_status)
            enrollment = await enrollments.get(user_plan_id)

        logger.info(f"Plan enrollment {user_plan_id} is now {to_status.value}")
        return enrollment

    async def record_workout_completed(
        self,
        conn: aiosqlite.Connection,
        user_plan_id: str,
        completed_at: datetime,
    ) -> UserFitnessPlan | None:
        """Advance an enrollment after one of its sessions completes.

        Runs on the caller's connection so it commits or rolls back together
        with the session update.
        """
        enrollments = UserPlanRepository(self.db_path, conn=conn)
        enrollment = await enrollments.get(user_plan_id)
        if enrollment is None:
            return None
        if enrollment.status == PlanStatus.COMPLETED:
            logger.debug(f"Enrollment {user_plan_id} already completed")
            return enrollment

        weeks = await FitnessPlanRepository(self.db_path, conn=conn).scheduled_weeks(
            enrollment.plan_id
        )
        enrollment.record_workout(weeks, completed_at)
        await enrollments.save_progress(enrollment)

        if enrollment.status == PlanStatus.COMPLETED:
            logger.info(f"Enrollment {user_plan_id} completed")
        return enrollment
