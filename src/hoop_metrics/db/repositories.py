"""Data access layer for hoop-metrics."""

import json
import sqlite3
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date, datetime, timedelta
from pathlib import Path

import aiosqlite

from ..errors import ConflictError
from ..models.inbox import InboxStatus, WorkoutInboxItem
from ..models.plan import FitnessPlan, PlanStatus, PlanType, PlanWorkout, UserFitnessPlan
from ..models.session import UPDATABLE_SESSION_FIELDS, SessionStatus, WorkoutSession
from ..models.social import Achievement, AchievementCategory, ActivityEntry, ActivityType
from ..models.user import EDITABLE_PROFILE_FIELDS, ExperienceLevel, User, UserProfile
from ..models.workout import Difficulty, Exercise, Workout, WorkoutType
from .engine import connect, get_db_path, new_id, now_iso, transaction


def _parse_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _iso(value: datetime | date | None) -> str | None:
    return value.isoformat() if value else None


class BaseRepository:
    """Shared connection handling.

    A repository either opens a connection per call, or is bound to the
    connection of an enclosing ``transaction()`` so several repositories can
    take part in one atomic write.
    """

    def __init__(self, db_path: Path | None = None, conn: aiosqlite.Connection | None = None):
        self.db_path = db_path or get_db_path()
        self.conn = conn

    @asynccontextmanager
    async def _connect(self, write: bool = False) -> AsyncIterator[aiosqlite.Connection]:
        if self.conn is not None:
            yield self.conn
        elif write:
            async with transaction(self.db_path) as db:
                yield db
        else:
            async with connect(self.db_path) as db:
                yield db


class UserRepository(BaseRepository):
    """Repository for users."""

    async def upsert(self, user: User) -> User:
        """Create or update a user, creating their profile if missing."""
        if user.id is None:
            user.id = new_id()
        timestamp = now_iso()
        async with self._connect(write=True) as db:
            await db.execute(
                """
                INSERT INTO users
                (id, email, first_name, last_name, profile_image_url, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    email = excluded.email,
                    first_name = excluded.first_name,
                    last_name = excluded.last_name,
                    profile_image_url = excluded.profile_image_url,
                    updated_at = excluded.updated_at
                """,
                (
                    user.id,
                    user.email,
                    user.first_name,
                    user.last_name,
                    user.profile_image_url,
                    timestamp,
                    timestamp,
                ),
            )
            await db.execute(
                """
                INSERT OR IGNORE INTO user_profiles (id, user_id, updated_at)
                VALUES (?, ?, ?)
                """,
                (new_id(), user.id, timestamp),
            )
            cursor = await db.execute("SELECT * FROM users WHERE id = ?", (user.id,))
            return self._row_to_user(await cursor.fetchone())

    async def get(self, user_id: str) -> User | None:
        """Get a user by ID."""
        async with self._connect() as db:
            cursor = await db.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def get_by_email(self, email: str) -> User | None:
        async with self._connect() as db:
            cursor = await db.execute("SELECT * FROM users WHERE email = ?", (email,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    async def list_all(self) -> list[User]:
        """List all users, oldest first."""
        async with self._connect() as db:
            cursor = await db.execute("SELECT * FROM users ORDER BY created_at, rowid")
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        return User(
            id=row["id"],
            email=row["email"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            profile_image_url=row["profile_image_url"],
            created_at=_parse_dt(row["created_at"]),
            updated_at=_parse_dt(row["updated_at"]),
        )


class UserProfileRepository(BaseRepository):
    """Repository for user profiles and their training counters."""

    async def get_by_user(self, user_id: str) -> UserProfile | None:
        """Get the profile belonging to a user."""
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT * FROM user_profiles WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def update_fields(self, user_id: str, changes: dict) -> UserProfile | None:
        """Apply a partial edit of user-editable fields.

        Keys outside the editable set are ignored.
        """
        values = {}
        for key, value in changes.items():
            if key not in EDITABLE_PROFILE_FIELDS:
                continue
            if key == "preferences":
                value = json.dumps(value or {})
            elif key == "experience":
                value = ExperienceLevel(value).value
            values[key] = value

        async with self._connect(write=True) as db:
            if values:
                assignments = ", ".join(f"{key} = ?" for key in values)
                await db.execute(
                    f"UPDATE user_profiles SET {assignments}, updated_at = ? WHERE user_id = ?",
                    (*values.values(), now_iso(), user_id),
                )
            cursor = await db.execute(
                "SELECT * FROM user_profiles WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            return self._row_to_profile(row) if row else None

    async def record_completion(self, user_id: str, points: int, completed_on: date) -> UserProfile:
        """Count one completed workout against the profile counters.

        Counters are updated in place so concurrent completions cannot lose
        increments. ``day_streak`` grows when the previous workout day was
        yesterday, holds on the same day and restarts at 1 after a gap.
        """
        today = completed_on.isoformat()
        yesterday = (completed_on - timedelta(days=1)).isoformat()
        async with self._connect(write=True) as db:
            await db.execute(
                "INSERT OR IGNORE INTO user_profiles (id, user_id, updated_at) VALUES (?, ?, ?)",
                (new_id(), user_id, now_iso()),
            )
            await db.execute(
                """
                UPDATE user_profiles SET
                    total_workouts = total_workouts + 1,
                    current_streak = current_streak + 1,
                    longest_streak = MAX(longest_streak, current_streak + 1),
                    total_points = total_points + ?,
                    day_streak = CASE
                        WHEN last_workout_date >= ? THEN MAX(day_streak, 1)
                        WHEN last_workout_date = ? THEN day_streak + 1
                        ELSE 1
                    END,
                    last_workout_date = MAX(COALESCE(last_workout_date, ?), ?),
                    updated_at = ?
                WHERE user_id = ?
                """,
                (points, today, yesterday, today, today, now_iso(), user_id),
            )
            cursor = await db.execute(
                "SELECT * FROM user_profiles WHERE user_id = ?", (user_id,)
            )
            return self._row_to_profile(await cursor.fetchone())

    async def get_leaderboard(self, limit: int = 10) -> list[tuple[User, UserProfile]]:
        """Users ranked by total points, highest first."""
        async with self._connect() as db:
            cursor = await db.execute(
                """
                SELECT p.*, u.id AS u_id, u.email AS u_email,
                       u.first_name AS u_first_name, u.last_name AS u_last_name,
                       u.profile_image_url AS u_profile_image_url,
                       u.created_at AS u_created_at, u.updated_at AS u_updated_at
                FROM user_profiles p
                JOIN users u ON u.id = p.user_id
                ORDER BY p.total_points DESC, u.created_at
                LIMIT ?
                """,
                (limit,),
            )
            rows = await cursor.fetchall()
            return [(_prefixed_user(row), self._row_to_profile(row)) for row in rows]

    @staticmethod
    def _row_to_profile(row: aiosqlite.Row) -> UserProfile:
        """Convert a database row to a UserProfile."""
        last_workout = row["last_workout_date"]
        return UserProfile(
            id=row["id"],
            user_id=row["user_id"],
            experience=ExperienceLevel(row["experience"] or "beginner"),
            age=row["age"],
            height=row["height"],
            weight=row["weight"],
            goals=row["goals"],
            preferences=json.loads(row["preferences"] or "{}"),
            total_workouts=row["total_workouts"] or 0,
            current_streak=row["current_streak"] or 0,
            longest_streak=row["longest_streak"] or 0,
            total_points=row["total_points"] or 0,
            skill_level=row["skill_level"] or 1,
            recovery_score=row["recovery_score"] if row["recovery_score"] is not None else 75.0,
            day_streak=row["day_streak"] or 0,
            last_workout_date=date.fromisoformat(last_workout) if last_workout else None,
            updated_at=_parse_dt(row["updated_at"]),
        )


def _prefixed_user(row: aiosqlite.Row) -> User:
    """Build a User from ``u_``-prefixed join columns."""
    return User(
        id=row["u_id"],
        email=row["u_email"],
        first_name=row["u_first_name"],
        last_name=row["u_last_name"],
        profile_image_url=row["u_profile_image_url"],
        created_at=_parse_dt(row["u_created_at"]),
        updated_at=_parse_dt(row["u_updated_at"]),
    )


class WorkoutRepository(BaseRepository):
    """Repository for the workout catalog."""

    async def create(self, workout: Workout) -> str:
        """Insert a workout and its exercises."""
        workout.id = workout.id or new_id()
        async with self._connect(write=True) as db:
            await db.execute(
                """
                INSERT INTO workouts
                (id, name, description, duration, difficulty, workout_type,
                 methodology, is_popular, ai_generated, created_by, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    workout.id,
                    workout.name,
                    workout.description,
                    workout.duration,
                    workout.difficulty.value,
                    workout.workout_type.value,
                    workout.methodology,
                    int(workout.is_popular),
                    int(workout.ai_generated),
                    workout.created_by,
                    now_iso(),
                ),
            )
            for exercise in workout.exercises:
                exercise.id = exercise.id or new_id()
                exercise.workout_id = workout.id
                await db.execute(
                    """
                    INSERT INTO exercises
                    (id, workout_id, name, description, sets, reps, duration,
                     rest_time, sort_order, instructions, tips)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        exercise.id,
                        workout.id,
                        exercise.name,
                        exercise.description,
                        exercise.sets,
                        exercise.reps,
                        exercise.duration,
                        exercise.rest_time,
                        exercise.order,
                        exercise.instructions,
                        exercise.tips,
                    ),
                )
        return workout.id

    async def get(self, workout_id: str, include_exercises: bool = True) -> Workout | None:
        """Get a workout by ID, with its exercises in order."""
        async with self._connect() as db:
            cursor = await db.execute("SELECT * FROM workouts WHERE id = ?", (workout_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            workout = self._row_to_workout(row)
            if include_exercises:
                cursor = await db.execute(
                    "SELECT * FROM exercises WHERE workout_id = ? ORDER BY sort_order",
                    (workout_id,),
                )
                workout.exercises = [
                    self._row_to_exercise(ex) for ex in await cursor.fetchall()
                ]
            return workout

    async def list_recent(self, limit: int = 20) -> list[Workout]:
        """List the newest workouts, without exercises."""
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT * FROM workouts ORDER BY created_at DESC, rowid DESC LIMIT ?",
                (limit,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_workout(row) for row in rows]

    @staticmethod
    def _row_to_workout(row: aiosqlite.Row) -> Workout:
        return Workout(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            duration=row["duration"],
            difficulty=Difficulty(row["difficulty"]),
            workout_type=WorkoutType(row["workout_type"]),
            methodology=row["methodology"],
            is_popular=bool(row["is_popular"]),
            ai_generated=bool(row["ai_generated"]),
            created_by=row["created_by"],
            created_at=_parse_dt(row["created_at"]),
        )

    @staticmethod
    def _row_to_exercise(row: aiosqlite.Row) -> Exercise:
        return Exercise(
            id=row["id"],
            workout_id=row["workout_id"],
            name=row["name"],
            description=row["description"],
            sets=row["sets"],
            reps=row["reps"],
            duration=row["duration"],
            rest_time=row["rest_time"],
            order=row["sort_order"],
            instructions=row["instructions"],
            tips=row["tips"],
        )


class FitnessPlanRepository(BaseRepository):
    """Repository for the fitness plan catalog."""

    async def list_plans(self, limit: int = 20) -> list[FitnessPlan]:
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT * FROM fitness_plans ORDER BY created_at DESC, rowid DESC LIMIT ?",
                (limit,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_plan(row) for row in rows]

    async def get(self, plan_id: str, include_schedule: bool = False) -> FitnessPlan | None:
        """Get a plan, optionally with its schedule ordered by week, day and order."""
        async with self._connect() as db:
            cursor = await db.execute("SELECT * FROM fitness_plans WHERE id = ?", (plan_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            plan = self._row_to_plan(row)
            if include_schedule:
                cursor = await db.execute(
                    """
                    SELECT pw.*, w.name AS w_name, w.description AS w_description,
                           w.duration AS w_duration, w.difficulty AS w_difficulty,
                           w.workout_type AS w_workout_type, w.methodology AS w_methodology,
                           w.is_popular AS w_is_popular, w.ai_generated AS w_ai_generated,
                           w.created_by AS w_created_by, w.created_at AS w_created_at
                    FROM plan_workouts pw
                    JOIN workouts w ON w.id = pw.workout_id
                    WHERE pw.plan_id = ?
                    ORDER BY pw.week, pw.day, pw.sort_order
                    """,
                    (plan_id,),
                )
                plan.schedule = [
                    self._row_to_plan_workout(pw) for pw in await cursor.fetchall()
                ]
            return plan

    async def count_workouts(self, plan_id: str) -> int:
        """Number of scheduled workouts in a plan."""
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM plan_workouts WHERE plan_id = ?", (plan_id,)
            )
            row = await cursor.fetchone()
            return row[0]

    async def scheduled_weeks(self, plan_id: str) -> list[int]:
        """Week number of each scheduled workout, in schedule order."""
        async with self._connect() as db:
            cursor = await db.execute(
                """
                SELECT week FROM plan_workouts WHERE plan_id = ?
                ORDER BY week, day, sort_order
                """,
                (plan_id,),
            )
            return [row["week"] for row in await cursor.fetchall()]

    @staticmethod
    def _row_to_plan(row: aiosqlite.Row) -> FitnessPlan:
        return FitnessPlan(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            methodology=row["methodology"],
            plan_type=PlanType(row["plan_type"]),
            difficulty=Difficulty(row["difficulty"]),
            duration=row["duration"],
            workouts_per_week=row["workouts_per_week"],
            ai_generated=bool(row["ai_generated"]),
            is_popular=bool(row["is_popular"]),
            created_by=row["created_by"],
            created_at=_parse_dt(row["created_at"]),
        )

    @staticmethod
    def _row_to_plan_workout(row: aiosqlite.Row) -> PlanWorkout:
        workout = Workout(
            id=row["workout_id"],
            name=row["w_name"],
            description=row["w_description"],
            duration=row["w_duration"],
            difficulty=Difficulty(row["w_difficulty"]),
            workout_type=WorkoutType(row["w_workout_type"]),
            methodology=row["w_methodology"],
            is_popular=bool(row["w_is_popular"]),
            ai_generated=bool(row["w_ai_generated"]),
            created_by=row["w_created_by"],
            created_at=_parse_dt(row["w_created_at"]),
        )
        return PlanWorkout(
            id=row["id"],
            plan_id=row["plan_id"],
            workout_id=row["workout_id"],
            week=row["week"],
            day=row["day"],
            order=row["sort_order"],
            is_optional=bool(row["is_optional"]),
            notes=row["notes"],
            workout=workout,
        )


class SessionRepository(BaseRepository):
    """Repository for workout sessions."""

    async def create(self, session: WorkoutSession) -> WorkoutSession:
        session.id = session.id or new_id()
        session.started_at = session.started_at or datetime.now()
        async with self._connect(write=True) as db:
            await db.execute(
                """
                INSERT INTO workout_sessions
                (id, user_id, workout_id, user_plan_id, status, started_at, completed_at,
                 total_duration, calories_burned, average_heart_rate, max_heart_rate, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    session.id,
                    session.user_id,
                    session.workout_id,
                    session.user_plan_id,
                    session.status.value,
                    _iso(session.started_at),
                    _iso(session.completed_at),
                    session.total_duration,
                    session.calories_burned,
                    session.average_heart_rate,
                    session.max_heart_rate,
                    session.notes,
                ),
            )
        return session

    async def get_owned(self, user_id: str, session_id: str) -> WorkoutSession | None:
        """Get a session only if it belongs to the user."""
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT * FROM workout_sessions WHERE id = ? AND user_id = ?",
                (session_id, user_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_session(row)

    async def list_for_user(self, user_id: str, limit: int = 10) -> list[WorkoutSession]:
        """Most recently started sessions first."""
        async with self._connect() as db:
            cursor = await db.execute(
                """
                SELECT * FROM workout_sessions WHERE user_id = ?
                ORDER BY started_at DESC, rowid DESC LIMIT ?
                """,
                (user_id, limit),
            )
            rows = await cursor.fetchall()
            return [self._row_to_session(row) for row in rows]

    async def update_fields(self, session_id: str, changes: dict) -> None:
        """Persist the directly editable fields of a partial update."""
        values = {
            key: (_iso(value) if isinstance(value, datetime) else value)
            for key, value in changes.items()
            if key in UPDATABLE_SESSION_FIELDS
        }
        if not values:
            return
        assignments = ", ".join(f"{key} = ?" for key in values)
        async with self._connect(write=True) as db:
            await db.execute(
                f"UPDATE workout_sessions SET {assignments} WHERE id = ?",
                (*values.values(), session_id),
            )

    async def set_status(self, session_id: str, status: SessionStatus) -> None:
        async with self._connect(write=True) as db:
            await db.execute(
                "UPDATE workout_sessions SET status = ? WHERE id = ? AND status != 'completed'",
                (status.value, session_id),
            )

    async def mark_completed(self, session_id: str, completed_at: datetime) -> bool:
        """Move a session to completed.

        Returns:
            True if this call made the transition, False if the session was
            already completed
        """
        async with self._connect(write=True) as db:
            cursor = await db.execute(
                """
                UPDATE workout_sessions SET status = 'completed', completed_at = ?
                WHERE id = ? AND status != 'completed'
                """,
                (_iso(completed_at), session_id),
            )
            return cursor.rowcount == 1

    async def list_completed_for_enrollment(
        self, user_plan_id: str
    ) -> list[tuple[WorkoutSession, Workout]]:
        """Completed sessions linked to an enrollment, newest first, with their workout."""
        async with self._connect() as db:
            cursor = await db.execute(
                """
                SELECT * FROM workout_sessions
                WHERE user_plan_id = ? AND status = 'completed'
                ORDER BY completed_at DESC, rowid DESC
                """,
                (user_plan_id,),
            )
            sessions = [self._row_to_session(row) for row in await cursor.fetchall()]

        workouts = WorkoutRepository(self.db_path, conn=self.conn)
        result = []
        for session in sessions:
            workout = await workouts.get(session.workout_id, include_exercises=False)
            result.append((session, workout))
        return result

    async def average_heart_rate(self, user_id: str) -> float | None:
        """Mean of recorded session heart rates, None when nothing is recorded."""
        async with self._connect() as db:
            cursor = await db.execute(
                """
                SELECT AVG(average_heart_rate) FROM workout_sessions
                WHERE user_id = ? AND average_heart_rate IS NOT NULL
                """,
                (user_id,),
            )
            row = await cursor.fetchone()
            return row[0]

    @staticmethod
    def _row_to_session(row: aiosqlite.Row) -> WorkoutSession:
        return WorkoutSession(
            id=row["id"],
            user_id=row["user_id"],
            workout_id=row["workout_id"],
            user_plan_id=row["user_plan_id"],
            status=SessionStatus(row["status"]),
            started_at=_parse_dt(row["started_at"]),
            completed_at=_parse_dt(row["completed_at"]),
            total_duration=row["total_duration"],
            calories_burned=row["calories_burned"],
            average_heart_rate=row["average_heart_rate"],
            max_heart_rate=row["max_heart_rate"],
            notes=row["notes"],
        )


class UserPlanRepository(BaseRepository):
    """Repository for plan enrollments."""

    async def create(self, enrollment: UserFitnessPlan) -> UserFitnessPlan:
        """Insert an enrollment.

        Raises:
            ConflictError: If the user already has an active enrollment for the plan
        """
        enrollment.id = enrollment.id or new_id()
        timestamp = datetime.now()
        enrollment.created_at = enrollment.updated_at = timestamp
        try:
            async with self._connect(write=True) as db:
                await db.execute(
                    """
                    INSERT INTO user_fitness_plans
                    (id, user_id, plan_id, status, current_week, total_workouts_completed,
                     total_workouts_in_plan, completion_percentage, start_date,
                     last_workout_date, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        enrollment.id,
                        enrollment.user_id,
                        enrollment.plan_id,
                        enrollment.status.value,
                        enrollment.current_week,
                        enrollment.total_workouts_completed,
                        enrollment.total_workouts_in_plan,
                        enrollment.completion_percentage,
                        _iso(enrollment.start_date),
                        _iso(enrollment.last_workout_date),
                        timestamp.isoformat(),
                        timestamp.isoformat(),
                    ),
                )
        except sqlite3.IntegrityError as e:
            raise ConflictError("You already have an active plan with this ID") from e
        return enrollment

    async def get(self, user_plan_id: str) -> UserFitnessPlan | None:
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT * FROM user_fitness_plans WHERE id = ?", (user_plan_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_enrollment(row)

    async def get_owned(self, user_id: str, user_plan_id: str) -> UserFitnessPlan | None:
        enrollment = await self.get(user_plan_id)
        if enrollment is None or enrollment.user_id != user_id:
            return None
        return enrollment

    async def get_active(self, user_id: str, plan_id: str) -> UserFitnessPlan | None:
        """The user's active enrollment for a plan, if any."""
        async with self._connect() as db:
            cursor = await db.execute(
                """
                SELECT * FROM user_fitness_plans
                WHERE user_id = ? AND plan_id = ? AND status = 'active'
                """,
                (user_id, plan_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_enrollment(row)

    async def get_latest_for_plan(self, user_id: str, plan_id: str) -> UserFitnessPlan | None:
        """The user's most recent enrollment for a plan, whatever its status."""
        async with self._connect() as db:
            cursor = await db.execute(
                """
                SELECT * FROM user_fitness_plans WHERE user_id = ? AND plan_id = ?
                ORDER BY created_at DESC, rowid DESC LIMIT 1
                """,
                (user_id, plan_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_enrollment(row)

    async def list_active(self, user_id: str) -> list[tuple[UserFitnessPlan, FitnessPlan]]:
        """Active enrollments with their plan, most recently updated first."""
        async with self._connect() as db:
            cursor = await db.execute(
                """
                SELECT ufp.*, fp.id AS fp_id
                FROM user_fitness_plans ufp
                JOIN fitness_plans fp ON fp.id = ufp.plan_id
                WHERE ufp.user_id = ? AND ufp.status = 'active'
                ORDER BY ufp.updated_at DESC, ufp.rowid DESC
                """,
                (user_id,),
            )
            enrollments = [self._row_to_enrollment(row) for row in await cursor.fetchall()]

        plans = FitnessPlanRepository(self.db_path, conn=self.conn)
        return [(e, await plans.get(e.plan_id)) for e in enrollments]

    async def save_progress(self, enrollment: UserFitnessPlan) -> None:
        """Persist the mutable progress columns of an enrollment."""
        enrollment.updated_at = datetime.now()
        async with self._connect(write=True) as db:
            await db.execute(
                """
                UPDATE user_fitness_plans SET
                    status = ?, current_week = ?, total_workouts_completed = ?,
                    completion_percentage = ?, last_workout_date = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    enrollment.status.value,
                    enrollment.current_week,
                    enrollment.total_workouts_completed,
                    enrollment.completion_percentage,
                    _iso(enrollment.last_workout_date),
                    enrollment.updated_at.isoformat(),
                    enrollment.id,
                ),
            )

    async def transition(
        self, user_plan_id: str, from_status: PlanStatus, to_status: PlanStatus
    ) -> bool:
        """Change status only if it currently equals ``from_status``.

        Raises:
            ConflictError: If the change would create a second active enrollment
        """
        try:
            async with self._connect(write=True) as db:
                cursor = await db.execute(
                    """
                    UPDATE user_fitness_plans SET status = ?, updated_at = ?
                    WHERE id = ? AND status = ?
                    """,
                    (to_status.value, now_iso(), user_plan_id, from_status.value),
                )
                return cursor.rowcount == 1
        except sqlite3.IntegrityError as e:
            raise ConflictError("You already have an active plan with this ID") from e

    @staticmethod
    def _row_to_enrollment(row: aiosqlite.Row) -> UserFitnessPlan:
        return UserFitnessPlan(
            id=row["id"],
            user_id=row["user_id"],
            plan_id=row["plan_id"],
            status=PlanStatus(row["status"]),
            current_week=row["current_week"],
            total_workouts_completed=row["total_workouts_completed"],
            total_workouts_in_plan=row["total_workouts_in_plan"],
            completion_percentage=row["completion_percentage"],
            start_date=_parse_dt(row["start_date"]),
            last_workout_date=_parse_dt(row["last_workout_date"]),
            created_at=_parse_dt(row["created_at"]),
            updated_at=_parse_dt(row["updated_at"]),
        )


class AchievementRepository(BaseRepository):
    """Repository for achievements and unlocks."""

    async def list_active(self) -> list[Achievement]:
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT * FROM achievements WHERE is_active = 1 ORDER BY rowid"
            )
            return [self._row_to_achievement(row) for row in await cursor.fetchall()]

    async def list_unlocked(self, user_id: str) -> list[tuple[Achievement, datetime]]:
        """Achievements the user has unlocked, with unlock time, oldest first."""
        async with self._connect() as db:
            cursor = await db.execute(
                """
                SELECT a.*, ua.unlocked_at AS unlocked_at
                FROM user_achievements ua
                JOIN achievements a ON a.id = ua.achievement_id
                WHERE ua.user_id = ?
                ORDER BY ua.unlocked_at, ua.rowid
                """,
                (user_id,),
            )
            return [
                (self._row_to_achievement(row), _parse_dt(row["unlocked_at"]))
                for row in await cursor.fetchall()
            ]

    async def unlock(self, user_id: str, achievement_id: str) -> bool:
        """Record an unlock. Returns False if it was already unlocked."""
        async with self._connect(write=True) as db:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO user_achievements
                (id, user_id, achievement_id, unlocked_at)
                VALUES (?, ?, ?, ?)
                """,
                (new_id(), user_id, achievement_id, now_iso()),
            )
            return cursor.rowcount == 1

    @staticmethod
    def _row_to_achievement(row: aiosqlite.Row) -> Achievement:
        return Achievement(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            icon_url=row["icon_url"],
            category=AchievementCategory(row["category"]),
            requirement=json.loads(row["requirement"] or "{}"),
            points=row["points"] or 0,
            is_active=bool(row["is_active"]),
            created_at=_parse_dt(row["created_at"]),
        )


class ActivityFeedRepository(BaseRepository):
    """Repository for the append-only activity feed."""

    async def add(self, entry: ActivityEntry) -> ActivityEntry:
        entry.id = entry.id or new_id()
        entry.created_at = entry.created_at or datetime.now()
        async with self._connect(write=True) as db:
            await db.execute(
                """
                INSERT INTO activity_feed
                (id, user_id, activity_type, title, description, metadata, points,
                 is_public, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    entry.user_id,
                    entry.activity_type.value,
                    entry.title,
                    entry.description,
                    json.dumps(entry.metadata),
                    entry.points,
                    int(entry.is_public),
                    entry.created_at.isoformat(),
                ),
            )
        return entry

    async def list_recent(
        self, limit: int = 10, user_id: str | None = None
    ) -> list[ActivityEntry]:
        """Newest public entries with their author; optionally one user's only."""
        query = """
            SELECT f.*, u.id AS u_id, u.email AS u_email,
                   u.first_name AS u_first_name, u.last_name AS u_last_name,
                   u.profile_image_url AS u_profile_image_url,
                   u.created_at AS u_created_at, u.updated_at AS u_updated_at
            FROM activity_feed f
            JOIN users u ON u.id = f.user_id
            WHERE f.is_public = 1
        """
        params: list = []
        if user_id is not None:
            query += " AND f.user_id = ?"
            params.append(user_id)
        query += " ORDER BY f.created_at DESC, f.rowid DESC LIMIT ?"
        params.append(limit)

        async with self._connect() as db:
            cursor = await db.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    @staticmethod
    def _row_to_entry(row: aiosqlite.Row) -> ActivityEntry:
        return ActivityEntry(
            id=row["id"],
            user_id=row["user_id"],
            activity_type=ActivityType(row["activity_type"]),
            title=row["title"],
            description=row["description"],
            metadata=json.loads(row["metadata"] or "{}"),
            points=row["points"] or 0,
            is_public=bool(row["is_public"]),
            user=_prefixed_user(row),
            created_at=_parse_dt(row["created_at"]),
        )


class WorkoutInboxRepository(BaseRepository):
    """Repository for wearable-detected workouts awaiting triage."""

    async def count_for_user(self, user_id: str) -> int:
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT COUNT(*) FROM workout_inbox WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            return row[0]

    async def ingest(self, item: WorkoutInboxItem) -> WorkoutInboxItem:
        """Store a newly detected workout as pending."""
        item.id = item.id or new_id()
        item.received_at = item.received_at or datetime.now()
        item.status = InboxStatus.PENDING
        async with self._connect(write=True) as db:
            await db.execute(
                """
                INSERT INTO workout_inbox
                (id, user_id, workout_data, status, auto_detected_type, confidence,
                 title, duration, calories_burned, average_heart_rate, max_heart_rate,
                 ai_summary, received_at)
                VALUES (?, ?, ?, 'pending', ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    item.id,
                    item.user_id,
                    json.dumps(item.workout_data),
                    item.auto_detected_type,
                    item.confidence,
                    item.title,
                    item.duration,
                    item.calories_burned,
                    item.average_heart_rate,
                    item.max_heart_rate,
                    item.ai_summary,
                    item.received_at.isoformat(),
                ),
            )
        return item

    async def list_for_user(self, user_id: str) -> list[WorkoutInboxItem]:
        """All of a user's items, newest received first."""
        async with self._connect() as db:
            cursor = await db.execute(
                """
                SELECT * FROM workout_inbox WHERE user_id = ?
                ORDER BY received_at DESC, rowid DESC
                """,
                (user_id,),
            )
            return [self._row_to_item(row) for row in await cursor.fetchall()]

    async def get_owned(self, user_id: str, item_id: str) -> WorkoutInboxItem | None:
        async with self._connect() as db:
            cursor = await db.execute(
                "SELECT * FROM workout_inbox WHERE id = ? AND user_id = ?",
                (item_id, user_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_item(row)

    async def resolve(
        self,
        user_id: str,
        item_id: str,
        status: InboxStatus,
        category: str | None = None,
    ) -> bool:
        """Move a pending item to a terminal status.

        Returns:
            True if the item was pending and owned by the user
        """
        async with self._connect(write=True) as db:
            cursor = await db.execute(
                """
                UPDATE workout_inbox SET status = ?, category = ?, processed_at = ?
                WHERE id = ? AND user_id = ? AND status = 'pending'
                """,
                (status.value, category, now_iso(), item_id, user_id),
            )
            return cursor.rowcount == 1

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> WorkoutInboxItem:
        return WorkoutInboxItem(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            workout_data=json.loads(row["workout_data"] or "{}"),
            status=InboxStatus(row["status"]),
            category=row["category"],
            auto_detected_type=row["auto_detected_type"],
            confidence=row["confidence"],
            duration=row["duration"],
            calories_burned=row["calories_burned"],
            average_heart_rate=row["average_heart_rate"],
            max_heart_rate=row["max_heart_rate"],
            ai_summary=row["ai_summary"],
            received_at=_parse_dt(row["received_at"]),
            processed_at=_parse_dt(row["processed_at"]),
        )
