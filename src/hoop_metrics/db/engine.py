"""Database engine setup and initialization."""

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from uuid import uuid4

import aiosqlite
from loguru import logger

from ..config import get_settings


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / settings.database_name


def new_id() -> str:
    return str(uuid4())


def now_iso() -> str:
    return datetime.now().isoformat()


@asynccontextmanager
async def connect(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open an autocommit connection with row access by name and foreign keys on."""
    async with aiosqlite.connect(db_path, isolation_level=None) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys = ON")
        yield db


@asynccontextmanager
async def transaction(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    """Open a connection holding the database write lock until the block exits.

    ``BEGIN IMMEDIATE`` serializes writers, so read-then-write sequences run
    inside the block cannot interleave with another request's writes.
    """
    async with connect(db_path) as db:
        await db.execute("BEGIN IMMEDIATE")
        try:
            yield db
        except BaseException:
            await db.execute("ROLLBACK")
            raise
        await db.execute("COMMIT")


async def _run_migrations(db: aiosqlite.Connection) -> None:
    """Run database migrations for schema updates."""
    cursor = await db.execute("PRAGMA table_info(user_profiles)")
    columns = await cursor.fetchall()
    profile_columns = {col[1] for col in columns}

    if "day_streak" not in profile_columns:
        await db.execute("ALTER TABLE user_profiles ADD COLUMN day_streak INTEGER DEFAULT 0")
    if "last_workout_date" not in profile_columns:
        await db.execute("ALTER TABLE user_profiles ADD COLUMN last_workout_date TEXT")

    cursor = await db.execute("PRAGMA table_info(workout_sessions)")
    columns = await cursor.fetchall()
    session_columns = {col[1] for col in columns}

    if "user_plan_id" not in session_columns:
        await db.execute(
            "ALTER TABLE workout_sessions ADD COLUMN user_plan_id TEXT "
            "REFERENCES user_fitness_plans(id)"
        )


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with connect(db_path) as db:
        await db.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT UNIQUE,
                first_name TEXT,
                last_name TEXT,
                profile_image_url TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_profiles (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL UNIQUE,
                age INTEGER,
                height INTEGER,
                weight REAL,
                experience TEXT DEFAULT 'beginner',
                goals TEXT,
                preferences TEXT DEFAULT '{}',
                current_streak INTEGER DEFAULT 0,
                longest_streak INTEGER DEFAULT 0,
                total_workouts INTEGER DEFAULT 0,
                total_points INTEGER DEFAULT 0,
                skill_level INTEGER DEFAULT 1,
                recovery_score REAL DEFAULT 75.0,
                day_streak INTEGER DEFAULT 0,
                last_workout_date TEXT,
                updated_at TEXT,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        # Catalog: workouts and their exercises
        await db.execute("""
            CREATE TABLE IF NOT EXISTS workouts (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                description TEXT,
                duration INTEGER,
                difficulty TEXT NOT NULL,
                workout_type TEXT NOT NULL,
                methodology TEXT,
                is_popular INTEGER DEFAULT 0,
                ai_generated INTEGER DEFAULT 0,
                created_by TEXT,
                created_at TEXT NOT NULL,
                FOREIGN KEY (created_by) REFERENCES users(id)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id TEXT PRIMARY KEY,
                workout_id TEXT NOT NULL,
                name TEXT NOT NULL,
                description TEXT,
                sets INTEGER,
                reps INTEGER,
                duration INTEGER,
                rest_time INTEGER,
                sort_order INTEGER NOT NULL,
                instructions TEXT,
                tips TEXT,
                FOREIGN KEY (workout_id) REFERENCES workouts(id) ON DELETE CASCADE
            )
        """)

        # Catalog: multi-week plans and their schedule
        await db.execute("""
            CREATE TABLE IF NOT EXISTS fitness_plans (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                description TEXT,
                methodology TEXT,
                plan_type TEXT NOT NULL,
                difficulty TEXT NOT NULL,
                duration INTEGER,
                workouts_per_week INTEGER,
                ai_generated INTEGER DEFAULT 0,
                is_popular INTEGER DEFAULT 0,
                created_by TEXT,
                created_at TEXT NOT NULL,
                FOREIGN KEY (created_by) REFERENCES users(id)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS plan_workouts (
                id TEXT PRIMARY KEY,
                plan_id TEXT NOT NULL,
                workout_id TEXT NOT NULL,
                week INTEGER NOT NULL,
                day INTEGER NOT NULL,
                sort_order INTEGER NOT NULL,
                is_optional INTEGER DEFAULT 0,
                notes TEXT,
                FOREIGN KEY (plan_id) REFERENCES fitness_plans(id) ON DELETE CASCADE,
                FOREIGN KEY (workout_id) REFERENCES workouts(id)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_fitness_plans (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                plan_id TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'active'
                    CHECK (status IN ('active', 'completed', 'paused')),
                current_week INTEGER DEFAULT 1,
                total_workouts_completed INTEGER DEFAULT 0,
                total_workouts_in_plan INTEGER DEFAULT 0,
                completion_percentage TEXT DEFAULT '0.00',
                start_date TEXT,
                last_workout_date TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
                FOREIGN KEY (plan_id) REFERENCES fitness_plans(id)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_sessions (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                workout_id TEXT NOT NULL,
                user_plan_id TEXT,
                status TEXT NOT NULL
                    CHECK (status IN ('active', 'completed', 'cancelled')),
                started_at TEXT NOT NULL,
                completed_at TEXT,
                total_duration INTEGER,
                calories_burned INTEGER,
                average_heart_rate INTEGER,
                max_heart_rate INTEGER,
                notes TEXT,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
                FOREIGN KEY (workout_id) REFERENCES workouts(id),
                FOREIGN KEY (user_plan_id) REFERENCES user_fitness_plans(id)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS achievements (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL UNIQUE,
                description TEXT,
                icon_url TEXT,
                category TEXT NOT NULL,
                requirement TEXT DEFAULT '{}',
                points INTEGER DEFAULT 0,
                is_active INTEGER DEFAULT 1,
                created_at TEXT NOT NULL
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_achievements (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                achievement_id TEXT NOT NULL,
                unlocked_at TEXT NOT NULL,
                UNIQUE (user_id, achievement_id),
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
                FOREIGN KEY (achievement_id) REFERENCES achievements(id)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS activity_feed (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                activity_type TEXT NOT NULL,
                title TEXT NOT NULL,
                description TEXT,
                metadata TEXT DEFAULT '{}',
                points INTEGER DEFAULT 0,
                is_public INTEGER DEFAULT 1,
                created_at TEXT NOT NULL,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS workout_inbox (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                workout_data TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'pending'
                    CHECK (status IN ('pending', 'categorized', 'ignored')),
                category TEXT,
                auto_detected_type TEXT,
                confidence TEXT,
                title TEXT NOT NULL,
                duration INTEGER,
                calories_burned INTEGER,
                average_heart_rate INTEGER,
                max_heart_rate INTEGER,
                ai_summary TEXT,
                received_at TEXT NOT NULL,
                processed_at TEXT,
                FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
            )
        """)

        # At most one active enrollment per (user, plan)
        await db.execute("""
            CREATE UNIQUE INDEX IF NOT EXISTS idx_user_fitness_plans_one_active
            ON user_fitness_plans(user_id, plan_id) WHERE status = 'active'
        """)

        # Indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_sessions_user
            ON workout_sessions(user_id, started_at)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_plan_workouts_plan
            ON plan_workouts(plan_id, week, day, sort_order)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercises_workout
            ON exercises(workout_id, sort_order)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_activity_feed_created
            ON activity_feed(created_at)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_workout_inbox_user
            ON workout_inbox(user_id, received_at)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_user_profiles_points
            ON user_profiles(total_points)
        """)

        # Run migrations for existing databases
        await _run_migrations(db)

    logger.info(f"Database schema ready at {db_path}")


async def seed_catalog(db_path: Path | None = None) -> dict[str, int]:
    """Seed the database with the built-in workouts, plans and achievements.

    Entries that already exist (matched by name) are skipped.

    Returns:
        Number of rows inserted per catalog table
    """
    from ..data.catalog import SEED_ACHIEVEMENTS, SEED_PLANS, SEED_WORKOUTS

    if db_path is None:
        db_path = get_db_path()

    counts = {"workouts": 0, "fitness_plans": 0, "achievements": 0}

    async with transaction(db_path) as db:
        cursor = await db.execute("SELECT id, name FROM workouts")
        workout_ids = {row["name"]: row["id"] for row in await cursor.fetchall()}

        for workout in SEED_WORKOUTS:
            if workout["name"] in workout_ids:
                continue
            workout_id = new_id()
            await db.execute(
                """
                INSERT INTO workouts
                (id, name, description, duration, difficulty, workout_type,
                 methodology, is_popular, ai_generated, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, 0, ?)
                """,
                (
                    workout_id,
                    workout["name"],
                    workout.get("description"),
                    workout.get("duration"),
                    workout["difficulty"],
                    workout["workout_type"],
                    workout.get("methodology"),
                    int(workout.get("is_popular", False)),
                    now_iso(),
                ),
            )
            for order, exercise in enumerate(workout.get("exercises", []), start=1):
                await db.execute(
                    """
                    INSERT INTO exercises
                    (id, workout_id, name, description, sets, reps, duration,
                     rest_time, sort_order, instructions, tips)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        new_id(),
                        workout_id,
                        exercise["name"],
                        exercise.get("description"),
                        exercise.get("sets"),
                        exercise.get("reps"),
                        exercise.get("duration"),
                        exercise.get("rest_time"),
                        order,
                        exercise.get("instructions"),
                        exercise.get("tips"),
                    ),
                )
            workout_ids[workout["name"]] = workout_id
            counts["workouts"] += 1

        cursor = await db.execute("SELECT name FROM fitness_plans")
        existing_plans = {row["name"] for row in await cursor.fetchall()}

        for plan in SEED_PLANS:
            if plan["name"] in existing_plans:
                continue
            plan_id = new_id()
            await db.execute(
                """
                INSERT INTO fitness_plans
                (id, name, description, methodology, plan_type, difficulty,
                 duration, workouts_per_week, ai_generated, is_popular, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, 0, ?, ?)
                """,
                (
                    plan_id,
                    plan["name"],
                    plan.get("description"),
                    plan.get("methodology"),
                    plan["plan_type"],
                    plan["difficulty"],
                    plan.get("duration"),
                    plan.get("workouts_per_week"),
                    int(plan.get("is_popular", False)),
                    now_iso(),
                ),
            )
            for week, day, workout_name in plan["schedule"]:
                await db.execute(
                    """
                    INSERT INTO plan_workouts
                    (id, plan_id, workout_id, week, day, sort_order)
                    VALUES (?, ?, ?, ?, ?, 1)
                    """,
                    (new_id(), plan_id, workout_ids[workout_name], week, day),
                )
            counts["fitness_plans"] += 1

        for achievement in SEED_ACHIEVEMENTS:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO achievements
                (id, name, description, category, requirement, points, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    new_id(),
                    achievement["name"],
                    achievement.get("description"),
                    achievement["category"],
                    json.dumps(achievement.get("requirement", {})),
                    achievement.get("points", 0),
                    now_iso(),
                ),
            )
            counts["achievements"] += cursor.rowcount

    logger.info(f"Catalog seeded: {counts}")
    return counts
