"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from hoop_metrics.config import Settings
from hoop_metrics.db import (
    FitnessPlanRepository,
    UserRepository,
    WorkoutRepository,
    init_db,
    seed_catalog,
)
from hoop_metrics.models.user import User
from hoop_metrics.web import create_app


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def settings(temp_db_path):
    """Settings pointing at the temporary database."""
    return Settings(
        data_dir=temp_db_path.parent,
        database_name=temp_db_path.name,
        anthropic_api_key="",
        log_level="WARNING",
    )


@pytest.fixture
async def db_path(temp_db_path):
    """A temporary database with schema and catalog."""
    await init_db(temp_db_path)
    await seed_catalog(temp_db_path)
    return temp_db_path


@pytest.fixture
async def user(db_path):
    return await UserRepository(db_path).upsert(
        User(id="user-1", email="jordan@example.com", first_name="Jordan", last_name="Hale")
    )


@pytest.fixture
async def other_user(db_path):
    return await UserRepository(db_path).upsert(
        User(id="user-2", email="sam@example.com", first_name="Sam")
    )


@pytest.fixture
async def workout(db_path):
    """A catalog workout."""
    workouts = await WorkoutRepository(db_path).list_recent()
    return workouts[0]


@pytest.fixture
async def plan(db_path):
    """The GOATA Movement Reset plan (8 scheduled workouts)."""
    plans = await FitnessPlanRepository(db_path).list_plans()
    return next(p for p in plans if p.name == "GOATA Movement Reset")


class FakeMessages:
    """Stands in for ``AsyncAnthropic().messages``."""

    def __init__(self, text: str | None = None, error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


class FakeAnthropic:
    def __init__(self, text: str | None = None, error: Exception | None = None):
        self.messages = FakeMessages(text, error)


@pytest.fixture
def fake_anthropic():
    """Factory for fake Anthropic clients returning a fixed reply."""
    return FakeAnthropic


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app, settings):
    """Test client authenticated as a freshly created user."""
    with TestClient(app) as test_client:
        asyncio.run(
            UserRepository(settings.database_path).upsert(
                User(id="user-1", email="jordan@example.com", first_name="Jordan")
            )
        )
        test_client.headers["X-User-Id"] = "user-1"
        yield test_client
