"""Service test fixtures — services wired to in-memory repositories.

Invariants:
    - Every test gets fresh, empty repositories
    - The recorder's clock is pinned to TODAY so "now" is deterministic
"""

from datetime import date

import pytest

from exercise_tracker.services.exercise_recorder import ExerciseRecorder
from exercise_tracker.services.log_query import LogQueryEngine
from exercise_tracker.services.user_registry import UserRegistry
from tests.services.fake_repositories import (
    InMemoryExerciseLogRepository, InMemoryUserRepository,
)

TODAY = date(2024, 6, 15)


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def log_repo():
    return InMemoryExerciseLogRepository()


@pytest.fixture
def registry(user_repo):
    return UserRegistry(user_repo)


@pytest.fixture
def recorder(registry, log_repo):
    return ExerciseRecorder(registry, log_repo, today=lambda: TODAY)


@pytest.fixture
def query_engine(registry, log_repo):
    return LogQueryEngine(registry, log_repo)


@pytest.fixture
async def alice(registry):
    return await registry.register("alice")
