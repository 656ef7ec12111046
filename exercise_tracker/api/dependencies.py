"""Service Dependencies — builds services per request from the request's DB session.

Invariants:
    - One AsyncSession per request, shared by every repository the request touches
    - Services receive repositories explicitly; nothing reaches for a global connection
    - Request bodies arrive as JSON or as HTML form fields; both validate through
      the same pydantic model and fail with the same VALIDATION_ERROR envelope

Design Decisions:
    - Overriding get_db (tests) swaps the store for every service at once
    - Body parsing branches on Content-Type inside one dependency per model, so
      each route keeps a single typed body parameter
"""

from typing import Callable, TypeVar

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.infrastructure.database import get_db
from exercise_tracker.infrastructure.sql_repositories import (
    SqlExerciseLogRepository, SqlUserRepository,
)
from exercise_tracker.services.exercise_recorder import ExerciseRecorder
from exercise_tracker.services.log_query import LogQueryEngine
from exercise_tracker.services.user_registry import UserRegistry

ModelT = TypeVar("ModelT", bound=BaseModel)

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_user_registry(db: AsyncSession = Depends(get_db)) -> UserRegistry:
    return UserRegistry(SqlUserRepository(db))


def get_exercise_recorder(db: AsyncSession = Depends(get_db)) -> ExerciseRecorder:
    return ExerciseRecorder(
        UserRegistry(SqlUserRepository(db)), SqlExerciseLogRepository(db),
    )


def get_log_query_engine(db: AsyncSession = Depends(get_db)) -> LogQueryEngine:
    return LogQueryEngine(
        UserRegistry(SqlUserRepository(db)), SqlExerciseLogRepository(db),
    )


def parsed_body(model: type[ModelT]) -> Callable:
    """Dependency factory: validate a JSON or form-encoded body into model."""

    async def dependency(request: Request) -> ModelT:
        content_type = request.headers.get("content-type", "").lower()
        if content_type.startswith(_FORM_TYPES):
            form = await request.form()
            data = dict(form.items())
        else:
            try:
                data = await request.json()
            except ValueError:
                raise RequestValidationError([{
                    "loc": ("body",),
                    "msg": "Request body is not valid JSON",
                    "type": "json_invalid",
                }])
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RequestValidationError([
                {**err, "loc": ("body", *err["loc"])}
                for err in e.errors(include_url=False)
            ])

    return dependency
