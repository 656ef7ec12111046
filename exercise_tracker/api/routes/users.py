"""User & Exercise Routes — HTTP mapping for registration, exercise logging, and log queries.

Invariants:
    - Routes are thin: parse request, call one service operation, shape the response
    - Domain errors propagate to the global TrackerError handler (uniform envelope)
    - user_id path segment is passed raw; the registry decides "not found"
    - POST bodies may be JSON or form-encoded (plain HTML form posts)

Design Decisions:
    - from/to/limit taken as raw strings: the query engine owns their validation
      so malformed values produce INVALID_QUERY_PARAMETER, not a generic 400
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from exercise_tracker.api.dependencies import (
    get_exercise_recorder, get_log_query_engine, get_user_registry, parsed_body,
)
from exercise_tracker.schemas.exercise import (
    ExerciseCreate, ExerciseResponse, LogResponse,
)
from exercise_tracker.schemas.user import UserCreate, UserResponse
from exercise_tracker.services.exercise_recorder import ExerciseRecorder
from exercise_tracker.services.log_query import LogQueryEngine
from exercise_tracker.services.user_registry import UserRegistry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: UserCreate = Depends(parsed_body(UserCreate)),
    registry: UserRegistry = Depends(get_user_registry),
):
    """Register a new user."""
    user = await registry.register(body.username)
    return UserResponse.from_user(user)


@router.get("", response_model=list[UserResponse])
async def list_users(registry: UserRegistry = Depends(get_user_registry)):
    """List every registered user."""
    users = await registry.list_all()
    return [UserResponse.from_user(u) for u in users]


@router.post(
    "/{user_id}/exercises", response_model=ExerciseResponse,
    status_code=status.HTTP_201_CREATED,
)
async def log_exercise(
    user_id: str,
    body: ExerciseCreate = Depends(parsed_body(ExerciseCreate)),
    recorder: ExerciseRecorder = Depends(get_exercise_recorder),
):
    """Append one exercise to the user's log."""
    recorded = await recorder.record(
        user_id, body.description, body.duration, body.date,
    )
    return ExerciseResponse.from_recorded(recorded)


@router.get("/{user_id}/logs", response_model=LogResponse)
async def get_logs(
    user_id: str,
    from_date: str | None = Query(None, alias="from"),
    to_date: str | None = Query(None, alias="to"),
    limit: str | None = Query(None),
    engine: LogQueryEngine = Depends(get_log_query_engine),
):
    """Read the user's exercise log, optionally filtered."""
    log = await engine.get_log(user_id, from_date, to_date, limit)
    return LogResponse.from_log(log)
