"""Exercise Recorder — normalizes one submission and appends it to the user's log.

Invariants:
    - The user is resolved BEFORE anything is written (UserNotFoundError otherwise)
    - Missing or unparseable dates become today's date — never an error
    - duration is coerced with int(); no range check (0 and negatives accepted)
    - Exactly one append per successful record() call: count grows by exactly 1

Design Decisions:
    - Injectable clock (today): tests pin "now" without patching datetime
    - Append delegated to ExerciseLogRepository.append_entry, a single store
      primitive, so two concurrent submissions cannot both create the log or
      both increment from the same base count
"""

import logging
from collections.abc import Callable
from datetime import date
from uuid import UUID

from exercise_tracker.core.calendar_dates import resolve_entry_date
from exercise_tracker.core.domain_types import ExerciseEntry, RecordedExercise
from exercise_tracker.core.repository_protocols import ExerciseLogRepository
from exercise_tracker.services.user_registry import UserRegistry

logger = logging.getLogger(__name__)


class ExerciseRecorder:
    """Records exercises into per-username aggregated logs."""

    def __init__(
        self,
        registry: UserRegistry,
        logs: ExerciseLogRepository,
        today: Callable[[], date] = date.today,
    ):
        self._registry = registry
        self._logs = logs
        self._today = today

    async def record(
        self,
        user_id: str | UUID,
        description: str,
        duration: int | str,
        raw_date: str | None = None,
    ) -> RecordedExercise:
        user = await self._registry.find_by_id(user_id)
        entry = ExerciseEntry(
            description=description,
            duration=int(duration),
            date=resolve_entry_date(raw_date, self._today()),
        )
        record = await self._logs.append_entry(user.username, entry)
        logger.info(
            "Exercise recorded",
            extra={
                "user_id": user.id, "username": user.username,
                "count": record.count,
            },
        )
        return RecordedExercise(user=user, entry=entry)
