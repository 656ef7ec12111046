"""Log Query Engine — serves a user's exercise log with date-range and limit filters.

Invariants:
    - Query parameters validated before ANY store access (no partial results)
    - A user without a stored log gets an empty result, not an error
    - Returned count is the post-filter, post-limit count, not the stored total
    - Entry order is submission order; never re-sorted by date
"""

from uuid import UUID

from exercise_tracker.core.domain_types import ExerciseLog
from exercise_tracker.core.filter_log import filter_entries, parse_log_query
from exercise_tracker.core.repository_protocols import ExerciseLogRepository
from exercise_tracker.services.user_registry import UserRegistry


class LogQueryEngine:
    def __init__(self, registry: UserRegistry, logs: ExerciseLogRepository):
        self._registry = registry
        self._logs = logs

    async def get_log(
        self,
        user_id: str | UUID,
        from_date: str | None = None,
        to_date: str | None = None,
        limit: str | None = None,
    ) -> ExerciseLog:
        query = parse_log_query(from_date, to_date, limit)
        user = await self._registry.find_by_id(user_id)
        record = await self._logs.find_by_username(user.username)
        entries = record.entries if record else ()
        return ExerciseLog(user=user, entries=filter_entries(entries, query))
