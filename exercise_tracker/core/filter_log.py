"""Log Filtering — query parameter validation and entry filtering. Pure, no IO.

Invariants:
    - parse_log_query raises InvalidQueryParameterError or returns a fully valid LogQuery
    - Empty-string parameters are treated as not supplied
    - Bounds are inclusive: from <= entry.date <= to
    - limit truncates AFTER date filtering and keeps the original order

Design Decisions:
    - Validation separated from filtering: services validate before any store access
"""

from collections.abc import Iterable

from exercise_tracker.core.calendar_dates import parse_calendar_date
from exercise_tracker.core.domain_types import ExerciseEntry, LogQuery
from exercise_tracker.core.errors import InvalidQueryParameterError


def parse_log_query(
    from_raw: str | None = None,
    to_raw: str | None = None,
    limit_raw: str | None = None,
) -> LogQuery:
    """Validate raw query strings into a LogQuery."""
    return LogQuery(
        from_date=_parse_bound("from", from_raw),
        to_date=_parse_bound("to", to_raw),
        limit=_parse_limit(limit_raw),
    )


def _parse_bound(name: str, raw: str | None):
    if raw is None or not raw.strip():
        return None
    parsed = parse_calendar_date(raw)
    if parsed is None:
        raise InvalidQueryParameterError(name, raw, "not a calendar date")
    return parsed


def _parse_limit(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise InvalidQueryParameterError("limit", raw, "not an integer")
    if limit < 1:
        raise InvalidQueryParameterError("limit", raw, "must be a positive integer")
    return limit


def filter_entries(
    entries: Iterable[ExerciseEntry], query: LogQuery,
) -> tuple[ExerciseEntry, ...]:
    """Apply date bounds then limit. Never re-sorts."""
    kept = [
        e for e in entries
        if (query.from_date is None or e.date >= query.from_date)
        and (query.to_date is None or e.date <= query.to_date)
    ]
    if query.limit is not None:
        kept = kept[:query.limit]
    return tuple(kept)
