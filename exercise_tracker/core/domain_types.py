"""Domain Types — identity types and immutable values shared by core and services.

Invariants:
    - UserId wraps UUID — never use bare UUID in domain logic
    - ExerciseEntry.date is a calendar date (datetime.date), never a datetime
    - LogRecord.count == len(LogRecord.entries) for every record the store returns
    - LogRecord.entries keep submission order; nothing in the domain sorts them

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Frozen dataclasses for values: services pass them around without defensive copies
    - LogRecord keyed by username, not user id (usernames are immutable, no rename exists)
"""

from dataclasses import dataclass, field
from datetime import date
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class User:
    """Registered user. Created once, never mutated."""
    id: UserId
    username: str


@dataclass(frozen=True)
class ExerciseEntry:
    """One logged exercise. Duration is in minutes."""
    description: str
    duration: int
    date: date


@dataclass(frozen=True)
class LogRecord:
    """Per-user aggregate of every logged exercise plus the cached count."""
    username: str
    count: int = 0
    entries: tuple[ExerciseEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LogQuery:
    """Validated log filters. None means "not supplied"."""
    from_date: date | None = None
    to_date: date | None = None
    limit: int | None = None


@dataclass(frozen=True)
class RecordedExercise:
    """Result of recording one exercise — entry plus the owner's identity."""
    user: User
    entry: ExerciseEntry


@dataclass(frozen=True)
class ExerciseLog:
    """Filtered view of a user's log. count reflects len(entries), not the stored total."""
    user: User
    entries: tuple[ExerciseEntry, ...]

    @property
    def count(self) -> int:
        return len(self.entries)
