"""Boundary Protocols — contracts between core and the record store.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided via dependency injection (SQL in production, fakes in tests)
    - Store failures surface as StoreError, never as driver exceptions

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - append_entry is ONE store primitive (create-if-missing + increment + append),
      not a fetch/mutate/save triple — concurrent submissions cannot lose updates
"""

from typing import Protocol

from exercise_tracker.core.domain_types import ExerciseEntry, LogRecord, User, UserId


class UserRepository(Protocol):
    """Contract for user persistence."""
    async def insert(self, username: str) -> User: ...
    async def find_by_id(self, user_id: UserId) -> User | None: ...
    async def find_by_username(self, username: str) -> User | None: ...
    async def find_all(self) -> list[User]: ...


class ExerciseLogRepository(Protocol):
    """Contract for the per-username aggregated exercise log."""
    async def find_by_username(self, username: str) -> LogRecord | None: ...
    async def append_entry(
        self, username: str, entry: ExerciseEntry,
    ) -> LogRecord: ...
