"""SQL Repositories — SQLAlchemy implementations of the core repository protocols.

Invariants:
    - Every public method returns domain values (core/domain_types.py), never ORM rows
    - Every SQLAlchemy failure is rolled back and re-raised as StoreError
    - A unique-username violation on insert is DuplicateUsernameError, not StoreError
    - append_entry runs in ONE transaction: create-if-missing, increment, insert entry
    - Reads use populate_existing so a long-lived session never serves stale counts

Design Decisions:
    - Atomic append over read-modify-write: INSERT .. ON CONFLICT DO NOTHING creates
      the log without racing a concurrent creator, and UPDATE count = count + 1
      takes the row lock, so concurrent appends for one username serialize
      (ADR: closes the lost-update race of fetch/mutate/save)
    - Dialect-specific insert (postgresql, sqlite): the only drivers this service ships with
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from exercise_tracker.core.domain_types import (
    ExerciseEntry, LogRecord, User, UserId,
)
from exercise_tracker.core.errors import DuplicateUsernameError, StoreError
from exercise_tracker.infrastructure.database import translate_store_error
from exercise_tracker.models.exercise_log import ExerciseLog, ExerciseLogEntry
from exercise_tracker.models.user import User as UserModel

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _to_user(row: UserModel) -> User:
    return User(id=UserId(row.id), username=row.username)


def _to_record(row: ExerciseLog) -> LogRecord:
    return LogRecord(
        username=row.username,
        count=row.count,
        entries=tuple(
            ExerciseEntry(
                description=e.description, duration=e.duration, date=e.date,
            )
            for e in row.entries
        ),
    )


class SqlUserRepository:
    """UserRepository backed by the users table."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def insert(self, username: str) -> User:
        row = UserModel(username=username)
        self._db.add(row)
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            raise DuplicateUsernameError(username)
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise translate_store_error(e, "insert")
        return _to_user(row)

    async def find_by_id(self, user_id: UserId) -> User | None:
        try:
            row = await self._db.get(UserModel, user_id)
        except SQLAlchemyError as e:
            raise translate_store_error(e, "find")
        return _to_user(row) if row else None

    async def find_by_username(self, username: str) -> User | None:
        try:
            result = await self._db.execute(
                select(UserModel).where(UserModel.username == username),
            )
        except SQLAlchemyError as e:
            raise translate_store_error(e, "find")
        row = result.scalar_one_or_none()
        return _to_user(row) if row else None

    async def find_all(self) -> list[User]:
        try:
            result = await self._db.execute(
                select(UserModel).order_by(UserModel.created_at),
            )
        except SQLAlchemyError as e:
            raise translate_store_error(e, "find")
        return [_to_user(row) for row in result.scalars().all()]


class SqlExerciseLogRepository:
    """ExerciseLogRepository backed by exercise_logs + exercise_entries."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def find_by_username(self, username: str) -> LogRecord | None:
        try:
            result = await self._db.execute(
                select(ExerciseLog)
                .where(ExerciseLog.username == username)
                .execution_options(populate_existing=True),
            )
        except SQLAlchemyError as e:
            raise translate_store_error(e, "find")
        row = result.scalar_one_or_none()
        return _to_record(row) if row else None

    async def append_entry(
        self, username: str, entry: ExerciseEntry,
    ) -> LogRecord:
        """Append entry to the username's log, creating the log on first use."""
        try:
            await self._db.execute(self._create_if_missing(username))
            result = await self._db.execute(
                update(ExerciseLog)
                .where(ExerciseLog.username == username)
                .values(count=ExerciseLog.count + 1)
                .returning(ExerciseLog.id, ExerciseLog.count)
                .execution_options(synchronize_session=False),
            )
            log_id, position = result.one()
            self._db.add(ExerciseLogEntry(
                log_id=log_id,
                position=position,
                description=entry.description,
                duration=entry.duration,
                date=entry.date,
            ))
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise translate_store_error(e, "append")
        logger.debug(
            f"Appended entry #{position} to log",
            extra={"username": username},
        )
        record = await self.find_by_username(username)
        if record is None:
            raise StoreError("Log vanished after append", "append")
        return record

    def _create_if_missing(self, username: str):
        dialect = self._db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise StoreError(f"Unsupported dialect '{dialect}'", "append")
        return (
            insert(ExerciseLog)
            .values(username=username, count=0)
            .on_conflict_do_nothing(index_elements=["username"])
        )
