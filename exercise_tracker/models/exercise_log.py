"""Exercise Log ORM — one aggregate per username with its ordered entries.

Invariants:
    - At most one ExerciseLog per username (unique constraint)
    - count == number of child entries after every committed append
    - ExerciseLogEntry.position is 1-based submission order, unique per log
    - Entries always loaded in position order, never by date

Design Decisions:
    - Keyed by username, not user id: usernames are immutable, and the log
      survives as a document-style aggregate independent of the users table
    - Entries as child rows instead of a JSON array: the append becomes an
      INSERT plus an atomic count increment, no read-modify-write of a blob
    - position taken from the incremented count: gaps or duplicates would
      violate uq_exercise_entries_log_position and abort the transaction
    - duration is BIGINT: JSON integers are unbounded, and an INTEGER column
      would reject values past 2**31 - 1 on PostgreSQL
"""

import uuid
import datetime as dt

from sqlalchemy import (
    BigInteger, String, Text, Integer, Date, DateTime, ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from exercise_tracker.db.base import Base


class ExerciseLog(Base):
    """Per-username exercise log aggregate."""
    __tablename__ = "exercise_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    username: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True,
    )
    count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: dt.datetime.now(dt.timezone.utc),
    )

    entries: Mapped[list["ExerciseLogEntry"]] = relationship(
        "ExerciseLogEntry", back_populates="log",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="ExerciseLogEntry.position",
    )


class ExerciseLogEntry(Base):
    """One logged exercise inside an ExerciseLog."""
    __tablename__ = "exercise_entries"
    __table_args__ = (
        UniqueConstraint("log_id", "position", name="uq_exercise_entries_log_position"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    log_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("exercise_logs.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    duration: Mapped[int] = mapped_column(BigInteger, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: dt.datetime.now(dt.timezone.utc),
    )

    log: Mapped["ExerciseLog"] = relationship(
        "ExerciseLog", back_populates="entries",
    )
