"""Exercise Schemas — request/response models for logging and reading exercises.

Invariants:
    - ExerciseCreate.duration is coerced to int: "30" -> 30, "30.5" / 30.5 -> 30
      (truncated); non-numeric input is rejected
    - ExerciseCreate.date is a raw string: parsing (and the fallback to today)
      happens in the recorder, so a bad date never fails request validation.
      Non-string JSON values are tolerated: numbers are stringified, anything
      else is treated as absent
    - Response dates use the display format ("Mon Jan 01 2024")
    - LogResponse.count always equals len(LogResponse.log)

Design Decisions:
    - Raw date passthrough over a pydantic date field: pydantic would reject
      "not-a-date", but the recorder must accept it and substitute today
"""

import math
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from exercise_tracker.core.calendar_dates import format_display_date
from exercise_tracker.core.domain_types import (
    ExerciseEntry, ExerciseLog, RecordedExercise,
)


class ExerciseCreate(BaseModel):
    """Exercise submission for one user."""
    description: str = Field(min_length=1, max_length=2000)
    duration: int
    date: str | None = None

    @field_validator("duration", mode="before")
    @classmethod
    def truncate_duration(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            try:
                v = float(v.strip())
            except ValueError:
                raise ValueError("duration must be a number")
        if isinstance(v, float):
            if not math.isfinite(v):
                raise ValueError("duration must be a finite number")
            return int(v)
        return v

    @field_validator("date", mode="before")
    @classmethod
    def stringify_date(cls, v: Any) -> str | None:
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return None


class ExerciseResponse(BaseModel):
    """Recorded exercise with its owner's identity."""
    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(alias="_id")
    username: str
    date: str
    duration: int
    description: str

    @classmethod
    def from_recorded(cls, recorded: RecordedExercise) -> "ExerciseResponse":
        return cls(
            id=recorded.user.id,
            username=recorded.user.username,
            date=format_display_date(recorded.entry.date),
            duration=recorded.entry.duration,
            description=recorded.entry.description,
        )


class LogEntryResponse(BaseModel):
    description: str
    duration: int
    date: str

    @classmethod
    def from_entry(cls, entry: ExerciseEntry) -> "LogEntryResponse":
        return cls(
            description=entry.description,
            duration=entry.duration,
            date=format_display_date(entry.date),
        )


class LogResponse(BaseModel):
    """Filtered exercise log."""
    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(alias="_id")
    username: str
    count: int
    log: list[LogEntryResponse]

    @classmethod
    def from_log(cls, log: ExerciseLog) -> "LogResponse":
        return cls(
            id=log.user.id,
            username=log.user.username,
            count=log.count,
            log=[LogEntryResponse.from_entry(e) for e in log.entries],
        )
