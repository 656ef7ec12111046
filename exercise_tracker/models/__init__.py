"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ExerciseLog is the aggregate root for entries; users are independent

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from exercise_tracker.models.user import User  # noqa: F401
from exercise_tracker.models.exercise_log import ExerciseLog, ExerciseLogEntry  # noqa: F401
