"""User Registry — registers users and resolves opaque ids to users.

Invariants:
    - Usernames are unique: register() checks the store before inserting
    - find_by_id() raises UserNotFoundError for unknown AND malformed ids
    - Never mutates or deletes users

Design Decisions:
    - Registry owns id parsing: routes pass the raw path segment, so a garbage id
      reads as "user not found" rather than a request validation failure
    - A concurrent duplicate slipping past the pre-check is rejected by the unique
      constraint; the repository reports it as DuplicateUsernameError (no retry)
"""

import logging
from uuid import UUID

from exercise_tracker.core.domain_types import User, UserId
from exercise_tracker.core.errors import DuplicateUsernameError, UserNotFoundError
from exercise_tracker.core.repository_protocols import UserRepository

logger = logging.getLogger(__name__)


class UserRegistry:
    """User lookups and registration over a UserRepository."""

    def __init__(self, users: UserRepository):
        self._users = users

    async def register(self, username: str) -> User:
        if await self._users.find_by_username(username) is not None:
            raise DuplicateUsernameError(username)
        user = await self._users.insert(username)
        logger.info(
            "User registered",
            extra={"user_id": user.id, "username": user.username},
        )
        return user

    async def list_all(self) -> list[User]:
        return await self._users.find_all()

    async def find_by_id(self, user_id: str | UUID) -> User:
        """Resolve a user id (raw string or UUID) or raise UserNotFoundError."""
        parsed = _parse_user_id(user_id)
        user = await self._users.find_by_id(parsed) if parsed is not None else None
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user


def _parse_user_id(raw: str | UUID) -> UserId | None:
    if isinstance(raw, UUID):
        return UserId(raw)
    try:
        return UserId(UUID(raw))
    except (ValueError, TypeError, AttributeError):
        return None
