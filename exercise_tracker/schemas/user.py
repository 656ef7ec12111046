"""User Schemas — Pydantic models for user registration and listing.

Invariants:
    - UserCreate.username: 1-255 chars, stripped, non-empty
    - Responses expose the store id as "_id"
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from exercise_tracker.core.domain_types import User


class UserCreate(BaseModel):
    """User registration request."""
    username: str = Field(min_length=1, max_length=255)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v


class UserResponse(BaseModel):
    """Public user representation."""
    model_config = ConfigDict(populate_by_name=True)

    id: UUID = Field(alias="_id")
    username: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username)
