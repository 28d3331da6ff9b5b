"""User collection schema."""

from pydantic import BaseModel, ConfigDict, Field
from typing import List


class User(BaseModel):
    """User collection model."""
    username: str = Field(..., description="Display name, not unique")
    exercises: List[str] = Field(default_factory=list, description="Ids of the user's exercises, in insertion order")


class UserCreated(BaseModel):
    """Response for a newly created user."""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    id: str = Field(..., alias="_id")


class UserRecord(BaseModel):
    """A stored user as returned by the listing."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    username: str
    exercises: List[str] = Field(default_factory=list)
