"""Exercise collection schema."""

from datetime import datetime
from typing import List, Union

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


class Exercise(BaseModel):
    """Exercise collection model."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    userId: ObjectId = Field(..., description="Owning user")
    description: str = Field(..., description="What was done")
    duration: Union[int, float] = Field(..., description="Duration in minutes")
    date: datetime = Field(..., description="When it was done, naive UTC")


class ExerciseCreated(BaseModel):
    """Response for a newly added exercise."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Owning user id")
    username: str
    date: str
    duration: Union[int, float]
    description: str


class LogEntry(BaseModel):
    """One exercise in a user's log."""
    description: str
    duration: Union[int, float]
    date: str


class ExerciseLog(BaseModel):
    """A user's filtered exercise log."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    username: str
    count: int
    log: List[LogEntry] = Field(default_factory=list)
