"""Collection and response schemas."""

from schemas.user import User, UserCreated, UserRecord
from schemas.exercise import Exercise, ExerciseCreated, ExerciseLog, LogEntry

__all__ = [
    "User",
    "UserCreated",
    "UserRecord",
    "Exercise",
    "ExerciseCreated",
    "ExerciseLog",
    "LogEntry",
]
