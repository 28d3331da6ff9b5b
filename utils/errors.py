"""Error hierarchy for the exercise tracker API.

Every error carries the message rendered to the client and the HTTP status
it maps to. The global handler in ``api.error_handlers`` turns any of them
into ``{"error": message}``.
"""

from typing import Dict, Optional


class ExerciseTrackerError(Exception):
    """Base exception for all exercise tracker errors."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_response(self) -> dict:
        return {"error": self.message}


class ValidationError(ExerciseTrackerError):
    """A document failed field validation.

    ``errors`` maps each failing field path to its message, in the order the
    fields were checked.
    """

    status_code = 400

    def __init__(self, model: str, errors: Dict[str, str]):
        self.model = model
        self.errors = dict(errors)
        details = ", ".join(f"{path}: {message}" for path, message in self.errors.items())
        super().__init__(f"{model} validation failed: {details}")


class NotFoundError(ExerciseTrackerError):
    """Requested resource does not exist."""

    status_code = 404


class InternalError(ExerciseTrackerError):
    """Unexpected failure while handling a request."""

    status_code = 500
