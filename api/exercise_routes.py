"""Exercise routes: adding exercises to a user and reading the user's log."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies import get_store, read_body
from schemas.exercise import ExerciseCreated, ExerciseLog, LogEntry
from services.exercise_store import ExerciseStore
from utils.errors import ExerciseTrackerError, InternalError, NotFoundError
from utils.helpers import format_date, parse_date_bound, parse_limit, validate_exercise
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["exercises"])


@router.post("/{user_id}/exercises", response_model=ExerciseCreated)
async def add_exercise(
    user_id: str,
    request: Request,
    store: ExerciseStore = Depends(get_store),
):
    """
    Add an exercise to a user.
    The exercise is saved first and then linked from the user.
    """
    try:
        user = await store.find_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        fields = validate_exercise(await read_body(request))
        exercise = await store.add_exercise(user, **fields)

        return ExerciseCreated(
            _id=str(user["_id"]),
            username=user["username"],
            date=format_date(exercise["date"]),
            duration=exercise["duration"],
            description=exercise["description"],
        )
    except ExerciseTrackerError as e:
        logger.warning(f"Rejected exercise for user {user_id}: {e.message}")
        raise
    except Exception as e:
        logger.error(f"Error adding exercise for user {user_id}: {e}", exc_info=True)
        raise InternalError(str(e))


@router.get("/{user_id}/logs", response_model=ExerciseLog)
async def get_logs(
    user_id: str,
    date_from: Optional[str] = Query(None, alias="from", description="Earliest date, inclusive"),
    date_to: Optional[str] = Query(None, alias="to", description="Latest date, inclusive"),
    limit: Optional[str] = Query(None, description="Maximum number of entries"),
    store: ExerciseStore = Depends(get_store),
):
    """
    Return a user's exercises, optionally bounded by date and capped in number.
    Unparseable date bounds are dropped from the filter rather than rejected.
    """
    try:
        user = await store.find_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        lower = parse_date_bound(date_from)
        upper = parse_date_bound(date_to)
        for name, raw, bound in (("from", date_from, lower), ("to", date_to, upper)):
            if raw and bound is None:
                logger.warning(f"Ignoring unparseable '{name}' bound {raw!r} for user {user_id}")

        exercises = await store.find_exercises(
            user["_id"], date_from=lower, date_to=upper, limit=parse_limit(limit)
        )
        log = [
            LogEntry(
                description=exercise["description"],
                duration=exercise["duration"],
                date=format_date(exercise["date"]),
            )
            for exercise in exercises
        ]

        return ExerciseLog(_id=str(user["_id"]), username=user["username"], count=len(log), log=log)
    except ExerciseTrackerError:
        raise
    except Exception as e:
        logger.error(f"Error fetching logs for user {user_id}: {e}", exc_info=True)
        raise InternalError(str(e))
