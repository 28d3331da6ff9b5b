"""User routes."""

from typing import List

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_store, read_body
from schemas.user import UserCreated, UserRecord
from services.exercise_store import ExerciseStore, user_serializer
from utils.errors import InternalError, ValidationError
from utils.helpers import validate_username
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserCreated)
async def create_user(request: Request, store: ExerciseStore = Depends(get_store)):
    """Create a new user. Any failure is reported as a generic 500."""
    try:
        body = await read_body(request)
        username = validate_username(body.get("username"))
        user = await store.create_user(username)
        return UserCreated(username=user["username"], _id=str(user["_id"]))
    except Exception as e:
        logger.error(f"Error creating user: {e}", exc_info=not isinstance(e, ValidationError))
        raise InternalError("Failed to create user")


@router.get("", response_model=List[UserRecord])
async def list_users(store: ExerciseStore = Depends(get_store)):
    """List every user in storage order."""
    try:
        users = await store.list_users()
        return [UserRecord(**user_serializer(user)) for user in users]
    except Exception as e:
        logger.error(f"Error listing users: {e}", exc_info=True)
        raise InternalError("Internal server error")
