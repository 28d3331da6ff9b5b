"""Persistence for users and their exercises."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId

from models.database import Database
from schemas.exercise import Exercise
from schemas.user import User
from utils.logger import setup_logger

logger = setup_logger(__name__)


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Convert an id string to an ObjectId, or None if it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    if value is None:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def user_serializer(user: Dict[str, Any]) -> Dict[str, Any]:
    """Serialize MongoDB user document."""
    return {
        "_id": str(user["_id"]),
        "username": user.get("username"),
        "exercises": [str(exercise_id) for exercise_id in user.get("exercises") or []],
    }


class ExerciseStore:
    """Users and exercises over a single Database handle.

    A user references its exercises by id (``exercises``) and every exercise
    references its owner (``userId``). The two writes of ``add_exercise`` are
    not transactional.
    """

    def __init__(self, database: Database):
        self.database = database

    @property
    def users(self):
        return self.database.get_users_collection()

    @property
    def exercises(self):
        return self.database.get_exercises_collection()

    async def create_user(self, username: str) -> Dict[str, Any]:
        user = User(username=username).model_dump()
        result = await self.users.insert_one(user)
        user["_id"] = result.inserted_id
        logger.info(f"Created user {result.inserted_id} ({username})")
        return user

    async def list_users(self) -> List[Dict[str, Any]]:
        cursor = self.users.find({})
        return await cursor.to_list(length=None)

    async def find_user(self, user_id: Any) -> Optional[Dict[str, Any]]:
        """Look up a user by id. Malformed ids are treated as unknown."""
        object_id = to_object_id(user_id)
        if object_id is None:
            return None
        return await self.users.find_one({"_id": object_id})

    async def create_exercise(
        self, user_id: ObjectId, description: str, duration: Any, date: datetime
    ) -> Dict[str, Any]:
        exercise = Exercise(
            userId=user_id, description=description, duration=duration, date=date
        ).model_dump()
        result = await self.exercises.insert_one(exercise)
        exercise["_id"] = result.inserted_id
        return exercise

    async def link_exercise(self, user: Dict[str, Any], exercise: Dict[str, Any]) -> None:
        """Append an exercise id to the user's exercise list and persist the user."""
        await self.users.update_one(
            {"_id": user["_id"]},
            {"$push": {"exercises": exercise["_id"]}},
        )
        user.setdefault("exercises", []).append(exercise["_id"])

    async def add_exercise(
        self, user: Dict[str, Any], description: str, duration: Any, date: datetime
    ) -> Dict[str, Any]:
        """Create an exercise for a user, then link it from the user."""
        exercise = await self.create_exercise(user["_id"], description, duration, date)
        await self.link_exercise(user, exercise)
        logger.info(f"Added exercise {exercise['_id']} to user {user['_id']}")
        return exercise

    async def list_user_exercises(self, user: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Resolve the user's exercise ids to exercise documents, in list order."""
        ids = list(user.get("exercises") or [])
        if not ids:
            return []
        cursor = self.exercises.find({"_id": {"$in": ids}})
        by_id = {doc["_id"]: doc for doc in await cursor.to_list(length=None)}
        return [by_id[exercise_id] for exercise_id in ids if exercise_id in by_id]

    async def find_exercises(
        self,
        user_id: ObjectId,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Exercises of one user within an inclusive date range, in storage order."""
        query: Dict[str, Any] = {"userId": user_id}
        date_filter = {}
        if date_from is not None:
            date_filter["$gte"] = date_from
        if date_to is not None:
            date_filter["$lte"] = date_to
        if date_filter:
            query["date"] = date_filter

        cursor = self.exercises.find(query, limit=limit or 0)
        return await cursor.to_list(length=None)
