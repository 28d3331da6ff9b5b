"""Request-scoped dependencies shared by the routers."""

import json
from typing import Any, Dict

from fastapi import Request

from services.exercise_store import ExerciseStore
from utils.errors import ExerciseTrackerError


def get_store(request: Request) -> ExerciseStore:
    """Return the store handle built during application start-up."""
    return request.app.state.store


async def read_body(request: Request) -> Dict[str, Any]:
    """Read a JSON or urlencoded/multipart form body into a dict.

    Empty bodies and JSON values that are not objects read as ``{}``.
    """
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        raw = await request.body()
        if not raw.strip():
            return {}
        try:
            payload = await request.json()
        except json.JSONDecodeError as e:
            raise ExerciseTrackerError(f"Invalid JSON body: {e.msg}", status_code=400)
        return payload if isinstance(payload, dict) else {}

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}
