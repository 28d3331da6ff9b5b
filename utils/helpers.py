"""Helper utility functions.

Field casting, validation and date formatting used by the request handlers.
All of these are pure: they never touch the database.
"""

import math
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from utils.errors import ValidationError

DATE_FORMAT = "%a %b %d %Y"

Number = Union[int, float]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def js_type(value: Any) -> str:
    """Name the JSON type of a request value the way error messages report it."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "object"


def utc_now() -> datetime:
    """Current time as a naive UTC datetime, the form MongoDB hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_iso_datetime(text: str) -> Optional[datetime]:
    """Parse an ISO-8601 string into a naive UTC datetime, or None if it is not one."""
    if not isinstance(text, str) or not text.strip():
        return None
    try:
        parsed = datetime.fromisoformat(text.strip().replace('Z', '+00:00'))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def format_date(value: datetime) -> str:
    """Render a stored timestamp as a calendar date, e.g. ``Mon Jan 15 2024``."""
    return value.strftime(DATE_FORMAT)


def cast_text(value: Any, path: str) -> Optional[str]:
    """Cast a value to text. Returns None when the value is missing or empty."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value or None
    raise ValueError(
        f'Cast to string failed for value "{value}" (type {js_type(value)}) at path "{path}"'
    )


def cast_number(value: Any, path: str) -> Optional[Number]:
    """Cast a value to a finite number. Returns None when the value is missing or empty.

    Integral results fitting in a signed 64-bit integer come back as int,
    everything else as float.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)

    number = None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            if not value.strip():
                return None
            # float() accepts digit separators, Number() does not
            if "_" not in value:
                number = float(value.strip())
    except (ValueError, OverflowError):
        number = None

    if number is None or not math.isfinite(number):
        raise ValueError(
            f'Cast to Number failed for value "{value}" (type {js_type(value)}) at path "{path}"'
        )
    if number.is_integer() and abs(number) < 2 ** 63:
        return int(number)
    return number


def cast_date(value: Any, path: str) -> Optional[datetime]:
    """Cast a value to a naive UTC datetime.

    Missing, empty, zero and false values return None so the caller can
    apply its default; empty objects and lists are not missing. Numbers are
    milliseconds since the epoch.
    """
    if value is None or (isinstance(value, (str, int, float)) and not value):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    parsed = None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc).replace(tzinfo=None)
        except (OverflowError, OSError, ValueError):
            parsed = None
    elif isinstance(value, str):
        parsed = parse_iso_datetime(value)

    if parsed is None:
        raise ValueError(
            f'Cast to date failed for value "{value}" (type {js_type(value)}) at path "{path}"'
        )
    return parsed


def validate_username(value: Any) -> str:
    """Validate the username of a new user."""
    try:
        username = cast_text(value, "username")
    except ValueError as e:
        raise ValidationError("User", {"username": str(e)})
    if username is None or not username.strip():
        raise ValidationError("User", {"username": "Path `username` is required."})
    return username


def validate_exercise(body: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    """Validate and coerce the fields of a new exercise.

    Returns ``description``, ``duration`` and ``date`` ready to store. All
    failing fields are reported together in one ValidationError.
    """
    errors: Dict[str, str] = {}
    fields: Dict[str, Any] = {}

    try:
        fields["description"] = cast_text(body.get("description"), "description")
        if fields["description"] is None:
            errors["description"] = "Description is required"
    except ValueError as e:
        errors["description"] = str(e)

    try:
        fields["duration"] = cast_number(body.get("duration"), "duration")
        if fields["duration"] is None:
            errors["duration"] = "Path `duration` is required"
    except ValueError as e:
        errors["duration"] = str(e)

    try:
        fields["date"] = cast_date(body.get("date"), "date") or now or utc_now()
    except ValueError as e:
        errors["date"] = str(e)

    if errors:
        raise ValidationError("Exercise", errors)
    return fields


def parse_date_bound(value: Optional[str]) -> Optional[datetime]:
    """Parse a ``from``/``to`` query bound. Unparseable bounds yield None."""
    if not value:
        return None
    try:
        return cast_date(value, "date")
    except ValueError:
        return None


def parse_limit(value: Optional[str]) -> Optional[int]:
    """Parse a ``limit`` query value from its leading integer.

    A negative limit caps at its absolute value. Returns None (no cap) when
    there is no leading integer or it is zero.
    """
    if not value:
        return None
    match = _LEADING_INT.match(value)
    if not match:
        return None
    limit = abs(int(match.group(1)))
    return limit or None
