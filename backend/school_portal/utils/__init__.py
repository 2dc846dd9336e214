"""Utility functions for the School Portal backend."""

import math
from datetime import datetime, timezone
from typing import Any, Optional, Tuple, Union

from bson import ObjectId

Number = Union[int, float]


def utcnow() -> datetime:
    """Current UTC time, truncated to milliseconds like Mongo stores it."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def to_trimmed_str(value: Any) -> str:
    """Coerce a loosely typed input value to a trimmed string."""
    if value is None:
        return ""
    return str(value).strip()


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after trimming."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_score(value: Any) -> Tuple[Optional[Number], str]:
    """
    Parse a submitted score.

    Returns (score, "") on success or (None, reason) when the value is not a
    finite number. Integral values come back as ``int``.
    """
    if isinstance(value, bool):
        return None, "Marks must be a number"

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            return None, "Marks must be a number"

    if not math.isfinite(number):
        return None, "Marks must be a number"

    if number.is_integer():
        return int(number), ""
    return number, ""


def as_object_id(value: Any) -> Optional[ObjectId]:
    """Convert a string id to ObjectId; None if it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    text = to_trimmed_str(value)
    if not ObjectId.is_valid(text):
        return None
    return ObjectId(text)


def seconds_between(first: datetime, second: datetime) -> float:
    """Absolute distance in seconds, treating naive datetimes as UTC."""
    if first.tzinfo is None:
        first = first.replace(tzinfo=timezone.utc)
    if second.tzinfo is None:
        second = second.replace(tzinfo=timezone.utc)
    return abs((second - first).total_seconds())
