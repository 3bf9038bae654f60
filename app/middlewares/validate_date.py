# app/middlewares/validate_date.py
"""
Date validation for request payloads.

Clients must send timestamps as YYYY-MM-DD, optionally followed by a
HH:MM:SS time part (space or T separated), fractional seconds and a Z or
±HH:MM designator. Locale formats ("5 de octubre") are rejected outright,
and so is any instant later than now.
"""

import re
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Depends

from app.middlewares.request_body import json_body
from app.utils.errors import ValidationError

ISO_DATE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})"
    r"(?:[ T](?P<time>\d{2}:\d{2}:\d{2})(?:\.(?P<fraction>\d+))?(?P<tz>Z|[+\-]\d{2}:\d{2})?)?$"
)

DATE_ERROR = (
    "El campo '{field}' tiene un formato de fecha inválido, "
    "no sigue el formato YYYY-MM-DD, o es una fecha futura."
)


def parse_timestamp(value: str) -> Optional[datetime]:
    """Format and calendar check only. Returns None when the string is not a valid timestamp."""
    match = ISO_DATE.fullmatch(value)
    if not match:
        return None

    text = match.group("date")
    if match.group("time"):
        text += "T" + match.group("time")
        if match.group("fraction"):
            text += "." + match.group("fraction")[:6].ljust(6, "0")
        tz = match.group("tz")
        if tz:
            text += "+00:00" if tz == "Z" else tz
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        # 2025-02-30, 2025-13-01, 25:00:00 ...
        return None


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse and bounds-check a client timestamp.
    Returns the parsed datetime, or None when it is missing, malformed,
    not a real calendar date, or in the future.
    """
    if not value or not isinstance(value, str):
        return None

    parsed = parse_timestamp(value)
    if parsed is None:
        return None

    now = datetime.now(timezone.utc) if parsed.tzinfo else datetime.now()
    if parsed > now:
        return None
    return parsed


def to_local_naive(value: datetime) -> datetime:
    """Offset-bearing datetimes are stored as server local time."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def coerce_timestamp(value: Any) -> Any:
    """Pydantic before-validator for date fields of request models."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_local_naive(value)
    if isinstance(value, str):
        parsed = parse_timestamp(value.strip())
        if parsed is None:
            raise ValueError("formato de fecha inválido, se espera YYYY-MM-DD[ HH:MM:SS]")
        return to_local_naive(parsed)
    raise ValueError("formato de fecha inválido, se espera YYYY-MM-DD[ HH:MM:SS]")


def validate_dates(*fields: str):
    """
    Dependency factory: check the named body fields with parse_date.
    Absent or empty fields are skipped; required-ness is decided by each
    controller. Returns the body so handlers can depend on it directly.
    """
    def dependency(body: dict = Depends(json_body)) -> dict:
        for field in fields:
            value = body.get(field)
            if value and parse_date(value) is None:
                raise ValidationError({"ok": False, "mensaje": DATE_ERROR.format(field=field)})
        return body

    return dependency
