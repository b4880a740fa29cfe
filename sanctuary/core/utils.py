"""General utility functions."""
import re
import secrets
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from sanctuary.core.constants import SECURITY_CODE_ALPHABET, SECURITY_CODE_LENGTH


def generate_security_code(length: int = SECURITY_CODE_LENGTH) -> str:
    """
    Generate the matching code printed on a child tag and its pickup tag.

    Codes are not checked for uniqueness. A parent's tag is compared by eye
    against the code on the child's tag within one session, so a collision
    is harmless in practice.
    """
    return "".join(secrets.choice(SECURITY_CODE_ALPHABET) for _ in range(length))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC timezone."""
    if dt.tzinfo is None:
        # Assume UTC if no timezone
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_timezone(dt: datetime, tz: ZoneInfo) -> datetime:
    """Convert datetime to specified timezone."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(tz)


def strftime(value: datetime, format: str = "%b %d, %Y %I:%M %p") -> str:
    """Format a datetime for a printed label.

    Leading zeros on the day and hour are dropped ("Mar 3, 2024 9:05 AM").
    """
    if value is None:
        return ""
    formatted = value.strftime(format)
    return re.sub(r"(?<=\s)0", "", formatted)
