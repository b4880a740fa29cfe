"""Input sanitization utilities."""
import re
from typing import Optional

from sanctuary.core.constants import (
    MAX_LOCATION_LENGTH,
    MAX_NAME_LENGTH,
    MAX_NOTES_LENGTH,
    MAX_SEARCH_LENGTH,
)
from sanctuary.core.exceptions import ValidationError


def sanitize_text(text: str, max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Sanitize free-text input.

    HTML tags are removed (unless ``strip_html`` is False) and whitespace is
    collapsed. Output is not HTML-escaped here; the label template escapes
    on render.

    Args:
        text: The input text to sanitize
        max_length: Optional maximum length to enforce
        strip_html: Whether to strip HTML tags (default True)

    Returns:
        Sanitized text with HTML tags removed and whitespace normalized

    Raises:
        ValidationError: If text exceeds max_length or contains dangerous patterns
    """
    if not isinstance(text, str):
        raise ValidationError("Input must be a string")

    sanitized = text.strip()

    if max_length and len(sanitized) > max_length:
        raise ValidationError(f"Input exceeds maximum length of {max_length} characters")

    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

        # Reject inputs that still contain HTML-like patterns after stripping
        if '<' in sanitized or '>' in sanitized:
            raise ValidationError("Input contains invalid HTML-like patterns")

    sanitized = re.sub(r'\s+', ' ', sanitized)

    return sanitized.strip()


def sanitize_guest_name(guest_name: str) -> str:
    """
    Sanitize the display name typed for a walk-in guest.

    Angle brackets are kept: a guest name is shown as typed.

    Raises:
        ValidationError: If the name is blank after cleaning
    """
    if guest_name is None:
        raise ValidationError("Please enter guest name")

    sanitized = sanitize_text(guest_name, max_length=MAX_NAME_LENGTH, strip_html=False)
    if not sanitized:
        raise ValidationError("Please enter guest name")
    return sanitized


def sanitize_session_name(name: str) -> str:
    if name is None:
        raise ValidationError("Please enter a session name")

    sanitized = sanitize_text(name, max_length=MAX_NAME_LENGTH)
    if not sanitized:
        raise ValidationError("Please enter a session name")
    return sanitized


def sanitize_optional_text(text: Optional[str], max_length: int = MAX_NOTES_LENGTH) -> Optional[str]:
    """Sanitize optional location text; blank becomes None."""
    if text is None:
        return None
    sanitized = sanitize_text(text, max_length=max_length)
    return sanitized or None


def sanitize_notes(notes: Optional[str]) -> Optional[str]:
    """
    Clean free-text notes kept with a guest check-in.

    Notes are stored as typed: only surrounding whitespace is trimmed and
    the length enforced. Blank becomes None.
    """
    if notes is None:
        return None
    if not isinstance(notes, str):
        raise ValidationError("Input must be a string")

    cleaned = notes.strip()
    if len(cleaned) > MAX_NOTES_LENGTH:
        raise ValidationError(f"Input exceeds maximum length of {MAX_NOTES_LENGTH} characters")
    return cleaned or None


def sanitize_location(location: Optional[str]) -> Optional[str]:
    return sanitize_optional_text(location, max_length=MAX_LOCATION_LENGTH)


def normalize_search_query(query: Optional[str]) -> str:
    """
    Normalize a roster or session search string.

    Search input is never rejected: it is trimmed, collapsed, truncated and
    lowercased for case-insensitive substring matching.
    """
    if not query:
        return ""
    normalized = re.sub(r'\s+', ' ', query.strip())
    return normalized[:MAX_SEARCH_LENGTH].lower()
