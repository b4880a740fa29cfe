"""Unit tests for input sanitization."""
import pytest

from sanctuary.core.exceptions import ValidationError
from sanctuary.core.sanitization import (
    normalize_search_query,
    sanitize_guest_name,
    sanitize_location,
    sanitize_notes,
    sanitize_optional_text,
    sanitize_session_name,
    sanitize_text,
)


@pytest.mark.unit
class TestSanitizeText:
    """Test the shared free-text cleaner."""

    def test_strips_and_collapses_whitespace(self):
        assert sanitize_text("  Emma   Jones \n") == "Emma Jones"

    def test_removes_html_tags(self):
        assert sanitize_text("<b>Emma</b> Jones") == "Emma Jones"

    def test_rejects_leftover_angle_brackets(self):
        with pytest.raises(ValidationError, match="invalid HTML-like"):
            sanitize_text("Emma <3")

    def test_rejects_too_long(self):
        with pytest.raises(ValidationError, match="maximum length of 5"):
            sanitize_text("abcdefgh", max_length=5)

    def test_rejects_non_string(self):
        with pytest.raises(ValidationError, match="must be a string"):
            sanitize_text(42)


@pytest.mark.unit
class TestNames:
    """Test guest and session name cleaning."""

    def test_guest_name(self):
        assert sanitize_guest_name("  Visiting   Emma ") == "Visiting Emma"

    def test_guest_name_keeps_angle_brackets(self):
        assert sanitize_guest_name("Emma <3") == "Emma <3"
        assert sanitize_guest_name("Timmy <visiting>") == "Timmy <visiting>"

    @pytest.mark.parametrize("blank", ["", "   ", "\t\n", None])
    def test_blank_guest_name_rejected(self, blank):
        with pytest.raises(ValidationError, match="Please enter guest name"):
            sanitize_guest_name(blank)

    def test_guest_name_is_a_value_error(self):
        """Pydantic validators and callers catching ValueError still see it."""
        with pytest.raises(ValueError):
            sanitize_guest_name(" ")

    @pytest.mark.parametrize("blank", ["", "  ", None])
    def test_blank_session_name_rejected(self, blank):
        with pytest.raises(ValidationError, match="Please enter a session name"):
            sanitize_session_name(blank)


@pytest.mark.unit
class TestOptionalText:
    """Test notes and location cleaning."""

    def test_blank_becomes_none(self):
        assert sanitize_optional_text("   ") is None
        assert sanitize_location("") is None
        assert sanitize_optional_text(None) is None

    def test_notes_kept(self):
        assert sanitize_notes("Allergic to peanuts") == "Allergic to peanuts"

    @pytest.mark.parametrize("notes", [
        "EpiPen dose < 0.3mg, mom at desk",
        "allergic to <peanuts> and dairy",
        "<b>bold</b>  stays",
    ])
    def test_notes_keep_angle_brackets(self, notes):
        assert sanitize_notes(notes) == notes

    def test_notes_trimmed_only(self):
        assert sanitize_notes("  pick up   at 11\n") == "pick up   at 11"
        assert sanitize_notes("   ") is None
        assert sanitize_notes(None) is None

    def test_notes_limit(self):
        assert sanitize_notes("x" * 1000) == "x" * 1000
        with pytest.raises(ValidationError, match="maximum length of 1000"):
            sanitize_notes("x" * 1001)

    def test_notes_non_string(self):
        with pytest.raises(ValidationError, match="must be a string"):
            sanitize_notes(42)

    def test_location_limit(self):
        with pytest.raises(ValidationError):
            sanitize_location("x" * 201)


@pytest.mark.unit
class TestSearchQuery:
    """Search input is normalized, never rejected."""

    def test_lowercases_and_trims(self):
        assert normalize_search_query("  ALICE   Moore ") == "alice moore"

    def test_empty(self):
        assert normalize_search_query(None) == ""
        assert normalize_search_query("") == ""

    def test_truncates(self):
        assert len(normalize_search_query("a" * 500)) == 100
