"""Unit tests for utility functions."""
import re
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from sanctuary.core.constants import SECURITY_CODE_ALPHABET
from sanctuary.core.utils import generate_security_code, strftime, to_timezone, to_utc


@pytest.mark.unit
class TestSecurityCode:
    """Test the pickup-matching security code."""

    def test_code_format(self):
        """Every code is six characters of A-Z and 0-9."""
        for _ in range(500):
            assert re.match(r"^[A-Z0-9]{6}$", generate_security_code())

    def test_code_custom_length(self):
        code = generate_security_code(length=8)
        assert len(code) == 8
        assert set(code) <= set(SECURITY_CODE_ALPHABET)

    def test_codes_vary(self):
        """Codes are random, not a fixed value."""
        codes = {generate_security_code() for _ in range(200)}
        assert len(codes) > 150


@pytest.mark.unit
class TestTimezoneHelpers:
    """Test timezone conversion helpers."""

    def test_to_utc_assumes_naive_is_utc(self):
        naive = datetime(2024, 3, 3, 14, 5)
        assert to_utc(naive) == datetime(2024, 3, 3, 14, 5, tzinfo=timezone.utc)

    def test_to_utc_converts_aware(self):
        eastern = datetime(2024, 3, 3, 9, 5, tzinfo=ZoneInfo("America/New_York"))
        assert to_utc(eastern) == datetime(2024, 3, 3, 14, 5, tzinfo=timezone.utc)
        assert to_utc(eastern).tzinfo == timezone.utc

    def test_to_timezone(self):
        utc_time = datetime(2024, 3, 3, 14, 5, tzinfo=timezone.utc)
        local = to_timezone(utc_time, ZoneInfo("America/New_York"))
        assert (local.hour, local.minute) == (9, 5)


@pytest.mark.unit
class TestStrftime:
    """Test label timestamp formatting."""

    def test_drops_leading_zeros(self):
        value = datetime(2024, 3, 3, 9, 5)
        assert strftime(value) == "Mar 3, 2024 9:05 AM"

    def test_keeps_two_digit_values(self):
        value = datetime(2024, 11, 24, 22, 30)
        assert strftime(value) == "Nov 24, 2024 10:30 PM"

    def test_custom_format(self):
        assert strftime(datetime(2024, 3, 3, 9, 5), "%b %d, %Y") == "Mar 3, 2024"

    def test_none_is_blank(self):
        assert strftime(None) == ""
