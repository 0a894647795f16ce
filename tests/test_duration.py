"""Tests for duration.py - resolving worked time to decimal hours."""

from datetime import time
from decimal import Decimal

import pytest

from duration import (
    clock_text_to_hours,
    elapsed_hours,
    hours_to_clock_text,
    parse_duration_text,
    parse_time_of_day,
    resolve_duration,
)


class TestParseTimeOfDay:
    """Tests for parse_time_of_day function."""

    def test_hours_and_minutes(self):
        assert parse_time_of_day("09:15") == time(9, 15)

    def test_single_digit_hour(self):
        assert parse_time_of_day("7:05") == time(7, 5)

    def test_seconds_ignored(self):
        """Browser-style HH:MM:SS values drop the seconds."""
        assert parse_time_of_day("17:30:45") == time(17, 30)

    def test_midnight(self):
        assert parse_time_of_day("00:00") == time(0, 0)

    @pytest.mark.parametrize("val", ["", "  ", None, "9", "24:00", "12:60", "ab:cd", "1:2:3:4"])
    def test_invalid_is_none(self, val):
        """Anything that is not a valid clock time is None."""
        assert parse_time_of_day(val) is None


class TestElapsedHours:
    """Tests for elapsed_hours function."""

    def test_same_day(self):
        assert elapsed_hours(time(9, 0), time(17, 30)) == Decimal("8.5")

    def test_overnight_shift(self):
        """End before start wraps past midnight."""
        assert elapsed_hours(time(22, 0), time(6, 0)) == Decimal("8")

    def test_same_time_is_zero(self):
        assert elapsed_hours(time(9, 0), time(9, 0)) == Decimal("0")

    def test_one_minute_before_start(self):
        """Ending a minute before the start is almost a full day."""
        assert hours_to_clock_text(elapsed_hours(time(9, 0), time(8, 59))) == "23:59"

    def test_never_negative(self):
        for start_hour in range(24):
            assert elapsed_hours(time(start_hour, 30), time(0, 0)) >= 0


class TestClockTextToHours:
    """Tests for clock_text_to_hours function."""

    def test_hours_and_minutes(self):
        assert clock_text_to_hours("8:30") == Decimal("8.5")

    def test_large_hours(self):
        """Hours have no upper bound."""
        assert clock_text_to_hours("40:15") == Decimal("40.25")

    def test_missing_minutes(self):
        assert clock_text_to_hours("3:") == Decimal("3")

    def test_missing_hours(self):
        assert clock_text_to_hours(":45") == Decimal("0.75")

    def test_non_numeric_parts(self):
        """Non-numeric parts count as zero."""
        assert clock_text_to_hours("x:30") == Decimal("0.5")
        assert clock_text_to_hours("2:yy") == Decimal("2")


class TestHoursToClockText:
    """Tests for hours_to_clock_text function."""

    def test_whole_hours(self):
        assert hours_to_clock_text(Decimal("8")) == "8:00"

    def test_half_hour(self):
        assert hours_to_clock_text(Decimal("8.5")) == "8:30"

    def test_minutes_zero_padded(self):
        assert hours_to_clock_text(Decimal("1.0833333")) == "1:05"

    def test_rollover_carries_into_hours(self):
        """Minutes rounding up to 60 become the next hour."""
        assert hours_to_clock_text(Decimal("1.999")) == "2:00"
        assert hours_to_clock_text(Decimal("0.9999")) == "1:00"

    def test_zero(self):
        assert hours_to_clock_text(Decimal("0")) == "0:00"

    def test_negative_treated_as_zero(self):
        assert hours_to_clock_text(Decimal("-2")) == "0:00"

    def test_huge_hours(self):
        """Hour counts too long for int-to-str conversion still format."""
        assert hours_to_clock_text(Decimal("1e5000")) == "1" + "0" * 5000 + ":00"

    def test_negative_zero(self):
        assert hours_to_clock_text(Decimal("-0")) == "0:00"

    @pytest.mark.parametrize("text", ["0:00", "0:59", "1:05", "8:30", "23:59", "100:01", "7:20"])
    def test_round_trip(self, text):
        """Well-formed H:MM text survives a trip through decimal hours."""
        assert hours_to_clock_text(clock_text_to_hours(text)) == text


class TestParseDurationText:
    """Tests for parse_duration_text function."""

    def test_decimal(self):
        assert parse_duration_text("7.25") == Decimal("7.25")

    def test_clock(self):
        assert parse_duration_text("7:15") == Decimal("7.25")

    @pytest.mark.parametrize("val", ["", None, "abc", "   "])
    def test_unparsable_is_zero(self, val):
        assert parse_duration_text(val) == Decimal("0")

    def test_negative_clamped(self):
        """Durations are never negative."""
        assert parse_duration_text("-3") == Decimal("0")
        assert parse_duration_text("-1:30") == Decimal("0")

    @pytest.mark.parametrize("val", ["1e5000", "1e600000", "99999999999999:00"])
    def test_huge_is_zero(self, val):
        """Absurd durations count as unparsable."""
        assert parse_duration_text(val) == Decimal("0")


class TestResolveDuration:
    """Tests for resolve_duration function."""

    def test_overnight_shift(self):
        """22:00 to 06:00 is eight hours."""
        resolution = resolve_duration("22:00", "06:00", "")
        assert resolution.hours == Decimal("8")
        assert resolution.from_clock is True
        assert resolution.display_text == "8:00"

    def test_same_start_and_end(self):
        resolution = resolve_duration("09:00", "09:00", "")
        assert resolution.hours == Decimal("0")
        assert resolution.display_text == "0:00"

    def test_clock_pair_overrides_typed_duration(self):
        """Start and end win over whatever was typed."""
        resolution = resolve_duration("09:00", "17:30", "3")
        assert resolution.hours == Decimal("8.5")
        assert resolution.display_text == "8:30"

    def test_no_rewrite_when_text_already_canonical(self):
        resolution = resolve_duration("09:00", "17:30", "8:30")
        assert resolution.hours == Decimal("8.5")
        assert resolution.display_text is None

    def test_idempotent(self):
        """Feeding the rewritten text back in gives no further rewrite."""
        first = resolve_duration("08:10", "16:45", "")
        second = resolve_duration("08:10", "16:45", first.display_text)
        assert second.display_text is None
        assert second.hours == first.hours
        assert first.display_text == "8:35"

    def test_decimal_only(self):
        """7.25 without start/end is used as-is."""
        resolution = resolve_duration("", "", "7.25")
        assert resolution.hours == Decimal("7.25")
        assert resolution.from_clock is False
        assert resolution.display_text is None

    def test_clock_duration_text(self):
        resolution = resolve_duration(None, None, "2:45")
        assert resolution.hours == Decimal("2.75")

    def test_only_start_uses_typed_duration(self):
        """An incomplete pair falls back to the typed duration."""
        resolution = resolve_duration("09:00", "", "4")
        assert resolution.hours == Decimal("4")
        assert resolution.from_clock is False

    def test_malformed_end_uses_typed_duration(self):
        resolution = resolve_duration("09:00", "25:00", "4")
        assert resolution.hours == Decimal("4")
        assert resolution.from_clock is False

    def test_garbage_duration_is_zero(self):
        resolution = resolve_duration("", "", "abc")
        assert resolution.hours == Decimal("0")
