"""Tests for the date/time context, time zones and clock-string helpers."""

from datetime import datetime

import pytest
import pytz

from persona_engine.tools.datetime_context import ACCEPTED_DATE_FORMATS, build_datetime_context
from persona_engine.tools.timezone import TimezoneManager
from persona_engine.utils.clock import FixedClock
from persona_engine.utils.time_utils import TimeFormat

TIMEZONE = "America/Los_Angeles"


class TestBuildDatetimeContext:
    """Tests for build_datetime_context."""

    def test_current_fields(self, wednesday_clock) -> None:
        context = build_datetime_context(TIMEZONE, clock=wednesday_clock)

        assert context.current.date == "Wednesday, January 15, 2025"
        assert context.current.time == "10:00 AM"
        assert context.current.day_of_week == "Wednesday"
        assert context.current.timezone == TIMEZONE
        assert context.current.utc_offset == "PST"
        assert context.current.timestamp.startswith("2025-01-15T10:00:00")

    def test_examples_resolve_against_now(self, wednesday_clock) -> None:
        examples = build_datetime_context(TIMEZONE, clock=wednesday_clock).formatting.examples

        assert examples[0] == '"tomorrow" = Thursday, January 16, 2025'
        assert examples[1] == '"next week" = Wednesday, January 22, 2025'
        assert examples[2] == '"next Monday" = Monday, January 20, 2025'
        assert examples[3] == '"in 3 days" = Saturday, January 18, 2025'
        assert examples[4] == '"January 20th" = January 20, 2025'

    def test_next_monday_from_a_monday_is_a_week_out(self, monday_clock) -> None:
        examples = build_datetime_context(TIMEZONE, clock=monday_clock).formatting.examples
        assert examples[2] == '"next Monday" = Monday, January 20, 2025'

    def test_january_example_rolls_over_in_december(self) -> None:
        context = build_datetime_context(TIMEZONE, clock=FixedClock(datetime(2025, 12, 10, 9, 0)))
        assert context.formatting.examples[4] == '"January 20th" = January 20, 2026'

    def test_business_hours_and_formats(self, wednesday_clock) -> None:
        context = build_datetime_context(TIMEZONE, "7:00 AM - 3:00 PM", clock=wednesday_clock)

        assert context.formatting.business_hours == "7:00 AM - 3:00 PM"
        assert context.formatting.date_formats == ACCEPTED_DATE_FORMATS

    def test_default_business_hours(self, wednesday_clock) -> None:
        assert build_datetime_context(TIMEZONE, clock=wednesday_clock).formatting.business_hours == "9:00 AM - 5:00 PM"

    def test_aware_instant_is_converted(self) -> None:
        clock = FixedClock(pytz.utc.localize(datetime(2025, 1, 15, 18, 30)))
        context = build_datetime_context("America/New_York", clock=clock)

        assert context.current.time == "1:30 PM"
        assert context.current.utc_offset == "EST"


class TestTimezoneManager:
    def test_abbreviation(self) -> None:
        assert TimezoneManager.zone_name("pst") == "America/Los_Angeles"

    def test_unknown_zone_falls_back_to_utc(self) -> None:
        assert TimezoneManager.zone_name("Mars/Olympus_Mons") == "UTC"

    def test_detect_from_text(self) -> None:
        assert TimezoneManager.detect_timezone_from_text("3pm EST works") == "America/New_York"
        assert TimezoneManager.detect_timezone_from_text("see you at the best time") is None


class TestTimeFormat:
    @pytest.mark.parametrize("text,expected", [
        ("3 PM", "15:00"),
        ("3:30 pm", "15:30"),
        ("12 AM", "00:00"),
        ("15:00", "15:00"),
        ("09:00:00", "09:00"),
        ("13 PM", None),
        ("soon", None),
    ])
    def test_parse_to_24hr(self, text, expected) -> None:
        assert TimeFormat.parse_to_24hr(text) == expected

    def test_add_hour_wraps(self) -> None:
        assert TimeFormat.add_hour("14:00:00") == ("15:00:00", False)
        assert TimeFormat.add_hour("23:30:00") == ("00:30:00", True)

    def test_business_hours_bounds_are_inclusive(self) -> None:
        assert TimeFormat.is_business_hours("09:00:00", "9:00 AM", "5:00 PM")
        assert TimeFormat.is_business_hours("17:00", "09:00", "17:00")
        assert not TimeFormat.is_business_hours("17:01", "09:00", "17:00")

    def test_displays(self) -> None:
        assert TimeFormat.to_12hr_display("15:30:00") == "3:30 PM"
        assert TimeFormat.to_12hr_display("09:00") == "9 AM"
