"""Tests for natural-language date/time parsing.

All cases run against a pinned clock in America/Los_Angeles:
Wednesday 2025-01-15 10:00 unless noted otherwise.
"""

from datetime import date, datetime

import pytest

from persona_engine.tools.time_parser import (
    ParseError,
    TimeParser,
    lenient_date,
    parse_natural_datetime,
)
from persona_engine.utils.clock import FixedClock

TIMEZONE = "America/Los_Angeles"


def parse(text, clock):
    return parse_natural_datetime(text, TIMEZONE, clock)


class TestParseNaturalDatetime:
    """End-to-end parsing into a one-hour window."""

    def test_tomorrow_at_2pm(self, wednesday_clock) -> None:
        result = parse("tomorrow at 2pm", wednesday_clock)

        assert result.success
        assert result.start_time.full_date_time == "2025-01-16 14:00:00"
        assert result.start_time.date == "2025-01-16"
        assert result.start_time.time == "14:00:00"
        assert result.start_time.confidence == 0.8
        assert result.start_time.timezone == TIMEZONE
        assert result.end_time.full_date_time == "2025-01-16 15:00:00"

    def test_next_thursday_from_monday(self, monday_clock) -> None:
        result = parse("next Thursday at 10am", monday_clock)

        assert result.start_time.full_date_time == "2025-01-16 10:00:00"
        assert result.start_time.confidence == 0.8

    def test_impossible_day_rolls_over(self, wednesday_clock) -> None:
        """2/30 does not raise; it becomes March 2."""
        result = parse("2/30 at 3pm", wednesday_clock)

        assert result.success
        assert result.start_time.full_date_time == "2025-03-02 15:00:00"

    def test_end_time_wraps_past_midnight(self, wednesday_clock) -> None:
        """The end of a late window moves to the next day."""
        result = parse("today at 11:30 pm", wednesday_clock)

        assert result.start_time.full_date_time == "2025-01-15 23:30:00"
        assert result.end_time.full_date_time == "2025-01-16 00:30:00"
        assert result.start_time.confidence == 0.9

    def test_missing_time(self, wednesday_clock) -> None:
        result = parse("sometime next week", wednesday_clock)

        assert not result.success
        assert result.error == ParseError.UNPARSEABLE_TIME
        assert result.start_time is None

    def test_missing_date(self, wednesday_clock) -> None:
        result = parse("at 3pm", wednesday_clock)

        assert not result.success
        assert result.error == ParseError.UNPARSEABLE_DATE

    def test_empty_text(self, wednesday_clock) -> None:
        assert parse("", wednesday_clock).error == ParseError.UNPARSEABLE_TIME

    def test_year_zero_is_unparseable(self, wednesday_clock) -> None:
        """An out-of-range year fails the date pass instead of raising."""
        result = parse("1/5/0000 at 2pm", wednesday_clock)

        assert not result.success
        assert result.error == ParseError.UNPARSEABLE_DATE

    def test_window_past_last_calendar_day_is_unparseable(self, wednesday_clock) -> None:
        """A window that would end after 9999-12-31 fails instead of raising."""
        result = parse("12/31/9999 at 11:30pm", wednesday_clock)

        assert not result.success
        assert result.error == ParseError.UNPARSEABLE_DATE

    def test_last_calendar_day_without_wrap(self, wednesday_clock) -> None:
        result = parse("12/31/9999 at 2pm", wednesday_clock)

        assert result.success
        assert result.end_time.full_date_time == "9999-12-31 15:00:00"


class TestExtractTime:
    """Tests for the time rules, most specific first."""

    @pytest.fixture
    def parser(self, wednesday_clock) -> TimeParser:
        return TimeParser(TIMEZONE, wednesday_clock)

    @pytest.mark.parametrize("text,expected", [
        ("3:30 pm", ("15:30:00", 0.9)),
        ("12:15 am", ("00:15:00", 0.9)),
        ("3pm", ("15:00:00", 0.8)),
        ("12 pm", ("12:00:00", 0.8)),
        ("15:30", ("15:30:00", 0.7)),
        ("noon", ("12:00:00", 0.9)),
        ("midnight", ("00:00:00", 0.9)),
        ("morning", ("09:00:00", 0.5)),
        ("afternoon", ("14:00:00", 0.5)),
        ("evening", ("18:00:00", 0.5)),
    ])
    def test_time_rules(self, parser, text, expected) -> None:
        assert parser.extract_time(text) == expected

    def test_afternoon_is_not_noon(self, parser) -> None:
        assert parser.extract_time("tomorrow afternoon") == ("14:00:00", 0.5)

    def test_impossible_hour_is_skipped(self, parser) -> None:
        assert parser.extract_time("13pm") is None
        assert parser.extract_time("25:00") is None

    def test_impossible_12_hour_time_falls_through(self, parser) -> None:
        """A bad am/pm time lets a later rule match."""
        assert parser.extract_time("13pm in the evening") == ("18:00:00", 0.5)


class TestExtractDate:
    """Tests for the date rules."""

    @pytest.fixture
    def parser(self, wednesday_clock) -> TimeParser:
        return TimeParser(TIMEZONE, wednesday_clock)

    @pytest.mark.parametrize("text,expected", [
        ("today", (date(2025, 1, 15), 0.9)),
        ("tomorrow", (date(2025, 1, 16), 0.9)),
        ("next wednesday", (date(2025, 1, 22), 0.8)),
        ("next friday", (date(2025, 1, 17), 0.8)),
        ("this monday", (date(2025, 1, 13), 0.8)),
        ("this saturday", (date(2025, 1, 18), 0.8)),
        ("friday", (date(2025, 1, 17), 0.7)),
        ("monday", (date(2025, 1, 20), 0.7)),
        ("wednesday", (date(2025, 1, 15), 0.7)),
        ("january 20th", (date(2025, 1, 20), 0.8)),
        ("january 15", (date(2025, 1, 15), 0.8)),
        ("january 10", (date(2026, 1, 10), 0.8)),
        ("1/20", (date(2025, 1, 20), 0.8)),
        ("1/20/2026", (date(2026, 1, 20), 0.8)),
    ])
    def test_date_rules(self, parser, text, expected) -> None:
        assert parser.extract_date(text) == expected

    def test_bare_weekday_late_in_the_day_means_next_week(self) -> None:
        parser = TimeParser(TIMEZONE, FixedClock(datetime(2025, 1, 15, 18, 0)))
        assert parser.extract_date("wednesday") == (date(2025, 1, 22), 0.7)

    def test_invalid_numeric_month(self, parser) -> None:
        assert parser.extract_date("13/02") is None

    def test_no_date(self, parser) -> None:
        assert parser.extract_date("whenever works") is None


class TestLenientDate:
    def test_overflowing_day(self) -> None:
        assert lenient_date(2025, 2, 30) == date(2025, 3, 2)

    def test_leap_year(self) -> None:
        assert lenient_date(2024, 2, 30) == date(2024, 3, 1)

    def test_year_end(self) -> None:
        assert lenient_date(2025, 12, 32) == date(2026, 1, 1)
