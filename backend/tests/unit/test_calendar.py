"""Tests for iCalendar export."""

from datetime import datetime

import pytest
import pytz
from icalendar import Calendar

from persona_engine.errors import CalendarExportError
from persona_engine.models import AppointmentCandidate
from persona_engine.tools.calendar import PRODID, CalendarExporter, build_ics

TIMEZONE = "America/Los_Angeles"
LA = pytz.timezone(TIMEZONE)


@pytest.fixture
def candidate() -> AppointmentCandidate:
    return AppointmentCandidate(
        success=True,
        start_time="2025-01-16 14:00:00",
        end_time="2025-01-16 15:00:00",
        confidence=0.9,
        source="reply",
    )


def only_event(ics: bytes):
    events = Calendar.from_ical(ics).walk("VEVENT")
    assert len(events) == 1
    return events[0]


class TestBuildIcs:
    """Tests for build_ics."""

    def test_round_trips_through_icalendar(self, candidate, wednesday_clock) -> None:
        ics = build_ics(candidate, TIMEZONE, "Kitchen estimate", location="12 Elm St", clock=wednesday_clock)

        cal = Calendar.from_ical(ics)
        event = only_event(ics)

        assert str(cal["prodid"]) == PRODID
        assert str(event["summary"]) == "Kitchen estimate"
        assert str(event["location"]) == "12 Elm St"
        assert event.decoded("dtstart") == LA.localize(datetime(2025, 1, 16, 14, 0))
        assert event.decoded("dtend") == LA.localize(datetime(2025, 1, 16, 15, 0))
        assert str(event["uid"]).endswith("@persona-engine")

    def test_stamp_comes_from_clock(self, candidate, wednesday_clock) -> None:
        event = only_event(build_ics(candidate, TIMEZONE, "Visit", clock=wednesday_clock))
        assert event.decoded("dtstamp") == pytz.utc.localize(datetime(2025, 1, 15, 10, 0))

    def test_attendee(self, candidate, wednesday_clock) -> None:
        event = only_event(build_ics(
            candidate,
            TIMEZONE,
            "Visit",
            attendee_email="jane@example.com",
            attendee_name="Jane Doe",
            clock=wednesday_clock,
        ))

        attendee = event["attendee"]
        assert str(attendee) == "MAILTO:jane@example.com"
        assert attendee.params["CN"] == "Jane Doe"

    def test_optional_fields_are_omitted(self, candidate, wednesday_clock) -> None:
        event = only_event(build_ics(candidate, TIMEZONE, "Visit", clock=wednesday_clock))

        assert "description" not in event
        assert "location" not in event
        assert "attendee" not in event

    def test_accepts_aware_iso_times(self, wednesday_clock) -> None:
        candidate = AppointmentCandidate(
            success=True,
            start_time="2025-01-16T22:00:00+00:00",
            end_time="2025-01-16T23:00:00+00:00",
        )

        event = CalendarExporter(TIMEZONE, wednesday_clock).build_event(candidate, "Visit")

        assert event.decoded("dtstart") == LA.localize(datetime(2025, 1, 16, 14, 0))


class TestExportErrors:
    """Tests for rejected exports."""

    def test_failed_candidate(self, wednesday_clock) -> None:
        with pytest.raises(CalendarExportError):
            build_ics(AppointmentCandidate(success=False, error="exhausted_fallback"), TIMEZONE, "Visit", clock=wednesday_clock)

    def test_missing_title(self, candidate, wednesday_clock) -> None:
        with pytest.raises(CalendarExportError):
            build_ics(candidate, TIMEZONE, "", clock=wednesday_clock)

    def test_end_before_start(self, wednesday_clock) -> None:
        backwards = AppointmentCandidate(success=True, start_time="2025-01-16 15:00:00", end_time="2025-01-16 14:00:00")

        with pytest.raises(CalendarExportError, match="before end time"):
            build_ics(backwards, TIMEZONE, "Visit", clock=wednesday_clock)

    def test_unreadable_datetime(self, wednesday_clock) -> None:
        garbled = AppointmentCandidate(success=True, start_time="tomorrow-ish", end_time="2025-01-16 14:00:00")

        with pytest.raises(CalendarExportError, match="Invalid appointment datetime"):
            build_ics(garbled, TIMEZONE, "Visit", clock=wednesday_clock)
