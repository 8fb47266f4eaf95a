"""
Calendar export for booked appointments.

Turns an AppointmentCandidate into an iCalendar document that the user can
import into any calendar client.
"""

import uuid
from datetime import datetime
from typing import Optional

import pytz
from dateutil import parser
from icalendar import Calendar, Event, vCalAddress, vText

from ..errors import CalendarExportError
from ..models import AppointmentCandidate
from ..utils.clock import Clock, resolve_clock
from ..utils.logger import logger
from .timezone import TimezoneManager


PRODID = "-//Persona Engine//Appointment Export//EN"
UID_DOMAIN = "persona-engine"


class CalendarExporter:
    def __init__(self, timezone: str = 'America/Los_Angeles', clock: Optional[Clock] = None):
        self.timezone = TimezoneManager.resolve(timezone)
        self.clock = resolve_clock(clock)

    def _localize(self, value: Optional[str]) -> datetime:
        """Accepts the wire format or any ISO 8601 string; naive values are read in the exporter's zone."""
        try:
            parsed = parser.isoparse(value)
        except (TypeError, ValueError) as e:
            raise CalendarExportError(f"Invalid appointment datetime '{value}'") from e

        if parsed.tzinfo is None:
            return self.timezone.localize(parsed)
        return parsed.astimezone(self.timezone)

    def build_event(
        self,
        candidate: AppointmentCandidate,
        title: str,
        description: str = "",
        location: str = "",
        attendee_email: str = "",
        attendee_name: str = ""
    ) -> Event:
        if not candidate.success:
            raise CalendarExportError("Cannot export an appointment that was not parsed")

        if not title:
            raise CalendarExportError("An appointment title is required")

        start = self._localize(candidate.start_time)
        end = self._localize(candidate.end_time)

        if end <= start:
            raise CalendarExportError("Start time must be before end time")

        stamp = self.clock.now(pytz.utc)

        event = Event()
        event.add('uid', f"{uuid.uuid4()}@{UID_DOMAIN}")
        event.add('dtstamp', stamp)
        event.add('created', stamp)
        event.add('last-modified', stamp)
        event.add('dtstart', start)
        event.add('dtend', end)
        event.add('summary', title)

        if description:
            event.add('description', description)

        if location:
            event['location'] = vText(location)

        if attendee_email:
            attendee = vCalAddress(f"MAILTO:{attendee_email}")
            if attendee_name:
                attendee.params['cn'] = vText(attendee_name)
            attendee.params['role'] = vText('REQ-PARTICIPANT')
            attendee.params['rsvp'] = vText('TRUE')
            event.add('attendee', attendee, encode=0)

        return event

    def build_calendar(self, candidate: AppointmentCandidate, title: str, **details) -> Calendar:
        cal = Calendar()
        cal.add('prodid', PRODID)
        cal.add('version', '2.0')
        cal.add('calscale', 'GREGORIAN')
        cal.add('method', 'PUBLISH')
        cal.add_component(self.build_event(candidate, title, **details))
        return cal


def build_ics(
    candidate: AppointmentCandidate,
    timezone: str,
    title: str,
    description: str = "",
    location: str = "",
    attendee_email: str = "",
    attendee_name: str = "",
    clock: Optional[Clock] = None
) -> bytes:
    """
    Render an appointment as an .ics document.

    Raises:
        CalendarExportError: when the candidate failed to parse, has no
            title, or does not describe a positive time window
    """
    exporter = CalendarExporter(timezone, clock)
    cal = exporter.build_calendar(
        candidate,
        title,
        description=description,
        location=location,
        attendee_email=attendee_email,
        attendee_name=attendee_name,
    )
    logger.info(f"Exported appointment '{title}' starting {candidate.start_time} to iCalendar")
    return cal.to_ical()
