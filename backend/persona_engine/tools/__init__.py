"""Tools for date/time parsing, appointment extraction and calendar export."""

from .appointment import extract_appointment
from .calendar import CalendarExporter, build_ics
from .datetime_context import build_datetime_context
from .time_parser import TimeParser, parse_natural_datetime
from .timezone import TimezoneManager
from .validation import AppointmentValidator, ValidationResult

__all__ = [
    "extract_appointment",
    "CalendarExporter",
    "build_ics",
    "build_datetime_context",
    "TimeParser",
    "parse_natural_datetime",
    "TimezoneManager",
    "AppointmentValidator",
    "ValidationResult",
]
