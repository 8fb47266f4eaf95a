from datetime import datetime
from typing import Optional

from ..models import AppointmentCandidate
from ..utils.clock import Clock, resolve_clock
from ..utils.config import settings
from ..utils.logger import logger
from ..utils.time_utils import TimeFormat, WIRE_DATETIME_FORMAT
from .timezone import TimezoneManager


class ValidationResult:
    def __init__(self, is_valid: bool, error_type: Optional[str] = None, clarification_question: Optional[str] = None, suggestion: Optional[str] = None):
        self.is_valid = is_valid
        self.error_type = error_type
        self.clarification_question = clarification_question
        self.suggestion = suggestion

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "error_type": self.error_type,
            "clarification_question": self.clarification_question,
            "suggestion": self.suggestion,
        }


class AppointmentValidator:
    def __init__(
        self,
        timezone: str = 'America/Los_Angeles',
        business_start: Optional[str] = None,
        business_end: Optional[str] = None,
        clock: Optional[Clock] = None
    ):
        self.timezone = TimezoneManager.resolve(timezone)
        self.business_start = business_start or settings.business_start
        self.business_end = business_end or settings.business_end
        self.now = resolve_clock(clock).now(self.timezone)

    def _localize(self, wire_datetime: str) -> datetime:
        return self.timezone.localize(datetime.strptime(wire_datetime, WIRE_DATETIME_FORMAT))

    def is_future(self, wire_datetime: str) -> bool:
        try:
            return self._localize(wire_datetime) > self.now
        except ValueError:
            logger.warning(f"Not a valid appointment datetime: '{wire_datetime}'")
            return False

    def is_within_business_hours(self, time_24hr: str) -> bool:
        return TimeFormat.is_business_hours(time_24hr, self.business_start, self.business_end)

    def validate(self, candidate: AppointmentCandidate) -> ValidationResult:
        not_parsed = ValidationResult(
            is_valid=False,
            error_type="not_parsed",
            clarification_question="I couldn't catch the date and time. Could you say something like 'next Tuesday at 2 PM'?",
            suggestion="next Tuesday at 2 PM"
        )

        if not candidate.success or not candidate.start_time:
            return not_parsed

        try:
            start = self._localize(candidate.start_time)
        except ValueError:
            logger.warning(f"Not a valid appointment datetime: '{candidate.start_time}'")
            return not_parsed

        if start <= self.now:
            logger.warning(f"Past appointment detected: {start.strftime('%A, %B %d, %Y %H:%M')}")

            day_name = start.strftime('%A')
            return ValidationResult(
                is_valid=False,
                error_type="past_date",
                clarification_question=f"That time ({TimeFormat.to_long_date(start.date())}) has already passed. Did you mean next {day_name}?",
                suggestion=f"next {day_name.lower()}"
            )

        start_clock = candidate.start_time.split(' ')[1]
        if not self.is_within_business_hours(start_clock):
            opening = TimeFormat.to_12hr_display(TimeFormat.parse_to_24hr(self.business_start) or self.business_start)
            closing = TimeFormat.to_12hr_display(TimeFormat.parse_to_24hr(self.business_end) or self.business_end)
            logger.info(f"Appointment at {start_clock} is outside business hours")

            return ValidationResult(
                is_valid=False,
                error_type="outside_business_hours",
                clarification_question=f"{TimeFormat.to_12hr_display(start_clock)} is outside our business hours ({opening} - {closing}). Would a time within those hours work?",
                suggestion=opening
            )

        return ValidationResult(is_valid=True)
