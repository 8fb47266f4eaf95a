from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Tuple
import re

from ..models import DateTimeParseResult, ParsedDateTime
from ..utils.clock import Clock, resolve_clock
from ..utils.logger import logger
from ..utils.time_utils import TimeFormat, WIRE_DATE_FORMAT
from .timezone import TimezoneManager


class ParseError:
    UNPARSEABLE_TIME = "Could not parse time from text"
    UNPARSEABLE_DATE = "Could not parse date from text"


# Sunday-first, so "this <weekday>" means the Sunday..Saturday week containing today
DAY_NAMES = ['sunday', 'monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday']
MONTH_NAMES = [
    'january', 'february', 'march', 'april', 'may', 'june',
    'july', 'august', 'september', 'october', 'november', 'december'
]

_DAY_ALTERNATION = '|'.join(DAY_NAMES)
_MONTH_ALTERNATION = '|'.join(MONTH_NAMES)

# Time rules, most specific first: (pattern, confidence, fixed HH:MM or None)
TIME_PATTERNS: List[Tuple[re.Pattern, float, Optional[str]]] = [
    (re.compile(r'\b(\d{1,2}):(\d{2})\s*(am|pm)\b'), 0.9, None),
    (re.compile(r'\b(\d{1,2})\s*(am|pm)\b'), 0.8, None),
    (re.compile(r'\b(\d{1,2}):(\d{2})(?!\s*(?:am|pm)\b)'), 0.7, None),
    (re.compile(r'\bnoon\b'), 0.9, '12:00'),
    (re.compile(r'\bmidnight\b'), 0.9, '00:00'),
    (re.compile(r'\bmorning\b'), 0.5, '09:00'),
    (re.compile(r'\bafternoon\b'), 0.5, '14:00'),
    (re.compile(r'\bevening\b'), 0.5, '18:00'),
]

TODAY_PATTERN = re.compile(r'\btoday\b')
TOMORROW_PATTERN = re.compile(r'\btomorrow\b')
NEXT_DAY_PATTERN = re.compile(rf'\bnext\s+({_DAY_ALTERNATION})\b')
THIS_DAY_PATTERN = re.compile(rf'\bthis\s+({_DAY_ALTERNATION})\b')
BARE_DAY_PATTERN = re.compile(rf'\b({_DAY_ALTERNATION})\b')
MONTH_DAY_PATTERN = re.compile(rf'\b({_MONTH_ALTERNATION})\s+(\d{{1,2}})(?:st|nd|rd|th)?\b')
NUMERIC_DATE_PATTERN = re.compile(r'\b(\d{1,2})/(\d{1,2})(?:/(\d{4}))?\b')

# After this hour a bare weekday naming today means next week's
LATE_DAY_HOUR = 17


def lenient_date(year: int, month: int, day: int) -> date:
    """
    Build a date without rejecting impossible days.

    Days past the end of the month roll into the next one, so 2/30 of a
    non-leap year becomes March 2.

    Raises:
        ValueError: year outside 1..9999
        OverflowError: rollover past 9999-12-31
    """
    return date(year, month, 1) + timedelta(days=day - 1)


def _sunday_index(value: date) -> int:
    return (value.weekday() + 1) % 7


class TimeParser:
    """
    Pulls a calendar date and a clock time out of free text.

    "Now" is read once, at construction, from the supplied clock.
    """

    def __init__(self, timezone: str = 'America/Los_Angeles', clock: Optional[Clock] = None):
        self.timezone = TimezoneManager.resolve(timezone)
        self.timezone_name = self.timezone.zone
        self.now = resolve_clock(clock).now(self.timezone)
        self.today = self.now.date()

        self.date_rules: List[Tuple[re.Pattern, Callable[[re.Match], Optional[date]], float]] = [
            (TODAY_PATTERN, lambda m: self.today, 0.9),
            (TOMORROW_PATTERN, lambda m: self.today + timedelta(days=1), 0.9),
            (NEXT_DAY_PATTERN, lambda m: self._next_weekday(DAY_NAMES.index(m.group(1))), 0.8),
            (THIS_DAY_PATTERN, lambda m: self._this_weekday(DAY_NAMES.index(m.group(1))), 0.8),
            (BARE_DAY_PATTERN, lambda m: self._next_occurrence(DAY_NAMES.index(m.group(1))), 0.7),
            (MONTH_DAY_PATTERN, self._month_day, 0.8),
            (NUMERIC_DATE_PATTERN, self._numeric_date, 0.8),
        ]

    def parse(self, text: str) -> DateTimeParseResult:
        normalized = (text or '').lower().strip()

        time_match = self.extract_time(normalized)
        if time_match is None:
            return DateTimeParseResult(success=False, error=ParseError.UNPARSEABLE_TIME)

        date_match = self.extract_date(normalized)
        if date_match is None:
            return DateTimeParseResult(success=False, error=ParseError.UNPARSEABLE_DATE)

        start_time, time_confidence = time_match
        start_date, date_confidence = date_match
        confidence = min(time_confidence, date_confidence)

        end_time, wrapped = TimeFormat.add_hour(start_time)
        try:
            end_date = start_date + timedelta(days=1) if wrapped else start_date
        except OverflowError:
            logger.debug(f"Appointment window past {start_date} is out of the calendar's range")
            return DateTimeParseResult(success=False, error=ParseError.UNPARSEABLE_DATE)

        return DateTimeParseResult(
            success=True,
            start_time=self._parsed(start_date, start_time, confidence),
            end_time=self._parsed(end_date, end_time, confidence),
        )

    def extract_time(self, text: str) -> Optional[Tuple[str, float]]:
        """
        Find the most specific clock time in lower-cased text.

        Returns:
            Tuple of (HH:MM:SS, confidence) or None
        """
        for pattern, confidence, fixed in TIME_PATTERNS:
            match = pattern.search(text)
            if not match:
                continue

            if fixed:
                return f"{fixed}:00", confidence

            groups = match.groups()
            hour = int(groups[0])
            if len(groups) == 3:
                minute = int(groups[1])
                period = groups[2]
            elif groups[1] in ('am', 'pm'):
                minute = 0
                period = groups[1]
            else:
                minute = int(groups[1])
                period = None

            if period:
                if hour < 1 or hour > 12 or minute >= 60:
                    logger.debug(f"Ignoring impossible 12-hour time in '{match.group(0)}'")
                    continue
                if period == 'pm' and hour != 12:
                    hour += 12
                elif period == 'am' and hour == 12:
                    hour = 0
            elif hour >= 24 or minute >= 60:
                logger.debug(f"Ignoring impossible 24-hour time in '{match.group(0)}'")
                continue

            return f"{hour:02d}:{minute:02d}:00", confidence

        return None

    def extract_date(self, text: str) -> Optional[Tuple[date, float]]:
        """
        Resolve the first matching date rule against lower-cased text.

        Returns:
            Tuple of (date, confidence) or None
        """
        for pattern, resolve, confidence in self.date_rules:
            match = pattern.search(text)
            if not match:
                continue

            try:
                resolved = resolve(match)
            except (ValueError, OverflowError):
                logger.debug(f"Ignoring out-of-range date in '{match.group(0)}'")
                continue

            if resolved is not None:
                return resolved, confidence

        return None

    def _parsed(self, day: date, time_str: str, confidence: float) -> ParsedDateTime:
        date_str = day.strftime(WIRE_DATE_FORMAT)
        return ParsedDateTime(
            date=date_str,
            time=time_str,
            full_date_time=f"{date_str} {time_str}",
            confidence=confidence,
            timezone=self.timezone_name,
        )

    def _next_weekday(self, target_day: int) -> date:
        """Occurrence in the following week: never today, never a past day."""
        days_ahead = target_day - _sunday_index(self.today)
        if days_ahead <= 0:
            days_ahead += 7
        return self.today + timedelta(days=days_ahead)

    def _this_weekday(self, target_day: int) -> date:
        """Occurrence inside the current Sunday-to-Saturday week, even if already past."""
        return self.today + timedelta(days=target_day - _sunday_index(self.today))

    def _next_occurrence(self, target_day: int) -> date:
        days_ahead = target_day - _sunday_index(self.today)

        if days_ahead < 0:
            days_ahead += 7
        elif days_ahead == 0 and self.now.hour >= LATE_DAY_HOUR:
            days_ahead = 7

        return self.today + timedelta(days=days_ahead)

    def _month_day(self, match: re.Match) -> Optional[date]:
        month = MONTH_NAMES.index(match.group(1)) + 1
        day = int(match.group(2))

        if day < 1 or day > 31:
            return None

        candidate = lenient_date(self.today.year, month, day)
        if candidate < self.today:
            candidate = lenient_date(self.today.year + 1, month, day)

        return candidate

    def _numeric_date(self, match: re.Match) -> Optional[date]:
        month = int(match.group(1))
        day = int(match.group(2))
        year = int(match.group(3)) if match.group(3) else self.today.year

        # Only the day's 1..31 range is checked; 2/30 rolls into March
        if month < 1 or month > 12 or day < 1 or day > 31:
            return None

        return lenient_date(year, month, day)


def parse_natural_datetime(
    text: str,
    timezone: str = 'America/Los_Angeles',
    clock: Optional[Clock] = None
) -> DateTimeParseResult:
    """
    Parse expressions like "Monday at 2pm", "next Tuesday at 10:30 AM" or
    "tomorrow at 3:30" into a one-hour window.

    Never raises: failures come back as ``success=False`` with an error
    message, so callers check ``success`` before reading the times.
    """
    return TimeParser(timezone, clock).parse(text)
