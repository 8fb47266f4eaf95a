from datetime import timedelta
from typing import Optional

from ..models import CurrentDateTime, DateTimeContext, DateTimeFormatting
from ..utils.clock import Clock, resolve_clock
from ..utils.config import settings
from ..utils.time_utils import TimeFormat
from .timezone import TimezoneManager


ACCEPTED_DATE_FORMATS = [
    'Thursday, January 16, 2025',
    'January 16, 2025',
    '1/16/2025',
    '2025-01-16',
    '16-Jan-2025',
]


def build_datetime_context(
    timezone: Optional[str] = None,
    business_hours: Optional[str] = None,
    clock: Optional[Clock] = None
) -> DateTimeContext:
    """
    Build the "current time" frame handed to the prompt assembler.

    Args:
        timezone: Named zone the user lives in (default from settings)
        business_hours: Display string, passed through verbatim
        clock: Source of "now"; read exactly once

    Returns:
        DateTimeContext with the current date/time and a worked-example
        table of relative expressions resolved against "now"
    """
    zone = TimezoneManager.resolve(timezone or settings.default_timezone)
    now = resolve_clock(clock).now(zone)
    today = now.date()

    tomorrow = today + timedelta(days=1)
    next_week = today + timedelta(days=7)
    next_monday = today + timedelta(days=(-today.weekday()) % 7 or 7)
    in_three_days = today + timedelta(days=3)
    example_year = today.year + (1 if today.month == 12 else 0)

    examples = [
        f'"tomorrow" = {TimeFormat.to_long_date(tomorrow)}',
        f'"next week" = {TimeFormat.to_long_date(next_week)}',
        f'"next Monday" = {TimeFormat.to_long_date(next_monday)}',
        f'"in 3 days" = {TimeFormat.to_long_date(in_three_days)}',
        f'"January 20th" = January 20, {example_year}',
        '"3pm" = 3:00 PM',
        '"15:30" = 3:30 PM',
        '"morning" = 9:00 AM - 12:00 PM',
        '"afternoon" = 12:00 PM - 5:00 PM',
        '"evening" = 5:00 PM - 8:00 PM',
    ]

    return DateTimeContext(
        current=CurrentDateTime(
            timestamp=now.isoformat(),
            date=TimeFormat.to_long_date(today),
            time=TimeFormat.to_clock_display(now),
            day_of_week=f"{today:%A}",
            timezone=zone.zone,
            utc_offset=now.strftime('%Z') or zone.zone,
        ),
        formatting=DateTimeFormatting(
            examples=examples,
            business_hours=business_hours if business_hours is not None else settings.business_hours,
            date_formats=list(ACCEPTED_DATE_FORMATS),
        ),
    )
