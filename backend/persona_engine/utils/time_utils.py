"""
Time utility functions for handling 24-hour and 12-hour format conversions.

This module provides a consistent interface for time handling throughout the application:
- Internal storage: 24-hour format (HH:MM:SS)
- User display: 12-hour format (h:MM AM/PM)
- Appointment wire format: YYYY-MM-DD HH:MM:SS
"""

import re
from typing import Optional, Tuple
from datetime import date, datetime


WIRE_DATE_FORMAT = "%Y-%m-%d"
WIRE_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class TimeFormat:
    """
    Utility class for time format conversions and validation.
    Ensures consistent time handling across the application.
    """

    @staticmethod
    def parse_to_24hr(time_str: str) -> Optional[str]:
        """
        Parse a clock string to 24-hour format (HH:MM).

        Handles:
        - "3 PM" → "15:00"
        - "3:30 PM" → "15:30"
        - "15:00" → "15:00"
        - "09:00:00" → "09:00"

        Args:
            time_str: Time string in 12-hour or 24-hour form

        Returns:
            24-hour format string (HH:MM) or None if unparseable
        """
        if not time_str:
            return None

        time_str = str(time_str).strip().upper()

        match = re.match(r'^(\d{1,2})(?::(\d{2}))?\s*(AM|PM)$', time_str)
        if match:
            hour = int(match.group(1))
            minute = int(match.group(2)) if match.group(2) else 0
            am_pm = match.group(3)

            if hour < 1 or hour > 12 or minute >= 60:
                return None

            if am_pm == 'PM' and hour != 12:
                hour += 12
            elif am_pm == 'AM' and hour == 12:
                hour = 0

            return f"{hour:02d}:{minute:02d}"

        match = re.match(r'^(\d{1,2}):(\d{2})(?::(\d{2}))?$', time_str)
        if match:
            hour = int(match.group(1))
            minute = int(match.group(2))

            if hour >= 24 or minute >= 60:
                return None

            return f"{hour:02d}:{minute:02d}"

        return None

    @staticmethod
    def to_12hr_display(time_24hr: str) -> str:
        """
        Convert 24-hour format to user-friendly 12-hour display.

        Examples:
            "15:00" → "3 PM"
            "15:30:00" → "3:30 PM"
            "09:00" → "9 AM"
        """
        if not time_24hr:
            return ""

        match = re.match(r'(\d{1,2}):(\d{2})', time_24hr)
        if not match:
            return time_24hr

        hour = int(match.group(1))
        minute = int(match.group(2))

        am_pm = "AM" if hour < 12 else "PM"
        hour_12 = hour % 12 or 12

        if minute == 0:
            return f"{hour_12} {am_pm}"
        return f"{hour_12}:{minute:02d} {am_pm}"

    @staticmethod
    def to_clock_display(dt: datetime) -> str:
        """
        Always-minutes 12-hour clock, no leading zero.

        Examples:
            14:30 → "2:30 PM"
            09:00 → "9:00 AM"
        """
        am_pm = "AM" if dt.hour < 12 else "PM"
        hour_12 = dt.hour % 12 or 12
        return f"{hour_12}:{dt.minute:02d} {am_pm}"

    @staticmethod
    def to_long_date(value: date) -> str:
        """Long date such as 'Wednesday, January 15, 2025', day not zero-padded."""
        return f"{value:%A}, {value:%B} {value.day}, {value.year}"

    @staticmethod
    def add_hour(time_str: str) -> Tuple[str, bool]:
        """
        Add one hour to an HH:MM:SS string.

        Returns:
            Tuple of (new_time, wrapped_past_midnight)

        Examples:
            "14:00:00" → ("15:00:00", False)
            "23:30:00" → ("00:30:00", True)
        """
        hours, minutes, seconds = (int(part) for part in time_str.split(':'))
        new_hours = (hours + 1) % 24
        return f"{new_hours:02d}:{minutes:02d}:{seconds:02d}", new_hours < hours

    @staticmethod
    def is_business_hours(time_24hr: str, start: str = "09:00", end: str = "17:00") -> bool:
        """
        Check if a time falls within business hours, both bounds inclusive.

        Args:
            time_24hr: Time in 24-hour format (HH:MM or HH:MM:SS)
            start: Opening time, any format parse_to_24hr accepts
            end: Closing time, any format parse_to_24hr accepts

        Returns:
            True if within business hours, False if outside or unparseable
        """
        value = TimeFormat.parse_to_24hr(time_24hr)
        opening = TimeFormat.parse_to_24hr(start)
        closing = TimeFormat.parse_to_24hr(end)

        if not value or not opening or not closing:
            return False

        # Zero-padded HH:MM strings order the same way the times do
        return opening <= value <= closing
