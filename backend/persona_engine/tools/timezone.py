import re

import pytz
from typing import Optional
from datetime import tzinfo

from ..utils.logger import logger


class TimezoneManager:
    TIMEZONE_ABBREV = {
        'PST': 'America/Los_Angeles',
        'PDT': 'America/Los_Angeles',
        'EST': 'America/New_York',
        'EDT': 'America/New_York',
        'CST': 'America/Chicago',
        'CDT': 'America/Chicago',
        'MST': 'America/Denver',
        'MDT': 'America/Denver',
        'GMT': 'GMT',
        'UTC': 'UTC',
        'IST': 'Asia/Kolkata',
    }

    @staticmethod
    def resolve(name: Optional[str]) -> tzinfo:
        """
        Resolve a zone name or abbreviation to a pytz zone.

        Unknown names fall back to UTC so callers always get a usable zone.
        """
        if not name:
            return pytz.utc

        canonical = TimezoneManager.TIMEZONE_ABBREV.get(name.strip().upper(), name.strip())

        try:
            return pytz.timezone(canonical)
        except pytz.UnknownTimeZoneError:
            logger.warning(f"Unknown timezone '{name}', falling back to UTC")
            return pytz.utc

    @staticmethod
    def zone_name(name: Optional[str]) -> str:
        return TimezoneManager.resolve(name).zone

    @staticmethod
    def detect_timezone_from_text(text: str) -> Optional[str]:
        words = set(re.findall(r'[A-Z]+', (text or '').upper()))

        for abbrev, full_tz in TimezoneManager.TIMEZONE_ABBREV.items():
            if abbrev in words:
                logger.info(f"Detected timezone {full_tz} from text")
                return full_tz

        return None
