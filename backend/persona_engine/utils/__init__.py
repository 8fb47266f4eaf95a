"""Utility modules for the persona engine."""

from .config import settings
from .logger import logger, setup_logger
from .clock import Clock, SystemClock, FixedClock

__all__ = [
    "settings",
    "logger",
    "setup_logger",
    "Clock",
    "SystemClock",
    "FixedClock"
]
