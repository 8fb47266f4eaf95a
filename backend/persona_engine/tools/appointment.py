from typing import Iterable, List, Optional, Tuple, Union

from ..models import AppointmentCandidate, AppointmentSource, HistoryExchange
from ..utils.clock import Clock, resolve_clock
from ..utils.logger import logger
from .time_parser import TimeParser


EXHAUSTED_FALLBACK = "exhausted_fallback"

# Text sources in priority order with their confidence adjustment
SOURCE_ADJUSTMENTS: List[Tuple[AppointmentSource, float]] = [
    ("reply", 0.1),
    ("message", 0.0),
    ("history", -0.1),
]


def _exchange_text(exchange: Union[HistoryExchange, dict]) -> str:
    if isinstance(exchange, HistoryExchange):
        return f"{exchange.message} {exchange.response}"
    return f"{exchange.get('message', '')} {exchange.get('response', '')}"


def conversation_text(
    generated_reply: str,
    user_message: str,
    history: Iterable[Union[HistoryExchange, dict]]
) -> str:
    parts = [_exchange_text(exchange) for exchange in history]
    parts.extend([user_message, generated_reply])
    return ' '.join(parts)


def _clamp(value: float) -> float:
    return round(min(1.0, max(0.0, value)), 2)


def extract_appointment(
    generated_reply: str,
    user_message: str,
    history: Optional[Iterable[Union[HistoryExchange, dict]]] = None,
    timezone: str = 'America/Los_Angeles',
    clock: Optional[Clock] = None
) -> AppointmentCandidate:
    """
    Settle on one appointment window from the texts of a conversation turn.

    Tries the generated reply, then the user's message, then the whole
    conversation; the first one that parses wins and its confidence is
    shifted by the source's trust adjustment.

    Returns:
        AppointmentCandidate; ``success=False`` when no source parses, in
        which case the caller should ask the user to restate the time
    """
    clock = resolve_clock(clock)
    history = list(history or [])

    # One parser, one read of "now" for all three attempts
    parser = TimeParser(timezone, clock)

    sources = {
        "reply": generated_reply or '',
        "message": user_message or '',
        "history": conversation_text(generated_reply or '', user_message or '', history),
    }

    for source, adjustment in SOURCE_ADJUSTMENTS:
        result = parser.parse(sources[source])
        if not result.success:
            logger.debug(f"Appointment source '{source}' did not parse: {result.error}")
            continue

        confidence = _clamp(result.start_time.confidence + adjustment)
        logger.info(
            f"Appointment extracted from {source}: "
            f"{result.start_time.full_date_time} (confidence {confidence})",
            extra={"source": source}
        )
        return AppointmentCandidate(
            success=True,
            start_time=result.start_time.full_date_time,
            end_time=result.end_time.full_date_time,
            confidence=confidence,
            source=source,
        )

    logger.info("No appointment date/time found in reply, message or history")
    return AppointmentCandidate(success=False, error=EXHAUSTED_FALLBACK)
