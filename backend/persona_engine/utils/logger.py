import logging
import sys
import json
from datetime import datetime, timezone
from typing import Union

from .config import settings

# Extra attributes copied into JSON records when a call passes them via ``extra=``
CONTEXT_FIELDS = ("persona_id", "intent", "source", "timezone")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def setup_logger(
    name: str,
    level: Union[int, str] = logging.INFO,
    json_output: bool = False
) -> logging.Logger:
    """
    Configure a stdout logger.

    ``level`` may be a number or a name such as "DEBUG"; an unknown name
    falls back to INFO.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    if json_output:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


logger = setup_logger(
    "persona_engine",
    settings.log_level,
    json_output=settings.environment == "production"
)
