class PersonaEngineError(Exception):
    """Base class for errors raised inside the persona engine."""


class MalformedPersonaData(PersonaEngineError, ValueError):
    """A persisted persona field is present but cannot be decoded."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Malformed persona field '{field}': {reason}")


class CalendarExportError(PersonaEngineError):
    """An appointment cannot be turned into a calendar document."""
