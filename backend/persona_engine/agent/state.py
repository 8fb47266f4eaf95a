from typing import TypedDict, Optional, List, Dict, Any, Annotated
import operator

from ..models import (
    AppointmentCandidate,
    DateTimeContext,
    HistoryExchange,
    KnowledgeSnippet,
    MessageContext,
    Persona,
    ResponseStructure,
)


class TurnState(TypedDict):
    messages: Annotated[List[Dict[str, str]], operator.add]
    persona: Persona
    message: str
    history: List[HistoryExchange]
    knowledge: List[KnowledgeSnippet]
    timezone: str
    business_hours: str
    context: Optional[MessageContext]
    structure: Optional[ResponseStructure]
    datetime_context: Optional[DateTimeContext]
    system_prompt: Optional[str]
    guidance: Optional[str]
    reply: Optional[str]
    generation_failed: bool
    appointment: Optional[AppointmentCandidate]
    appointment_validation: Optional[Dict[str, Any]]


def create_initial_state(
    persona: Persona,
    message: str,
    history: Optional[List[HistoryExchange]] = None,
    knowledge: Optional[List[KnowledgeSnippet]] = None,
    timezone: str = "America/Los_Angeles",
    business_hours: str = "9:00 AM - 5:00 PM"
) -> TurnState:
    return TurnState(
        messages=[],
        persona=persona,
        message=message,
        history=list(history or []),
        knowledge=list(knowledge or []),
        timezone=timezone,
        business_hours=business_hours,
        context=None,
        structure=None,
        datetime_context=None,
        system_prompt=None,
        guidance=None,
        reply=None,
        generation_failed=False,
        appointment=None,
        appointment_validation=None
    )
