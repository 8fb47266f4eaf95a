from langgraph.graph import StateGraph, END
from typing import Iterable, List, Literal, Optional, Union

from langchain_core.language_models import BaseChatModel

from .state import TurnState, create_initial_state
from .nodes import (
    analyze_message,
    plan_structure,
    assemble_prompt,
    generate_reply,
    mentions_scheduling,
    extract_appointment_details
)
from ..models import HistoryExchange, KnowledgeSnippet, Persona
from ..tools.timezone import TimezoneManager
from ..utils.clock import Clock
from ..utils.config import settings
from ..utils.logger import logger


def after_generate(state: TurnState) -> Literal["extract", END]:
    if mentions_scheduling(state):
        logger.info("Routing: generate -> extract")
        return "extract"

    logger.info("Routing: generate -> END")
    return END


def create_turn_graph():
    workflow = StateGraph(TurnState)

    workflow.add_node("analyze", analyze_message)
    workflow.add_node("plan", plan_structure)
    workflow.add_node("assemble", assemble_prompt)
    workflow.add_node("generate", generate_reply)
    workflow.add_node("extract", extract_appointment_details)

    workflow.set_entry_point("analyze")

    workflow.add_edge("analyze", "plan")
    workflow.add_edge("plan", "assemble")
    workflow.add_edge("assemble", "generate")

    workflow.add_conditional_edges(
        "generate",
        after_generate,
        {
            "extract": "extract",
            END: END
        }
    )

    workflow.add_edge("extract", END)

    app = workflow.compile()
    logger.info("Compiled conversation turn workflow")
    return app


turn_graph = create_turn_graph()


def _as_exchange(item: Union[HistoryExchange, dict]) -> HistoryExchange:
    if isinstance(item, HistoryExchange):
        return item
    return HistoryExchange(message=item.get("message", ""), response=item.get("response", ""))


def _as_snippet(item: Union[KnowledgeSnippet, dict]) -> KnowledgeSnippet:
    if isinstance(item, KnowledgeSnippet):
        return item
    return KnowledgeSnippet(title=item.get("title", ""), content=item.get("content") or "")


def run_turn(
    persona: Persona,
    message: str,
    history: Optional[Iterable[Union[HistoryExchange, dict]]] = None,
    knowledge: Optional[Iterable[Union[KnowledgeSnippet, dict]]] = None,
    timezone: Optional[str] = None,
    business_hours: Optional[str] = None,
    llm: Optional[BaseChatModel] = None,
    clock: Optional[Clock] = None
) -> TurnState:
    """
    Run one conversation turn: classify, plan, assemble the prompt,
    generate a reply and, when the turn is about scheduling, pull an
    appointment out of it.
    """
    exchanges: List[HistoryExchange] = [_as_exchange(item) for item in history or []]
    snippets: List[KnowledgeSnippet] = [_as_snippet(item) for item in knowledge or []]

    state = create_initial_state(
        persona,
        message,
        history=exchanges,
        knowledge=snippets,
        timezone=timezone or TimezoneManager.detect_timezone_from_text(message) or settings.default_timezone,
        business_hours=business_hours or settings.business_hours
    )

    return turn_graph.invoke(state, config={"configurable": {"llm": llm, "clock": clock}})
