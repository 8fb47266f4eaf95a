"""
LangGraph nodes for one conversation turn.
Each node reads the turn state and returns the fields it updates.

The generation backend and the clock are not part of the state; they are
passed per run through ``config["configurable"]`` as ``llm`` and ``clock``.
"""

from typing import Any, Dict, List, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_core.runnables import RunnableConfig
from langchain_google_genai import ChatGoogleGenerativeAI

from .classifier import analyze_message_context
from .planner import plan_response
from .prompts import GENERATION_FALLBACK_REPLY, build_context_guidance, build_persona_prompt
from .state import TurnState
from ..tools.appointment import extract_appointment
from ..tools.datetime_context import build_datetime_context
from ..tools.validation import AppointmentValidator
from ..utils.clock import Clock
from ..utils.config import settings
from ..utils.logger import logger


SCHEDULING_WORDS = ['appointment', 'book', 'schedule', 'estimate', 'visit', 'meet']


def _configurable(config: Optional[RunnableConfig]) -> Dict[str, Any]:
    return (config or {}).get("configurable", {}) or {}


def _clock(config: Optional[RunnableConfig]) -> Optional[Clock]:
    return _configurable(config).get("clock")


def create_default_llm() -> BaseChatModel:
    if not settings.gemini_api_key:
        raise RuntimeError("No generation backend configured (GEMINI_API_KEY is not set)")

    return ChatGoogleGenerativeAI(
        model=settings.llm_model,
        google_api_key=settings.gemini_api_key,
        temperature=settings.llm_temperature
    )


def analyze_message(state: TurnState) -> Dict[str, Any]:
    logger.info("Node: analyze")
    return {"context": analyze_message_context(state["message"], state["persona"])}


def plan_structure(state: TurnState) -> Dict[str, Any]:
    logger.info("Node: plan")
    return {"structure": plan_response(state["context"])}


def assemble_prompt(state: TurnState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: assemble")

    datetime_context = build_datetime_context(
        state["timezone"],
        state["business_hours"],
        clock=_clock(config)
    )
    system_prompt = build_persona_prompt(state["persona"], datetime_context, state["knowledge"])

    return {
        "datetime_context": datetime_context,
        "system_prompt": system_prompt,
        "guidance": build_context_guidance(state["context"]),
    }


def build_generation_messages(state: TurnState) -> List[BaseMessage]:
    messages: List[BaseMessage] = [
        SystemMessage(content=f"{state['system_prompt']}\n{state['guidance']}")
    ]

    for exchange in state["history"]:
        messages.append(HumanMessage(content=exchange.message))
        if exchange.response:
            messages.append(AIMessage(content=exchange.response))

    messages.append(HumanMessage(content=state["message"]))
    return messages


def generate_reply(state: TurnState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: generate")

    try:
        llm = _configurable(config).get("llm") or create_default_llm()
        response = llm.invoke(build_generation_messages(state))
        reply = str(response.content).strip().strip('"\'')
        failed = False
    except Exception as e:
        logger.error(f"Generation failed, using fallback reply: {e}")
        reply = GENERATION_FALLBACK_REPLY.format(role=state["persona"].role, message=state["message"])
        failed = True

    return {
        "reply": reply,
        "generation_failed": failed,
        "messages": [
            {"role": "user", "content": state["message"]},
            {"role": "assistant", "content": reply},
        ],
    }


def mentions_scheduling(state: TurnState) -> bool:
    text = f"{state['message']} {state.get('reply') or ''}".lower()
    return any(word in text for word in SCHEDULING_WORDS)


def extract_appointment_details(state: TurnState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: extract")
    clock = _clock(config)

    candidate = extract_appointment(
        state.get("reply") or "",
        state["message"],
        state["history"],
        state["timezone"],
        clock=clock
    )

    validation = AppointmentValidator(state["timezone"], clock=clock).validate(candidate)
    if not validation.is_valid:
        logger.info(f"Appointment needs clarification: {validation.error_type}")

    return {
        "appointment": candidate,
        "appointment_validation": validation.to_dict(),
    }
