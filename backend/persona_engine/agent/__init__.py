"""Persona-conditioned conversation turn: classification, prompts and the LangGraph pipeline."""

from .classifier import analyze_message_context
from .graph import turn_graph, run_turn, create_turn_graph
from .persona import normalize_persona
from .planner import plan_response
from .prompts import build_persona_prompt, build_context_guidance, render_datetime_instructions
from .state import TurnState, create_initial_state

__all__ = [
    "analyze_message_context",
    "turn_graph",
    "run_turn",
    "create_turn_graph",
    "normalize_persona",
    "plan_response",
    "build_persona_prompt",
    "build_context_guidance",
    "render_datetime_instructions",
    "TurnState",
    "create_initial_state"
]
