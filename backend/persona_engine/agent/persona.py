"""
Persona normalization: persisted persona record -> canonical Persona.

List-valued attributes are stored as serialized JSON text. Every missing or
unreadable one is replaced by the default declared in PERSONA_LIST_DEFAULTS.
"""

import json
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar

from ..errors import MalformedPersonaData
from ..models import Persona, Skill
from ..utils.logger import logger

T = TypeVar("T")


# field -> default factory; factories receive the raw record
PERSONA_LIST_DEFAULTS: Dict[str, Callable[[Mapping[str, Any]], List[Any]]] = {
    "responsibilities": lambda raw: [_scalar(raw, "role", "")],
    "skills": lambda raw: [],
    "constraints": lambda raw: ["Be helpful and accurate", "Stay within role boundaries"],
    "expertise_areas": lambda raw: [],
    "personality_traits": lambda raw: ["Professional", "Helpful"],
    "success_metrics": lambda raw: ["Customer satisfaction"],
    "context_awareness": lambda raw: ["Industry best practices"],
}

SCALAR_DEFAULTS = {
    "experience": "",
    "primary_goal": "Provide helpful assistance",
    "communication_style": "Professional and friendly",
}

CAMEL_CASE_KEYS = {
    "primary_goal": "primaryGoal",
    "communication_style": "communicationStyle",
    "expertise_areas": "expertiseAreas",
    "personality_traits": "personalityTraits",
    "success_metrics": "successMetrics",
    "context_awareness": "contextAwareness",
}


def _lookup(raw: Mapping[str, Any], field: str) -> Any:
    value = raw.get(field)
    if value is None and field in CAMEL_CASE_KEYS:
        value = raw.get(CAMEL_CASE_KEYS[field])
    return value


def _scalar(raw: Mapping[str, Any], field: str, default: str) -> str:
    value = _lookup(raw, field)
    return str(value) if value else default


def parse_string_list(field: str, value: Any) -> List[str]:
    items = _decode_list(field, value)
    if not all(isinstance(item, str) for item in items):
        raise MalformedPersonaData(field, "expected a list of strings")
    return items


def parse_skill_list(field: str, value: Any) -> List[Skill]:
    skills = []
    for item in _decode_list(field, value):
        if not isinstance(item, dict) or not item.get("name"):
            raise MalformedPersonaData(field, "each skill needs at least a name")

        steps = item.get("steps") or []
        if not isinstance(steps, list):
            raise MalformedPersonaData(field, f"steps of skill '{item['name']}' must be a list")

        skills.append(Skill(
            name=str(item["name"]),
            description=str(item.get("description") or ""),
            steps=[str(step) for step in steps],
        ))
    return skills


def _decode_list(field: str, value: Any) -> List[Any]:
    if isinstance(value, list):
        return value

    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8", errors="replace")

    if not isinstance(value, str):
        raise MalformedPersonaData(field, f"unsupported type {type(value).__name__}")

    try:
        decoded = json.loads(value)
    except json.JSONDecodeError as e:
        raise MalformedPersonaData(field, f"invalid JSON ({e.msg})") from e

    if not isinstance(decoded, list):
        raise MalformedPersonaData(field, "expected a JSON array")

    return decoded


def or_default(
    parse: Callable[[str, Any], T],
    field: str,
    value: Any,
    default: Callable[[], T]
) -> T:
    """
    Parse a stored field, or fall back to its documented default.

    An absent (or empty) value takes the default silently. A present value
    that fails to parse is logged and takes the default too, so a bad
    record never stops a response from being generated.
    """
    if value is None or value == "":
        return default()

    try:
        return parse(field, value)
    except MalformedPersonaData as e:
        logger.warning(f"{e}; using default")
        return default()


LIST_PARSERS: Dict[str, Callable[[str, Any], List[Any]]] = {
    "responsibilities": parse_string_list,
    "skills": parse_skill_list,
    "constraints": parse_string_list,
    "expertise_areas": parse_string_list,
    "personality_traits": parse_string_list,
    "success_metrics": parse_string_list,
    "context_awareness": parse_string_list,
}


def normalize_persona(raw: Mapping[str, Any]) -> Persona:
    """
    Build a canonical Persona from a stored persona record.

    Args:
        raw: Record with snake_case (stored) or camelCase keys

    Returns:
        Persona whose list fields are always lists
    """
    lists = {
        field: or_default(parse, field, _lookup(raw, field), lambda field=field: PERSONA_LIST_DEFAULTS[field](raw))
        for field, parse in LIST_PARSERS.items()
    }

    return Persona(
        id=str(raw.get("id") or ""),
        name=str(raw.get("name") or ""),
        role=str(raw.get("role") or ""),
        experience=_scalar(raw, "experience", SCALAR_DEFAULTS["experience"]),
        primary_goal=_scalar(raw, "primary_goal", SCALAR_DEFAULTS["primary_goal"]),
        communication_style=_scalar(raw, "communication_style", SCALAR_DEFAULTS["communication_style"]),
        **lists,
    )


def persona_summary(persona: Persona, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Fields of a persona surfaced next to a generated answer."""
    summary = {
        "id": persona.id,
        "name": persona.name,
        "role": persona.role,
        "context_awareness": list(persona.context_awareness),
    }
    if extra:
        summary.update(extra)
    return summary
