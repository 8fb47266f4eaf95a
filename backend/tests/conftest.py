"""Shared test fixtures for the persona engine test suite."""

from datetime import datetime

import pytest

from persona_engine.agent.persona import normalize_persona
from persona_engine.models import Persona
from persona_engine.utils.clock import FixedClock


@pytest.fixture
def wednesday_clock() -> FixedClock:
    """Wednesday 2025-01-15, 10:00 local time."""
    return FixedClock(datetime(2025, 1, 15, 10, 0))


@pytest.fixture
def monday_clock() -> FixedClock:
    """Monday 2025-01-13, 10:00 local time."""
    return FixedClock(datetime(2025, 1, 13, 10, 0))


@pytest.fixture
def raw_persona() -> dict:
    """A stored persona record, list fields serialized as JSON text."""
    return {
        "id": "persona-1",
        "name": "Dana Brooks",
        "role": "General Contractor",
        "experience": "20 years in residential remodeling",
        "primary_goal": "Help homeowners plan safe, realistic projects",
        "communication_style": "Plain-spoken and practical",
        "responsibilities": '["Estimate project costs", "Schedule site visits"]',
        "skills": (
            '[{"name": "Kitchen Design", "description": "Layout planning", '
            '"steps": ["Measure the space", "Draft a layout"]}, '
            '{"name": "Troubleshooting Basics", "description": "Diagnose faults", "steps": []}]'
        ),
        "constraints": '["Never give electrical advice that skips a permit"]',
        "expertise_areas": '["Kitchens", "Bathrooms"]',
        "personality_traits": '["Patient", "Direct"]',
        "success_metrics": '["Projects finished on budget"]',
        "context_awareness": '["Local building codes"]',
    }


@pytest.fixture
def persona(raw_persona: dict) -> Persona:
    return normalize_persona(raw_persona)
