from typing import Dict, List, Tuple

from ..models import MessageContext, ResponseSection, ResponseStructure


MAX_FOLLOW_UP_QUESTIONS = 3

EMERGENCY_CALL_TO_ACTION = (
    "If this is a true emergency, stop and call emergency services "
    "or relevant professionals immediately."
)

# (section type, title, priority)
EMERGENCY_SECTIONS: List[Tuple[str, str, int]] = [
    ("warning", "Immediate Safety Actions", 1),
    ("steps", "Emergency Steps", 2),
    ("recommendation", "When to Call Professionals", 3),
]

SECTION_TEMPLATES: Dict[str, List[Tuple[str, str, int]]] = {
    "how_to_guide": [
        ("analysis", "Project Overview", 1),
        ("steps", "Step-by-Step Instructions", 2),
        ("warning", "Safety Considerations", 3),
        ("examples", "Pro Tips", 4),
    ],
    "pricing_inquiry": [
        ("analysis", "Cost Factors", 1),
        ("recommendation", "Price Ranges", 2),
        ("examples", "Value & Savings Tips", 3),
    ],
    "troubleshooting": [
        ("analysis", "Problem Diagnosis", 1),
        ("steps", "Troubleshooting Steps", 2),
        ("recommendation", "Solution Options", 3),
    ],
}

DEFAULT_SECTIONS: List[Tuple[str, str, int]] = [
    ("analysis", "Assessment", 1),
    ("recommendation", "Recommendations", 2),
    ("steps", "Next Steps", 3),
]

FOLLOW_UP_QUESTIONS: Dict[str, List[str]] = {
    "how_to_guide": [
        "What's your current skill level with this type of project?",
        "Do you have all the necessary tools and materials?",
        "Would you like specific product recommendations?",
    ],
    "pricing_inquiry": [
        "What's your target budget range?",
        "Are you considering DIY or hiring professionals?",
        "Do you need financing options or payment plans?",
    ],
    "troubleshooting": [
        "How long has this problem been occurring?",
        "Have you tried any solutions already?",
        "Is this affecting other systems in your home?",
    ],
}

DEFAULT_FOLLOW_UP_QUESTIONS = [
    "Would you like more specific guidance for your situation?",
    "Do you have any other related questions?",
    "What's your timeline for this project?",
]


def _sections(template: List[Tuple[str, str, int]]) -> List[ResponseSection]:
    return [
        ResponseSection(type=section_type, title=title, priority=priority)
        for section_type, title, priority in template
    ]


def follow_up_questions(context: MessageContext) -> List[str]:
    bank = FOLLOW_UP_QUESTIONS.get(context.intent, DEFAULT_FOLLOW_UP_QUESTIONS)
    return bank[:MAX_FOLLOW_UP_QUESTIONS]


def plan_response(context: MessageContext) -> ResponseStructure:
    """
    Choose the shape the generated reply should take.

    High urgency always gets the emergency plan, whatever the intent.
    Otherwise the intent picks the section template, and complexity picks
    between a structured and a conversational reply.
    """
    if context.urgency == "high":
        return ResponseStructure(
            response_type="emergency",
            sections=_sections(EMERGENCY_SECTIONS),
            call_to_action=EMERGENCY_CALL_TO_ACTION,
            follow_up_questions=follow_up_questions(context),
        )

    template = SECTION_TEMPLATES.get(context.intent, DEFAULT_SECTIONS)

    return ResponseStructure(
        response_type="structured" if context.complexity == "simple" else "conversational",
        sections=_sections(template),
        follow_up_questions=follow_up_questions(context),
    )
