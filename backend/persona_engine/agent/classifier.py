"""
Rule-based message classification.

Each dimension is an ordered table of (vocabulary, label) rules; the first
rule with any vocabulary hit wins. Vocabulary is matched as plain
substrings of the lower-cased message.
"""

import re
from typing import List, Sequence, Tuple

from ..models import MessageContext, Persona
from ..utils.logger import logger

Rule = Tuple[Sequence[str], str]


INTENT_RULES: List[Rule] = [
    (("why", "should i"), "decision_help"),
    (("how to", "how do"), "how_to_guide"),
    (("problem", "broken", "not working"), "troubleshooting"),
    (("cost", "price", "budget"), "pricing_inquiry"),
    (("recommend", "best", "suggest"), "recommendation_request"),
]

CATEGORY_RULES: List[Rule] = [
    (("kitchen", "cabinet", "appliance", "countertop", "cooking"), "kitchen"),
    (("bathroom", "toilet", "shower", "bathtub", "sink", "plumbing"), "bathroom"),
    (("electrical", "wiring", "outlet", "switch", "power", "electricity"), "electrical"),
    (("heating", "cooling", "hvac", "furnace", "air conditioning", "temperature"), "hvac"),
    (("floor", "carpet", "hardwood", "tile", "laminate"), "flooring"),
    (("roof", "siding", "exterior", "deck", "patio", "landscaping"), "exterior"),
    (("safety", "danger", "hazard", "emergency", "code", "permit"), "safety"),
    (("sell", "customer", "client", "objection", "close", "negotiate"), "sales"),
]

URGENCY_RULES: List[Rule] = [
    (("emergency", "urgent", "immediately", "asap", "danger", "leak", "smoke", "fire"), "high"),
    (("soon", "quickly", "problem", "broken", "not working"), "medium"),
]

COMPLEXITY_RULES: List[Rule] = [
    (("renovate", "remodel", "install", "replace", "upgrade", "system"), "complex"),
    (("repair", "fix", "improve", "update"), "moderate"),
]

# Negative vocabulary is listed first: a message with both reads as negative
SENTIMENT_RULES: List[Rule] = [
    (("bad", "terrible", "awful", "hate", "frustrated", "angry", "broken"), "negative"),
    (("good", "great", "excellent", "perfect", "love", "amazing"), "positive"),
]

_NON_WORD = re.compile(r'[^\w]')
MIN_KEYWORD_LENGTH = 4


def first_match(text: str, rules: List[Rule], default: str) -> str:
    for vocabulary, label in rules:
        if any(term in text for term in vocabulary):
            return label
    return default


def extract_keywords(message: str) -> List[str]:
    """Lower-cased tokens of at least MIN_KEYWORD_LENGTH word characters, punctuation removed first."""
    keywords = []
    for word in message.split():
        token = _NON_WORD.sub('', word.lower())
        if len(token) >= MIN_KEYWORD_LENGTH:
            keywords.append(token)
    return keywords


def suggest_skills(text: str, intent: str, persona: Persona) -> List[str]:
    suggested = []
    for skill in persona.skills:
        words = skill.name.lower().split()
        if not words:
            continue
        lead = words[0]
        if lead in text or lead in intent:
            suggested.append(skill.name)
    return suggested


def analyze_message_context(message: str, persona: Persona) -> MessageContext:
    text = (message or '').lower()

    intent = first_match(text, INTENT_RULES, "general_inquiry")
    category = first_match(text, CATEGORY_RULES, "general")
    urgency = first_match(text, URGENCY_RULES, "low")
    complexity = first_match(text, COMPLEXITY_RULES, "simple")
    sentiment = first_match(text, SENTIMENT_RULES, "neutral")

    context = MessageContext(
        intent=intent,
        category=category,
        urgency=urgency,
        complexity=complexity,
        requires_personalization=complexity != "simple" or urgency == "high",
        suggested_skills=suggest_skills(text, intent, persona),
        keywords=extract_keywords(message or ''),
        sentiment=sentiment,
    )

    logger.info(
        f"Classified message: intent={context.intent} category={context.category} "
        f"urgency={context.urgency} complexity={context.complexity} sentiment={context.sentiment}",
        extra={"intent": context.intent}
    )
    return context
