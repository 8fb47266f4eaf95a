"""
Prompt templates and the persona prompt assembler.

Everything here is a pure function of its inputs: the same persona,
date/time context and knowledge excerpts always render the same text.
"""

from typing import List, Optional, Sequence

from ..models import DateTimeContext, KnowledgeSnippet, MessageContext, Persona, Skill
from ..utils.config import settings


IDENTITY_TEMPLATE = """# PERSONA: {name}
You are {name}, a {role} with {experience}.

## PRIMARY MISSION
{primary_goal}"""

PERSONALITY_TEMPLATE = """## PERSONALITY TRAITS & COMMUNICATION STYLE
**Core Traits:** {traits}
**Communication Style:** {communication_style}"""

SUCCESS_METRICS_TEMPLATE = """## SUCCESS METRICS & GOALS
You measure success by:
{metrics}"""

RESPONSIBILITIES_TEMPLATE = """## RESPONSIBILITIES & DUTIES
{responsibilities}"""

EXPERTISE_TEMPLATE = """## AREAS OF EXPERTISE
{areas}"""

CONTEXT_AWARENESS_TEMPLATE = """## CONTEXT AWARENESS
You are aware of and consider:
{factors}"""

SKILLS_HEADER = "## PROFESSIONAL SKILLS & TECHNIQUES"

SKILL_TEMPLATE = """### {index}. {name}
**Description:** {description}
**Process:**
{steps}"""

DATETIME_INSTRUCTIONS_TEMPLATE = """## DATE & TIME AWARENESS
Current Date/Time: {date} at {time} ({utc_offset})
Today is: {day_of_week}
Timezone: {timezone}

### Understanding Date/Time References:
When users mention dates or times, interpret them as follows:
{examples}

### Business Hours: {business_hours}
- Schedule appointments within business hours unless specifically requested otherwise
- For after-hours requests, suggest the next available business day
- Always confirm the exact date and time in your response

### Date Format Examples:
{date_formats}

### Important Guidelines:
- Always acknowledge and confirm specific dates/times mentioned by users
- Convert relative dates (tomorrow, next week) to specific dates
- Clarify ambiguous time references (morning vs specific time)
- Consider timezone differences if mentioned
- Validate that requested dates are not in the past
- For scheduling, always provide both date and time"""

KNOWLEDGE_TEMPLATE = """## KNOWLEDGE BASE CONTEXT
{excerpts}

Use this knowledge when relevant to provide accurate, specific answers that align with your persona traits and goals."""

CONSTRAINTS_TEMPLATE = """## CONSTRAINTS & BOUNDARIES
{constraints}"""

EXECUTION_CHECKLIST_TEMPLATE = """## EXECUTION INSTRUCTIONS
1. **ALWAYS stay in character as {name}** - embody their personality traits and communication style
2. **APPLY YOUR SKILLS SYSTEMATICALLY** - Use your professional techniques and processes for every response
3. **LEVERAGE CONTEXT AWARENESS** - Consider market conditions, industry trends, and situational factors
4. **MEASURE BY SUCCESS METRICS** - Aim for outcomes that align with your success criteria
5. **RESPECT ALL CONSTRAINTS** - Never violate your professional boundaries or limitations
6. **USE CONVERSATION HISTORY** - Reference previous interactions for continuity and deeper understanding
7. **BE RESULTS-ORIENTED** - Focus on actionable, valuable guidance that drives toward your primary mission
8. **DEMONSTRATE EXPERTISE** - Show deep knowledge in your areas of specialization
9. **ADAPT TO CONTEXT** - Adjust your approach based on the specific situation and context clues
10. **MAINTAIN CONSISTENCY** - Ensure every response reflects your personality, expertise, and professional standards

IMPORTANT: Every response should demonstrate your expertise, personality traits, context awareness, and systematic application of your professional skills to achieve your success metrics while respecting all constraints."""


# Per-turn guidance, keyed off the classified MessageContext

EMERGENCY_PROTOCOL = """**EMERGENCY RESPONSE PROTOCOL**
1. Address immediate safety concerns first
2. Provide step-by-step emergency actions
3. Clearly state when to call professionals
4. Include emergency contact guidance"""

INTENT_FORMATS = {
    "how_to_guide": """**HOW-TO GUIDE FORMAT**
1. **Prerequisites** - What they need before starting
2. **Step-by-Step Instructions** - Clear, numbered steps
3. **Safety Warnings** - Important precautions
4. **Pro Tips** - Expert insights for better results
5. **Common Mistakes** - What to avoid""",
    "pricing_inquiry": """**PRICING GUIDANCE FORMAT**
1. **Cost Factors** - What affects the price
2. **Price Ranges** - Typical costs for different approaches
3. **Value Considerations** - ROI and long-term benefits
4. **Money-Saving Tips** - How to reduce costs""",
    "troubleshooting": """**TROUBLESHOOTING PROTOCOL**
1. **Diagnostic Questions** - Help identify the exact problem
2. **Safety Check** - Ensure safe troubleshooting
3. **Step-by-Step Diagnosis** - Systematic problem-solving
4. **Solution Options** - DIY vs professional repair
5. **Prevention** - How to avoid future issues""",
}

TONE_BY_SENTIMENT = {
    "negative": "Empathetic and solution-focused",
    "positive": "Enthusiastic and encouraging",
    "neutral": "Professional and helpful",
}

CONTEXT_GUIDANCE_TEMPLATE = """## CURRENT CONTEXT ANALYSIS
- **Intent**: {intent}
- **Category**: {category}
- **Urgency**: {urgency}
- **Complexity**: {complexity}
- **User Sentiment**: {sentiment}

## RESPONSE REQUIREMENTS
Provide a {depth} response.
{formats}
## SKILLS TO APPLY
{skills}

## RESPONSE STYLE
- **Tone**: {tone}
- **Format**: Direct, actionable advice; no persona introductions
- **Emergency**: {emergency}"""


def _bullets(items: Sequence[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def _numbered_steps(steps: Sequence[str]) -> str:
    return "\n".join(f"   {i}. {step}" for i, step in enumerate(steps, start=1))


def render_skill(index: int, skill: Skill) -> str:
    return SKILL_TEMPLATE.format(
        index=index,
        name=skill.name,
        description=skill.description,
        steps=_numbered_steps(skill.steps),
    )


def render_datetime_instructions(context: DateTimeContext) -> str:
    return DATETIME_INSTRUCTIONS_TEMPLATE.format(
        date=context.current.date,
        time=context.current.time,
        utc_offset=context.current.utc_offset,
        day_of_week=context.current.day_of_week,
        timezone=context.current.timezone,
        examples=_bullets(context.formatting.examples),
        business_hours=context.formatting.business_hours,
        date_formats=_bullets(context.formatting.date_formats),
    )


def render_knowledge(snippets: Sequence[KnowledgeSnippet], max_chars: int) -> str:
    excerpts = [
        f"- {snippet.title}: {(snippet.content or '')[:max_chars]}..."
        for snippet in snippets
    ]
    return KNOWLEDGE_TEMPLATE.format(excerpts="\n".join(excerpts))


def build_persona_prompt(
    persona: Persona,
    datetime_context: DateTimeContext,
    knowledge_snippets: Optional[Sequence[KnowledgeSnippet]] = None,
    max_excerpt_chars: Optional[int] = None
) -> str:
    """
    Render the persona-conditioned system prompt.

    Sections always appear in the same order; the knowledge block is left
    out entirely when there are no snippets.

    Args:
        persona: Normalized persona
        datetime_context: Frame from build_datetime_context
        knowledge_snippets: Knowledge base excerpts (title + content)
        max_excerpt_chars: Characters kept from each excerpt

    Returns:
        Prompt text
    """
    budget = max_excerpt_chars if max_excerpt_chars is not None else settings.knowledge_excerpt_chars

    skills_block = "\n\n".join(
        [SKILLS_HEADER] + [render_skill(i, skill) for i, skill in enumerate(persona.skills, start=1)]
    )

    sections: List[str] = [
        IDENTITY_TEMPLATE.format(
            name=persona.name,
            role=persona.role,
            experience=persona.experience,
            primary_goal=persona.primary_goal,
        ),
        PERSONALITY_TEMPLATE.format(
            traits=", ".join(persona.personality_traits),
            communication_style=persona.communication_style,
        ),
        SUCCESS_METRICS_TEMPLATE.format(metrics=_bullets(persona.success_metrics)),
        RESPONSIBILITIES_TEMPLATE.format(responsibilities=_bullets(persona.responsibilities)),
        EXPERTISE_TEMPLATE.format(areas=_bullets(persona.expertise_areas)),
        CONTEXT_AWARENESS_TEMPLATE.format(factors=_bullets(persona.context_awareness)),
        skills_block,
        render_datetime_instructions(datetime_context),
    ]

    if knowledge_snippets:
        sections.append(render_knowledge(knowledge_snippets, budget))

    sections.append(CONSTRAINTS_TEMPLATE.format(constraints=_bullets(persona.constraints)))
    sections.append(EXECUTION_CHECKLIST_TEMPLATE.format(name=persona.name))

    return "\n\n".join(sections) + "\n"


def build_context_guidance(context: MessageContext) -> str:
    """Per-turn instructions derived from how the message was classified."""
    high = context.urgency == "high"

    formats = []
    if high:
        formats.append(EMERGENCY_PROTOCOL)
    if context.intent in INTENT_FORMATS:
        formats.append(INTENT_FORMATS[context.intent])

    if context.suggested_skills:
        skills = "Focus on these relevant skills:\n" + _bullets(context.suggested_skills)
    else:
        skills = "Apply any relevant skills from your expertise"

    return CONTEXT_GUIDANCE_TEMPLATE.format(
        intent=context.intent,
        category=context.category,
        urgency=context.urgency,
        complexity=context.complexity,
        sentiment=context.sentiment,
        depth="URGENT" if high else "comprehensive",
        formats="".join(f"\n{block}\n" for block in formats),
        skills=skills,
        tone=TONE_BY_SENTIMENT[context.sentiment],
        emergency="Lead with safety first" if high else "Normal priority",
    ) + "\n"


GENERATION_FALLBACK_REPLY = (
    "I'm {role}. I'm having trouble accessing my AI right now, but I'd be happy "
    "to help with your question: \"{message}\". Please try again."
)
