"""
Value types shared by the classifier, prompt assembler, planner and the
date/time tools. All of them are frozen: built once per request, never
mutated afterwards.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


Intent = Literal[
    "general_inquiry",
    "how_to_guide",
    "decision_help",
    "troubleshooting",
    "pricing_inquiry",
    "recommendation_request",
]
Category = Literal[
    "kitchen", "bathroom", "electrical", "hvac", "flooring",
    "exterior", "safety", "sales", "general",
]
Urgency = Literal["low", "medium", "high"]
Complexity = Literal["simple", "moderate", "complex"]
Sentiment = Literal["positive", "neutral", "negative"]
ResponseType = Literal["structured", "conversational", "emergency"]
SectionType = Literal["analysis", "recommendation", "steps", "warning", "examples"]
AppointmentSource = Literal["reply", "message", "history"]


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Skill(FrozenModel):
    name: str
    description: str = ""
    steps: List[str] = Field(default_factory=list)


class Persona(FrozenModel):
    id: str
    name: str
    role: str
    experience: str = ""
    primary_goal: str = "Provide helpful assistance"
    communication_style: str = "Professional and friendly"
    responsibilities: List[str] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    constraints: List[str] = Field(default_factory=list)
    expertise_areas: List[str] = Field(default_factory=list)
    personality_traits: List[str] = Field(default_factory=list)
    success_metrics: List[str] = Field(default_factory=list)
    context_awareness: List[str] = Field(default_factory=list)


class MessageContext(FrozenModel):
    intent: Intent = "general_inquiry"
    category: Category = "general"
    urgency: Urgency = "low"
    complexity: Complexity = "simple"
    requires_personalization: bool = False
    suggested_skills: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    sentiment: Sentiment = "neutral"


class ResponseSection(FrozenModel):
    type: SectionType
    title: str
    priority: int


class ResponseStructure(FrozenModel):
    response_type: ResponseType
    sections: List[ResponseSection]
    call_to_action: Optional[str] = None
    follow_up_questions: List[str] = Field(default_factory=list, max_length=3)


class ParsedDateTime(FrozenModel):
    date: str
    time: str
    full_date_time: str
    confidence: float = Field(ge=0.0, le=1.0)
    timezone: Optional[str] = None


class DateTimeParseResult(FrozenModel):
    success: bool
    start_time: Optional[ParsedDateTime] = None
    end_time: Optional[ParsedDateTime] = None
    error: Optional[str] = None


class AppointmentCandidate(FrozenModel):
    success: bool
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    confidence: Optional[float] = None
    source: Optional[AppointmentSource] = None
    error: Optional[str] = None


class CurrentDateTime(FrozenModel):
    timestamp: str
    date: str
    time: str
    day_of_week: str
    timezone: str
    utc_offset: str


class DateTimeFormatting(FrozenModel):
    examples: List[str]
    business_hours: str
    date_formats: List[str]


class DateTimeContext(FrozenModel):
    current: CurrentDateTime
    formatting: DateTimeFormatting


class KnowledgeSnippet(FrozenModel):
    title: str
    content: str = ""


class HistoryExchange(FrozenModel):
    message: str
    response: str = ""
