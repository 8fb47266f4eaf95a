"""
Persona Engine - Main FastAPI Application
Exposes message classification, prompt assembly, date/time parsing and
appointment extraction, plus a full conversation turn.
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from .agent.classifier import analyze_message_context
from .agent.graph import run_turn
from .agent.persona import normalize_persona, persona_summary
from .agent.planner import plan_response
from .agent.prompts import build_persona_prompt
from .errors import CalendarExportError
from .models import AppointmentCandidate, HistoryExchange, KnowledgeSnippet
from .tools.appointment import extract_appointment
from .tools.calendar import build_ics
from .tools.datetime_context import build_datetime_context
from .tools.time_parser import parse_natural_datetime
from .utils.config import settings
from .utils.logger import logger

# Initialize FastAPI app
app = FastAPI(
    title="Persona Engine",
    description="Persona-conditioned home-improvement assistant with appointment extraction",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.frontend_url,
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ContextRequest(BaseModel):
    message: str
    persona: Dict[str, Any]


class PromptRequest(BaseModel):
    persona: Dict[str, Any]
    knowledge: List[KnowledgeSnippet] = Field(default_factory=list)
    timezone: Optional[str] = None
    business_hours: Optional[str] = None


class ParseRequest(BaseModel):
    text: str
    timezone: Optional[str] = None


class ExtractRequest(BaseModel):
    generated_reply: str = ""
    user_message: str = ""
    history: List[HistoryExchange] = Field(default_factory=list)
    timezone: Optional[str] = None


class IcsRequest(BaseModel):
    start_time: str
    end_time: str
    title: str
    timezone: Optional[str] = None
    description: str = ""
    location: str = ""
    attendee_email: str = ""
    attendee_name: str = ""


class ChatRequest(BaseModel):
    message: str
    persona: Dict[str, Any]
    history: List[HistoryExchange] = Field(default_factory=list)
    knowledge: List[KnowledgeSnippet] = Field(default_factory=list)
    timezone: Optional[str] = None
    business_hours: Optional[str] = None


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "Persona Engine",
        "version": "1.0.0"
    }

@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "components": {
            "api": "operational",
            "generation": "configured" if settings.gemini_api_key else "not configured",
            "default_timezone": settings.default_timezone
        }
    }

# Core endpoints

@app.post("/api/context")
def message_context(request: ContextRequest):
    """Classify a message and plan the shape of the reply."""
    try:
        persona = normalize_persona(request.persona)
        context = analyze_message_context(request.message, persona)
        return {
            "context": context.model_dump(),
            "structure": plan_response(context).model_dump(),
            "persona": persona_summary(persona),
        }
    except Exception as e:
        logger.error(f"Error in context endpoint: {e}")
        raise HTTPException(status_code=500, detail=str(e))

@app.post("/api/prompt")
def persona_prompt(request: PromptRequest):
    """Assemble the persona system prompt."""
    try:
        persona = normalize_persona(request.persona)
        datetime_context = build_datetime_context(request.timezone, request.business_hours)
        return {
            "prompt": build_persona_prompt(persona, datetime_context, request.knowledge),
            "datetime_context": datetime_context.model_dump(),
        }
    except Exception as e:
        logger.error(f"Error in prompt endpoint: {e}")
        raise HTTPException(status_code=500, detail=str(e))

@app.get("/api/datetime/context")
def datetime_context(timezone: Optional[str] = None, business_hours: Optional[str] = None):
    return build_datetime_context(timezone, business_hours).model_dump()

@app.post("/api/datetime/parse")
def parse_datetime(request: ParseRequest):
    result = parse_natural_datetime(request.text, request.timezone or settings.default_timezone)
    return result.model_dump()

@app.post("/api/appointments/extract")
def extract(request: ExtractRequest):
    candidate = extract_appointment(
        request.generated_reply,
        request.user_message,
        request.history,
        request.timezone or settings.default_timezone
    )
    return candidate.model_dump()

@app.post("/api/appointments/ics")
def appointment_ics(request: IcsRequest):
    """Render an appointment window as a downloadable .ics file."""
    candidate = AppointmentCandidate(
        success=True,
        start_time=request.start_time,
        end_time=request.end_time
    )

    try:
        content = build_ics(
            candidate,
            request.timezone or settings.default_timezone,
            request.title,
            description=request.description,
            location=request.location,
            attendee_email=request.attendee_email,
            attendee_name=request.attendee_name
        )
    except CalendarExportError as e:
        logger.warning(f"Rejected ICS export: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return Response(
        content=content,
        media_type="text/calendar",
        headers={"Content-Disposition": 'attachment; filename="appointment.ics"'}
    )

@app.post("/api/chat")
def chat(request: ChatRequest):
    """
    Run one conversation turn.

    Request body:
        {
            "message": "string",
            "persona": {stored persona record},
            "history": [{"message": "...", "response": "..."}] (optional),
            "knowledge": [{"title": "...", "content": "..."}] (optional)
        }
    """
    try:
        persona = normalize_persona(request.persona)
        result = run_turn(
            persona,
            request.message,
            history=request.history,
            knowledge=request.knowledge,
            timezone=request.timezone,
            business_hours=request.business_hours
        )
    except Exception as e:
        logger.error(f"Error in chat endpoint: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    context = result["context"]
    appointment = result.get("appointment")

    return {
        "answer": result["reply"],
        "ai_generated": not result["generation_failed"],
        "sources": [snippet.title for snippet in request.knowledge],
        "persona": persona_summary(persona),
        "context": {
            "intent": context.intent,
            "category": context.category,
            "urgency": context.urgency,
            "complexity": context.complexity,
            "persona_context": list(persona.context_awareness),
        },
        "structure": result["structure"].model_dump(),
        "appointment": appointment.model_dump() if appointment else None,
        "appointment_validation": result.get("appointment_validation"),
    }

# Application Startup

@app.on_event("startup")
async def startup_event():
    """Log configuration on startup."""
    logger.info("Starting Persona Engine")
    logger.info(f"Default timezone: {settings.default_timezone}")
    logger.info(f"Environment: {settings.environment}")

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "persona_engine.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower()
    )
