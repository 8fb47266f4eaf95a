from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    default_timezone: str = "America/Los_Angeles"
    business_hours: str = "9:00 AM - 5:00 PM"
    business_start: str = "09:00"
    business_end: str = "17:00"
    knowledge_excerpt_chars: int = 150
    gemini_api_key: Optional[str] = None  # Generation backend is optional; tests inject a fake model
    llm_model: str = "gemini-2.5-flash"
    llm_temperature: float = 0.8
    port: int = 8000
    host: str = "0.0.0.0"
    environment: str = "development"
    frontend_url: str = "http://localhost:3000"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
