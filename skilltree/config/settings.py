"""
Configuration settings for the SkillTree generation engine
"""

from functools import lru_cache
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.content import AIAgentType


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(default="sqlite:///skilltree.db")

    # Research providers
    exa_api_key: Optional[str] = None
    http_timeout_seconds: float = Field(default=30.0, gt=0)
    research_user_agent: str = Field(default="SkillTreeResearchBot/1.0")

    # AI providers
    default_agent: AIAgentType = AIAgentType.GEMINI
    credentials_key: Optional[str] = None  # Fernet key for stored credentials
    gemini_api_key: Optional[str] = None  # used to seed agent configs
    openai_api_key: Optional[str] = None

    # Logging
    log_level: str = Field(default="INFO")
    log_dir: str = Field(default="logs")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)


# Default endpoint/model per vendor used when seeding configuration records
AGENT_DEFAULTS = {
    AIAgentType.GEMINI: {
        "api_endpoint": "https://generativelanguage.googleapis.com",
        "default_model": "gemini-2.0-flash",
    },
    AIAgentType.OPENAI: {
        "api_endpoint": "https://api.openai.com/v1",
        "default_model": "gpt-4o-mini",
    },
}


@lru_cache
def get_settings() -> Settings:
    """Get application settings singleton"""
    return Settings()
