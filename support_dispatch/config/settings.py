"""
Configuration management for the application.
Loads settings from environment variables and the project .env file.
"""

from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from loguru import logger

# Find project root (where .env and data/ live)
# This file is at support_dispatch/config/settings.py, so project root is 3 levels up
_project_root = Path(__file__).resolve().parent.parent.parent

PROJECT_ROOT = _project_root

_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(dotenv_path=_env_file, override=False)
    logger.debug(f"Loaded .env from: {_env_file}")
else:
    load_dotenv(override=False)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_project_root / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM Provider Selection
    llm_provider: str = Field(default="groq")  # Options: "groq" | "openai" | "ollama"

    # API Keys
    groq_api_key: str = Field(default="")
    openai_api_key: str = Field(default="")

    # Groq Configuration (OpenAI-compatible endpoint)
    groq_model: str = Field(default="llama-3.3-70b-versatile")
    groq_base_url: str = Field(default="https://api.groq.com/openai/v1")

    # OpenAI Configuration
    openai_model: str = Field(default="gpt-4o-mini")

    # Ollama Configuration
    ollama_base_url: str = Field(default="http://localhost:11434")
    ollama_model: str = Field(default="llama3")

    # Generation
    llm_temperature: float = Field(default=0.3)
    max_output_tokens: int = Field(default=1024)
    router_max_output_tokens: int = Field(default=10)  # One-word label from the fallback classifier

    # Record Store
    database_url: str = Field(default="sqlite+aiosqlite:///data/support.db")
    seed_on_startup: bool = Field(default=True)

    # Classification
    carryover_max_length: int = Field(default=40)  # Messages shorter than this may inherit the previous topic

    # Conversation Memory Configuration
    title_max_length: int = Field(default=60)
    max_conversation_messages: int = Field(default=20)
    persist_retry_attempts: int = Field(default=3)
    persist_retry_delay: float = Field(default=0.1)
    persist_partial_on_disconnect: bool = Field(default=True)

    # Rate limiting (fixed window per client address)
    rate_limit_window_ms: int = Field(default=60_000)
    rate_limit_max: int = Field(default=30)

    # HTTP
    cors_origins: List[str] = Field(default=[
        "http://localhost:5173",
        "http://localhost:5174",
        "http://localhost:4173",
    ])

    # Logging
    log_level: str = Field(default="INFO")

    @property
    def database_url_resolved(self) -> str:
        """Database URL with relative SQLite file paths anchored at the project root."""
        prefix = "sqlite+aiosqlite:///"
        if not self.database_url.startswith(prefix):
            return self.database_url
        path = self.database_url[len(prefix):]
        if not path or path == ":memory:" or Path(path).is_absolute():
            return self.database_url
        resolved = _project_root / path
        resolved.parent.mkdir(parents=True, exist_ok=True)
        return f"{prefix}{resolved}"


# Create global settings instance
settings = Settings()
