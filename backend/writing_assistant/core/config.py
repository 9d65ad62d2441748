from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root (parent of backend/) for .env loading when running from backend/
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Provider API keys are never configured here; they arrive with each
    request and are discarded when it completes.
    """

    # Core app settings
    app_name: str = Field(default="writing_assistant")
    environment: str = Field(default="development")  # development | staging | production
    debug: bool = Field(default=False)

    # HTTP server
    api_prefix: str = Field(default="/api")

    # Observability
    log_level: str = Field(default="INFO")

    # Fallbacks when the client omits the x-api-* headers
    default_provider: str = Field(
        default="openai",
        description="Provider used when the x-api-provider header is missing.",
    )
    default_model: str = Field(
        default="gpt-3.5-turbo",
        description="Model used when the x-api-model header is missing.",
    )

    # OpenAI
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of the OpenAI Chat Completions API.",
    )

    # Anthropic
    anthropic_base_url: str = Field(
        default="https://api.anthropic.com",
        description="Base URL of the Anthropic Messages API.",
    )
    anthropic_version: str = Field(default="2023-06-01")

    # Google Generative Language
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Google Generative Language API.",
    )
    gemini_model: str = Field(
        default="gemini-pro",
        description="Gemini model used for every Google request.",
    )

    # Ollama
    ollama_base_url: str = Field(
        default="http://localhost:11434",
        description="Base URL for local Ollama HTTP API when no endpoint is supplied.",
    )

    # Outbound HTTP
    request_timeout_seconds: float = Field(default=120.0)

    model_config = SettingsConfigDict(
        env_prefix="WRITING_ASSISTANT_",
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return a cached settings instance for use as a dependency.
    """
    return Settings()
