"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly typed application configuration."""

    groq_api_key: str = Field(alias="GROQ_API_KEY")
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1", alias="GROQ_BASE_URL"
    )
    chat_model: str = Field(default="llama-3.3-70b-versatile", alias="CHAT_MODEL")
    chat_temperature: float = Field(default=0.4, alias="CHAT_TEMPERATURE")
    chat_max_tokens: int = Field(default=400, alias="CHAT_MAX_TOKENS")
    chat_timeout: float = Field(default=10.0, alias="CHAT_TIMEOUT", description="Seconds")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    cors_origin: str = Field(default="http://127.0.0.1:5500", alias="CORS_ORIGIN")
    rate_limit_window: float = Field(
        default=15 * 60, alias="RATE_LIMIT_WINDOW", description="Seconds"
    )
    rate_limit_max: int = Field(default=100, alias="RATE_LIMIT_MAX")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of settings."""

    return Settings()
