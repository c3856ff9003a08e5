"""Application configuration via pydantic-settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Web search (optional; research falls back to the topic table without it)
    brave_api_key: str = ""
    brave_base_url: str = "https://api.search.brave.com"
    search_timeout: float = 10.0

    # LLM settings (required for the pitch agent only)
    anthropic_api_key: str = ""
    llm_model: str = "claude-sonnet-4-5-20250929"
    llm_max_tokens: int = 4096
    llm_temperature: float = 0.7

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    # API server
    api_host: str = "127.0.0.1"
    api_port: int = 8000
