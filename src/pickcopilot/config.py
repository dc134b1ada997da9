"""Environment-driven configuration helpers for Pick Copilot."""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    gemini_api_key: str = Field(default="", validation_alias="GEMINI_API_KEY")
    llm_model: str = Field(default="gemini-1.5-flash", validation_alias="LLM_MODEL")
    llm_base_url: str = Field(default=GEMINI_OPENAI_BASE_URL, validation_alias="LLM_BASE_URL")
    upstream_timeout_seconds: float = Field(default=30.0, gt=0, validation_alias="UPSTREAM_TIMEOUT_SECONDS")

    gateway_url: str = Field(
        default="http://localhost:8000/analyze-pick",
        validation_alias="GATEWAY_URL",
    )
    client_timeout_seconds: float = Field(default=60.0, gt=0, validation_alias="CLIENT_TIMEOUT_SECONDS")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]


def get_llm_api_key() -> str:
    """Return the Gemini API key or raise a helpful error."""

    key = os.getenv("GEMINI_API_KEY") or get_settings().gemini_api_key
    if not key:
        raise RuntimeError(
            "GEMINI_API_KEY is not configured. "
            "Set it in .env for local dev or in the deployment environment."
        )
    return key
