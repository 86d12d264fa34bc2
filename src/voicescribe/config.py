"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, Field


class GeminiConfig(BaseModel, frozen=True):
    """Gemini AI task configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash"
    request_timeout_seconds: float = Field(default=120.0, gt=0)


class ScribeConfig(BaseModel, frozen=True):
    """Pipeline and capture defaults."""

    default_language: str = "English"
    recording_mime_type: str = "audio/webm"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    gemini: GeminiConfig
    scribe: ScribeConfig = ScribeConfig()


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            request_timeout_seconds=float(
                os.getenv("GEMINI_REQUEST_TIMEOUT_SECONDS", "120")
            ),
        ),
        scribe=ScribeConfig(
            default_language=os.getenv("SCRIBE_DEFAULT_LANGUAGE", "English"),
            recording_mime_type=os.getenv("SCRIBE_RECORDING_MIME_TYPE", "audio/webm"),
        ),
    )
