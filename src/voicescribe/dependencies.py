"""Dependency injection configuration for the voicescribe service."""

from functools import lru_cache

from google import genai

from voicescribe.config import AppConfig, load_config
from voicescribe.domain import InputNormalizer, PipelineOrchestrator, ScribeStore
from voicescribe.infrastructure import ClipRecorder, GeminiAITaskService
from voicescribe.infrastructure.interfaces import CaptureDevice
from voicescribe.logging import setup_logging

logger = setup_logging()


def build_orchestrator(
    config: AppConfig, language: str | None = None
) -> PipelineOrchestrator:
    """Wires the Gemini backend, normalizer and store into an orchestrator."""
    client = genai.Client(api_key=config.gemini.api_key)
    ai_tasks = GeminiAITaskService(
        client,
        config.gemini.model_name,
        config.gemini.request_timeout_seconds,
    )
    store = ScribeStore(language or config.scribe.default_language)
    logger.info(
        "Orchestrator initialized",
        extra={"model": config.gemini.model_name, "language": store.snapshot().language},
    )
    return PipelineOrchestrator(ai_tasks, InputNormalizer(), store)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Returns the configuration loaded from the environment."""
    return load_config()


@lru_cache(maxsize=1)
def get_orchestrator() -> PipelineOrchestrator:
    """Returns the process-wide orchestrator."""
    return build_orchestrator(get_config())


@lru_cache(maxsize=1)
def get_recorder() -> CaptureDevice:
    """Returns the process-wide capture device."""
    return ClipRecorder(get_config().scribe.recording_mime_type)
