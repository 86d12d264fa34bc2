"""Shared fixtures for the voicescribe test suite."""

from __future__ import annotations

from typing import Callable

import pytest

from voicescribe.domain import InputNormalizer, PipelineOrchestrator, Source

from .fakes import RecordingStore, ScriptedAITaskService


@pytest.fixture
def ai_service() -> ScriptedAITaskService:
    return ScriptedAITaskService()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore("English")


@pytest.fixture
def orchestrator(
    ai_service: ScriptedAITaskService, store: RecordingStore
) -> PipelineOrchestrator:
    return PipelineOrchestrator(ai_service, InputNormalizer(), store)


@pytest.fixture
def make_source(orchestrator: PipelineOrchestrator) -> Callable[..., Source]:
    """Builds an in-memory source whose transcript will be ``text``."""

    def _make(text: str, mime_type: str = "audio/webm") -> Source:
        return orchestrator.accept(mime_type=mime_type, data=text.encode("utf-8"))

    return _make
