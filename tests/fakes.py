"""Test doubles for the AI task service and the state store."""

from __future__ import annotations

import asyncio

from pydantic import BaseModel

from voicescribe.domain.models import (
    AITask,
    ScribeState,
    SummarizeRequest,
    SummarizeResponse,
    TranscribeRequest,
    TranscribeResponse,
    TranslateRequest,
    TranslateResponse,
    TransliterateRequest,
    TransliterateResponse,
)
from voicescribe.domain.store import ScribeStore
from voicescribe.exceptions import AITaskError, AITaskErrorKind
from voicescribe.infrastructure.interfaces import AITaskService


def describe(task: AITask, request: BaseModel) -> str:
    """Text a hold or failure rule is matched against."""
    if isinstance(request, TranscribeRequest):
        return request.payload.decode().decode("utf-8")
    if isinstance(request, TranslateRequest):
        return f"{request.text}|{request.target_language}"
    if isinstance(request, TransliterateRequest):
        return f"{request.text}|{request.target_script}"
    return request.text


class ScriptedAITaskService(AITaskService):
    """
    Deterministic AI backend.

    The transcript is the UTF-8 text of the source bytes; the other tasks
    tag the transcript with their target. ``hold`` parks matching calls on
    an event so tests control completion order; ``fail`` makes matching
    calls raise AITaskError.
    """

    def __init__(self):
        self.requests: list[tuple[AITask, BaseModel]] = []
        self._holds: list[tuple[AITask, str, asyncio.Event]] = []
        self._failures: list[tuple[AITask, str, AITaskErrorKind]] = []

    def hold(self, task: AITask, contains: str = "") -> asyncio.Event:
        event = asyncio.Event()
        self._holds.append((task, contains, event))
        return event

    def fail(
        self,
        task: AITask,
        contains: str = "",
        kind: AITaskErrorKind = AITaskErrorKind.SERVICE,
    ) -> None:
        self._failures.append((task, contains, kind))

    def recover(self, task: AITask) -> None:
        self._failures = [rule for rule in self._failures if rule[0] is not task]

    def calls(self, task: AITask) -> list[BaseModel]:
        return [request for t, request in self.requests if t is task]

    async def transcribe(self, request: TranscribeRequest) -> TranscribeResponse:
        text = await self._respond(AITask.TRANSCRIBE, request)
        return TranscribeResponse(transcript=text)

    async def translate(self, request: TranslateRequest) -> TranslateResponse:
        await self._respond(AITask.TRANSLATE, request)
        return TranslateResponse(
            translated_text=f"[{request.target_language}] {request.text}"
        )

    async def transliterate(
        self, request: TransliterateRequest
    ) -> TransliterateResponse:
        await self._respond(AITask.TRANSLITERATE, request)
        return TransliterateResponse(
            transliterated_text=f"<{request.target_script}> {request.text}"
        )

    async def summarize(self, request: SummarizeRequest) -> SummarizeResponse:
        await self._respond(AITask.SUMMARIZE, request)
        return SummarizeResponse(summary=f"Summary: {request.text}")

    async def _respond(self, task: AITask, request: BaseModel) -> str:
        self.requests.append((task, request))
        key = describe(task, request)
        for held_task, contains, event in self._holds:
            if held_task is task and contains in key:
                await event.wait()
                break
        for failing_task, contains, kind in self._failures:
            if failing_task is task and contains in key:
                raise AITaskError(task, kind)
        return key


class RecordingStore(ScribeStore):
    """ScribeStore that keeps every state it passes through."""

    def __init__(self, language: str):
        super().__init__(language)
        self.history: list[ScribeState] = [self.snapshot()]

    def begin_run(self, source_id: int) -> None:
        super().begin_run(source_id)
        self.history.append(self.snapshot())

    def _update(self, **changes) -> None:
        super()._update(**changes)
        self.history.append(self.snapshot())


async def wait_until(store: ScribeStore, predicate, timeout: float = 2.0) -> ScribeState:
    """Polls the store until predicate holds for its snapshot."""
    async with asyncio.timeout(timeout):
        while not predicate(store.snapshot()):
            await asyncio.sleep(0.005)
    return store.snapshot()
