"""Two-stage transcription pipeline: transcribe, then fan out."""

import asyncio
import itertools
from collections.abc import Awaitable, Callable, Coroutine
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from voicescribe.domain.languages import script_for
from voicescribe.domain.models import (
    AITask,
    MediaKind,
    RunOutcome,
    RunState,
    Source,
    SummarizeRequest,
    TaskOutcome,
    TranscribeRequest,
    TranslateRequest,
    TransliterateRequest,
)
from voicescribe.domain.normalizer import InputNormalizer
from voicescribe.domain.store import ScribeStore
from voicescribe.exceptions import AITaskError, AITaskErrorKind, EncodingError
from voicescribe.infrastructure.interfaces import AITaskService
from voicescribe.logging import setup_logging

logger = setup_logging()

TRANSCRIPTION_FAILED = (
    "Transcription Failed",
    "Could not generate transcript from the provided file.",
)
PROCESSING_ERROR = (
    "Processing Error",
    "One or more AI tasks failed after transcription.",
)

DOWNSTREAM_TASKS = (AITask.TRANSLATE, AITask.TRANSLITERATE, AITask.SUMMARIZE)


class PipelineOrchestrator:
    """
    Runs the transcription pipeline and is the only writer of the store.

    Stage 1 transcribes the current source. Stage 2 issues translate,
    transliterate and summarize concurrently against the transcript. Every
    store write is tagged with the source id (and, for translate and
    transliterate, the selected language), so results from runs that have
    been superseded by a newer source or language are dropped on arrival.
    """

    def __init__(
        self,
        ai_tasks: AITaskService,
        normalizer: InputNormalizer,
        store: ScribeStore,
    ):
        self._ai = ai_tasks
        self._normalizer = normalizer
        self._store = store
        self._source_ids = itertools.count(1)
        self._inflight: set[asyncio.Task] = set()

    @property
    def store(self) -> ScribeStore:
        return self._store

    def accept(
        self,
        *,
        mime_type: str | None,
        data: bytes | None = None,
        path: Path | None = None,
        name: str = "recording",
    ) -> Source:
        """
        Wraps an uploaded file or recorded clip as a new Source.

        Raises:
            UnsupportedMediaError: If mime_type is not audio/* or video/*.
        """
        kind = MediaKind.from_mime_type(mime_type)
        source = Source(
            source_id=next(self._source_ids),
            kind=kind,
            mime_type=mime_type,
            name=name,
            data=data,
            path=path,
        )
        logger.info(
            "Source accepted",
            extra={"source_id": source.source_id, "kind": kind, "source_name": name},
        )
        return source

    def submit(self, source: Source) -> asyncio.Task:
        """Makes source current immediately and runs its pipeline in the background."""
        self._begin(source)
        return self._spawn(self._run(source))

    async def start(self, source: Source) -> RunOutcome:
        """Makes source current and runs its pipeline to completion."""
        self._begin(source)
        return await self._run(source)

    def select_language(self, language: str) -> asyncio.Task | None:
        """Applies a language change now and re-runs any dependent tasks in the background."""
        plan = self._apply_language(language)
        if plan is None:
            return None
        return self._spawn(self._fan_out(*plan))

    async def change_language(self, language: str) -> RunOutcome | None:
        """Applies a language change and waits for the re-issued tasks to settle."""
        plan = self._apply_language(language)
        if plan is None:
            return None
        return await self._fan_out(*plan)

    def dismiss_notice(self, notice_id: int) -> None:
        self._store.dismiss_notice(notice_id)

    async def shutdown(self) -> None:
        """Cancels background runs and waits for them to unwind."""
        tasks = list(self._inflight)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Orchestrator stopped", extra={"cancelled": len(tasks)})

    def _begin(self, source: Source) -> None:
        self._store.begin_run(source.source_id)
        logger.info("Run started", extra={"source_id": source.source_id})

    async def _run(self, source: Source) -> RunOutcome:
        outcome = await self._transcribe(source)

        if not outcome.success:
            if not self._store.transcription_failed(
                source.source_id, *TRANSCRIPTION_FAILED
            ):
                return self._superseded(source.source_id)
            logger.warning(
                "Transcription failed",
                extra={
                    "source_id": source.source_id,
                    "error": outcome.error,
                    "detail": outcome.detail,
                },
            )
            return RunOutcome(
                source_id=source.source_id,
                state=RunState.TRANSCRIBE_FAILED,
                failed_tasks=(AITask.TRANSCRIBE,),
            )

        if not self._store.transcript_ready(source.source_id, outcome.text):
            return self._superseded(source.source_id)

        language = self._store.snapshot().language
        return await self._fan_out(
            source.source_id, outcome.text, language, DOWNSTREAM_TASKS
        )

    async def _transcribe(self, source: Source) -> TaskOutcome:
        try:
            payload = await self._normalizer.normalize(source)
        except EncodingError as e:
            return TaskOutcome(
                task=AITask.TRANSCRIBE, success=False, detail=str(e)
            )
        return await self._call(
            AITask.TRANSCRIBE,
            lambda: self._ai.transcribe(TranscribeRequest(payload=payload)),
            lambda response: response.transcript,
        )

    async def _fan_out(
        self,
        source_id: int,
        transcript: str,
        language: str,
        tasks: tuple[AITask, ...],
    ) -> RunOutcome:
        script = script_for(language)
        logger.info(
            "Downstream tasks issued",
            extra={
                "source_id": source_id,
                "language": language,
                "script": script,
                "tasks": [str(t) for t in tasks],
            },
        )

        calls = {
            AITask.TRANSLATE: (
                lambda: self._ai.translate(
                    TranslateRequest(text=transcript, target_language=language)
                ),
                lambda response: response.translated_text,
            ),
            AITask.TRANSLITERATE: (
                lambda: self._ai.transliterate(
                    TransliterateRequest(text=transcript, target_script=script)
                ),
                lambda response: response.transliterated_text,
            ),
            AITask.SUMMARIZE: (
                lambda: self._ai.summarize(SummarizeRequest(text=transcript)),
                lambda response: response.summary,
            ),
        }

        async def settle(task: AITask) -> tuple[TaskOutcome, bool]:
            outcome = await self._call(task, *calls[task])
            return outcome, self._store.task_settled(source_id, language, outcome)

        settled = await asyncio.gather(*(settle(task) for task in tasks))

        failed = tuple(
            outcome.task for outcome, written in settled if written and not outcome.success
        )
        if not self._store.fan_out_settled(source_id, bool(failed), *PROCESSING_ERROR):
            return self._superseded(source_id)

        if failed:
            logger.warning(
                "Downstream tasks failed",
                extra={"source_id": source_id, "failed_tasks": [str(t) for t in failed]},
            )
            return RunOutcome(
                source_id=source_id,
                state=RunState.DOWNSTREAM_PARTIAL_FAILURE,
                failed_tasks=failed,
            )

        logger.info(
            "Downstream tasks completed",
            extra={"source_id": source_id, "language": language},
        )
        return RunOutcome(source_id=source_id, state=RunState.DOWNSTREAM_COMPLETE)

    async def _call(
        self,
        task: AITask,
        invoke: Callable[[], Awaitable[BaseModel]],
        extract: Callable[[Any], str],
    ) -> TaskOutcome:
        """Runs one AI task and folds any failure into a TaskOutcome."""
        try:
            response = await invoke()
        except AITaskError as e:
            return TaskOutcome(task=task, success=False, error=e.kind, detail=str(e))
        except Exception as e:
            logger.exception("AI task raised unexpectedly", extra={"task": task})
            return TaskOutcome(
                task=task,
                success=False,
                error=AITaskErrorKind.SERVICE,
                detail=repr(e),
            )
        return TaskOutcome(task=task, success=True, text=extract(response))

    def _apply_language(
        self, language: str
    ) -> tuple[int, str, str, tuple[AITask, ...]] | None:
        state = self._store.snapshot()
        if language == state.language:
            return None

        reissued: tuple[AITask, ...] = ()
        if state.transcript.is_present:
            reissued = (AITask.TRANSLATE, AITask.TRANSLITERATE)
            if not state.summary.is_present and not state.summary.is_pending:
                reissued += (AITask.SUMMARIZE,)

        self._store.language_selected(language, reissued)
        logger.info(
            "Language selected",
            extra={
                "language": language,
                "script": script_for(language),
                "reissued": [str(t) for t in reissued],
            },
        )
        if not reissued:
            return None
        return state.source_id, state.transcript.value, language, reissued

    def _spawn(self, coro: Coroutine[Any, Any, RunOutcome]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    def _superseded(self, source_id: int) -> RunOutcome:
        logger.info("Run superseded, results discarded", extra={"source_id": source_id})
        return RunOutcome(source_id=source_id, state=RunState.SUPERSEDED)
