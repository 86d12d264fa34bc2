"""Domain models for the transcription pipeline."""

import base64
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, computed_field, model_validator

from voicescribe.domain.languages import script_for
from voicescribe.exceptions import AITaskErrorKind, UnsupportedMediaError


class MediaKind(StrEnum):
    """Kind of media carried by a source."""

    AUDIO = "audio"
    VIDEO = "video"

    @classmethod
    def from_mime_type(cls, mime_type: str | None) -> "MediaKind":
        """
        Derives the media kind from a MIME type prefix.

        Raises:
            UnsupportedMediaError: If the type is neither audio/* nor video/*.
        """
        prefix = (mime_type or "").split("/", 1)[0].lower()
        try:
            return cls(prefix)
        except ValueError as e:
            raise UnsupportedMediaError(mime_type) from e


class Source(BaseModel, frozen=True):
    """
    A user-provided audio or video unit.

    Backed either by in-memory bytes (uploads, recorded clips) or by a file
    on disk. Sources are never mutated; a newer source supersedes them.
    """

    source_id: int
    kind: MediaKind
    mime_type: str
    name: str = "recording"
    data: bytes | None = None
    path: Path | None = None

    @model_validator(mode="after")
    def _check_backing(self) -> "Source":
        if (self.data is None) == (self.path is None):
            raise ValueError("Source needs exactly one of 'data' or 'path'")
        return self


class EncodedPayload(BaseModel, frozen=True):
    """Self-describing base64 representation of a source."""

    mime_type: str
    encoded: str

    @property
    def data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.encoded}"

    def decode(self) -> bytes:
        return base64.b64decode(self.encoded)

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str) -> "EncodedPayload":
        return cls(mime_type=mime_type, encoded=base64.b64encode(data).decode("ascii"))


class CapturedClip(BaseModel, frozen=True):
    """A single completed recording produced by a capture device."""

    data: bytes
    mime_type: str


class AITask(StrEnum):
    TRANSCRIBE = "transcribe"
    TRANSLATE = "translate"
    TRANSLITERATE = "transliterate"
    SUMMARIZE = "summarize"


class TranscribeRequest(BaseModel, frozen=True):
    payload: EncodedPayload


class TranscribeResponse(BaseModel):
    transcript: str


class TranslateRequest(BaseModel, frozen=True):
    text: str
    target_language: str


class TranslateResponse(BaseModel):
    translated_text: str


class TransliterateRequest(BaseModel, frozen=True):
    text: str
    target_script: str


class TransliterateResponse(BaseModel):
    transliterated_text: str


class SummarizeRequest(BaseModel, frozen=True):
    text: str


class SummarizeResponse(BaseModel):
    summary: str


class FieldStatus(StrEnum):
    ABSENT = "absent"
    PENDING = "pending"
    PRESENT = "present"


class ResultField(BaseModel, frozen=True):
    """One derived text artifact and its lifecycle status."""

    status: FieldStatus = FieldStatus.ABSENT
    value: str | None = None

    @classmethod
    def pending(cls) -> "ResultField":
        return cls(status=FieldStatus.PENDING)

    @classmethod
    def present(cls, value: str) -> "ResultField":
        return cls(status=FieldStatus.PRESENT, value=value)

    @property
    def is_present(self) -> bool:
        return self.status is FieldStatus.PRESENT

    @property
    def is_pending(self) -> bool:
        return self.status is FieldStatus.PENDING


class Notice(BaseModel, frozen=True):
    """A dismissable, non-blocking user-visible message."""

    notice_id: int
    title: str
    description: str
    variant: str = "destructive"


class RunState(StrEnum):
    """States a pipeline run moves through."""

    IDLE = "idle"
    TRANSCRIBING = "transcribing"
    TRANSCRIBE_FAILED = "transcribe_failed"
    AWAITING_DOWNSTREAM = "awaiting_downstream"
    DOWNSTREAM_COMPLETE = "downstream_complete"
    DOWNSTREAM_PARTIAL_FAILURE = "downstream_partial_failure"
    SUPERSEDED = "superseded"


class ScribeState(BaseModel, frozen=True):
    """Read-only snapshot of everything the presentation layer renders."""

    source_id: int | None = None
    language: str
    transcript: ResultField = ResultField()
    translation: ResultField = ResultField()
    transliteration: ResultField = ResultField()
    summary: ResultField = ResultField()
    transcribing: bool = False
    post_processing: bool = False
    notices: tuple[Notice, ...] = ()

    @computed_field
    @property
    def script(self) -> str:
        return script_for(self.language)

    @computed_field
    @property
    def run_state(self) -> RunState:
        """Where the current source's run stands, derived from the fields."""
        if self.source_id is None:
            return RunState.IDLE
        if self.transcribing:
            return RunState.TRANSCRIBING
        if not self.transcript.is_present:
            return RunState.TRANSCRIBE_FAILED
        if any(field.is_pending for field in self.downstream_fields):
            return RunState.AWAITING_DOWNSTREAM
        if all(field.is_present for field in self.downstream_fields):
            return RunState.DOWNSTREAM_COMPLETE
        return RunState.DOWNSTREAM_PARTIAL_FAILURE

    @property
    def downstream_fields(self) -> tuple[ResultField, ResultField, ResultField]:
        return self.translation, self.transliteration, self.summary


class TaskOutcome(BaseModel, frozen=True):
    """Tagged success/failure result of a single AI task."""

    task: AITask
    success: bool
    text: str | None = None
    error: AITaskErrorKind | None = None
    detail: str | None = None


class RunOutcome(BaseModel, frozen=True):
    """Terminal state reached by one pipeline run or language re-run."""

    source_id: int | None
    state: RunState
    failed_tasks: tuple[AITask, ...] = ()
