"""Scribe endpoints: source submission, language selection and state reads."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, UploadFile

from voicescribe.dependencies import get_orchestrator, get_recorder
from voicescribe.domain import LANGUAGES, PipelineOrchestrator, ScribeState, TargetLanguage
from voicescribe.domain.languages import find_language
from voicescribe.exceptions import (
    NoticeNotFoundError,
    RecorderStateError,
    UnsupportedMediaError,
)
from voicescribe.infrastructure.interfaces import CaptureDevice
from voicescribe.logging import setup_logging
from voicescribe.response_models import LanguageSelection, RecordingStatus, SourceAccepted

logger = setup_logging()

router = APIRouter(prefix="/scribe", tags=["scribe"])

OrchestratorDep = Annotated[PipelineOrchestrator, Depends(get_orchestrator)]
RecorderDep = Annotated[CaptureDevice, Depends(get_recorder)]


@router.get("/state", response_model=ScribeState)
async def get_state(orchestrator: OrchestratorDep) -> ScribeState:
    """Returns the current transcript, derived texts and loading flags."""
    return orchestrator.store.snapshot()


@router.get("/languages", response_model=list[TargetLanguage])
async def list_languages() -> list[TargetLanguage]:
    return list(LANGUAGES)


@router.post("/sources", response_model=SourceAccepted, status_code=202)
async def upload_source(
    file: UploadFile, orchestrator: OrchestratorDep
) -> SourceAccepted:
    """
    Accepts an audio or video upload.

    The new source supersedes whatever run is in flight; processing continues
    in the background and is observed through GET /scribe/state.
    """
    data = await file.read()
    try:
        source = orchestrator.accept(
            mime_type=file.content_type,
            data=data,
            name=file.filename or "upload",
        )
    except UnsupportedMediaError:
        logger.warning(
            "Rejected upload",
            extra={"file_name": file.filename, "content_type": file.content_type},
        )
        raise HTTPException(
            status_code=422, detail="Please upload a valid audio or video file."
        )

    orchestrator.submit(source)
    return SourceAccepted(
        message="Source accepted, processing started",
        source_id=source.source_id,
        kind=source.kind,
    )


@router.put("/language", response_model=ScribeState, status_code=202)
async def select_language(
    selection: LanguageSelection, orchestrator: OrchestratorDep
) -> ScribeState:
    """Changes the target language, re-running translation and transliteration."""
    if find_language(selection.language) is None:
        raise HTTPException(
            status_code=422, detail=f"Unknown language '{selection.language}'"
        )
    orchestrator.select_language(selection.language)
    return orchestrator.store.snapshot()


@router.post("/recording/start", response_model=RecordingStatus)
async def start_recording(recorder: RecorderDep) -> RecordingStatus:
    try:
        recorder.start()
    except RecorderStateError as e:
        raise HTTPException(status_code=409, detail=e.reason)
    return RecordingStatus(recording=True)


@router.post("/recording/chunks", response_model=RecordingStatus)
async def push_recording_chunk(request: Request, recorder: RecorderDep) -> RecordingStatus:
    chunk = await request.body()
    try:
        captured = recorder.write(chunk)
    except RecorderStateError as e:
        raise HTTPException(status_code=409, detail=e.reason)
    return RecordingStatus(recording=True, captured_bytes=captured)


@router.post("/recording/stop", response_model=SourceAccepted, status_code=202)
async def stop_recording(
    recorder: RecorderDep, orchestrator: OrchestratorDep
) -> SourceAccepted:
    """Finishes the take and submits the recorded clip as a new source."""
    try:
        clip = recorder.stop()
    except RecorderStateError as e:
        raise HTTPException(status_code=409, detail=e.reason)

    try:
        source = orchestrator.accept(mime_type=clip.mime_type, data=clip.data)
    except UnsupportedMediaError:
        raise HTTPException(
            status_code=422, detail="Please upload a valid audio or video file."
        )

    orchestrator.submit(source)
    return SourceAccepted(
        message="Recording accepted, processing started",
        source_id=source.source_id,
        kind=source.kind,
    )


@router.delete("/notices/{notice_id}", status_code=204)
async def dismiss_notice(notice_id: int, orchestrator: OrchestratorDep) -> Response:
    try:
        orchestrator.dismiss_notice(notice_id)
    except NoticeNotFoundError:
        raise HTTPException(status_code=404, detail="Notice not found")
    return Response(status_code=204)
