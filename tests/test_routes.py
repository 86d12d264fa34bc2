"""Tests for the scribe HTTP routes."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from voicescribe.application import create_app
from voicescribe.dependencies import get_orchestrator, get_recorder
from voicescribe.domain import AITask
from voicescribe.infrastructure import ClipRecorder

from .fakes import wait_until


@pytest.fixture
def recorder() -> ClipRecorder:
    return ClipRecorder("audio/webm")


@pytest.fixture
def app(orchestrator, recorder):
    app = create_app()
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_recorder] = lambda: recorder
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app, orchestrator):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    await orchestrator.shutdown()


@pytest.mark.asyncio
async def test_list_languages(client):
    response = await client.get("/scribe/languages")

    assert response.status_code == 200
    assert response.json()[1] == {"value": "Hindi", "label": "Hindi", "script": "Devanagari"}


@pytest.mark.asyncio
async def test_upload_runs_pipeline(client, orchestrator):
    response = await client.post(
        "/scribe/sources",
        files={"file": ("talk.mp3", b"Hello world", "audio/mpeg")},
    )

    assert response.status_code == 202
    body = response.json()
    assert body["kind"] == "audio"
    assert body["message"] == "Source accepted, processing started"

    await wait_until(
        orchestrator.store,
        lambda s: s.summary.is_present and not s.post_processing,
    )
    state = (await client.get("/scribe/state")).json()
    assert state["source_id"] == body["source_id"]
    assert state["transcript"]["value"] == "Hello world"
    assert state["translation"]["value"] == "[English] Hello world"
    assert state["script"] == "Latin"


@pytest.mark.asyncio
async def test_upload_rejects_non_media(client, ai_service):
    response = await client.post(
        "/scribe/sources",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Please upload a valid audio or video file."
    assert ai_service.requests == []


@pytest.mark.asyncio
async def test_select_language_reruns_translation(client, orchestrator, ai_service, make_source):
    await orchestrator.start(make_source("Hello world"))

    response = await client.put("/scribe/language", json={"language": "Hindi"})

    assert response.status_code == 202
    assert response.json()["language"] == "Hindi"
    state = await wait_until(
        orchestrator.store, lambda s: s.translation.is_present and not s.post_processing
    )
    assert state.translation.value == "[Hindi] Hello world"
    assert state.transliteration.value == "<Devanagari> Hello world"
    assert len(ai_service.calls(AITask.SUMMARIZE)) == 1


@pytest.mark.asyncio
async def test_select_unknown_language(client):
    response = await client.put("/scribe/language", json={"language": "Klingon"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_recording_flow(client, orchestrator):
    assert (await client.post("/scribe/recording/start")).json()["recording"] is True

    chunk = await client.post("/scribe/recording/chunks", content=b"Spoken words")
    assert chunk.json() == {"recording": True, "captured_bytes": 12}

    response = await client.post("/scribe/recording/stop")
    assert response.status_code == 202
    assert response.json()["message"] == "Recording accepted, processing started"

    state = await wait_until(orchestrator.store, lambda s: s.transcript.is_present)
    assert state.transcript.value == "Spoken words"


@pytest.mark.asyncio
async def test_recording_commands_out_of_order(client):
    response = await client.post("/scribe/recording/stop")

    assert response.status_code == 409
    assert response.json()["detail"] == "not recording"


@pytest.mark.asyncio
async def test_dismiss_notice(client, orchestrator, ai_service, make_source):
    ai_service.fail(AITask.TRANSCRIBE)
    await orchestrator.start(make_source("Hello world"))
    notice = orchestrator.store.snapshot().notices[0]

    response = await client.delete(f"/scribe/notices/{notice.notice_id}")
    assert response.status_code == 204
    assert orchestrator.store.snapshot().notices == ()

    response = await client.delete(f"/scribe/notices/{notice.notice_id}")
    assert response.status_code == 404
