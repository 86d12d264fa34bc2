"""Tests for GeminiAITaskService."""

import asyncio
import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from voicescribe.domain.models import (
    EncodedPayload,
    SummarizeRequest,
    TranscribeRequest,
    TranslateRequest,
    TranslateResponse,
    TransliterateRequest,
)
from voicescribe.exceptions import AITaskError, AITaskErrorKind
from voicescribe.infrastructure import GeminiAITaskService


def _client(text: str | None = None, side_effect=None) -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=SimpleNamespace(text=text), side_effect=side_effect
    )
    return client


def _service(client: MagicMock, timeout: float = 5.0) -> GeminiAITaskService:
    return GeminiAITaskService(client, "gemini-test", timeout)


@pytest.mark.asyncio
async def test_transcribe_sends_inline_media():
    client = _client(json.dumps({"transcript": "hello there"}))
    payload = EncodedPayload.from_bytes(b"RIFF-audio", "audio/wav")

    response = await _service(client).transcribe(TranscribeRequest(payload=payload))

    assert response.transcript == "hello there"
    kwargs = client.aio.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    media = kwargs["contents"][0]
    assert media.inline_data.data == b"RIFF-audio"
    assert media.inline_data.mime_type == "audio/wav"
    assert kwargs["config"]["response_mime_type"] == "application/json"


@pytest.mark.asyncio
async def test_translate_uses_structured_output():
    client = _client(json.dumps({"translated_text": "नमस्ते"}))

    response = await _service(client).translate(
        TranslateRequest(text="hello", target_language="Hindi")
    )

    assert response.translated_text == "नमस्ते"
    kwargs = client.aio.models.generate_content.call_args.kwargs
    assert "Target Language: Hindi" in kwargs["contents"]
    assert kwargs["config"]["response_schema"] is TranslateResponse


@pytest.mark.asyncio
async def test_transliterate_names_target_script():
    client = _client(json.dumps({"transliterated_text": "ஹலோ"}))

    response = await _service(client).transliterate(
        TransliterateRequest(text="hello", target_script="Tamil")
    )

    assert response.transliterated_text == "ஹலோ"
    assert "Tamil" in client.aio.models.generate_content.call_args.kwargs["contents"]


@pytest.mark.asyncio
async def test_slow_call_times_out():
    async def never_returns(**kwargs):
        await asyncio.sleep(10)

    client = MagicMock()
    client.aio.models.generate_content = never_returns

    with pytest.raises(AITaskError) as exc_info:
        await _service(client, timeout=0.01).summarize(SummarizeRequest(text="hi"))

    assert exc_info.value.kind == AITaskErrorKind.TIMEOUT
    assert exc_info.value.task == "summarize"


@pytest.mark.asyncio
async def test_api_error_is_service_failure():
    client = _client(side_effect=ConnectionError("reset"))

    with pytest.raises(AITaskError) as exc_info:
        await _service(client).summarize(SummarizeRequest(text="hi"))

    assert exc_info.value.kind == AITaskErrorKind.SERVICE
    assert isinstance(exc_info.value.cause, ConnectionError)


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "not json", json.dumps({"other": 1})])
async def test_empty_or_malformed_response_is_validation_failure(text):
    client = _client(text)

    with pytest.raises(AITaskError) as exc_info:
        await _service(client).summarize(SummarizeRequest(text="hi"))

    assert exc_info.value.kind == AITaskErrorKind.VALIDATION
