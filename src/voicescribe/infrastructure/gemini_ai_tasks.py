"""Gemini implementation of the AITaskService interface."""

import asyncio
from typing import Any, TypeVar

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from voicescribe.domain.models import (
    AITask,
    SummarizeRequest,
    SummarizeResponse,
    TranscribeRequest,
    TranscribeResponse,
    TranslateRequest,
    TranslateResponse,
    TransliterateRequest,
    TransliterateResponse,
)
from voicescribe.exceptions import AITaskError, AITaskErrorKind
from voicescribe.logging import setup_logging

from . import prompts
from .interfaces import AITaskService

logger = setup_logging()

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class GeminiAITaskService(AITaskService):
    """AI task service backed by Google Gemini structured output."""

    def __init__(self, client: genai.Client, model_name: str, timeout_seconds: float):
        self._client = client
        self._model_name = model_name
        self._timeout_seconds = timeout_seconds

    async def transcribe(self, request: TranscribeRequest) -> TranscribeResponse:
        payload = request.payload
        media = types.Part.from_bytes(data=payload.decode(), mime_type=payload.mime_type)
        return await self._generate(
            AITask.TRANSCRIBE,
            [media, prompts.TRANSCRIBE_TEMPLATE],
            TranscribeResponse,
            prompts.TRANSCRIBE_SYSTEM_PROMPT,
        )

    async def translate(self, request: TranslateRequest) -> TranslateResponse:
        return await self._generate(
            AITask.TRANSLATE,
            prompts.TRANSLATE_TEMPLATE.format(
                text=request.text, target_language=request.target_language
            ),
            TranslateResponse,
            prompts.TRANSLATE_SYSTEM_PROMPT,
        )

    async def transliterate(
        self, request: TransliterateRequest
    ) -> TransliterateResponse:
        return await self._generate(
            AITask.TRANSLITERATE,
            prompts.TRANSLITERATE_TEMPLATE.format(
                text=request.text, target_script=request.target_script
            ),
            TransliterateResponse,
            prompts.TRANSLITERATE_SYSTEM_PROMPT,
        )

    async def summarize(self, request: SummarizeRequest) -> SummarizeResponse:
        return await self._generate(
            AITask.SUMMARIZE,
            prompts.SUMMARIZE_TEMPLATE.format(text=request.text),
            SummarizeResponse,
            prompts.SUMMARIZE_SYSTEM_PROMPT,
        )

    async def _generate(
        self,
        task: AITask,
        contents: Any,
        response_model: type[ResponseT],
        system_prompt: str,
    ) -> ResponseT:
        """
        Runs one structured-output request under the configured time bound.

        Raises:
            AITaskError: TIMEOUT when the bound expires, VALIDATION when the
                response is empty or does not match response_model, SERVICE
                for any other failure.
        """
        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self._model_name,
                    contents=contents,
                    config={
                        "response_mime_type": "application/json",
                        "response_schema": response_model,
                        "system_instruction": system_prompt,
                    },
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.exception(
                "Gemini call timed out",
                extra={"task": task, "timeout_seconds": self._timeout_seconds},
            )
            raise AITaskError(task, AITaskErrorKind.TIMEOUT, e) from e
        except Exception as e:
            logger.exception("Gemini API call failed", extra={"task": task})
            raise AITaskError(task, AITaskErrorKind.SERVICE, e) from e

        if not response.text:
            logger.error("Gemini returned empty response", extra={"task": task})
            raise AITaskError(
                task,
                AITaskErrorKind.VALIDATION,
                ValueError("Gemini returned empty response"),
            )

        try:
            result = response_model.model_validate_json(response.text)
        except ValidationError as e:
            logger.exception("Gemini response failed validation", extra={"task": task})
            raise AITaskError(task, AITaskErrorKind.VALIDATION, e) from e

        logger.info("AI task completed", extra={"task": task, "model": self._model_name})
        return result
