"""Abstract interface for the four AI tasks."""

from abc import ABC, abstractmethod

from voicescribe.domain.models import (
    SummarizeRequest,
    SummarizeResponse,
    TranscribeRequest,
    TranscribeResponse,
    TranslateRequest,
    TranslateResponse,
    TransliterateRequest,
    TransliterateResponse,
)


class AITaskService(ABC):
    """
    Abstract base class for AI backends.

    Each call either fully succeeds or fails with AITaskError; none of them
    retries or produces partial output.
    """

    @abstractmethod
    async def transcribe(self, request: TranscribeRequest) -> TranscribeResponse:
        """
        Generates a transcript from an encoded audio or video payload.

        Args:
            request: The MIME-typed payload to transcribe.

        Returns:
            TranscribeResponse with the transcript text.

        Raises:
            AITaskError: If the backend call fails, times out or returns
                an unusable response.
        """

    @abstractmethod
    async def translate(self, request: TranslateRequest) -> TranslateResponse:
        """
        Translates text into the target language.

        Raises:
            AITaskError: If the backend call fails.
        """

    @abstractmethod
    async def transliterate(
        self, request: TransliterateRequest
    ) -> TransliterateResponse:
        """
        Transliterates text into the target script.

        Raises:
            AITaskError: If the backend call fails.
        """

    @abstractmethod
    async def summarize(self, request: SummarizeRequest) -> SummarizeResponse:
        """
        Summarizes text.

        Raises:
            AITaskError: If the backend call fails.
        """
