"""Converts sources into the encoded payload the AI tasks consume."""

import asyncio

from voicescribe.domain.models import EncodedPayload, Source
from voicescribe.exceptions import EncodingError
from voicescribe.logging import setup_logging

logger = setup_logging()


class InputNormalizer:
    """Reads file-backed and in-memory sources into an EncodedPayload."""

    async def normalize(self, source: Source) -> EncodedPayload:
        """
        Encodes a source as a MIME-typed base64 payload.

        Args:
            source: The accepted source, backed by bytes or by a file path.

        Returns:
            EncodedPayload carrying the source MIME type.

        Raises:
            EncodingError: If the underlying read fails.
        """
        try:
            data = await self._read(source)
            payload = await asyncio.to_thread(
                EncodedPayload.from_bytes, data, source.mime_type
            )
        except Exception as e:
            logger.exception(
                "Source encoding failed",
                extra={"source_id": source.source_id, "source_name": source.name},
            )
            raise EncodingError(source.source_id, e) from e

        logger.info(
            "Source encoded",
            extra={
                "source_id": source.source_id,
                "mime_type": source.mime_type,
                "size": len(data),
            },
        )
        return payload

    async def _read(self, source: Source) -> bytes:
        if source.path is not None:
            return await asyncio.to_thread(source.path.read_bytes)
        return source.data
