"""In-memory implementation of the CaptureDevice interface."""

import asyncio

from voicescribe.domain.models import CapturedClip
from voicescribe.exceptions import RecorderStateError
from voicescribe.logging import setup_logging

from .interfaces import CaptureDevice

logger = setup_logging()


class ClipRecorder(CaptureDevice):
    """Buffers pushed audio chunks and completes one clip per take."""

    def __init__(self, mime_type: str = "audio/webm"):
        self._mime_type = mime_type
        self._chunks: list[bytes] = []
        self._captured = 0
        self._recording = False
        self._completion: asyncio.Future[CapturedClip] | None = None

    @property
    def is_recording(self) -> bool:
        return self._recording

    def start(self) -> None:
        if self._recording:
            raise RecorderStateError("recording already in progress")
        self._chunks = []
        self._captured = 0
        self._completion = asyncio.get_running_loop().create_future()
        self._recording = True
        logger.info("Recording started", extra={"mime_type": self._mime_type})

    def write(self, chunk: bytes) -> int:
        if not self._recording:
            raise RecorderStateError("not recording")
        self._chunks.append(chunk)
        self._captured += len(chunk)
        return self._captured

    def stop(self) -> CapturedClip:
        if not self._recording:
            raise RecorderStateError("not recording")
        self._recording = False
        clip = CapturedClip(data=b"".join(self._chunks), mime_type=self._mime_type)
        self._chunks = []
        if not self._completion.done():
            self._completion.set_result(clip)
        logger.info("Recording stopped", extra={"size": len(clip.data)})
        return clip

    async def completed(self) -> CapturedClip:
        if self._completion is None:
            raise RecorderStateError("no recording has been started")
        return await asyncio.shield(self._completion)
