"""Abstract interface for microphone-style capture."""

from abc import ABC, abstractmethod

from voicescribe.domain.models import CapturedClip


class CaptureDevice(ABC):
    """Collects chunks while recording and yields exactly one clip per take."""

    @property
    @abstractmethod
    def is_recording(self) -> bool:
        """Whether a take is in progress."""

    @abstractmethod
    def start(self) -> None:
        """
        Begins a new take.

        Raises:
            RecorderStateError: If a take is already in progress.
        """

    @abstractmethod
    def write(self, chunk: bytes) -> int:
        """
        Appends a chunk to the current take.

        Returns:
            Total number of bytes captured so far.

        Raises:
            RecorderStateError: If no take is in progress.
        """

    @abstractmethod
    def stop(self) -> CapturedClip:
        """
        Ends the take and resolves its completion event.

        Raises:
            RecorderStateError: If no take is in progress.
        """

    @abstractmethod
    async def completed(self) -> CapturedClip:
        """Waits for the current take to be stopped and returns its clip."""
