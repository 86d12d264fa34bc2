"""Custom exceptions for the voicescribe service."""

from enum import StrEnum


class AITaskErrorKind(StrEnum):
    """Failure categories reported by the AI task adapter."""

    TIMEOUT = "timeout"
    SERVICE = "service"
    VALIDATION = "validation"


class EncodingError(Exception):
    """Raised when a source cannot be read into an encoded payload."""

    def __init__(self, source_id: int, cause: Exception | None = None):
        self.source_id = source_id
        self.cause = cause
        super().__init__(f"Failed to encode source {source_id}")


class AITaskError(Exception):
    """Raised when one of the AI tasks fails."""

    def __init__(
        self, task: str, kind: AITaskErrorKind, cause: Exception | None = None
    ):
        self.task = task
        self.kind = kind
        self.cause = cause
        super().__init__(f"AI task '{task}' failed ({kind})")


class UnsupportedMediaError(Exception):
    """Raised when a submitted file is neither audio nor video."""

    def __init__(self, mime_type: str | None):
        self.mime_type = mime_type
        super().__init__(f"Unsupported media type '{mime_type}'")


class RecorderStateError(Exception):
    """Raised when the capture device is driven out of order."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Recorder error: {reason}")


class NoticeNotFoundError(Exception):
    """Raised when dismissing a notice that is not on display."""

    def __init__(self, notice_id: int):
        self.notice_id = notice_id
        super().__init__(f"Notice {notice_id} not found")
