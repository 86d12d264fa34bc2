from voicescribe.config import AppConfig, load_config
from voicescribe.exceptions import (
    AITaskError,
    AITaskErrorKind,
    EncodingError,
    NoticeNotFoundError,
    RecorderStateError,
    UnsupportedMediaError,
)
from voicescribe.logging import setup_logging

__all__ = [
    "setup_logging",
    "AppConfig",
    "load_config",
    "AITaskError",
    "AITaskErrorKind",
    "EncodingError",
    "NoticeNotFoundError",
    "RecorderStateError",
    "UnsupportedMediaError",
]
