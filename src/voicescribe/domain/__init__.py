"""Domain layer exports."""

from .languages import LANGUAGES, TargetLanguage, script_for
from .models import (
    AITask,
    CapturedClip,
    EncodedPayload,
    MediaKind,
    RunOutcome,
    RunState,
    ScribeState,
    Source,
)
from .normalizer import InputNormalizer
from .orchestrator import PipelineOrchestrator
from .store import ScribeStore

__all__ = [
    "LANGUAGES",
    "TargetLanguage",
    "script_for",
    "AITask",
    "CapturedClip",
    "EncodedPayload",
    "MediaKind",
    "RunOutcome",
    "RunState",
    "ScribeState",
    "Source",
    "InputNormalizer",
    "PipelineOrchestrator",
    "ScribeStore",
]
