"""Infrastructure layer exports."""

from .clip_recorder import ClipRecorder
from .gemini_ai_tasks import GeminiAITaskService

__all__ = ["ClipRecorder", "GeminiAITaskService"]
