"""Infrastructure interface exports."""

from .ai_task_service import AITaskService
from .capture_device import CaptureDevice

__all__ = ["AITaskService", "CaptureDevice"]
