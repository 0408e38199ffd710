"""framecatch core: comparison orchestrator, base step, shared contracts."""

from .step_base import BaseStep
from .contracts import (
    ComparisonDetail,
    ComparisonResult,
    ComparisonSettings,
    ComparisonTimes,
    FrameDiffResult,
    VideoSummary,
)
from .errors import (
    AllocationError,
    ExtractionError,
    FrameCatchError,
    FrameCountError,
    FrameSizeMismatchError,
    ImageReadError,
)
from .pipeline_runner import compare_videos, load_settings
from .logging import setup_logging

__all__ = [
    "BaseStep",
    "ComparisonDetail",
    "ComparisonResult",
    "ComparisonSettings",
    "ComparisonTimes",
    "FrameDiffResult",
    "VideoSummary",
    "AllocationError",
    "ExtractionError",
    "FrameCatchError",
    "FrameCountError",
    "FrameSizeMismatchError",
    "ImageReadError",
    "compare_videos",
    "load_settings",
    "setup_logging",
]
