"""Frame-by-frame visual comparison of two videos."""

from framecatch.core import (
    ComparisonResult,
    ComparisonSettings,
    FrameDiffResult,
    compare_videos,
    load_settings,
    setup_logging,
)
from framecatch.core.errors import (
    AllocationError,
    ExtractionError,
    FrameCatchError,
    FrameCountError,
    FrameSizeMismatchError,
    ImageReadError,
)

__version__ = "0.1.0"

__all__ = [
    "ComparisonResult",
    "ComparisonSettings",
    "FrameDiffResult",
    "compare_videos",
    "load_settings",
    "setup_logging",
    "AllocationError",
    "ExtractionError",
    "FrameCatchError",
    "FrameCountError",
    "FrameSizeMismatchError",
    "ImageReadError",
]
