"""Exception hierarchy for the comparison pipeline.

None of these are retried: any of them raised mid-pipeline aborts the whole
comparison. A frame-count mismatch is not an error and never shows up here.
"""

from __future__ import annotations


class FrameCatchError(Exception):
    """Base class for all comparison failures."""


class AllocationError(FrameCatchError):
    """A scratch directory could not be created."""


class ExtractionError(FrameCatchError):
    """The external decoder reported or exhibited a failure."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


class FrameCountError(FrameCatchError, OSError):
    """An extracted frame directory could not be listed."""


class ImageReadError(FrameCatchError):
    """A frame image could not be decoded."""


class FrameSizeMismatchError(FrameCatchError, ValueError):
    """Two paired frames do not share the same dimensions."""
