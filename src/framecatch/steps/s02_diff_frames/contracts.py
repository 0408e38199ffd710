"""I/O contracts for Step 02: Frame diffing."""

from pathlib import Path

from pydantic import BaseModel, Field

from framecatch.core.contracts import FrameDiffResult


class DiffFramesInput(BaseModel):
    frames_dir_a: Path = Field(..., description="Extracted frames of video A")
    frames_dir_b: Path = Field(..., description="Extracted frames of video B")
    frame_count: int = Field(..., ge=0, description="Frame count shared by both directories")


class DiffFramesOutput(BaseModel):
    frames: dict[int, FrameDiffResult] = Field(
        default_factory=dict, description="Diff result per sampled frame index"
    )
    passed: bool = Field(True, description="No sampled frame differed")
    stopped_early: bool = Field(False, description="Loop ended at the first differing frame")
    first_failed_index: int | None = Field(None, description="First sampled index with diff > 0")
