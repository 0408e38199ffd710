"""Pydantic models shared across the comparison pipeline.

Field names are snake_case in Python; the camelCase aliases are what ends up
in serialized reports (``model_dump(by_alias=True)``). Both spellings are
accepted on input.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class FrameDiffResult(BaseModel):
    """Outcome of diffing one sampled frame pair."""

    model_config = ConfigDict(frozen=True)

    diff: int = Field(0, ge=0, description="Number of pixels classified as different")
    time: int = Field(0, ge=0, description="Time spent on this pair in milliseconds")


class ComparisonSettings(BaseModel):
    """Options accepted by ``compare_videos``."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    stop_on_first_fail: bool = Field(
        False, alias="stopOnFirstFail", description="Abort diffing at the first mismatching frame"
    )
    frame_interval: int | None = Field(
        None, gt=0, alias="frameInterval", description="Sample every Nth frame (None = every frame)"
    )
    write_to_file: bool = Field(
        False, alias="writeToFile", description="Persist the result as JSON to report_path"
    )
    threshold: float = Field(
        0.1, ge=0.0, le=1.0, description="Per-pixel perceptual sensitivity; lower flags smaller changes"
    )
    report_path: Path = Field(
        Path("report.json"), alias="reportPath", description="Where the JSON report is written"
    )

    @property
    def interval(self) -> int:
        return self.frame_interval or 1


class ComparisonTimes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    split_to_frames: int = Field(0, alias="splitToFrames", description="Extraction wall time (ms)")
    diff_frames: int = Field(0, alias="diffFrames", description="Diff loop wall time (ms)")


class VideoSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    frame_count: int = Field(0, ge=0, alias="frameCount")


class ComparisonDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    video_a: VideoSummary = Field(default_factory=VideoSummary, alias="videoA")
    video_b: VideoSummary = Field(default_factory=VideoSummary, alias="videoB")
    # Keyed by sampled frame index; gaps appear when frame_interval > 1.
    frames: dict[int, FrameDiffResult] = Field(default_factory=dict)


class ComparisonResult(BaseModel):
    """Aggregate outcome of one video comparison."""

    model_config = ConfigDict(populate_by_name=True)

    passed: bool = Field(True, alias="pass")
    type: Literal["full", "partial"] = Field(
        "full", description="'partial' when stop_on_first_fail cut the diff loop short"
    )
    error: str | None = Field(None, description="Reason for failing")
    settings: ComparisonSettings = Field(default_factory=ComparisonSettings)
    times: ComparisonTimes = Field(default_factory=ComparisonTimes)
    result: ComparisonDetail = Field(default_factory=ComparisonDetail)

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)
