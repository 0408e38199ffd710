"""I/O contracts for Step 01: Video to Frames extraction."""

from pathlib import Path

from pydantic import BaseModel, Field


class ExtractFramesInput(BaseModel):
    video_path: Path = Field(..., description="Path to input video file")
    output_dir: Path = Field(..., description="Empty scratch directory receiving the frames")


class ExtractFramesOutput(BaseModel):
    frames_dir: Path = Field(..., description="Directory containing extracted frames")
