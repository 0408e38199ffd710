"""Configuration for Step 02: Frame diffing."""

from pydantic import BaseModel, Field


class DiffFramesConfig(BaseModel):
    threshold: float = Field(0.1, ge=0.0, le=1.0, description="Per-pixel perceptual sensitivity")
    frame_interval: int = Field(1, gt=0, description="Diff every Nth frame starting at 1")
    stop_on_first_fail: bool = Field(False, description="Stop at the first differing frame")
    frame_prefix: str = Field("frame", description="Filename prefix of extracted frames")
    output_format: str = Field("png", description="Frame image format")
