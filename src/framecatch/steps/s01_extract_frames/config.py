"""Configuration for Step 01: Video to Frames."""

from pydantic import BaseModel, Field


class ExtractFramesConfig(BaseModel):
    ffmpeg_bin: str = Field("ffmpeg", description="ffmpeg executable name or path")
    frame_prefix: str = Field("frame", description="Filename prefix of extracted frames")
    output_format: str = Field("png", description="Frame image format")
    timeout: int = Field(3600, gt=0, description="Seconds before the decoder is killed")
