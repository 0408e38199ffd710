"""Step 01: Split a video into numbered still frames with ffmpeg."""

from __future__ import annotations

import logging
from typing import ClassVar

from framecatch.core.errors import ExtractionError
from framecatch.core.step_base import BaseStep
from framecatch.utils.ffmpeg import run_ffmpeg
from framecatch.utils.io import frame_pattern
from .config import ExtractFramesConfig
from .contracts import ExtractFramesInput, ExtractFramesOutput

logger = logging.getLogger(__name__)


class ExtractFramesStep(BaseStep[ExtractFramesInput, ExtractFramesOutput, ExtractFramesConfig]):
    name: ClassVar[str] = "extract_frames"
    input_type: ClassVar = ExtractFramesInput
    output_type: ClassVar = ExtractFramesOutput
    config_type: ClassVar = ExtractFramesConfig

    def validate_inputs(self, inputs: ExtractFramesInput) -> bool:
        if not inputs.output_dir.is_dir():
            logger.error(f"Output directory not found: {inputs.output_dir}")
            return False
        return True

    def build_args(self, inputs: ExtractFramesInput) -> list[str]:
        pattern = frame_pattern(self.config.frame_prefix, self.config.output_format)
        return ["-i", str(inputs.video_path), str(inputs.output_dir / pattern)]

    def run(self, inputs: ExtractFramesInput) -> ExtractFramesOutput:
        if not inputs.video_path.is_file():
            raise ExtractionError(f"Video not found: {inputs.video_path}")

        try:
            run_ffmpeg(
                self.build_args(inputs),
                ffmpeg_bin=self.config.ffmpeg_bin,
                timeout=self.config.timeout,
            )
        except ExtractionError:
            logger.error(f"Frame extraction failed for {inputs.video_path}")
            raise

        logger.info(f"Extracted frames from {inputs.video_path.name} into {inputs.output_dir}")
        return ExtractFramesOutput(frames_dir=inputs.output_dir)
