"""Step 02: Diff index-aligned frame pairs of two extracted videos."""

from __future__ import annotations

import logging
import time
from typing import ClassVar

from framecatch.core.contracts import FrameDiffResult
from framecatch.core.step_base import BaseStep, elapsed_ms
from framecatch.utils.io import frame_filename
from framecatch.utils.pixel_diff import diff_frames
from .config import DiffFramesConfig
from .contracts import DiffFramesInput, DiffFramesOutput

logger = logging.getLogger(__name__)


def sampled_indices(frame_count: int, interval: int = 1) -> range:
    """Frame indices to diff: 1, 1+interval, ... strictly below ``frame_count``."""
    return range(1, frame_count, interval)


class DiffFramesStep(BaseStep[DiffFramesInput, DiffFramesOutput, DiffFramesConfig]):
    name: ClassVar[str] = "diff_frames"
    input_type: ClassVar = DiffFramesInput
    output_type: ClassVar = DiffFramesOutput
    config_type: ClassVar = DiffFramesConfig

    def validate_inputs(self, inputs: DiffFramesInput) -> bool:
        for frames_dir in (inputs.frames_dir_a, inputs.frames_dir_b):
            if not frames_dir.is_dir():
                logger.error(f"Frames directory not found: {frames_dir}")
                return False
        return True

    def run(self, inputs: DiffFramesInput) -> DiffFramesOutput:
        output = DiffFramesOutput()

        # One pair at a time: at most two decoded frames are held in memory
        for i in sampled_indices(inputs.frame_count, self.config.frame_interval):
            fname = frame_filename(i, self.config.frame_prefix, self.config.output_format)

            t0 = time.perf_counter()
            diff = diff_frames(inputs.frames_dir_a / fname, inputs.frames_dir_b / fname,
                               self.config.threshold)
            output.frames[i] = FrameDiffResult(diff=diff, time=elapsed_ms(t0))

            if diff > 0:
                logger.info(f"Frame {i}: {diff} differing pixels")
                if output.passed:
                    output.passed = False
                    output.first_failed_index = i
                if self.config.stop_on_first_fail:
                    output.stopped_early = True
                    break
            else:
                logger.debug(f"Frame {i}: identical")

        logger.info(
            f"Diffed {len(output.frames)} frame pairs "
            f"(interval={self.config.frame_interval}, passed={output.passed})"
        )
        return output
