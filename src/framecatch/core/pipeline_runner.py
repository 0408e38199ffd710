"""Comparison orchestrator: extract both videos, reconcile counts, diff frames.

Lifecycle of one call to ``compare_videos``::

    Init -> Extracting -> CountReconciling -> Diffing -> Completed

Any error along the way aborts the call and propagates unchanged.
Extraction and counting run for both videos concurrently; diffing runs one
frame pair at a time. Scratch directories are released on every path.
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from pathlib import Path
from typing import Any, Mapping, TypeVar, Union

import yaml
from pydantic import BaseModel

from framecatch.steps.s01_extract_frames.config import ExtractFramesConfig
from framecatch.steps.s01_extract_frames.contracts import ExtractFramesInput
from framecatch.steps.s01_extract_frames.step import ExtractFramesStep
from framecatch.steps.s02_diff_frames.config import DiffFramesConfig
from framecatch.steps.s02_diff_frames.contracts import DiffFramesInput
from framecatch.steps.s02_diff_frames.step import DiffFramesStep
from framecatch.utils.io import count_frames, write_report
from framecatch.utils.scratch import scratch_dirs
from .contracts import ComparisonResult, ComparisonSettings
from .step_base import elapsed_ms

logger = logging.getLogger(__name__)

SettingsLike = Union[ComparisonSettings, Mapping[str, Any], None]
ConfigT = TypeVar("ConfigT", bound=BaseModel)


def load_settings(config_path: Path) -> ComparisonSettings:
    """Load comparison settings from a YAML file."""
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return ComparisonSettings.model_validate(raw)


def load_step_config(config_path: str | Path, config_class: type[ConfigT]) -> ConfigT:
    """Load a step YAML file (e.g. ``configs/steps/s01_extract_frames.yaml``)."""
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    return config_class.model_validate(raw)


def resolve_extract_config(
    extract_config: ExtractFramesConfig | str | Path | None,
) -> ExtractFramesConfig:
    """Decoder options from a model, a YAML path, or the defaults."""
    if extract_config is None:
        return ExtractFramesConfig()
    if isinstance(extract_config, ExtractFramesConfig):
        return extract_config
    return load_step_config(extract_config, ExtractFramesConfig)


def resolve_settings(settings: SettingsLike) -> ComparisonSettings:
    """Validate caller-supplied settings (model, mapping or None)."""
    if settings is None:
        return ComparisonSettings()
    if isinstance(settings, ComparisonSettings):
        return settings
    return ComparisonSettings.model_validate(dict(settings))


def _run_concurrently(fn, *args_per_call) -> list:
    """Call ``fn`` once per argument tuple in parallel and wait for all of them.

    Results come back in call order. The first failure (in call order) is
    re-raised unchanged, after every call has finished.
    """
    with concurrent.futures.ThreadPoolExecutor(max_workers=len(args_per_call)) as executor:
        futures = [executor.submit(fn, *args) for args in args_per_call]
        concurrent.futures.wait(futures)
    return [future.result() for future in futures]


def _persist(result: ComparisonResult) -> None:
    if result.settings.write_to_file:
        write_report(result.settings.report_path, result.to_json())


def compare_videos(
    video_a: str | Path,
    video_b: str | Path,
    settings: SettingsLike = None,
    extract_config: ExtractFramesConfig | str | Path | None = None,
) -> ComparisonResult:
    """Compare two videos frame by frame.

    Args:
        video_a: Reference video.
        video_b: Video to check against the reference.
        settings: ``ComparisonSettings`` or an equivalent mapping
            (snake_case or camelCase keys). Defaults apply when omitted.
        extract_config: Decoder options for the extraction step, or the path
            of a YAML file holding them.

    Returns:
        The comparison result. A frame-count mismatch is reported as a failed
        result, not raised.

    Raises:
        AllocationError, ExtractionError, FrameCountError, ImageReadError,
        FrameSizeMismatchError: propagated unchanged; no partial result.
    """
    cfg = resolve_settings(settings)
    video_a, video_b = Path(video_a), Path(video_b)
    extract_config = resolve_extract_config(extract_config)

    result = ComparisonResult(settings=cfg)
    logger.info(f"Comparing {video_a} against {video_b}")

    with scratch_dirs(2) as (dir_a, dir_b):
        extractor = ExtractFramesStep(config=extract_config)

        t0 = time.perf_counter()
        frames_a, frames_b = _run_concurrently(
            extractor.execute,
            (ExtractFramesInput(video_path=video_a, output_dir=dir_a),),
            (ExtractFramesInput(video_path=video_b, output_dir=dir_b),),
        )
        result.times.split_to_frames = elapsed_ms(t0)

        count_a, count_b = _run_concurrently(
            count_frames, (frames_a.frames_dir,), (frames_b.frames_dir,)
        )
        result.result.video_a.frame_count = count_a
        result.result.video_b.frame_count = count_b

        # Per-frame alignment is meaningless when the totals differ
        if count_a != count_b:
            result.passed = False
            result.error = f"Frame count mismatch: {count_a} != {count_b}"
            logger.info(result.error)
            _persist(result)
            return result

        differ = DiffFramesStep(config=DiffFramesConfig(
            threshold=cfg.threshold,
            frame_interval=cfg.interval,
            stop_on_first_fail=cfg.stop_on_first_fail,
            frame_prefix=extract_config.frame_prefix,
            output_format=extract_config.output_format,
        ))

        t0 = time.perf_counter()
        diffed = differ.execute(DiffFramesInput(
            frames_dir_a=frames_a.frames_dir,
            frames_dir_b=frames_b.frames_dir,
            frame_count=count_a,
        ))
        result.times.diff_frames = elapsed_ms(t0)

    result.result.frames = diffed.frames
    if not diffed.passed:
        result.passed = False
        result.error = f"Frame {diffed.first_failed_index} differs"
    if diffed.stopped_early:
        result.type = "partial"

    logger.info(
        f"Comparison {'passed' if result.passed else 'failed'} ({result.type}): "
        f"{len(result.result.frames)} frames checked, "
        f"extract {result.times.split_to_frames}ms, diff {result.times.diff_frames}ms"
    )
    _persist(result)
    return result
