"""Shared pytest fixtures for framecatch tests."""

from __future__ import annotations

import json
import stat
import sys
from pathlib import Path
from typing import Callable, Iterable

import numpy as np
import pytest

from framecatch.steps.s01_extract_frames.contracts import ExtractFramesInput, ExtractFramesOutput
from framecatch.steps.s01_extract_frames.step import ExtractFramesStep
from framecatch.utils.io import frame_filename

FRAME_SIZE = (32, 24)  # width, height


def make_frame(index: int, changed: bool = False, size: tuple[int, int] = FRAME_SIZE) -> np.ndarray:
    """Deterministic dark BGR frame; ``changed`` paints a white block into it."""
    width, height = size
    frame = np.full((height, width, 3), 40, dtype=np.uint8)
    frame[:, :, 0] = (np.arange(width, dtype=np.uint16) * 2 % 60).astype(np.uint8)
    frame[0, 0, 1] = index % 60
    if changed:
        frame[4:14, 4:14] = 255
    return frame


def write_frames(
    frames_dir: Path,
    count: int,
    changed: Iterable[int] = (),
    size: tuple[int, int] = FRAME_SIZE,
) -> Path:
    """Write ``count`` PNG frames named like the extractor names them."""
    import cv2

    changed = set(changed)
    frames_dir.mkdir(parents=True, exist_ok=True)
    for i in range(1, count + 1):
        cv2.imwrite(str(frames_dir / frame_filename(i)), make_frame(i, i in changed, size))
    return frames_dir


@pytest.fixture
def frames_pair(tmp_path: Path) -> Callable[..., tuple[Path, Path]]:
    """Factory for two frame directories; video B differs at ``changed``."""

    def _make(count: int = 10, changed: Iterable[int] = ()) -> tuple[Path, Path]:
        dir_a = write_frames(tmp_path / "frames_a", count)
        dir_b = write_frames(tmp_path / "frames_b", count, changed)
        return dir_a, dir_b

    return _make


class FakeVideos:
    """Stand-in for ffmpeg: each registered 'video' knows which frames to emit."""

    def __init__(self, root: Path):
        self.root = root
        self.specs: dict[Path, tuple[int, set[int]]] = {}
        self.output_dirs: list[Path] = []

    def make(self, name: str, frame_count: int, changed: Iterable[int] = ()) -> Path:
        path = self.root / name
        path.write_bytes(b"not really a video")
        self.specs[path] = (frame_count, set(changed))
        return path

    def extract(self, inputs: ExtractFramesInput) -> ExtractFramesOutput:
        frame_count, changed = self.specs[inputs.video_path]
        self.output_dirs.append(inputs.output_dir)
        write_frames(inputs.output_dir, frame_count, changed)
        return ExtractFramesOutput(frames_dir=inputs.output_dir)


@pytest.fixture
def fake_videos(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeVideos:
    """Replace ffmpeg extraction with synthetic frame generation."""
    videos = FakeVideos(tmp_path)
    monkeypatch.setattr(ExtractFramesStep, "run", lambda self, inputs: videos.extract(inputs))
    return videos


FAKE_FFMPEG = """\
#!{python}
import json
import sys
import time

import cv2
import numpy as np

args = sys.argv[1:]
with open(args[args.index("-i") + 1], encoding="utf-8") as f:
    plan = json.load(f)
pattern = args[-1]

time.sleep(plan.get("sleep", 0))
for i in range(1, plan.get("frames", 0) + 1):
    frame = np.full((24, 32, 3), 40, dtype=np.uint8)
    if i in plan.get("changed", []):
        frame[4:14, 4:14] = 255
    cv2.imwrite(pattern % i, frame)
if plan.get("stderr"):
    sys.stderr.write(plan["stderr"] + "\\n")
sys.exit(plan.get("exit_code", 0))
"""


class FakeFfmpeg:
    """Executable stand-in for the ffmpeg binary.

    Each 'video' is a JSON plan telling the script how many frames to write
    through the ``-i VIDEO PATTERN`` arguments, which of them carry a white
    block, and what to print to stderr or exit with.
    """

    def __init__(self, root: Path):
        self.root = root
        self.bin = root / "fake-ffmpeg"
        self.bin.write_text(FAKE_FFMPEG.format(python=sys.executable), encoding="utf-8")
        self.bin.chmod(self.bin.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    def video(self, name: str, frames: int = 0, changed: Iterable[int] = (), **plan) -> Path:
        path = self.root / name
        path.write_text(json.dumps({"frames": frames, "changed": list(changed), **plan}), encoding="utf-8")
        return path


@pytest.fixture
def fake_ffmpeg(tmp_path: Path) -> FakeFfmpeg:
    """A runnable fake ffmpeg in ``tmp_path``; POSIX only."""
    if sys.platform == "win32":
        pytest.skip("shebang scripts are not executable on Windows")
    return FakeFfmpeg(tmp_path)


def create_synthetic_video(
    video_path: Path,
    num_frames: int = 10,
    changed: Iterable[int] = (),
    resolution: tuple[int, int] = (64, 48),
    fps: float = 10.0,
) -> Path:
    """Write a small mp4 whose 0-based frames in ``changed`` carry a white block."""
    cv2 = pytest.importorskip("cv2")
    changed = set(changed)

    width, height = resolution
    fourcc = cv2.VideoWriter_fourcc(*"mp4v")
    writer = cv2.VideoWriter(str(video_path), fourcc, fps, (width, height))
    if not writer.isOpened():
        pytest.skip("OpenCV build cannot write mp4v video")

    for i in range(num_frames):
        frame = np.zeros((height, width, 3), dtype=np.uint8)
        frame[:, :, 1] = np.linspace(0, 200, width, dtype=np.uint8)
        if i in changed:
            frame[8:40, 8:40] = 255
        writer.write(frame)
    writer.release()
    return video_path


@pytest.fixture
def synthetic_video(tmp_path: Path) -> Callable[..., Path]:
    """Factory for synthetic videos inside ``tmp_path``."""

    def _make(name: str = "video.mp4", **kwargs) -> Path:
        return create_synthetic_video(tmp_path / name, **kwargs)

    return _make
