"""I/O utilities: frame naming, frame counting, image decoding, reports."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import cv2
import numpy as np

from framecatch.core.errors import FrameCountError, ImageReadError

logger = logging.getLogger(__name__)

FRAME_PREFIX = "frame"
FRAME_FORMAT = "png"
FRAME_INDEX_WIDTH = 4


# ── Frame naming ─────────────────────────────────────────────────────

def frame_pattern(prefix: str = FRAME_PREFIX, ext: str = FRAME_FORMAT) -> str:
    """ffmpeg output pattern matching ``frame_filename``, e.g. ``frame%04d.png``."""
    return f"{prefix}%0{FRAME_INDEX_WIDTH}d.{ext}"


def frame_filename(index: int, prefix: str = FRAME_PREFIX, ext: str = FRAME_FORMAT) -> str:
    """Name of the 1-based frame ``index`` as written by the extractor."""
    return f"{prefix}{index:0{FRAME_INDEX_WIDTH}d}.{ext}"


# ── Frame counting ───────────────────────────────────────────────────

def count_frames(frames_dir: Path) -> int:
    """Count the entries of an extracted frame directory (non-recursive)."""
    try:
        return len(os.listdir(frames_dir))
    except OSError as e:
        raise FrameCountError(f"Cannot list frame directory {frames_dir}: {e}") from e


# ── Image decoding ───────────────────────────────────────────────────

def read_image(path: Path) -> np.ndarray:
    """Decode an image file into an (H, W, 4) uint8 RGBA array."""
    # cv2.imread returns None instead of raising on unreadable files
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ImageReadError(f"Cannot decode image: {path}")

    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    elif img.dtype != np.uint8:
        raise ImageReadError(f"Unsupported pixel type {img.dtype} in {path}")

    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    channels = img.shape[2]
    if channels == 1:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    if channels == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    if channels == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    raise ImageReadError(f"Unsupported channel count {channels} in {path}")


# ── Reports ──────────────────────────────────────────────────────────

def write_report(path: Path, payload: str) -> bool:
    """Write a JSON report, overwriting any existing file.

    Returns False (after logging a warning) when the file cannot be written.
    """
    try:
        Path(path).write_text(payload, encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not write report to {path}: {e}")
        return False
    logger.info(f"Report written to {path}")
    return True
