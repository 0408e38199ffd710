"""Perceptual pixel comparison between two RGBA frames.

Pixels are alpha-blended onto white, converted to YIQ, and compared with a
weighted squared delta. A pixel counts as different when its delta exceeds
``MAX_YIQ_DELTA * threshold**2``, so ``threshold=0`` flags any change and
``threshold=1`` flags nothing.

Pixels over the threshold that sit on an anti-aliased edge in either frame
are not counted unless ``include_aa`` is set. A pixel is anti-aliased when
at most two of its 8 neighbours share its brightness, it has both a darker
and a brighter neighbour, and the darkest or the brightest of those
neighbours has three or more identical neighbours in both frames. Pixels on
the frame border count one extra equal neighbour.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from framecatch.core.errors import FrameSizeMismatchError
from framecatch.utils.io import read_image

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.1

# Largest possible weighted YIQ delta between two colours
MAX_YIQ_DELTA = 35215.0

_RGB_TO_YIQ = np.array([
    [0.29889531, 0.58662247, 0.11448223],
    [0.59597799, -0.27417610, -0.32180189],
    [0.21147017, -0.52261711, 0.31114694],
], dtype=np.float64)

_YIQ_WEIGHTS = np.array([0.5053, 0.299, 0.1957], dtype=np.float64)

# (dy, dx) of the 8 neighbours, column by column
_NEIGHBOURS = [(dy, dx) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dy, dx) != (0, 0)]


def _blend_on_white(rgba: np.ndarray) -> np.ndarray:
    """Composite RGBA (uint8) over a white background, returning float RGB."""
    rgb = rgba[..., :3].astype(np.float64)
    alpha = rgba[..., 3:4].astype(np.float64) / 255.0
    return 255.0 + (rgb - 255.0) * alpha


def yiq_delta(rgba_a: np.ndarray, rgba_b: np.ndarray) -> np.ndarray:
    """Per-pixel weighted squared YIQ distance, shape (H, W)."""
    yiq_a = _blend_on_white(rgba_a) @ _RGB_TO_YIQ.T
    yiq_b = _blend_on_white(rgba_b) @ _RGB_TO_YIQ.T
    return np.square(yiq_a - yiq_b) @ _YIQ_WEIGHTS


def _neighbour_view(padded: np.ndarray, dy: int, dx: int, height: int, width: int) -> np.ndarray:
    return padded[1 + dy:1 + dy + height, 1 + dx:1 + dx + width]


def _border_mask(height: int, width: int) -> np.ndarray:
    border = np.zeros((height, width), dtype=np.int32)
    border[0, :] = border[-1, :] = 1
    border[:, 0] = border[:, -1] = 1
    return border


def _has_many_siblings(rgba: np.ndarray) -> np.ndarray:
    """True where a pixel has 3+ neighbours of exactly the same RGBA value."""
    height, width = rgba.shape[:2]
    # -1 never matches a uint8 channel, so out-of-frame neighbours are skipped
    padded = np.pad(rgba.astype(np.int16), ((1, 1), (1, 1), (0, 0)), constant_values=-1)
    zeroes = _border_mask(height, width)
    for dy, dx in _NEIGHBOURS:
        neighbour = _neighbour_view(padded, dy, dx, height, width)
        zeroes += np.all(neighbour == rgba, axis=-1)
    return zeroes > 2


def _antialiased(rgba: np.ndarray, many_siblings: np.ndarray) -> np.ndarray:
    """Mask of pixels in ``rgba`` that look like anti-aliased edge pixels.

    ``many_siblings`` is the combined ``_has_many_siblings`` mask of both
    frames; the darkest or brightest neighbour must be solid in each.
    """
    height, width = rgba.shape[:2]
    luma = _blend_on_white(rgba) @ _RGB_TO_YIQ[0]
    padded = np.pad(luma, 1, constant_values=np.nan)

    zeroes = _border_mask(height, width)
    darkest = np.zeros((height, width))
    brightest = np.zeros((height, width))
    darkest_at = np.zeros((height, width), dtype=np.intp)
    brightest_at = np.zeros((height, width), dtype=np.intp)

    for k, (dy, dx) in enumerate(_NEIGHBOURS):
        delta = luma - _neighbour_view(padded, dy, dx, height, width)
        inside = ~np.isnan(delta)
        zeroes += inside & (delta == 0)

        # Strict comparisons keep the first neighbour on ties
        darker = inside & (delta < darkest)
        darkest = np.where(darker, delta, darkest)
        darkest_at = np.where(darker, k, darkest_at)

        brighter = inside & (delta > brightest)
        brightest = np.where(brighter, delta, brightest)
        brightest_at = np.where(brighter, k, brightest_at)

    offsets = np.array(_NEIGHBOURS, dtype=np.intp)
    ys, xs = np.indices((height, width))

    def solid_at(chosen: np.ndarray) -> np.ndarray:
        ny = np.clip(ys + offsets[chosen, 0], 0, height - 1)
        nx = np.clip(xs + offsets[chosen, 1], 0, width - 1)
        return many_siblings[ny, nx]

    return (
        (zeroes <= 2)
        & (darkest < 0)
        & (brightest > 0)
        & (solid_at(darkest_at) | solid_at(brightest_at))
    )


def count_diff_pixels(
    rgba_a: np.ndarray,
    rgba_b: np.ndarray,
    threshold: float = DEFAULT_THRESHOLD,
    include_aa: bool = False,
) -> int:
    """Count pixels that differ perceptually between two same-sized frames.

    Args:
        rgba_a: (H, W, 4) uint8 reference frame. Its width/height are used.
        rgba_b: (H, W, 4) uint8 frame to compare.
        threshold: Sensitivity in [0, 1]; lower values flag smaller changes.
        include_aa: Count anti-aliased edge pixels as differences too.

    Returns:
        Number of mismatching pixels; 0 means identical under ``threshold``.
    """
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"threshold must be within [0, 1], got {threshold}")

    if rgba_a.shape != rgba_b.shape:
        raise FrameSizeMismatchError(
            f"Frame sizes do not match: {rgba_a.shape[1]}x{rgba_a.shape[0]} "
            f"vs {rgba_b.shape[1]}x{rgba_b.shape[0]}"
        )

    if np.array_equal(rgba_a, rgba_b):
        return 0

    max_delta = MAX_YIQ_DELTA * threshold * threshold
    over = yiq_delta(rgba_a, rgba_b) > max_delta
    if include_aa or not over.any():
        return int(np.count_nonzero(over))

    many_siblings = _has_many_siblings(rgba_a) & _has_many_siblings(rgba_b)
    aa = _antialiased(rgba_a, many_siblings) | _antialiased(rgba_b, many_siblings)
    counted = int(np.count_nonzero(over & ~aa))
    logger.debug(f"{int(np.count_nonzero(over)) - counted} anti-aliased pixels ignored")
    return counted


def diff_frames(path_a: Path, path_b: Path, threshold: float = DEFAULT_THRESHOLD) -> int:
    """Load two frame images and count their differing pixels."""
    frame_a = read_image(path_a)
    frame_b = read_image(path_b)
    return count_diff_pixels(frame_a, frame_b, threshold)
