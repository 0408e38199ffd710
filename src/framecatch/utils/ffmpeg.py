"""Running the ffmpeg command-line decoder."""

from __future__ import annotations

import logging
import subprocess

from framecatch.core.errors import ExtractionError

logger = logging.getLogger(__name__)


def ffmpeg_command(ffmpeg_bin: str, *args: str) -> list[str]:
    """Full ffmpeg command line: no stdin, errors only on stderr."""
    return [ffmpeg_bin, "-nostdin", "-loglevel", "error", *args]


def run_ffmpeg(args: list[str], ffmpeg_bin: str = "ffmpeg", timeout: int = 3600) -> None:
    """Run ffmpeg with ``args``; every kind of failure raises ``ExtractionError``.

    At ``-loglevel error`` a clean decode writes nothing to stderr, so any
    stderr output is a failure even when the exit code is 0. The captured
    text is kept on the raised error as ``stderr``.
    """
    cmd = ffmpeg_command(ffmpeg_bin, *args)
    cmd_str = " ".join(cmd)
    logger.info(f"Running: {cmd_str}")

    try:
        result = subprocess.run(
            cmd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        raise ExtractionError(f"Decoder not found: {ffmpeg_bin}") from e
    except subprocess.TimeoutExpired as e:
        raise ExtractionError(f"Decoder timed out after {timeout}s: {cmd_str}") from e

    stderr = result.stderr.strip()
    if stderr:
        logger.debug(f"stderr: {stderr[-500:]}")
    if result.returncode != 0 or stderr:
        raise ExtractionError(f"ffmpeg exited with code {result.returncode}: {stderr}", stderr=stderr)
