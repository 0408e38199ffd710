"""Scratch directories for extracted frames.

Each comparison owns its directories outright: they are allocated before
extraction and removed on every exit path, including failures.
"""

from __future__ import annotations

import concurrent.futures
import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from framecatch.core.errors import AllocationError

logger = logging.getLogger(__name__)

SCRATCH_PREFIX = "framecatch-"


def allocate(prefix: str = SCRATCH_PREFIX) -> Path:
    """Create a uniquely named, empty, writable temporary directory."""
    try:
        path = Path(tempfile.mkdtemp(prefix=prefix))
    except OSError as e:
        raise AllocationError(f"Could not create scratch directory: {e}") from e
    logger.debug(f"Allocated scratch directory {path}")
    return path


def release(path: Path) -> None:
    """Recursively remove a scratch directory, contents included."""
    shutil.rmtree(path, ignore_errors=True)
    logger.debug(f"Released scratch directory {path}")


@contextmanager
def scratch_dirs(count: int = 2, prefix: str = SCRATCH_PREFIX) -> Iterator[list[Path]]:
    """Allocate ``count`` scratch directories concurrently.

    If any allocation fails, the ones that succeeded are released and
    ``AllocationError`` is raised. Otherwise every directory is released when
    the block exits, however it exits.
    """
    allocated: list[Path] = []
    errors: list[BaseException] = []

    with concurrent.futures.ThreadPoolExecutor(max_workers=count) as executor:
        futures = [executor.submit(allocate, prefix) for _ in range(count)]
        for future in futures:
            try:
                allocated.append(future.result())
            except AllocationError as e:
                errors.append(e)

    if errors:
        for path in allocated:
            release(path)
        raise errors[0]

    try:
        yield allocated
    finally:
        for path in allocated:
            release(path)
