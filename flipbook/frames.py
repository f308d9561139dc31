"""Frame discovery and trimming."""
from __future__ import annotations

import logging
import os
from typing import List, Optional, Sequence, TypeVar

from .config import IMAGE_EXTS
from .errors import InsufficientFramesError

T = TypeVar("T")


def list_frames(directory: str, prefix: Optional[str] = None) -> List[str]:
    """Return PNG frame paths in *directory* sorted by file name.

    Only ``.png`` files are considered. When *prefix* is given, names not
    starting with it are skipped. Raises ``OSError`` if the directory cannot
    be listed.
    """
    names = [
        f
        for f in os.listdir(directory)
        if os.path.splitext(f)[1].lower() in IMAGE_EXTS
        and (prefix is None or f.startswith(prefix))
    ]
    names.sort()
    return [os.path.join(directory, f) for f in names]


def trim_frames(frames: Sequence[T], capacity: int) -> List[T]:
    """Drop trailing frames so the count is a multiple of *capacity*."""
    if capacity < 1:
        raise ValueError(f"capacity must be >= 1, got {capacity}")
    if len(frames) < capacity:
        raise InsufficientFramesError(
            f"{len(frames)} frames found, at least {capacity} needed for one page"
        )
    keep = capacity * (len(frames) // capacity)
    dropped = len(frames) - keep
    if dropped:
        logging.info("discarding %d trailing frame(s) to fill whole pages", dropped)
    return list(frames[:keep])
