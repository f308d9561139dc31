"""Helpers to resolve external binary paths.

Frame extraction goes through moviepy, which shells out to ``ffmpeg``. This
module finds that executable without requiring hard coded paths, honoring an
explicit CLI argument, environment variables and finally a search on
``PATH``.
"""
from __future__ import annotations

import os
import shutil
from typing import Optional


def _validate_binary(path: str | None) -> Optional[str]:
    """Return *path* if it points to an existing executable."""
    if not path:
        return None
    if os.path.isfile(path) or shutil.which(path):
        return path
    return None


def resolve_ffmpeg(cli_path: str | None = None) -> Optional[str]:
    """Resolve path to the ``ffmpeg`` executable.

    Resolution order:
    1. explicit ``cli_path`` argument (e.g. ``--ffmpeg``)
    2. ``FFMPEG_BINARY`` environment variable
    3. ``IMAGEIO_FFMPEG_EXE`` environment variable
    4. ``ffmpeg`` discovered on ``PATH``
    The returned path is validated and stored in ``IMAGEIO_FFMPEG_EXE`` so
    moviepy picks it up. Returns ``None`` if no candidate is found.
    """
    candidates = [
        cli_path,
        os.environ.get("FFMPEG_BINARY"),
        os.environ.get("IMAGEIO_FFMPEG_EXE"),
        shutil.which("ffmpeg"),
    ]
    for cand in candidates:
        path = _validate_binary(cand)
        if path:
            os.environ["IMAGEIO_FFMPEG_EXE"] = path
            return path
    return None
