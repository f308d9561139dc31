"""Frame extraction from a source video."""
from __future__ import annotations

import logging
import os
from typing import List

try:
    from moviepy.editor import VideoFileClip
except ModuleNotFoundError:  # moviepy >=2.0
    from moviepy import VideoFileClip
from PIL import Image

from .bin_config import resolve_ffmpeg
from .config import FPS_MAX, FPS_MIN, FRAME_PREFIX
from .errors import ConfigurationError, ExtractionError
from .utils import _subclip


def frame_name(identifier: str, index: int) -> str:
    return f"{FRAME_PREFIX}{identifier}-{index:03d}.png"


def extract_frames(
    input_path: str,
    output_dir: str,
    identifier: str = "",
    fps: int = 15,
    start_time: float = 0,
    max_length: float = 5,
    ffmpeg: str | None = None,
) -> List[str]:
    """Write frames of *input_path* to *output_dir* as numbered PNG files.

    Frames are sampled at *fps* starting *start_time* seconds into the video
    and at most ``max_length * fps`` frames are written, named
    ``frame-<identifier>-000.png`` upwards. Returns the written paths in
    order.
    """
    if not (FPS_MIN <= fps <= FPS_MAX):
        raise ConfigurationError(
            f"fps must be between {FPS_MIN} and {FPS_MAX}, {fps} invalid value"
        )
    if not os.path.isfile(input_path):
        raise FileNotFoundError(f"invalid input, file does not exist: {input_path}")
    if not os.path.isdir(output_dir):
        raise FileNotFoundError(
            f"invalid output, the directory does not exist, please create it: {output_dir}"
        )
    if not resolve_ffmpeg(ffmpeg):
        raise EnvironmentError("ffmpeg is not installed, please install then re-run")

    logging.info("generating frames from: %s", input_path)
    logging.debug("writing frames to: %s", output_dir)
    logging.debug("fps=%d", fps)

    max_frames = int(max_length * fps)
    paths: List[str] = []
    try:
        clip = VideoFileClip(input_path, audio=False)
        try:
            sub = _subclip(clip, start_time)
            for i, arr in enumerate(sub.iter_frames(fps=fps, dtype="uint8")):
                if i >= max_frames:
                    break
                path = os.path.join(output_dir, frame_name(identifier, i))
                Image.fromarray(arr).save(path)
                paths.append(path)
        finally:
            clip.close()
    except (OSError, ValueError) as e:
        raise ExtractionError(f"failed to extract frames: {input_path}, details: {e}") from e

    logging.info("%d frames extracted", len(paths))
    return paths
