"""Utility helpers for image placement."""
from __future__ import annotations

from typing import Tuple

import cv2
import numpy as np
from PIL import Image


def fit_to_height(img: Image.Image, target_w: int, target_h: int) -> Tuple[Image.Image, int]:
    """Scale *img* to *target_h* and right align it in a ``target_w`` box.

    The aspect ratio is kept. If the scaled image is wider than the box the
    left overflow is cropped away, otherwise the image is shifted right and
    the returned x offset is the width of the gap on the left.
    """
    w, h = img.size
    scaled_w = max(1, int(target_h / h * w))
    scaled = img.resize((scaled_w, target_h), Image.BILINEAR)
    if scaled_w > target_w:
        return scaled.crop((scaled_w - target_w, 0, scaled_w, target_h)), 0
    return scaled, target_w - scaled_w


def gaussian_blur(img: np.ndarray, sigma: float) -> np.ndarray:
    """Blur *img* with a kernel sized from *sigma*."""
    if sigma <= 0:
        raise ValueError("sigma must be > 0")
    return cv2.GaussianBlur(img, (0, 0), sigma)


def _subclip(clip, start: float, end: float | None = None):
    """Cut a clip for moviepy 1.x/2.x."""
    return clip.subclip(start, end) if hasattr(clip, "subclip") else clip.subclipped(start, end)
