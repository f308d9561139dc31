"""Per-frame image effects.

:data:`EFFECTS` is the only list of effect names; validation, the command
line and the effect pass all read it.
"""
from __future__ import annotations

import logging
import os
from typing import Callable, Dict, List, Sequence

import cv2
import numpy as np

from .errors import DecodeError, EffectError, EncodeError, InvalidEffectError

OIL_SIZE = 5
OIL_LEVELS = 30
PIXEL_BLOCK = 10
EDGE_LOW = 50
EDGE_HIGH = 150

STAGE_SUFFIX = ".fx"


def oil(img: np.ndarray) -> np.ndarray:
    return cv2.xphoto.oilPainting(img, OIL_SIZE, max(1, 256 // OIL_LEVELS))


def pixelate(img: np.ndarray) -> np.ndarray:
    h, w = img.shape[:2]
    small = cv2.resize(
        img,
        (max(1, w // PIXEL_BLOCK), max(1, h // PIXEL_BLOCK)),
        interpolation=cv2.INTER_LINEAR,
    )
    return cv2.resize(small, (w, h), interpolation=cv2.INTER_NEAREST)


def edge(img: np.ndarray) -> np.ndarray:
    """Dark outlines on white paper."""
    gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
    gray = cv2.GaussianBlur(gray, (3, 3), 0)
    edges = cv2.Canny(gray, EDGE_LOW, EDGE_HIGH)
    return cv2.cvtColor(cv2.bitwise_not(edges), cv2.COLOR_GRAY2BGR)


def cartoon(img: np.ndarray) -> np.ndarray:
    gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
    gray = cv2.medianBlur(gray, 3)
    edges = cv2.adaptiveThreshold(
        gray, 255, cv2.ADAPTIVE_THRESH_MEAN_C, cv2.THRESH_BINARY, 9, 2
    )
    # bilateral filtering at half size is much cheaper
    smoothed = cv2.resize(img, (0, 0), fx=0.5, fy=0.5)
    for _ in range(3):
        smoothed = cv2.bilateralFilter(smoothed, d=9, sigmaColor=150, sigmaSpace=150)
    smoothed = cv2.resize(
        smoothed, (img.shape[1], img.shape[0]), interpolation=cv2.INTER_LINEAR
    )
    return cv2.bitwise_and(smoothed, smoothed, mask=edges)


def pencil(img: np.ndarray) -> np.ndarray:
    gray, _ = cv2.pencilSketch(img, sigma_s=60, sigma_r=0.07, shade_factor=0.05)
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)


EFFECTS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "oil": oil,
    "pixelate": pixelate,
    "edge": edge,
    "cartoon": cartoon,
    "pencil": pencil,
}


def check_effect(name: str) -> None:
    """Raise :class:`InvalidEffectError` unless *name* is empty or known."""
    if name and name not in EFFECTS:
        raise InvalidEffectError(
            f"invalid effect option: {name!r}, must be one of {', '.join(EFFECTS)}"
        )


def apply_effect(name: str, frame_path: str) -> np.ndarray:
    """Load *frame_path* and return it processed by effect *name*."""
    check_effect(name)
    img = cv2.imread(frame_path, cv2.IMREAD_COLOR)
    if img is None:
        raise DecodeError(f"failed to load frame: {frame_path}")
    try:
        return EFFECTS[name](img)
    except cv2.error as e:
        raise EffectError(f"failed to apply {name} effect: {frame_path}, {e}") from e


def apply_effects(name: str, frame_paths: Sequence[str]) -> None:
    """Apply effect *name* to every frame, replacing the files in place.

    Processed frames are first written next to the originals with a
    ``.fx`` suffix. Originals are only replaced once every frame has been
    processed, so a failure leaves all input frames untouched.
    """
    check_effect(name)
    if not name:
        return
    staged: List[str] = []
    try:
        for path in frame_paths:
            logging.debug("applying %s effect to: %s", name, path)
            out = apply_effect(name, path)
            ok, buf = cv2.imencode(".png", out)
            if not ok:
                raise EncodeError(f"failed to encode image with effect: {path}")
            tmp = path + STAGE_SUFFIX
            staged.append(tmp)
            try:
                with open(tmp, "wb") as fh:
                    fh.write(buf.tobytes())
            except OSError as e:
                raise EncodeError(f"failed to save image with effect: {tmp}, {e}") from e
    except BaseException:
        for tmp in staged:
            try:
                os.remove(tmp)
            except FileNotFoundError:
                pass
            except OSError:
                logging.warning("could not remove staged frame: %s", tmp)
        raise
    for path in frame_paths:
        os.replace(path + STAGE_SUFFIX, path)
    logging.info("applied %s effect to %d frame(s)", name, len(frame_paths))
