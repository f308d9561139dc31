"""Front cover rendering."""
from __future__ import annotations

import io
import logging
import os
from typing import Optional

import numpy as np
from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from .config import (
    COVER_BLUR_SIGMA,
    COVER_NAME,
    TITLE_LINE1_SIZE,
    TITLE_LINE2_OFFSET,
    TITLE_LINE2_SIZE,
    TITLE_SHADOW,
    TITLE_X,
    TITLE_Y,
)
from .errors import DecodeError, EncodeError, FontError
from .page import Rect
from .utils import gaussian_blur


def render_cover(frame_path: str, output_dir: str) -> str:
    """Blur *frame_path* and save it as ``cover.png`` in *output_dir*.

    Returns the path of the written cover image. The title is not drawn
    here; it is added by :func:`annotate_cover` when the cover cell is
    composed, at the size it is printed.
    """
    try:
        with Image.open(frame_path) as im:
            arr = np.array(im.convert("RGB"))
    except (OSError, UnidentifiedImageError) as e:
        raise DecodeError(f"failed to load cover frame: {frame_path}, {e}") from e

    blurred = gaussian_blur(arr, sigma=COVER_BLUR_SIGMA)
    out_path = os.path.join(output_dir, COVER_NAME)
    try:
        Image.fromarray(blurred).save(out_path)
    except OSError as e:
        raise EncodeError(f"failed to save cover image: {out_path}, {e}") from e
    logging.info("cover rendered from %s", frame_path)
    return out_path


def load_title_font(font_bytes: Optional[bytes], size: int) -> ImageFont.FreeTypeFont:
    """Return a TrueType font of *size* pixels.

    ``None`` selects the scalable font bundled with Pillow.
    """
    if font_bytes is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(io.BytesIO(font_bytes), size)
    except (OSError, ValueError) as e:
        raise FontError(f"failed to parse font file: {e}") from e


def check_font(font_bytes: Optional[bytes]) -> None:
    load_title_font(font_bytes, TITLE_LINE1_SIZE)


def annotate_cover(
    img: Image.Image,
    box: Rect,
    line1: str,
    line2: str,
    font_bytes: Optional[bytes] = None,
) -> None:
    """Draw the two title lines with a drop shadow, clipped to *box*.

    Each line is drawn in black first and then in white two pixels up and
    to the left.
    """
    font1 = load_title_font(font_bytes, TITLE_LINE1_SIZE)
    font2 = load_title_font(font_bytes, TITLE_LINE2_SIZE)

    region = img.crop(box.box)
    draw = ImageDraw.Draw(region)
    x, y = TITLE_X, TITLE_Y
    for text, font, dy in ((line1, font1, 0), (line2, font2, TITLE_LINE2_OFFSET)):
        if not text:
            continue
        draw.text((x, y + dy), text, fill=(0, 0, 0), font=font, anchor="la")
        draw.text(
            (x - TITLE_SHADOW, y + dy - TITLE_SHADOW),
            text,
            fill=(255, 255, 255),
            font=font,
            anchor="la",
        )
    img.paste(region, (box.left, box.top))
