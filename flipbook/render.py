"""Page composition and JPEG output."""
from __future__ import annotations

import logging
import os
from typing import Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from .config import (
    BAR_COLOR,
    BAR_WIDTH,
    BG_COLORS,
    FALLBACK_BG,
    JPEG_QUALITY,
    LABEL_COLOR,
    LABEL_LINE_GAP,
    LABEL_X,
    PAGE_NAME,
)
from .cover import annotate_cover
from .errors import DecodeError, EncodeError, GeometryError
from .page import Frame, Page, Rect, RenderOptions
from .utils import fit_to_height

Color = Tuple[int, int, int]


def background_color(name: str) -> Color:
    """Return the RGB fill for *name*.

    Unknown names fall back to the dark background instead of failing; the
    command line rejects them before they get here.
    """
    try:
        return BG_COLORS[name]
    except KeyError:
        logging.warning("unknown background color %r, using %s", name, FALLBACK_BG)
        return BG_COLORS[FALLBACK_BG]


def new_canvas(page: Page, color: Color) -> Image.Image:
    w, h = page.canvas_size
    if w <= 0 or h <= 0:
        raise GeometryError(f"invalid canvas size {w}x{h} for page {page}")
    try:
        return Image.new("RGB", (w, h), color)
    except (MemoryError, ValueError) as e:
        raise GeometryError(f"failed to allocate {w}x{h} canvas: {e}") from e


def load_frame(path: str) -> Image.Image:
    try:
        with Image.open(path, formats=["PNG"]) as im:
            return im.convert("RGB")
    except (OSError, UnidentifiedImageError) as e:
        raise DecodeError(f"failed to decode image on load: {path}, {e}") from e


def place_frame(canvas: Image.Image, frame: Frame) -> Rect:
    """Paste the scaled frame into its cell and return the covered rect."""
    b = frame.bounds
    logging.debug("reading: %s", frame.path)
    img = load_frame(frame.path)
    logging.debug("bounds: %dx%d", *img.size)
    fitted, offset = fit_to_height(img, b.width, b.height)
    canvas.paste(fitted, (b.left + offset, b.top))
    return Rect(top=b.top, left=b.left + offset, width=b.width - offset, height=b.height)


def _draw_fold_bar(draw: ImageDraw.ImageDraw, bounds: Rect) -> None:
    right = bounds.left + min(BAR_WIDTH, bounds.width)
    draw.rectangle((bounds.left, bounds.top, right - 1, bounds.bottom - 1), fill=BAR_COLOR)


def _draw_debug_labels(draw: ImageDraw.ImageDraw, frame: Frame, font) -> None:
    x = frame.bounds.left + LABEL_X
    y = frame.bounds.top + int(frame.bounds.height * 0.5)
    draw.text((x, y), str(frame.index), fill=LABEL_COLOR, font=font)
    draw.text((x, y + LABEL_LINE_GAP), frame.label, fill=LABEL_COLOR, font=font)


def render_page(placements: Sequence[Frame], options: RenderOptions) -> Image.Image:
    """Compose one page from its placements on a freshly allocated canvas."""
    canvas = new_canvas(options.page, background_color(options.bg_color))
    draw = ImageDraw.Draw(canvas)
    label_font = ImageFont.load_default()
    for frame in placements:
        dst = place_frame(canvas, frame)
        _draw_fold_bar(draw, frame.bounds)
        if frame.is_front_cover:
            annotate_cover(
                canvas, dst, options.line1_text, options.line2_text, options.font_bytes
            )
        else:
            _draw_debug_labels(draw, frame, label_font)
    return canvas


def output_index(page_index: int, n_pages: int, reverse_pages: bool) -> int:
    """Number used in the file name of page *page_index*.

    Print services usually order by name, which leaves the last page on top
    of the stack; reversing the numbering saves flipping it by hand.
    """
    return n_pages - page_index - 1 if reverse_pages else page_index


def write_jpg(img: Image.Image, output_dir: str, identifier: str, index: int) -> str:
    path = os.path.join(output_dir, PAGE_NAME.format(identifier=identifier, index=index))
    logging.debug("writing: %s", path)
    try:
        img.save(path, "JPEG", quality=JPEG_QUALITY)
    except OSError as e:
        raise EncodeError(f"failed to save img: {path}, {e}") from e
    logging.debug("written file: %s", path)
    return path
