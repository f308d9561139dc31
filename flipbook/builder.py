"""Core building logic for the flip-book pages."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .cover import check_font, render_cover
from .effects import apply_effects, check_effect
from .frames import list_frames, trim_frames
from .layout import cell_bounds, layout_page
from .page import RenderOptions
from .render import output_index, render_page, write_jpg
from .validate import check_options


@dataclass
class RunResult:
    """Summary of a finished run."""

    frame_count: int
    page_count: int
    cell_aspect: float
    pages: List[str] = field(default_factory=list)
    cover_path: Optional[str] = None
    cover_index: Optional[int] = None


def make_flipbook(
    options: RenderOptions,
    input_dir: str,
    output_dir: str,
    frames: Optional[Sequence[str]] = None,
) -> RunResult:
    """Render every page of the flip-book into *output_dir*.

    Parameters
    ----------
    options:
        Run options, see :meth:`RenderOptions.for_layout`.
    input_dir:
        Folder holding the PNG frames. Ignored when *frames* is given.
    output_dir:
        Folder receiving ``cover.png`` and the ``comp-*.jpg`` pages.
    frames:
        Explicit, already ordered frame paths.

    Pages already written stay on disk if a later page fails.
    """
    check_effect(options.effect)
    check_options(options)
    if options.cover:
        check_font(options.font_bytes)

    if frames is None:
        logging.info("reading input frames from: %s", input_dir)
        frames = list_frames(input_dir)
    frames = trim_frames(frames, options.capacity)

    cover_path = None
    cover_index = None
    if options.cover:
        cover_index = len(frames) - 1 if options.reverse_frames else 0
        cover_path = render_cover(frames[cover_index], output_dir)
        frames[cover_index] = cover_path

    # TODO: resize frames before applying the effect, effects run at full resolution
    if options.effect:
        apply_effects(options.effect, frames)

    n_frames = len(frames)
    n_pages = n_frames // options.capacity
    logging.info("%d frames found for processing", n_frames)
    logging.info("%d pages to be generated", n_pages)

    printable = options.page.printable
    pages: List[str] = []
    for pi in range(n_pages):
        placements = layout_page(pi, n_pages, cover_index, printable, options, frames)
        img = render_page(placements, options)
        idx = output_index(pi, n_pages, options.reverse_pages)
        pages.append(write_jpg(img, output_dir, options.identifier, idx))
        img.close()

    cell = cell_bounds(printable, options.rows, options.cols, 0, 0)
    return RunResult(
        frame_count=n_frames,
        page_count=n_pages,
        cell_aspect=cell.width / cell.height,
        pages=pages,
        cover_path=cover_path,
        cover_index=cover_index,
    )
