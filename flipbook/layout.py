"""Interlaced page layouts.

Frames are spread over pages so that a fixed cell, read across all pages in
order, holds a contiguous run of frames. Given frames::

    0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11

and the ``4x6x3`` layout (three rows, one column) the pages are::

      a   b   c    d
    | 0 | 1 | 2  | 3  |
    | 4 | 5 | 6  | 7  |
    | 8 | 9 | 10 | 11 |

so 0, 4, 8 are printed on page ``a``, 1, 5, 9 on page ``b`` and so on.
Stacking pages a-d, cutting along the row boundaries and putting the
sub-stacks on top of each other assembles the book in order. The grid
layouts extend this column by column.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from .page import Frame, Interlace, Rect, RenderOptions


def frame_index(
    interlace: Interlace,
    page_index: int,
    n_pages: int,
    row: int,
    col: int,
    rows: int,
    n_frames: int,
    reverse_frames: bool = False,
) -> int:
    """Return the frame shown at ``(row, col)`` of page *page_index*."""
    if interlace is Interlace.COLUMN:
        fi = page_index + row * n_pages
    else:
        fi = page_index + row * n_pages + col * n_pages * rows
    if reverse_frames:
        fi = n_frames - fi - 1
    return fi


def cell_bounds(printable: Rect, rows: int, cols: int, row: int, col: int) -> Rect:
    """Split *printable* into equal bands and columns and return one cell."""
    frame_h = printable.height // rows
    frame_w = printable.width // cols
    return Rect(
        top=printable.top + frame_h * row,
        left=printable.left + frame_w * col,
        width=frame_w,
        height=frame_h,
    )


def layout_page(
    page_index: int,
    n_pages: int,
    cover_index: Optional[int],
    printable: Rect,
    options: RenderOptions,
    frames: Sequence[str],
) -> List[Frame]:
    """Return the placements for one page, column by column."""
    n_frames = len(frames)
    interlace = options.layout.interlace
    placements: List[Frame] = []
    for ci in range(options.cols):
        for ri in range(options.rows):
            fi = frame_index(
                interlace,
                page_index,
                n_pages,
                ri,
                ci,
                options.rows,
                n_frames,
                options.reverse_frames,
            )
            placements.append(
                Frame(
                    path=frames[fi],
                    index=fi,
                    label=options.identifier,
                    bounds=cell_bounds(printable, options.rows, options.cols, ri, ci),
                    is_front_cover=cover_index is not None and fi == cover_index,
                )
            )
    return placements
