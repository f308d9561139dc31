"""Page geometry and per-run options."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .config import DEFAULT_DPI

Margins = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Rect:
    """Axis aligned pixel rectangle."""

    top: int
    left: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """``(left, top, right, bottom)`` as used by Pillow."""
        return (self.left, self.top, self.right, self.bottom)

    def contains(self, other: "Rect") -> bool:
        return (
            other.left >= self.left
            and other.top >= self.top
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def overlaps(self, other: "Rect") -> bool:
        return (
            self.left < other.right
            and other.left < self.right
            and self.top < other.bottom
            and other.top < self.bottom
        )


@dataclass(frozen=True)
class Page:
    """Physical sheet in inches, rendered at ``dpi`` dots per inch."""

    width: float
    height: float
    margin_top: float = 0.0
    margin_right: float = 0.0
    margin_bottom: float = 0.0
    margin_left: float = 0.0
    dpi: int = DEFAULT_DPI

    @property
    def margins(self) -> Margins:
        return (self.margin_top, self.margin_right, self.margin_bottom, self.margin_left)

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return (int(self.width * self.dpi), int(self.height * self.dpi))

    @property
    def printable(self) -> Rect:
        """Area inside the margins, in pixels."""
        return Rect(
            top=int(self.margin_top * self.dpi),
            left=int(self.margin_left * self.dpi),
            width=int((self.width - (self.margin_left + self.margin_right)) * self.dpi),
            height=int((self.height - (self.margin_top + self.margin_bottom)) * self.dpi),
        )


class Interlace(Enum):
    """Index formula used to spread frames over pages."""

    COLUMN = "column"
    GRID = "grid"


@dataclass(frozen=True)
class _LayoutSpec:
    rows: int
    cols: int
    width: float
    height: float
    margins: Margins
    interlace: Interlace


class Layout(str, Enum):
    """Supported physical layouts.

    ``4x6x3`` prints three 4x2 frames on a 4x6 photo, ``letter`` ten
    4.25x2 frames on a US letter sheet, ``letter-business`` ten business
    card sized frames on a US letter sheet with half inch margins.
    """

    FOUR_BY_SIX = "4x6x3"
    LETTER = "letter"
    LETTER_BUSINESS = "letter-business"

    @property
    def rows(self) -> int:
        return _LAYOUTS[self].rows

    @property
    def cols(self) -> int:
        return _LAYOUTS[self].cols

    @property
    def interlace(self) -> Interlace:
        return _LAYOUTS[self].interlace

    @property
    def default_margins(self) -> Margins:
        return _LAYOUTS[self].margins

    def page(self, margins: Optional[Margins] = None, dpi: int = DEFAULT_DPI) -> Page:
        spec = _LAYOUTS[self]
        top, right, bottom, left = margins if margins is not None else spec.margins
        return Page(
            width=spec.width,
            height=spec.height,
            margin_top=top,
            margin_right=right,
            margin_bottom=bottom,
            margin_left=left,
            dpi=dpi,
        )


_LAYOUTS = {
    Layout.FOUR_BY_SIX: _LayoutSpec(3, 1, 4.0, 6.0, (0.0, 0.0, 0.0, 0.0), Interlace.COLUMN),
    Layout.LETTER: _LayoutSpec(5, 2, 8.5, 11.0, (0.0, 0.0, 1.0, 0.0), Interlace.GRID),
    Layout.LETTER_BUSINESS: _LayoutSpec(5, 2, 8.5, 11.0, (0.5, 0.5, 0.5, 0.5), Interlace.GRID),
}


@dataclass(frozen=True)
class Frame:
    """One frame placed into one cell of a page."""

    path: str
    index: int
    label: str
    bounds: Rect
    is_front_cover: bool = False


@dataclass(frozen=True)
class RenderOptions:
    """Immutable options for one run, shared by every stage."""

    layout: Layout
    page: Page
    rows: int
    cols: int
    bg_color: str = "light"
    identifier: str = ""
    line1_text: str = ""
    line2_text: str = ""
    font_bytes: Optional[bytes] = field(default=None, repr=False)
    reverse_pages: bool = False
    reverse_frames: bool = False
    cover: bool = False
    effect: str = ""

    @classmethod
    def for_layout(
        cls,
        layout: Layout | str,
        margins: Optional[Margins] = None,
        dpi: int = DEFAULT_DPI,
        **kwargs,
    ) -> "RenderOptions":
        layout = Layout(layout)
        return cls(
            layout=layout,
            page=layout.page(margins, dpi=dpi),
            rows=layout.rows,
            cols=layout.cols,
            **kwargs,
        )

    @property
    def capacity(self) -> int:
        return self.rows * self.cols
