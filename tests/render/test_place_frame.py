import logging
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from flipbook.config import BAR_WIDTH, LABEL_LINE_GAP, LABEL_X
from flipbook.errors import DecodeError, GeometryError
from flipbook.page import Frame, Page, Rect, RenderOptions
from flipbook.render import (
    background_color,
    new_canvas,
    output_index,
    place_frame,
    render_page,
    write_jpg,
)
from flipbook.utils import fit_to_height

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def _two_tone(path: Path, size, split: int) -> None:
    w, h = size
    arr = np.zeros((h, w, 3), dtype=np.uint8)
    arr[:, :split] = RED
    arr[:, split:] = BLUE
    Image.fromarray(arr).save(path)


def test_fit_to_height_crops_left_overflow():
    img = Image.new("RGB", (400, 100))
    fitted, offset = fit_to_height(img, 150, 50)
    assert fitted.size == (150, 50)
    assert offset == 0


def test_fit_to_height_right_aligns_narrow():
    img = Image.new("RGB", (100, 100))
    fitted, offset = fit_to_height(img, 150, 50)
    assert fitted.size == (50, 50)
    assert offset == 100


def test_wide_frame_keeps_rightmost_pixels(tmp_path):
    src = tmp_path / "wide.png"
    _two_tone(src, (400, 100), split=300)
    canvas = Image.new("RGB", (200, 80), (0, 255, 0))
    cell = Rect(top=10, left=20, width=150, height=50)
    dst = place_frame(canvas, Frame(str(src), 0, "", cell))
    assert dst == cell
    arr = np.array(canvas)
    # scaled to 200x50 (red up to x=150), the left 50 px are cropped away
    assert tuple(arr[35, 20 + 10]) == RED
    assert tuple(arr[35, 20 + 140]) == BLUE
    assert tuple(arr[5, 30]) == (0, 255, 0)


def test_narrow_frame_leaves_gap_on_left(tmp_path):
    src = tmp_path / "narrow.png"
    Image.new("RGB", (100, 100), RED).save(src)
    canvas = Image.new("RGB", (200, 80), (0, 0, 0))
    cell = Rect(top=10, left=20, width=150, height=50)
    dst = place_frame(canvas, Frame(str(src), 0, "", cell))
    assert dst == Rect(top=10, left=120, width=50, height=50)
    arr = np.array(canvas)
    assert tuple(arr[35, 60]) == (0, 0, 0)
    assert tuple(arr[35, 169]) == RED
    assert tuple(arr[9, 169]) == (0, 0, 0)
    assert tuple(arr[60, 169]) == (0, 0, 0)


def test_corrupt_frame_raises_decode_error(tmp_path):
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"not a png")
    canvas = Image.new("RGB", (10, 10))
    with pytest.raises(DecodeError, match="bad.png"):
        place_frame(canvas, Frame(str(bad), 0, "", Rect(0, 0, 10, 10)))


def test_missing_frame_raises_decode_error(tmp_path):
    canvas = Image.new("RGB", (10, 10))
    with pytest.raises(DecodeError):
        place_frame(canvas, Frame(str(tmp_path / "nope.png"), 0, "", Rect(0, 0, 10, 10)))


def test_background_color_fallback(caplog):
    assert background_color("light") == (255, 255, 255)
    assert background_color("black") == (0, 0, 0)
    with caplog.at_level(logging.WARNING):
        assert background_color("purple") == (0, 0, 0)
    assert "purple" in caplog.text


def test_new_canvas_rejects_empty_page():
    with pytest.raises(GeometryError):
        new_canvas(Page(width=0, height=6, dpi=300), (0, 0, 0))


@pytest.mark.parametrize("reverse,expected", [(False, [0, 1, 2, 3]), (True, [3, 2, 1, 0])])
def test_output_index(reverse, expected):
    assert [output_index(p, 4, reverse) for p in range(4)] == expected


def test_write_jpg_name(tmp_path):
    img = Image.new("RGB", (20, 20))
    path = write_jpg(img, str(tmp_path), "abc", 7)
    assert Path(path).name == "comp-abc-007.jpg"
    with Image.open(path) as im:
        assert im.format == "JPEG"


def test_render_page_draws_fold_bar(tmp_path):
    src = tmp_path / "f.png"
    Image.new("RGB", (300, 100), (255, 255, 255)).save(src)
    opts = RenderOptions.for_layout("4x6x3", dpi=72, bg_color="light", identifier="id")
    printable = opts.page.printable
    cell_h = printable.height // 3
    placements = [
        Frame(str(src), i, "id", Rect(top=cell_h * i, left=0, width=printable.width, height=cell_h))
        for i in range(3)
    ]
    canvas = render_page(placements, opts)
    assert canvas.size == opts.page.canvas_size
    arr = np.array(canvas)
    assert tuple(arr[5, 50]) == (0, 0, 0)
    assert tuple(arr[5, 150]) == (255, 255, 255)


def _label_pixels(arr, cell: Rect):
    y = cell.top + cell.height // 2
    region = arr[y : y + LABEL_LINE_GAP + 15, cell.left + LABEL_X : cell.left + BAR_WIDTH].astype(int)
    r, g, b = region[..., 0], region[..., 1], region[..., 2]
    # label colour blended over the black fold bar keeps r == 2g and b == 0
    return (r >= 60) & (abs(r - 2 * g) <= 3) & (b <= 3)


def test_render_page_labels_frames_but_not_cover(tmp_path):
    src = tmp_path / "f.png"
    Image.new("RGB", (300, 100), (255, 255, 255)).save(src)
    opts = RenderOptions.for_layout("4x6x3", dpi=72, bg_color="light", identifier="id")
    printable = opts.page.printable
    cell_h = printable.height // 3
    cells = [Rect(top=cell_h * i, left=0, width=printable.width, height=cell_h) for i in range(3)]
    placements = [
        Frame(str(src), 0, "id", cells[0], is_front_cover=True),
        Frame(str(src), 7, "id", cells[1]),
        Frame(str(src), 8, "id", cells[2]),
    ]
    arr = np.array(render_page(placements, opts))
    assert not _label_pixels(arr, cells[0]).any()
    assert _label_pixels(arr, cells[1]).any()
    assert _label_pixels(arr, cells[2]).any()
