from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from flipbook.config import BAR_WIDTH
from flipbook.cover import annotate_cover, check_font, render_cover
from flipbook.errors import DecodeError, FontError
from flipbook.page import Rect
from flipbook.utils import gaussian_blur


def _checker(path: Path) -> None:
    arr = np.zeros((120, 160, 3), dtype=np.uint8)
    arr[::2, ::2] = 255
    Image.fromarray(arr).save(path)


def test_render_cover_blurs_and_saves(tmp_path):
    src = tmp_path / "frame-000.png"
    _checker(src)
    out = render_cover(str(src), str(tmp_path))
    assert Path(out).name == "cover.png"
    with Image.open(out) as im:
        blurred = np.array(im.convert("RGB")).astype(int)
    assert blurred.shape == (120, 160, 3)
    # a heavy blur flattens the checkerboard
    assert blurred.std() < 20
    with Image.open(src) as im:
        assert np.array(im).std() > 50


def test_render_cover_missing_frame(tmp_path):
    with pytest.raises(DecodeError):
        render_cover(str(tmp_path / "missing.png"), str(tmp_path))


def test_bad_font_bytes():
    with pytest.raises(FontError):
        check_font(b"definitely not a font")


def test_annotate_cover_draws_inside_box():
    img = Image.new("RGB", (600, 300), (0, 0, 0))
    box = Rect(top=0, left=0, width=400, height=200)
    annotate_cover(img, box, "Title", "subtitle")
    arr = np.array(img)
    inside = arr[:200, :400]
    assert (inside == 255).all(axis=2).any()
    assert (arr[:, 400:] == 0).all()
    assert (arr[200:, :] == 0).all()
    # the title starts right of the fold bar
    assert (arr[:, :BAR_WIDTH] == 0).all()


def test_annotate_cover_empty_lines_draw_nothing():
    img = Image.new("RGB", (200, 100), (10, 10, 10))
    annotate_cover(img, Rect(0, 0, 200, 100), "", "")
    assert (np.array(img) == 10).all()


def test_gaussian_blur_needs_sigma():
    with pytest.raises(ValueError):
        gaussian_blur(np.zeros((20, 20, 3), dtype=np.uint8), sigma=0)
