import os

import numpy as np
import pytest
from PIL import Image

cv2 = pytest.importorskip("cv2")

from flipbook.effects import EFFECTS, STAGE_SUFFIX, apply_effect, apply_effects, check_effect
from flipbook.errors import DecodeError, InvalidEffectError


def _frames(folder, n):
    rng = np.random.default_rng(7)
    paths = []
    for i in range(n):
        p = folder / f"frame-{i:03d}.png"
        Image.fromarray(rng.integers(0, 256, size=(40, 60, 3), dtype=np.uint8)).save(p)
        paths.append(str(p))
    return paths


def test_effect_names():
    assert list(EFFECTS) == ["oil", "pixelate", "edge", "cartoon", "pencil"]
    check_effect("")
    with pytest.raises(InvalidEffectError):
        check_effect("sepia")


@pytest.mark.parametrize("name", ["pixelate", "edge", "cartoon", "pencil"])
def test_effect_keeps_shape(tmp_path, name):
    (path,) = _frames(tmp_path, 1)
    out = apply_effect(name, path)
    assert out.shape == (40, 60, 3)
    assert out.dtype == np.uint8


def test_oil_effect(tmp_path):
    if not hasattr(cv2, "xphoto"):
        pytest.skip("opencv built without contrib modules")
    (path,) = _frames(tmp_path, 1)
    assert apply_effect("oil", path).shape == (40, 60, 3)


def test_pixelate_makes_blocks(tmp_path):
    (path,) = _frames(tmp_path, 1)
    out = apply_effect("pixelate", path)
    assert (out[0:4, 0:6] == out[0, 0]).all()


def test_invalid_effect_touches_nothing(tmp_path):
    paths = _frames(tmp_path, 2)
    before = [open(p, "rb").read() for p in paths]
    with pytest.raises(InvalidEffectError):
        apply_effects("sepia", paths)
    assert [open(p, "rb").read() for p in paths] == before


def test_apply_effects_replaces_frames(tmp_path):
    paths = _frames(tmp_path, 3)
    before = [open(p, "rb").read() for p in paths]
    apply_effects("pixelate", paths)
    after = [open(p, "rb").read() for p in paths]
    assert all(a != b for a, b in zip(after, before))
    assert not [f for f in os.listdir(tmp_path) if f.endswith(STAGE_SUFFIX)]


def test_failed_effect_leaves_originals(tmp_path):
    paths = _frames(tmp_path, 3)
    with open(paths[2], "wb") as fh:
        fh.write(b"garbage")
    before = [open(p, "rb").read() for p in paths]
    with pytest.raises(DecodeError):
        apply_effects("edge", paths)
    assert [open(p, "rb").read() for p in paths] == before
    assert not [f for f in os.listdir(tmp_path) if f.endswith(STAGE_SUFFIX)]
