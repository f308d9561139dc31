"""Flip-book page composer package."""

__version__ = "0.3.0"

__all__ = ["make_flipbook"]


def make_flipbook(*args, **kwargs):
    from .builder import make_flipbook as _make_flipbook

    return _make_flipbook(*args, **kwargs)
