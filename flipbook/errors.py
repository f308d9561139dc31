"""Exception types raised while building a flip-book."""
from __future__ import annotations


class FlipbookError(Exception):
    """Base class for every failure reported by :mod:`flipbook`."""


class ConfigurationError(FlipbookError, ValueError):
    """Invalid option value, detected before any file is touched."""


class InvalidEffectError(ConfigurationError):
    """Effect name outside of :data:`flipbook.effects.EFFECTS`."""


class InsufficientFramesError(FlipbookError, ValueError):
    """Fewer frames than a single page needs."""


class DecodeError(FlipbookError, OSError):
    """A frame could not be read or decoded."""


class EncodeError(FlipbookError, OSError):
    """An output image could not be encoded or written."""


class FontError(FlipbookError, ValueError):
    """Font data for the cover title could not be parsed."""


class GeometryError(FlipbookError, ValueError):
    """The page canvas could not be allocated."""


class EffectError(FlipbookError, RuntimeError):
    """An image effect failed on a frame."""


class ExtractionError(FlipbookError, RuntimeError):
    """Frame extraction from the source video failed."""
