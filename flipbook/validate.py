"""Option validation helpers for flipbook."""
from __future__ import annotations

import base64
import binascii
from argparse import Namespace
from typing import List, Tuple

from .config import FPS_MAX, FPS_MIN
from .effects import EFFECTS
from .errors import ConfigurationError
from .page import Layout, RenderOptions

DPI_MIN = 72
DPI_MAX = 1200
PAGE_MAX_INCHES = 48.0


def parse_margins(margins: str) -> Tuple[float, float, float, float]:
    """Parse ``"top,right,bottom,left"`` into four non-negative floats."""
    parts = margins.split(",")
    if len(parts) != 4:
        raise ConfigurationError(
            f"invalid margin: {margins}, must be in the format top,right,bottom,left"
        )
    values = []
    for name, part in zip(("top", "right", "bottom", "left"), parts):
        try:
            v = float(part)
        except ValueError:
            raise ConfigurationError(f"invalid {name} margin value: {part}") from None
        if v < 0:
            raise ConfigurationError(f"{name} margin must be >= 0, got {part}")
        values.append(v)
    return tuple(values)  # type: ignore[return-value]


def decode_title(text: str) -> str:
    """Decode a base64 encoded title line."""
    try:
        return base64.b64decode(text, validate=True).decode("utf8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ConfigurationError(f"error decoding title text: {e}") from e


def validate_options(options: RenderOptions) -> List[str]:
    """Validate run options.

    Returns a list of human readable error messages. The caller should abort
    if the list is non-empty.
    """
    errors: List[str] = []
    page = options.page
    if options.effect and options.effect not in EFFECTS:
        errors.append(f"invalid effect option: {options.effect}")
    try:
        layout = Layout(options.layout)
    except ValueError:
        errors.append(f"invalid layout value: {options.layout}")
    else:
        if (options.rows, options.cols) != (layout.rows, layout.cols):
            errors.append(
                f"layout {layout.value} needs {layout.rows}x{layout.cols} cells, "
                f"got {options.rows}x{options.cols}"
            )
    if not (DPI_MIN <= page.dpi <= DPI_MAX):
        errors.append(f"dpi must be within [{DPI_MIN},{DPI_MAX}]")
    if not (0 < page.width <= PAGE_MAX_INCHES and 0 < page.height <= PAGE_MAX_INCHES):
        errors.append(f"page size must be within (0,{PAGE_MAX_INCHES}] inches")
    if any(m < 0 for m in page.margins):
        errors.append("margins must be >= 0")
    else:
        printable = page.printable
        if printable.width < options.cols or printable.height < options.rows:
            errors.append("margins leave no printable area")
    if "/" in options.identifier or "\\" in options.identifier:
        errors.append("identifier must not contain path separators")
    return errors


def check_options(options: RenderOptions) -> None:
    """Raise :class:`ConfigurationError` listing every validation error."""
    errors = validate_options(options)
    if errors:
        raise ConfigurationError("; ".join(errors))


def validate_args(args: Namespace) -> List[str]:
    """Validate parsed CLI arguments.

    Returns a list of human readable error messages. The caller should abort
    if the list is non-empty.
    """
    errors: List[str] = []
    if not args.input and not args.skipvideo:
        errors.append("--input is a required option")
    if not args.output:
        errors.append("--output is a required option")
    if not (FPS_MIN <= args.fps <= FPS_MAX):
        errors.append(f"--fps must be a value between {FPS_MIN} and {FPS_MAX}")
    if args.starttime < 0:
        errors.append("--starttime must be >= 0")
    if args.maxlength <= 0:
        errors.append("--maxlength must be > 0")
    if args.margins:
        try:
            parse_margins(args.margins)
        except ConfigurationError as e:
            errors.append(f"--margins {e}")
    return errors
