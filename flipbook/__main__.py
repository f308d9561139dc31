"""Command line interface for flipbook."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

import yaml

from . import __version__
from .builder import make_flipbook
from .config import FONT_PATH, FRAME_PREFIX
from .effects import EFFECTS
from .errors import ConfigurationError, FlipbookError
from .extract import extract_frames
from .frames import list_frames
from .page import Layout, RenderOptions
from .validate import decode_title, parse_margins, validate_args


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Turn a video into printable, interlaced flip-book pages"
    )
    parser.add_argument("--preset", action="append", default=[], help="Path to YAML preset overriding defaults")
    parser.add_argument("--input", help="Path to the input video source (required unless --skipvideo)")
    parser.add_argument(
        "--output",
        help="Folder where frames and pages are written, frames are named frame-<identifier>-000.png ... (required)",
    )
    parser.add_argument("--fontpath", default=FONT_PATH, help="TrueType font for the cover text, Pillow's default font if not given")
    parser.add_argument("--line1text", default="", help="Text to display on line 1 of the cover")
    parser.add_argument("--line2text", default="", help="Text to display on line 2 of the cover")
    parser.add_argument(
        "--titleencoded",
        action="store_true",
        help="line1text and line2text are base64 encoded, useful for untrusted input",
    )
    parser.add_argument(
        "--effect",
        choices=["", *EFFECTS],
        default="",
        help="Image processing effect applied to each frame",
    )
    parser.add_argument("--fps", type=int, default=15, help="Frames extracted per second of video, 1-60")
    parser.add_argument("--clean", action="store_true", help="Delete every file in the output folder first")
    parser.add_argument("--cleanframes", action="store_true", help="Delete the extracted frames after compositing")
    parser.add_argument(
        "--bgcolor",
        choices=["white", "black", "light", "dark"],
        default="white",
        help="Background color of the page border",
    )
    parser.add_argument("--skipvideo", action="store_true", help="Reuse frames already in the output folder")
    parser.add_argument("--cover", action="store_true", help="Replace the first frame with a title cover")
    parser.add_argument("--starttime", type=float, default=0, help="Start offset into the video in seconds")
    parser.add_argument(
        "--layout",
        choices=[layout.value for layout in Layout],
        default=Layout.FOUR_BY_SIX.value,
        help="4x6x3: three 4x2 frames on a 4x6 photo; letter: ten 4.25x2 frames on 8.5x11; "
        "letter-business: ten business card frames on 8.5x11",
    )
    parser.add_argument(
        "--margins",
        default="",
        help="Margins in inches as top,right,bottom,left, overrides the layout defaults",
    )
    parser.add_argument("--maxlength", type=float, default=5, help="Maximum length of video to process in seconds")
    parser.add_argument("--identifier", default="", help="Text printed on each frame and used in file names")
    parser.add_argument(
        "--reversepages",
        action="store_true",
        help="Lowest numbered page holds the last frames, so a printed stack needs no reordering",
    )
    parser.add_argument(
        "--reverseframes",
        action="store_true",
        help="Print frame 0 last, the book is flipped from back to front",
    )
    parser.add_argument("--ffmpeg", help="Path to ffmpeg binary")
    parser.add_argument("--validate", action="store_true", help="Validate arguments and exit")
    parser.add_argument("--version", action="store_true", help="Print the version and exit")
    parser.add_argument("--verbose", action="store_true", help="Verbose progress output")

    prelim, _ = parser.parse_known_args(argv)
    for path in prelim.preset:
        with open(path, "r", encoding="utf8") as fh:
            data = yaml.safe_load(fh) or {}
        parser.set_defaults(**data)

    return parser.parse_args(argv)


def build_options(args: argparse.Namespace) -> RenderOptions:
    """Turn parsed arguments into the immutable run options."""
    margins = parse_margins(args.margins) if args.margins else None

    font_bytes: Optional[bytes] = None
    if args.fontpath:
        try:
            with open(args.fontpath, "rb") as fh:
                font_bytes = fh.read()
        except OSError as e:
            raise ConfigurationError(f"--fontpath cannot open font file: {args.fontpath}") from e

    line1, line2 = args.line1text, args.line2text
    if args.titleencoded:
        line1 = decode_title(line1)
        line2 = decode_title(line2)

    return RenderOptions.for_layout(
        args.layout,
        margins=margins,
        bg_color=args.bgcolor,
        identifier=args.identifier,
        line1_text=line1,
        line2_text=line2,
        font_bytes=font_bytes,
        reverse_pages=args.reversepages,
        reverse_frames=args.reverseframes,
        cover=args.cover,
        effect=args.effect,
    )


def _clean_output(output: str) -> None:
    logging.debug("cleaning: %s", output)
    if not os.path.isdir(output):
        raise FileNotFoundError(
            f"invalid output, the directory does not exist, please create it: {output}"
        )
    for name in os.listdir(output):
        path = os.path.join(output, name)
        if os.path.isfile(path):
            os.remove(path)
            logging.debug("deleted: %s", path)


def _existing_frames(output: str, identifier: str) -> List[str]:
    return list_frames(output, prefix=f"{FRAME_PREFIX}{identifier}-")


def run(args: argparse.Namespace) -> None:
    options = build_options(args)

    if args.clean:
        _clean_output(args.output)

    if args.skipvideo:
        frames = _existing_frames(args.output, args.identifier)
    else:
        frames = extract_frames(
            args.input,
            args.output,
            identifier=args.identifier,
            fps=args.fps,
            start_time=args.starttime,
            max_length=args.maxlength,
            ffmpeg=args.ffmpeg,
        )

    result = make_flipbook(options, args.output, args.output, frames=frames)
    logging.info(
        "%d pages written from %d frames, cell aspect %.3f",
        result.page_count,
        result.frame_count,
        result.cell_aspect,
    )

    if args.cleanframes:
        logging.debug("cleaning frames")
        for path in frames:
            try:
                os.remove(path)
            except OSError as e:
                logging.error("failed to delete %s: %s", path, e)
                continue
            logging.debug("deleted: %s", path)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    if args.version:
        print(__version__)
        return
    errs = validate_args(args)
    if errs:
        for e in errs:
            print(f"ERR: {e}", file=sys.stderr)
        raise SystemExit(1)
    if args.validate:
        return
    try:
        run(args)
    except (FlipbookError, OSError) as e:
        print(f"ERR: {e}", file=sys.stderr)
        raise SystemExit(1)
    logging.info("All done")


if __name__ == "__main__":  # pragma: no cover
    main()
