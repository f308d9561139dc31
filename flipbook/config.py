"""Configuration constants for flipbook."""
from __future__ import annotations

import os

IMAGE_EXTS = {".png"}

# Output encoding
JPEG_QUALITY = 90
COVER_NAME = "cover.png"
PAGE_NAME = "comp-{identifier}-{index:03d}.jpg"

# Default page geometry
DEFAULT_DPI = 300

BG_COLORS = {
    "light": (255, 255, 255),
    "white": (255, 255, 255),
    "dark": (0, 0, 0),
    "black": (0, 0, 0),
}
FALLBACK_BG = "dark"

# Fold/cut guide and debug labels
BAR_WIDTH = 100
BAR_COLOR = (0, 0, 0)
LABEL_COLOR = (200, 100, 0)
LABEL_X = 20
LABEL_LINE_GAP = 20

# Cover title
COVER_BLUR_SIGMA = 12.5
TITLE_LINE1_SIZE = 80
TITLE_LINE2_SIZE = 45
TITLE_LINE2_OFFSET = 100
TITLE_X = BAR_WIDTH + 20
TITLE_Y = 30
TITLE_SHADOW = 2

# Video extraction
FPS_MIN = 1
FPS_MAX = 60
FRAME_PREFIX = "frame-"

FONT_PATH = os.environ.get("FLIPBOOK_FONT") or None
