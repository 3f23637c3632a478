# Layout of a discourse node shape: a padded, bordered box holding a
# title line and a smaller subtitle (the node type name), optionally
# topped by a key image.

MIN_NODE_WIDTH = 160
MAX_NODE_WIDTH = 400

CONTAINER_PADDING = 8
CONTAINER_BORDER_WIDTH = 2

TITLE_MARGIN = 4
TITLE_LINE_HEIGHT = 1.5

SUBTITLE_MARGIN = 0
SUBTITLE_LINE_HEIGHT = 1.25
SUBTITLE_SCALE = 0.75

BASE_PADDING = 16
MAX_IMAGE_HEIGHT = 250
IMAGE_GAP = 4
EXTRA_BOTTOM_SPACING = 12

DEFAULT_SIZE = "s"
DEFAULT_FONT_FAMILY = "draw"

FONT_SIZES = {
    "s": 18,
    "m": 24,
    "l": 36,
    "xl": 44,
}

FONT_FAMILIES = {
    "draw": {
        "css": "'tldraw_draw', sans-serif",
        "fallbacks": ["Shantell Sans", "Comic Sans MS", "sans-serif"],
    },
    "sans": {
        "css": "'tldraw_sans', sans-serif",
        "fallbacks": ["IBM Plex Sans", "Inter", "sans-serif"],
    },
    "serif": {
        "css": "'tldraw_serif', serif",
        "fallbacks": ["IBM Plex Serif", "Georgia", "serif"],
    },
    "mono": {
        "css": "'tldraw_mono', monospace",
        "fallbacks": ["IBM Plex Mono", "Menlo", "monospace"],
    },
}

IMAGE_EXTENSIONS = {"png", "jpg", "jpeg", "gif", "webp", "svg", "bmp", "tif", "tiff"}

NODE_COLOR_PALETTE = {
    "black": "#1d1d1d",
    "blue": "#4263eb",
    "green": "#099268",
    "grey": "#adb5bd",
    "lightBlue": "#4dabf7",
    "lightGreen": "#40c057",
    "lightRed": "#ff8787",
    "lightViolet": "#e599f7",
    "orange": "#f76707",
    "red": "#e03131",
    "violet": "#ae3ec9",
    "white": "#ffffff",
    "yellow": "#ffc078",
}
