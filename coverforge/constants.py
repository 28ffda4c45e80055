"""
Layout constants for the cover compositor.

All lengths and font sizes are in native units (pixels of the loaded
background image) and are multiplied by the active scale before use.
"""

# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------

DEFAULT_BACKGROUND_PATH = "img/pearl.jpg"
DEFAULT_LOGO_PATH = "img/logo.png"
DEFAULT_TITLE_FONT_PATH = "font/truenoblk.otf"
DEFAULT_BODY_FONT_PATH = "font/truenorg.otf"

DEFAULT_TITLE_FAMILY = "TrueNo-Black"
DEFAULT_BODY_FAMILY = "TrueNo-Regular"
GENERIC_FAMILY = "system-ui"

EXPORT_FILENAME = "perl-school-cover.png"
PRESET_FILENAME = "cover-preset.json"

# Used when the background image cannot be loaded
FALLBACK_NATIVE_WIDTH = 1600
FALLBACK_NATIVE_HEIGHT = 2560

# ---------------------------------------------------------------------------
# Viewport fitting (display pixels)
# ---------------------------------------------------------------------------

CONTROL_PANEL_WIDTH = 360
BODY_PADDING = 32
PANEL_GAP = 16
SAFETY_MARGIN = 100
MIN_DISPLAY_WIDTH = 250
MIN_DISPLAY_HEIGHT = 350

# ---------------------------------------------------------------------------
# Compositing
# ---------------------------------------------------------------------------

TINT_STRENGTH = 0.3
IMAGE_OPACITY = 0.8
IMAGE_BLEND = "multiply"
INK = "#ffffff"

# ---------------------------------------------------------------------------
# Text blocks (native units)
# ---------------------------------------------------------------------------

PAD_RATIO = 0.08
TITLE_TOP_OFFSET = 20

TITLE_MAX_SIZE = 260
TITLE_WEIGHT = "900"
TITLE_TRACKING = -2
TITLE2_GROWTH = 3
TITLE1_LINE_FACTOR = 0.95
TITLE1_GAP = 8
TITLE2_LINE_FACTOR = 0.9
TITLE2_GAP = 18

SUBTITLE_MAX_SIZE = 120
SUBTITLE_MIN_SIZE = 40
SUBTITLE_LUMINANCE = -0.06
SUBTITLE_GAP_BEFORE = 48
SUBTITLE_GAP_AFTER = 32

AUTHOR_SIZE = 175

LOGO_SCALE = 1.0
LOGO_MARGIN = 75

# Fit solver
FIT_MIN_SIZE = 24
FIT_STEP = 2
