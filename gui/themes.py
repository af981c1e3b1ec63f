"""
TriSolver — window and derivation colours

``DARK_PALETTE`` and ``LIGHT_PALETTE`` cover the window chrome, the six
coefficient entries and the tags of the derivation text (headings, the
determinant line, the answer, verification ticks and notes).  The graph
colours live with the figures in ``trisolver.graph``.

Widgets read the module-level names (``themes.BG`` ...), which
``apply_theme()`` rebinds when the user switches between dark and light.
"""

DARK_PALETTE = dict(
    BG           = "#101418",
    HEADER_BG    = "#161c22",
    ACCENT       = "#3d9be9",
    ACCENT_HOVER = "#2a7fc8",
    TEXT         = "#cfd6dd",
    TEXT_DIM     = "#8a949e",
    TEXT_BRIGHT  = "#f2f5f8",
    STEP_BG      = "#1a2027",
    STEP_BORDER  = "#2b333c",
    INPUT_BG     = "#1f262e",
    INPUT_BORDER = "#34404c",
    # derivation text tags
    HEADING      = "#3d9be9",
    DETERMINANT  = "#c792ea",
    ANSWER       = "#5cc48a",
    VERIFY_OK    = "#5cc48a",
    VERIFY_FAIL  = "#ff6b6b",
    NOTE         = "#f0b64e",
    ERROR        = "#ff6b6b",
)

LIGHT_PALETTE = dict(
    BG           = "#eef2f6",
    HEADER_BG    = "#fbfcfd",
    ACCENT       = "#1565a8",
    ACCENT_HOVER = "#0e4d82",
    TEXT         = "#33404d",
    TEXT_DIM     = "#6b7784",
    TEXT_BRIGHT  = "#0d1620",
    STEP_BG      = "#f8fafc",
    STEP_BORDER  = "#d3dbe3",
    INPUT_BG     = "#ffffff",
    INPUT_BORDER = "#b9c4cf",
    # derivation text tags
    HEADING      = "#1565a8",
    DETERMINANT  = "#7b3fa0",
    ANSWER       = "#23784a",
    VERIFY_OK    = "#23784a",
    VERIFY_FAIL  = "#b3261e",
    NOTE         = "#a8670a",
    ERROR        = "#b3261e",
)

THEMES = {"dark": DARK_PALETTE, "light": LIGHT_PALETTE}

# Active colours; start dark, rebound by apply_theme().
BG           = DARK_PALETTE["BG"]
HEADER_BG    = DARK_PALETTE["HEADER_BG"]
ACCENT       = DARK_PALETTE["ACCENT"]
ACCENT_HOVER = DARK_PALETTE["ACCENT_HOVER"]
TEXT         = DARK_PALETTE["TEXT"]
TEXT_DIM     = DARK_PALETTE["TEXT_DIM"]
TEXT_BRIGHT  = DARK_PALETTE["TEXT_BRIGHT"]
STEP_BG      = DARK_PALETTE["STEP_BG"]
STEP_BORDER  = DARK_PALETTE["STEP_BORDER"]
INPUT_BG     = DARK_PALETTE["INPUT_BG"]
INPUT_BORDER = DARK_PALETTE["INPUT_BORDER"]
HEADING      = DARK_PALETTE["HEADING"]
DETERMINANT  = DARK_PALETTE["DETERMINANT"]
ANSWER       = DARK_PALETTE["ANSWER"]
VERIFY_OK    = DARK_PALETTE["VERIFY_OK"]
VERIFY_FAIL  = DARK_PALETTE["VERIFY_FAIL"]
NOTE         = DARK_PALETTE["NOTE"]
ERROR        = DARK_PALETTE["ERROR"]


def palette(theme: str) -> dict:
    """Palette for *theme*; anything other than ``"light"`` is dark."""
    return THEMES.get(theme, DARK_PALETTE)


def apply_theme(theme: str) -> None:
    globals().update(palette(theme))
