"""Design tokens for the ChromaGen color engine.

These are the fixed values the engine derives palettes from: the shade
stops, the mix weights that give a ramp its feel, the dark-mode reference
colors, and the WCAG thresholds. Exported code and previews depend on these
exact numbers, so change them only together with their tests.

Based on Tailwind CSS naming conventions for familiarity.
"""

from typing import Final

RGB = tuple[int, int, int]

# =============================================================================
# Shade Ramp
# =============================================================================

SHADE_STOPS: Final[tuple[str, ...]] = (
    "50",
    "100",
    "200",
    "300",
    "400",
    "500",
    "600",
    "700",
    "800",
    "900",
    "950",
)

BASE_STOP: Final[str] = "500"

WHITE_RGB: Final[RGB] = (255, 255, 255)

# Slate-900ish, keeps the 950 stop from going flat black
NEAR_BLACK_RGB: Final[RGB] = (15, 23, 42)

# Weight of the mix toward white for stops lighter than the base
TINT_WEIGHTS: Final[dict[str, float]] = {
    "50": 0.95,
    "100": 0.90,
    "200": 0.75,
    "300": 0.60,
    "400": 0.30,
}

# Weight of the mix toward NEAR_BLACK_RGB for stops darker than the base
SHADE_WEIGHTS: Final[dict[str, float]] = {
    "600": 0.20,
    "700": 0.40,
    "800": 0.60,
    "900": 0.80,
    "950": 0.90,
}

# =============================================================================
# Dark Mode References
# =============================================================================

# (hue, saturation %, lightness %)
DARK_BACKGROUND_HSL: Final[tuple[float, float, float]] = (222, 47, 11)
DARK_SURFACE_HSL: Final[tuple[float, float, float]] = (222, 47, 16)

# Slate-50
DARK_MODE_TEXT: Final[str] = "#f8fafc"

ROLE_KEYWORDS: Final[dict[str, tuple[str, ...]]] = {
    "background": ("background", "bg"),
    "surface": ("surface", "container", "card"),
    "text": ("text", "content", "foreground"),
}

# Brand colors: below DARK_BRAND_MAX lightness get lifted to
# DARK_BRAND_TARGET_LIGHTNESS, above PASTEL_MIN they are kept as is,
# mid-tones are raised by MIDTONE_LIFT up to MIDTONE_CAP.
DARK_BRAND_MAX: Final[float] = 40
DARK_BRAND_TARGET_LIGHTNESS: Final[float] = 60
DARK_BRAND_SATURATION_SCALE: Final[float] = 0.9
PASTEL_MIN: Final[float] = 70
MIDTONE_LIFT: Final[float] = 10
MIDTONE_CAP: Final[float] = 85

# =============================================================================
# Accessibility
# =============================================================================

WHITE: Final[str] = "#ffffff"
BLACK: Final[str] = "#000000"

# (minimum ratio, score, label, passes); first match wins
WCAG_THRESHOLDS: Final[tuple[tuple[float, str, str, bool], ...]] = (
    (7.0, "AAA", "Excellent", True),
    (4.5, "AA", "Pass", True),
    (3.0, "AA+", "Large Text", True),
)
WCAG_FAIL: Final[tuple[str, str, bool]] = ("Fail", "Low Contrast", False)

# =============================================================================
# Palette Defaults
# =============================================================================

CUSTOM_COLOR_NAME: Final[str] = "New Color"
CUSTOM_COLOR_HEX: Final[str] = "#71717a"  # Zinc-500
CUSTOM_ROLE: Final[str] = "custom"
