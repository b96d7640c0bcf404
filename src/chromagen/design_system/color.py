"""Color engine: conversions, shade ramps, dark variants and WCAG contrast.

Every function here is pure and total. Colors are ``#rrggbb`` strings;
input may omit the ``#`` and use either case. Input that does not parse is
read as black rather than raising, because the engine only ever sees colors
that were already validated by a color picker or by the AI response schema.
Computed colors are returned in lowercase.

Usage:
    from chromagen.design_system.color import generate_shades, get_contrast_ratio

    shades = generate_shades("#3b82f6")
    shades["50"]     # '#f5f9ff'
    get_contrast_ratio("#000000", "#ffffff")  # 21.0
"""

import math
import re

from chromagen.design_system.tokens import (
    BASE_STOP,
    BLACK,
    DARK_BACKGROUND_HSL,
    DARK_BRAND_MAX,
    DARK_BRAND_SATURATION_SCALE,
    DARK_BRAND_TARGET_LIGHTNESS,
    DARK_MODE_TEXT,
    DARK_SURFACE_HSL,
    MIDTONE_CAP,
    MIDTONE_LIFT,
    NEAR_BLACK_RGB,
    PASTEL_MIN,
    RGB,
    ROLE_KEYWORDS,
    SHADE_STOPS,
    SHADE_WEIGHTS,
    TINT_WEIGHTS,
    WCAG_FAIL,
    WCAG_THRESHOLDS,
    WHITE,
    WHITE_RGB,
)
from chromagen.domain.colors import ContrastRating, RoleCategory

_HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; ramps must round .5 up.
    return math.floor(value + 0.5)


# =============================================================================
# Conversions
# =============================================================================


def hex_to_rgb(hex_color: str) -> RGB:
    """Parse ``#rrggbb`` into an (r, g, b) tuple; unparseable input is black."""
    if not isinstance(hex_color, str):
        return (0, 0, 0)
    match = _HEX_PATTERN.match(hex_color)
    if match is None:
        return (0, 0, 0)
    r, g, b = (int(part, 16) for part in match.groups())
    return (r, g, b)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Clamp each channel to [0, 255], round it and format as ``#rrggbb``."""
    channels = (_round_half_up(max(0.0, min(255.0, value))) for value in (r, g, b))
    return "#" + "".join(f"{channel:02x}" for channel in channels)


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """Convert RGB channels to (hue degrees, saturation %, lightness %)."""
    r, g, b = r / 255, g / 255, b / 255
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        return (0.0, 0.0, lightness * 100)

    delta = high - low
    if lightness > 0.5:
        saturation = delta / (2 - high - low)
    else:
        saturation = delta / (high + low)

    if high == r:
        hue = (g - b) / delta + (6 if g < b else 0)
    elif high == g:
        hue = (b - r) / delta + 2
    else:
        hue = (r - g) / delta + 4
    hue /= 6

    return (hue * 360, saturation * 100, lightness * 100)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_hex(h: float, s: float, l: float) -> str:  # noqa: E741
    """Convert (hue degrees, saturation %, lightness %) to ``#rrggbb``."""
    h, s, l = h / 360, s / 100, l / 100  # noqa: E741
    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)
    return rgb_to_hex(r * 255, g * 255, b * 255)


def hex_to_hsl(hex_color: str) -> tuple[float, float, float]:
    return rgb_to_hsl(*hex_to_rgb(hex_color))


# =============================================================================
# Shade Ramps
# =============================================================================


def mix(color: RGB, target: RGB, weight: float) -> RGB:
    """Linear per-channel interpolation from color (weight 0) to target (weight 1)."""
    r, g, b = (
        _round_half_up(start + (end - start) * weight)
        for start, end in zip(color, target)
    )
    return (r, g, b)


def generate_shades(base_hex: str) -> dict[str, str]:
    """Build the 50-950 ramp for a base color.

    Stop 500 is the base string itself. Lighter stops mix toward white,
    darker stops toward a slate near-black.
    """
    rgb = hex_to_rgb(base_hex)
    shades: dict[str, str] = {}
    for stop in SHADE_STOPS:
        if stop == BASE_STOP:
            shades[stop] = base_hex
        elif stop in TINT_WEIGHTS:
            shades[stop] = rgb_to_hex(*mix(rgb, WHITE_RGB, TINT_WEIGHTS[stop]))
        else:
            shades[stop] = rgb_to_hex(*mix(rgb, NEAR_BLACK_RGB, SHADE_WEIGHTS[stop]))
    return shades


# =============================================================================
# Dark Mode
# =============================================================================


def classify_role(role: str | None) -> RoleCategory:
    """Map a free-text role tag to its dark-mode category.

    Background keywords win over surface, surface over text, so
    ``"bg-text"`` is a background and ``"card-text"`` a surface.
    """
    role_key = (role or "").lower()
    for category in (RoleCategory.BACKGROUND, RoleCategory.SURFACE, RoleCategory.TEXT):
        if any(keyword in role_key for keyword in ROLE_KEYWORDS[category.value]):
            return category
    return RoleCategory.BRAND


def calculate_dark_variant(hex_color: str, role: str | None = None) -> str:
    """Derive the dark-mode counterpart of a color based on its role."""
    category = classify_role(role)

    if category is RoleCategory.BACKGROUND:
        return hsl_to_hex(*DARK_BACKGROUND_HSL)

    if category is RoleCategory.SURFACE:
        return hsl_to_hex(*DARK_SURFACE_HSL)

    h, s, l = hex_to_hsl(hex_color)  # noqa: E741

    if category is RoleCategory.TEXT:
        return DARK_MODE_TEXT if l < 50 else hex_color

    if l < DARK_BRAND_MAX:
        return hsl_to_hex(h, s * DARK_BRAND_SATURATION_SCALE, DARK_BRAND_TARGET_LIGHTNESS)
    if l > PASTEL_MIN:
        return hex_color
    return hsl_to_hex(h, s, min(l + MIDTONE_LIFT, MIDTONE_CAP))


# =============================================================================
# Accessibility
# =============================================================================


def get_luminance(r: float, g: float, b: float) -> float:
    """WCAG 2.0 relative luminance of an RGB color."""

    def expand(channel: float) -> float:
        v = channel / 255
        return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4

    return expand(r) * 0.2126 + expand(g) * 0.7152 + expand(b) * 0.0722


def get_contrast_ratio(hex1: str, hex2: str) -> float:
    """WCAG contrast ratio between two colors, from 1 to 21."""
    l1 = get_luminance(*hex_to_rgb(hex1))
    l2 = get_luminance(*hex_to_rgb(hex2))
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def get_wcag_rating(ratio: float) -> ContrastRating:
    for minimum, score, label, passed in WCAG_THRESHOLDS:
        if ratio >= minimum:
            return ContrastRating(score=score, label=label, passed=passed)
    score, label, passed = WCAG_FAIL
    return ContrastRating(score=score, label=label, passed=passed)


def get_best_text_color(bg_hex: str) -> str:
    """White or black, whichever contrasts more with bg_hex.

    White must be strictly better to win; an exact tie returns black.
    """
    white_contrast = get_contrast_ratio(bg_hex, WHITE)
    black_contrast = get_contrast_ratio(bg_hex, BLACK)
    return WHITE if white_contrast > black_contrast else BLACK


def is_valid_hex(value: str) -> bool:
    """Strict check for user input; the engine itself never needs it."""
    return isinstance(value, str) and _HEX_PATTERN.match(value) is not None


def normalize_hex(value: str) -> str:
    """Canonical lowercase ``#rrggbb`` form of a valid color."""
    return rgb_to_hex(*hex_to_rgb(value))
