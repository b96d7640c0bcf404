"""ChromaGen design system: color engine, exporters and preview themes.

This package holds everything that turns a handful of hex colors into a
usable design-system palette. None of it does I/O.

Usage:
    from chromagen.design_system import (
        calculate_dark_variant, generate_shades, get_contrast_ratio,
        get_wcag_rating, export_palette,
    )

    shades = generate_shades("#3b82f6")
    dark = calculate_dark_variant("#1e3a8a", role="primary")
    rating = get_wcag_rating(get_contrast_ratio("#0f172a", "#f8fafc"))
"""

from chromagen.design_system.color import (
    calculate_dark_variant,
    classify_role,
    generate_shades,
    get_best_text_color,
    get_contrast_ratio,
    get_luminance,
    get_wcag_rating,
    hex_to_hsl,
    hex_to_rgb,
    hsl_to_hex,
    is_valid_hex,
    mix,
    normalize_hex,
    rgb_to_hex,
    rgb_to_hsl,
)
from chromagen.design_system.export import (
    export_palette,
    generate_css_variables,
    generate_json,
    generate_tailwind_config,
    to_camel_case,
    to_kebab_case,
)
from chromagen.design_system.themes import (
    PreviewTheme,
    ThemeMode,
    build_preview_theme,
    generate_css_root,
)
from chromagen.design_system.tokens import SHADE_STOPS

__all__ = [
    # Color engine
    "SHADE_STOPS",
    "hex_to_rgb",
    "rgb_to_hex",
    "rgb_to_hsl",
    "hsl_to_hex",
    "hex_to_hsl",
    "mix",
    "generate_shades",
    "classify_role",
    "calculate_dark_variant",
    "get_luminance",
    "get_contrast_ratio",
    "get_wcag_rating",
    "get_best_text_color",
    "is_valid_hex",
    "normalize_hex",
    # Export
    "export_palette",
    "generate_tailwind_config",
    "generate_css_variables",
    "generate_json",
    "to_kebab_case",
    "to_camel_case",
    # Themes
    "PreviewTheme",
    "ThemeMode",
    "build_preview_theme",
    "generate_css_root",
]
