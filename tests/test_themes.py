"""Tests for light/dark preview themes."""

from chromagen.design_system.color import calculate_dark_variant
from chromagen.design_system.themes import (
    ThemeMode,
    build_preview_theme,
    generate_css_root,
)
from chromagen.domain.colors import ColorToken, Palette


class TestLightTheme:
    def test_uses_light_hexes(self, sample_palette: Palette) -> None:
        theme = build_preview_theme(sample_palette, ThemeMode.LIGHT)
        assert theme.mode is ThemeMode.LIGHT
        assert theme.background == "#ffffff"
        assert theme.foreground == "#0f172a"
        assert theme.card == "#f1f5f9"
        assert theme.primary == "#3b82f6"
        assert theme.secondary == "#64748b"
        assert theme.accent == "#f59e0b"

    def test_foregrounds(self, sample_palette: Palette) -> None:
        theme = build_preview_theme(sample_palette, "light")
        assert theme.primary_foreground == "#ffffff"
        assert theme.secondary_foreground == theme.background
        assert theme.accent_foreground == theme.background

    def test_overlays_and_fixed_values(self, sample_palette: Palette) -> None:
        theme = build_preview_theme(sample_palette)
        assert theme.border == "rgba(0,0,0,0.1)"
        assert theme.muted == "rgba(0,0,0,0.1)"
        assert theme.destructive == "#ef4444"
        assert theme.radius == "0.75rem"


class TestDarkTheme:
    def test_uses_dark_hexes(self, sample_palette: Palette) -> None:
        theme = build_preview_theme(sample_palette, ThemeMode.DARK)
        assert theme.background == "#0f1729"
        assert theme.card == "#16213c"
        assert theme.foreground == "#f8fafc"
        assert theme.primary == calculate_dark_variant("#3b82f6", "primary")

    def test_foregrounds(self, sample_palette: Palette) -> None:
        theme = build_preview_theme(sample_palette, "dark")
        assert theme.primary_foreground == theme.background
        assert theme.secondary_foreground == "#ffffff"
        assert theme.accent_foreground == "#ffffff"
        assert theme.input == "rgba(255,255,255,0.1)"

    def test_empty_dark_hex_falls_back_to_hex(self) -> None:
        palette = Palette(colors=[ColorToken(name="Brand", hex="#3b82f6", dark_hex="", role="primary")])
        assert build_preview_theme(palette, "dark").primary == "#3b82f6"


class TestMissingRoles:
    def test_light_fallback_is_white(self) -> None:
        theme = build_preview_theme(Palette(), "light")
        assert theme.background == "#ffffff"
        assert theme.primary == "#ffffff"

    def test_dark_fallback_is_slate(self) -> None:
        theme = build_preview_theme(Palette(), "dark")
        assert theme.background == "#1e293b"
        assert theme.foreground == "#1e293b"

    def test_role_lookup_is_substring(self) -> None:
        palette = Palette(
            colors=[ColorToken(name="Page", hex="#fafafa", dark_hex="#0f1729", role="page-background")]
        )
        assert build_preview_theme(palette).background == "#fafafa"


class TestCssOutput:
    def test_variables_use_shadcn_names(self, sample_palette: Palette) -> None:
        variables = build_preview_theme(sample_palette).variables()
        assert variables["--background"] == "#ffffff"
        assert variables["--card-foreground"] == "#0f172a"
        assert variables["--ring"] == "#3b82f6"
        assert variables["--radius"] == "0.75rem"

    def test_light_css_uses_root_selector(self, sample_palette: Palette) -> None:
        css = generate_css_root(build_preview_theme(sample_palette, "light"))
        assert css.startswith(":root {\n  --background: #ffffff;")
        assert css.endswith("\n}")

    def test_dark_css_uses_dark_class(self, sample_palette: Palette) -> None:
        css = generate_css_root(build_preview_theme(sample_palette, "dark"))
        assert css.startswith(".dark {\n  --background: #0f1729;")
