"""Palette editing, contrast reporting and export."""

from __future__ import annotations

from chromagen.design_system.color import (
    calculate_dark_variant,
    get_best_text_color,
    get_contrast_ratio,
    get_wcag_rating,
)
from chromagen.design_system.export import export_palette
from chromagen.design_system.themes import PreviewTheme, ThemeMode, build_preview_theme
from chromagen.design_system.tokens import (
    BLACK,
    CUSTOM_COLOR_HEX,
    CUSTOM_COLOR_NAME,
    CUSTOM_ROLE,
    WHITE,
)
from chromagen.domain.colors import (
    SCHEME_ROLES,
    ColorToken,
    ExportFormat,
    GenerationResult,
    Palette,
)
from chromagen.services.interfaces import ContrastReport, PaletteService

AUTO_BASELINE = "auto"
WHITE_BASELINE = "white"
BLACK_BASELINE = "black"


class PaletteServiceImpl(PaletteService):
    def create_token(
        self,
        name: str,
        hex_color: str,
        role: str | None = None,
        dark_hex: str | None = None,
    ) -> ColorToken:
        return ColorToken(
            name=name,
            hex=hex_color,
            dark_hex=dark_hex or calculate_dark_variant(hex_color, role),
            role=role,
        )

    def default_custom_token(self) -> ColorToken:
        return self.create_token(CUSTOM_COLOR_NAME, CUSTOM_COLOR_HEX, CUSTOM_ROLE)

    def build_palette(
        self, scheme: dict[str, tuple[str, str]], mood: str
    ) -> GenerationResult:
        """Turn a role -> (name, hex) mapping into tokens in display order.

        Known scheme roles come first in their fixed order; any extra roles
        follow in the order given.
        """
        ordered = [role for role in SCHEME_ROLES if role in scheme]
        ordered += [role for role in scheme if role not in SCHEME_ROLES]
        colors = [
            self.create_token(scheme[role][0], scheme[role][1], role) for role in ordered
        ]
        return GenerationResult(colors=colors, mood=mood)

    def _baseline_hex(self, token: ColorToken, baseline: str, palette: Palette) -> str:
        if baseline == AUTO_BASELINE:
            return get_best_text_color(token.hex)
        if baseline == WHITE_BASELINE:
            return WHITE
        if baseline == BLACK_BASELINE:
            return BLACK
        for other in palette:
            if other.id == baseline:
                return other.hex
        return BLACK

    def contrast_for(
        self, token: ColorToken, baseline: str, palette: Palette
    ) -> ContrastReport:
        against = self._baseline_hex(token, baseline, palette)
        ratio = get_contrast_ratio(token.hex, against)
        return ContrastReport(
            token_id=token.id,
            token_name=token.name,
            hex=token.hex,
            against=against,
            ratio=ratio,
            rating=get_wcag_rating(ratio),
        )

    def contrast_report(
        self, palette: Palette, baseline: str = AUTO_BASELINE
    ) -> list[ContrastReport]:
        return [self.contrast_for(token, baseline, palette) for token in palette]

    def export(self, palette: Palette, fmt: ExportFormat | str) -> str:
        return export_palette(palette.colors, fmt)

    def preview_theme(
        self, palette: Palette, mode: ThemeMode | str = ThemeMode.LIGHT
    ) -> PreviewTheme:
        return build_preview_theme(palette, mode)
