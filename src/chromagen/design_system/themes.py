"""Preview themes built from a palette.

A preview theme is the set of CSS variables a mock dashboard or mobile
screen uses to render a palette in light or dark mode. Roles are looked up
by substring on each token's role tag, so "primary" also finds
"primary-brand".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final

from chromagen.domain.colors import ColorToken, Palette


class ThemeMode(str, Enum):
    """Available theme modes."""

    LIGHT = "light"
    DARK = "dark"


_MISSING_ROLE: Final[dict[ThemeMode, str]] = {
    ThemeMode.LIGHT: "#ffffff",
    ThemeMode.DARK: "#1e293b",
}

_OVERLAY: Final[dict[ThemeMode, str]] = {
    ThemeMode.LIGHT: "rgba(0,0,0,0.1)",
    ThemeMode.DARK: "rgba(255,255,255,0.1)",
}

DESTRUCTIVE: Final[str] = "#ef4444"
RADIUS: Final[str] = "0.75rem"


@dataclass(frozen=True)
class PreviewTheme:
    """Resolved preview colors for one mode."""

    mode: ThemeMode
    background: str
    foreground: str
    card: str
    primary: str
    primary_foreground: str
    secondary: str
    secondary_foreground: str
    accent: str
    accent_foreground: str
    muted: str
    border: str
    input: str
    destructive: str = DESTRUCTIVE
    destructive_foreground: str = "#ffffff"
    radius: str = RADIUS

    def variables(self) -> dict[str, str]:
        """CSS custom properties in shadcn/ui naming."""
        return {
            "--background": self.background,
            "--foreground": self.foreground,
            "--card": self.card,
            "--card-foreground": self.foreground,
            "--popover": self.card,
            "--popover-foreground": self.foreground,
            "--primary": self.primary,
            "--primary-foreground": self.primary_foreground,
            "--secondary": self.secondary,
            "--secondary-foreground": self.secondary_foreground,
            "--muted": self.muted,
            "--muted-foreground": self.foreground,
            "--accent": self.accent,
            "--accent-foreground": self.accent_foreground,
            "--destructive": self.destructive,
            "--destructive-foreground": self.destructive_foreground,
            "--border": self.border,
            "--input": self.input,
            "--ring": self.primary,
            "--radius": self.radius,
        }

    def to_css_variables(self) -> str:
        """Generate CSS custom property declarations from the theme."""
        return "\n".join(f"{name}: {value};" for name, value in self.variables().items())


def _resolve(palette: Palette, role_part: str, mode: ThemeMode) -> str:
    token: ColorToken | None = palette.find_by_role(role_part)
    if token is None:
        return _MISSING_ROLE[mode]
    if mode is ThemeMode.DARK:
        return token.dark_hex or token.hex
    return token.hex


def build_preview_theme(palette: Palette, mode: ThemeMode | str = ThemeMode.LIGHT) -> PreviewTheme:
    """Resolve a palette into preview colors for the given mode."""
    mode = ThemeMode(mode)
    dark = mode is ThemeMode.DARK

    background = _resolve(palette, "background", mode)
    overlay = _OVERLAY[mode]

    return PreviewTheme(
        mode=mode,
        background=background,
        foreground=_resolve(palette, "text", mode),
        card=_resolve(palette, "surface", mode),
        primary=_resolve(palette, "primary", mode),
        primary_foreground=background if dark else "#ffffff",
        secondary=_resolve(palette, "secondary", mode),
        secondary_foreground="#ffffff" if dark else background,
        accent=_resolve(palette, "accent", mode),
        accent_foreground="#ffffff" if dark else background,
        muted=overlay,
        border=overlay,
        input=overlay,
    )


def generate_css_root(theme: PreviewTheme) -> str:
    """Wrap a theme's variables in ``:root`` (light) or ``.dark`` (dark)."""
    selector = ".dark" if theme.mode is ThemeMode.DARK else ":root"
    body = "\n".join(f"  {line}" for line in theme.to_css_variables().splitlines())
    return f"{selector} {{\n{body}\n}}"
