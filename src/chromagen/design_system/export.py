"""Code exporters for generated palettes.

Each exporter expands every color into its full 50-950 ramp and renders it
in one of the supported formats:

- Tailwind v4 ``@theme`` block
- Plain CSS custom properties on ``:root``
- JSON mapping of camelCase color names to their ramps
"""

import json
import re
from collections.abc import Iterable

from chromagen.design_system.color import generate_shades
from chromagen.domain.colors import ColorToken, ExportFormat

_WHITESPACE = re.compile(r"\s+")
_NOT_KEBAB = re.compile(r"[^a-z0-9-]")
_CAMEL_BREAK = re.compile(r"[^a-zA-Z0-9]+(.)")


def to_kebab_case(name: str) -> str:
    """'Midnight Blue!' -> 'midnight-blue'."""
    return _NOT_KEBAB.sub("", _WHITESPACE.sub("-", name.lower()))


def to_camel_case(name: str) -> str:
    """'Midnight Blue' -> 'midnightBlue'."""
    return _CAMEL_BREAK.sub(lambda match: match.group(1).upper(), name.lower())


def _with_shades(colors: Iterable[ColorToken]) -> list[tuple[ColorToken, dict[str, str]]]:
    return [(token, generate_shades(token.hex)) for token in colors]


def _shade_lines(slug: str, shades: dict[str, str]) -> str:
    return "\n".join(f"  --color-{slug}-{stop}: {value};" for stop, value in shades.items())


def generate_tailwind_config(colors: Iterable[ColorToken]) -> str:
    extended = _with_shades(colors)
    blocks = []
    for token, shades in extended:
        slug = to_kebab_case(token.name)
        blocks.append(
            f"  /* {token.name} ({token.role or 'Custom'}) */\n{_shade_lines(slug, shades)}"
        )
    variables = "\n\n".join(blocks)
    example = to_kebab_case(extended[0][0].name) if extended else "color"

    return f"""/* main.css */
@import "tailwindcss";

@theme {{
{variables}
}}

/*
  Usage Examples:
  bg-{example}-500
  text-{example}-900
*/"""


def generate_css_variables(colors: Iterable[ColorToken]) -> str:
    blocks = []
    for token, shades in _with_shades(colors):
        slug = to_kebab_case(token.name)
        base = f"  /* {token.name} */\n  --color-{slug}: {token.hex};"
        blocks.append(f"{base}\n{_shade_lines(slug, shades)}")
    variables = "\n\n".join(blocks)

    return f"""/* global.css */
:root {{
{variables}
}}"""


def generate_json(colors: Iterable[ColorToken]) -> str:
    # Later colors with the same camelCase name overwrite earlier ones.
    payload = {to_camel_case(token.name): shades for token, shades in _with_shades(colors)}
    return json.dumps(payload, indent=2)


def export_palette(colors: Iterable[ColorToken], fmt: ExportFormat | str) -> str:
    """Render colors in the requested export format."""
    fmt = ExportFormat(fmt)
    if fmt is ExportFormat.TAILWIND:
        return generate_tailwind_config(colors)
    if fmt is ExportFormat.CSS_VARS:
        return generate_css_variables(colors)
    return generate_json(colors)
