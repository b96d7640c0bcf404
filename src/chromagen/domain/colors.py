from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from uuid import uuid4

from chromagen.exceptions import ColorTokenNotFoundError


def _new_token_id() -> str:
    return str(uuid4())


class ExportFormat(str, Enum):
    TAILWIND = "TAILWIND"
    CSS_VARS = "CSS_VARS"
    JSON = "JSON"


class RoleCategory(str, Enum):
    """Dark-mode treatment a color role falls into."""

    BACKGROUND = "background"
    SURFACE = "surface"
    TEXT = "text"
    BRAND = "brand"


# Roles the AI collaborator produces, in display order.
SCHEME_ROLES: tuple[str, ...] = (
    "primary",
    "secondary",
    "accent",
    "background",
    "surface",
    "text",
)


@dataclass
class ColorToken:
    name: str
    hex: str
    dark_hex: str
    role: str | None = None
    id: str = field(default_factory=_new_token_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "hex": self.hex,
            "darkHex": self.dark_hex,
            "role": self.role,
        }


@dataclass(frozen=True)
class ContrastRating:
    score: str
    label: str
    passed: bool

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "label": self.label, "pass": self.passed}


@dataclass
class Palette:
    """Ordered, editable list of color tokens.

    Order is insertion order and only matters for display.
    """

    colors: list[ColorToken] = field(default_factory=list)

    def __iter__(self) -> Iterator[ColorToken]:
        return iter(self.colors)

    def __len__(self) -> int:
        return len(self.colors)

    def get(self, token_id: str) -> ColorToken:
        for token in self.colors:
            if token.id == token_id:
                return token
        raise ColorTokenNotFoundError(token_id)

    def add(self, token: ColorToken) -> ColorToken:
        self.colors.append(token)
        return token

    def update(self, token_id: str, **changes: Any) -> ColorToken:
        token = self.get(token_id)
        for attr, value in changes.items():
            if attr == "id" or not hasattr(token, attr):
                raise AttributeError(f"ColorToken has no editable field {attr!r}")
            setattr(token, attr, value)
        return token

    def remove(self, token_id: str) -> ColorToken:
        token = self.get(token_id)
        self.colors.remove(token)
        return token

    def find_by_role(self, role_part: str) -> ColorToken | None:
        """First token whose role contains role_part, case-insensitively."""
        needle = role_part.lower()
        for token in self.colors:
            if token.role and needle in token.role.lower():
                return token
        return None


@dataclass
class GenerationResult:
    colors: list[ColorToken]
    mood: str

    def to_palette(self) -> Palette:
        return Palette(colors=list(self.colors))

    def to_dict(self) -> dict[str, Any]:
        return {
            "colors": [token.to_dict() for token in self.colors],
            "mood": self.mood,
        }


__all__ = [
    "SCHEME_ROLES",
    "ColorToken",
    "ContrastRating",
    "ExportFormat",
    "GenerationResult",
    "Palette",
    "RoleCategory",
]
