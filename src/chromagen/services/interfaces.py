from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from chromagen.design_system.themes import PreviewTheme, ThemeMode
from chromagen.domain.colors import (
    ColorToken,
    ContrastRating,
    ExportFormat,
    GenerationResult,
    Palette,
)
from chromagen.domain.usage import BonusClaimResult, ConsumeResult, UsageStatus


@dataclass(frozen=True)
class ContrastReport:
    token_id: str
    token_name: str
    hex: str
    against: str
    ratio: float
    rating: ContrastRating

    def to_dict(self) -> dict[str, Any]:
        return {
            "tokenId": self.token_id,
            "name": self.token_name,
            "hex": self.hex,
            "against": self.against,
            "ratio": round(self.ratio, 2),
            "rating": self.rating.to_dict(),
        }


@dataclass(frozen=True)
class TurnstileResult:
    success: bool
    error_codes: list[str] = field(default_factory=list)
    hostname: str | None = None
    challenge_ts: str | None = None
    action: str | None = None


class UsageService(ABC):
    @abstractmethod
    def check(self, identifier: str, now: datetime | None = None) -> UsageStatus:
        pass

    @abstractmethod
    def consume(self, identifier: str, now: datetime | None = None) -> ConsumeResult:
        pass

    @abstractmethod
    def claim_bonus(
        self, identifier: str, now: datetime | None = None
    ) -> BonusClaimResult:
        pass


class PaletteService(ABC):
    @abstractmethod
    def create_token(
        self,
        name: str,
        hex_color: str,
        role: str | None = None,
        dark_hex: str | None = None,
    ) -> ColorToken:
        pass

    @abstractmethod
    def default_custom_token(self) -> ColorToken:
        pass

    @abstractmethod
    def build_palette(
        self, scheme: dict[str, tuple[str, str]], mood: str
    ) -> GenerationResult:
        pass

    @abstractmethod
    def contrast_for(
        self, token: ColorToken, baseline: str, palette: Palette
    ) -> ContrastReport:
        pass

    @abstractmethod
    def contrast_report(
        self, palette: Palette, baseline: str = "auto"
    ) -> list[ContrastReport]:
        pass

    @abstractmethod
    def export(self, palette: Palette, fmt: ExportFormat | str) -> str:
        pass

    @abstractmethod
    def preview_theme(self, palette: Palette, mode: ThemeMode | str) -> PreviewTheme:
        pass


class CaptchaVerifier(ABC):
    @abstractmethod
    def verify(self, token: str, remote_ip: str | None = None) -> TurnstileResult:
        pass

    @abstractmethod
    def require_valid(self, token: str | None, remote_ip: str | None = None) -> None:
        pass


class ColorSchemeGenerator(ABC):
    @abstractmethod
    def generate(self, image: bytes | str, mime_type: str) -> GenerationResult:
        pass
