"""Pydantic v2 schemas for API request/response models.

Wire names are camelCase (``imageBase64``, ``canUseBonus``); Python
attributes stay snake_case.
"""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from chromagen.design_system.themes import ThemeMode
from chromagen.domain.colors import ExportFormat

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"
DATA_URL_PATTERN = re.compile(r"^data:(.+);base64,(.+)$", re.DOTALL)


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Health Schemas
class HealthResponse(CamelModel):
    """Schema for health check response."""

    status: str = "healthy"
    version: str


# Usage Schemas
class UsageStatusResponse(CamelModel):
    """Schema for a caller's quota status."""

    remaining: int
    total: int
    can_use_bonus: bool
    reset_at: str


class ConsumeResponse(CamelModel):
    success: bool
    remaining: int


class BonusClaimResponse(CamelModel):
    success: bool
    message: str


# Color Token Schemas
class ColorTokenIn(CamelModel):
    """Schema for a palette color sent by the client.

    ``darkHex`` is derived from the role when omitted.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str | None = None
    name: str = Field(..., min_length=1, max_length=255)
    hex: str = Field(..., pattern=HEX_PATTERN)
    dark_hex: str | None = Field(default=None, pattern=HEX_PATTERN)
    role: str | None = None


class ColorTokenResponse(CamelModel):
    id: str
    name: str
    hex: str
    dark_hex: str
    role: str | None = None


# Palette Schemas
class GenerateRequest(CamelModel):
    """Schema for generating a palette from an image.

    ``imageBase64`` may be raw base64 or a full ``data:<mime>;base64,``
    URL, in which case the mime type is taken from the URL.
    """

    image_base64: str = Field(..., min_length=1)
    mime_type: str = Field(default="image/jpeg", pattern=r"^image/[\w.+-]+$")
    turnstile_token: str | None = None

    @model_validator(mode="before")
    @classmethod
    def split_data_url(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        raw = data.get("imageBase64", data.get("image_base64"))
        if isinstance(raw, str):
            match = DATA_URL_PATTERN.match(raw)
            if match:
                data = {k: v for k, v in data.items() if k != "image_base64"}
                data["mimeType"] = match.group(1)
                data["imageBase64"] = match.group(2)
        return data


class GenerateResponse(CamelModel):
    colors: list[ColorTokenResponse]
    mood: str
    usage: UsageStatusResponse


class ExportRequest(CamelModel):
    colors: list[ColorTokenIn]
    format: ExportFormat = ExportFormat.TAILWIND


class ExportResponse(CamelModel):
    format: ExportFormat
    code: str


class ContrastRequest(CamelModel):
    """Schema for a palette contrast report.

    ``baseline`` is ``auto``, ``white``, ``black`` or the id of another
    color in the palette.
    """

    colors: list[ColorTokenIn]
    baseline: str = "auto"


class ContrastRatingResponse(CamelModel):
    score: str
    label: str
    passed: bool = Field(alias="pass")


class ContrastEntryResponse(CamelModel):
    token_id: str
    name: str
    hex: str
    against: str
    ratio: float
    rating: ContrastRatingResponse


class ContrastReportResponse(CamelModel):
    baseline: str
    results: list[ContrastEntryResponse]


class PreviewRequest(CamelModel):
    colors: list[ColorTokenIn]
    mode: ThemeMode = ThemeMode.LIGHT


class PreviewResponse(CamelModel):
    mode: ThemeMode
    variables: dict[str, str]
    css: str


# Single Color Schemas
class ShadesResponse(CamelModel):
    hex: str
    shades: dict[str, str]


class DarkVariantResponse(CamelModel):
    hex: str
    role: str | None = None
    category: str
    dark_hex: str


class ContrastPairResponse(CamelModel):
    foreground: str
    background: str
    ratio: float
    rating: ContrastRatingResponse
