"""AI color scheme extraction through an OpenAI-compatible chat API.

The model sees the image plus a system prompt and must answer with a JSON
object holding a mood word and six named colors. The answer is validated
with pydantic before any token is built; dark variants are derived locally.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import TYPE_CHECKING, Any

import openai
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from chromagen.domain.colors import SCHEME_ROLES, GenerationResult
from chromagen.exceptions import (
    AIClientNotConfiguredError,
    ColorSchemeGenerationError,
    EmptyAIResponseError,
    InvalidAIResponseError,
    InvalidImageError,
)
from chromagen.logging_config import get_logger
from chromagen.services.interfaces import ColorSchemeGenerator
from chromagen.services.palette import PaletteServiceImpl
from chromagen.services.prompts import (
    COLOR_SCHEME_SYSTEM_PROMPT,
    COLOR_SCHEME_USER_PROMPT,
)

if TYPE_CHECKING:
    from chromagen.config import Settings

logger = get_logger(__name__)

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class SchemeColor(BaseModel):
    name: str
    hex: str = Field(pattern=HEX_PATTERN)


class SchemeColors(BaseModel):
    primary: SchemeColor
    secondary: SchemeColor
    accent: SchemeColor
    background: SchemeColor
    surface: SchemeColor
    text: SchemeColor


class ColorSchemeResponse(BaseModel):
    """Shape the model is instructed to return."""

    mood: str = Field(description="A one or two word description of the palette's mood")
    scheme: SchemeColors


def create_ai_client(settings: Settings) -> openai.OpenAI:
    """Build an OpenAI SDK client for the configured gateway."""
    if not settings.ai_api_key:
        raise AIClientNotConfiguredError()
    return openai.OpenAI(api_key=settings.ai_api_key, base_url=settings.ai_base_url)


def encode_image(image: bytes | str) -> str:
    """Base64 text for raw bytes; already-encoded text is checked and passed through."""
    if isinstance(image, bytes):
        if not image:
            raise InvalidImageError("empty image")
        return base64.b64encode(image).decode("ascii")
    if not image:
        raise InvalidImageError("empty image")
    try:
        base64.b64decode(image, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError("image is not valid base64") from e
    return image


def parse_color_scheme(content: str | None) -> ColorSchemeResponse:
    if not content:
        raise EmptyAIResponseError()
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as e:
        raise InvalidAIResponseError("Failed to parse AI response as JSON.") from e
    try:
        return ColorSchemeResponse.model_validate(payload)
    except PydanticValidationError as e:
        raise InvalidAIResponseError(str(e)) from e


class OpenAIColorSchemeGenerator(ColorSchemeGenerator):
    def __init__(
        self,
        client: Any,
        model: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        palette_service: PaletteServiceImpl | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._palette_service = palette_service or PaletteServiceImpl()

    def _messages(self, image_b64: str, mime_type: str) -> list[dict[str, Any]]:
        return [
            {"role": "system", "content": COLOR_SCHEME_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": COLOR_SCHEME_USER_PROMPT},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{mime_type};base64,{image_b64}"},
                    },
                ],
            },
        ]

    def generate(self, image: bytes | str, mime_type: str) -> GenerationResult:
        if not mime_type or not mime_type.startswith("image/"):
            raise InvalidImageError(f"unsupported mime type {mime_type!r}")
        image_b64 = encode_image(image)

        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=self._messages(image_b64, mime_type),
                response_format={"type": "json_object"},
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except openai.OpenAIError as e:
            logger.error("color_scheme_request_failed", model=self._model, error=str(e))
            raise ColorSchemeGenerationError(str(e)) from e

        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        parsed = parse_color_scheme(content)

        scheme = {
            role: (getattr(parsed.scheme, role).name, getattr(parsed.scheme, role).hex)
            for role in SCHEME_ROLES
        }
        result = self._palette_service.build_palette(scheme, parsed.mood)
        logger.info(
            "color_scheme_generated",
            model=self._model,
            mood=result.mood,
            colors=len(result.colors),
        )
        return result
