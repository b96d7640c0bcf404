"""Tests for AI color scheme generation."""

import base64
import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import openai
import pytest

from chromagen.config import Settings
from chromagen.domain.colors import SCHEME_ROLES
from chromagen.exceptions import (
    AIClientNotConfiguredError,
    ColorSchemeGenerationError,
    EmptyAIResponseError,
    InvalidAIResponseError,
    InvalidImageError,
)
from chromagen.services.color_scheme import (
    OpenAIColorSchemeGenerator,
    create_ai_client,
    encode_image,
    parse_color_scheme,
)

VALID_SCHEME = {
    "mood": "Calm",
    "scheme": {
        "primary": {"name": "Royal Blue", "hex": "#3B82F6"},
        "secondary": {"name": "Slate", "hex": "#64748b"},
        "accent": {"name": "Amber", "hex": "#f59e0b"},
        "background": {"name": "Snow", "hex": "#ffffff"},
        "surface": {"name": "Mist", "hex": "#f1f5f9"},
        "text": {"name": "Ink", "hex": "#0f172a"},
    },
}

PNG_BYTES = b"\x89PNG\r\n\x1a\n fake image"


def completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


@pytest.fixture
def ai_client() -> MagicMock:
    client = MagicMock()
    client.chat.completions.create.return_value = completion(json.dumps(VALID_SCHEME))
    return client


@pytest.fixture
def generator(ai_client: MagicMock) -> OpenAIColorSchemeGenerator:
    return OpenAIColorSchemeGenerator(ai_client, model="test-model")


class TestEncodeImage:
    def test_bytes_are_base64_encoded(self) -> None:
        assert encode_image(PNG_BYTES) == base64.b64encode(PNG_BYTES).decode()

    def test_base64_text_passes_through(self) -> None:
        encoded = base64.b64encode(PNG_BYTES).decode()
        assert encode_image(encoded) == encoded

    @pytest.mark.parametrize("value", [b"", ""])
    def test_empty_image_rejected(self, value: bytes | str) -> None:
        with pytest.raises(InvalidImageError):
            encode_image(value)

    def test_invalid_base64_rejected(self) -> None:
        with pytest.raises(InvalidImageError):
            encode_image("not base64!!")


class TestParseColorScheme:
    def test_valid_payload(self) -> None:
        parsed = parse_color_scheme(json.dumps(VALID_SCHEME))
        assert parsed.mood == "Calm"
        assert parsed.scheme.text.name == "Ink"

    @pytest.mark.parametrize("content", [None, ""])
    def test_empty_content(self, content: str | None) -> None:
        with pytest.raises(EmptyAIResponseError):
            parse_color_scheme(content)

    def test_invalid_json(self) -> None:
        with pytest.raises(InvalidAIResponseError):
            parse_color_scheme("{not json")

    def test_missing_role(self) -> None:
        payload = json.loads(json.dumps(VALID_SCHEME))
        del payload["scheme"]["surface"]
        with pytest.raises(InvalidAIResponseError):
            parse_color_scheme(json.dumps(payload))

    @pytest.mark.parametrize("bad_hex", ["#fff", "3b82f6", "#3b82fz", "blue"])
    def test_invalid_hex(self, bad_hex: str) -> None:
        payload = json.loads(json.dumps(VALID_SCHEME))
        payload["scheme"]["primary"]["hex"] = bad_hex
        with pytest.raises(InvalidAIResponseError):
            parse_color_scheme(json.dumps(payload))


class TestGenerator:
    def test_returns_six_tokens_in_role_order(
        self, generator: OpenAIColorSchemeGenerator
    ) -> None:
        result = generator.generate(PNG_BYTES, "image/png")

        assert result.mood == "Calm"
        assert [t.role for t in result.colors] == list(SCHEME_ROLES)
        assert result.colors[0].name == "Royal Blue"
        assert result.colors[0].hex == "#3B82F6"

    def test_dark_variants_are_computed(self, generator: OpenAIColorSchemeGenerator) -> None:
        by_role = {t.role: t for t in generator.generate(PNG_BYTES, "image/png").colors}
        assert by_role["background"].dark_hex == "#0f1729"
        assert by_role["surface"].dark_hex == "#16213c"
        assert by_role["text"].dark_hex == "#f8fafc"

    def test_request_shape(
        self, generator: OpenAIColorSchemeGenerator, ai_client: MagicMock
    ) -> None:
        generator.generate(PNG_BYTES, "image/png")

        kwargs = ai_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["temperature"] == 0.7
        assert kwargs["max_tokens"] == 1000

        system, user = kwargs["messages"]
        assert system["role"] == "system"
        image_part = user["content"][1]
        assert image_part["type"] == "image_url"
        expected_url = f"data:image/png;base64,{base64.b64encode(PNG_BYTES).decode()}"
        assert image_part["image_url"]["url"] == expected_url

    def test_rejects_non_image_mime_type(
        self, generator: OpenAIColorSchemeGenerator, ai_client: MagicMock
    ) -> None:
        with pytest.raises(InvalidImageError):
            generator.generate(PNG_BYTES, "application/pdf")
        ai_client.chat.completions.create.assert_not_called()

    def test_empty_choices(
        self, generator: OpenAIColorSchemeGenerator, ai_client: MagicMock
    ) -> None:
        ai_client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        with pytest.raises(EmptyAIResponseError):
            generator.generate(PNG_BYTES, "image/png")

    def test_invalid_model_output(
        self, generator: OpenAIColorSchemeGenerator, ai_client: MagicMock
    ) -> None:
        ai_client.chat.completions.create.return_value = completion('{"mood": "x"}')
        with pytest.raises(InvalidAIResponseError):
            generator.generate(PNG_BYTES, "image/png")

    def test_sdk_errors_are_wrapped(
        self, generator: OpenAIColorSchemeGenerator, ai_client: MagicMock
    ) -> None:
        ai_client.chat.completions.create.side_effect = openai.OpenAIError("quota")
        with pytest.raises(ColorSchemeGenerationError):
            generator.generate(PNG_BYTES, "image/png")


class TestCreateClient:
    def test_requires_api_key(self, test_settings: Settings) -> None:
        with pytest.raises(AIClientNotConfiguredError):
            create_ai_client(test_settings)

    def test_builds_openai_client(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(
            update={"ai_api_key": "sk-test", "ai_base_url": "https://gateway.example/v1"}
        )
        client = create_ai_client(settings)
        assert isinstance(client, openai.OpenAI)
        assert str(client.base_url).startswith("https://gateway.example/v1")
