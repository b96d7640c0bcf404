"""Domain exception hierarchy for ChromaGen.

All domain-specific exceptions inherit from ChromaGenError.
This allows catching all application errors with a single base class
while preserving specificity for individual error types.

Quota exhaustion and repeated bonus claims are ordinary results of the
usage service, not exceptions; QuotaExceededError is only raised by the
HTTP layer when it refuses to start a generation.
"""

from typing import Any


class ChromaGenError(Exception):
    """Base exception for all ChromaGen errors.

    All domain exceptions should inherit from this class.
    Includes optional error_code for API responses and extra context.
    """

    error_code: str = "CHROMAGEN_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        if status_code:
            self.status_code = status_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(ChromaGenError):
    """Base exception for validation errors."""

    error_code = "VALIDATION_ERROR"
    status_code = 422


class InvalidHexColorError(ValidationError):
    """Raised when user input is not a #RRGGBB color."""

    error_code = "INVALID_HEX_COLOR"

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Invalid hex color: {value!r} (expected #RRGGBB)",
            context={"value": value},
        )


class InvalidIdentifierError(ValidationError):
    """Raised when a usage operation is called without an identifier."""

    error_code = "INVALID_IDENTIFIER"

    def __init__(self) -> None:
        super().__init__("A non-empty usage identifier is required")


class InvalidImageError(ValidationError):
    """Raised when an uploaded image payload cannot be used."""

    error_code = "INVALID_IMAGE"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid image: {reason}", context={"reason": reason})


# =============================================================================
# Store Errors
# =============================================================================


class StoreError(ChromaGenError):
    """Base exception for key-value store errors."""

    error_code = "STORE_ERROR"
    status_code = 500


class StoreUnavailableError(StoreError):
    """Raised when the key-value store cannot be reached."""

    error_code = "STORE_UNAVAILABLE"
    status_code = 503

    def __init__(self, message: str) -> None:
        super().__init__(f"Key-value store unavailable: {message}")


# =============================================================================
# Quota Errors
# =============================================================================


class QuotaError(ChromaGenError):
    """Base exception for usage quota errors."""

    error_code = "QUOTA_ERROR"
    status_code = 429


class QuotaExceededError(QuotaError):
    """Raised when a caller has no generations left today."""

    error_code = "QUOTA_EXCEEDED"

    def __init__(self, reset_at: str, can_use_bonus: bool) -> None:
        super().__init__(
            "Daily limit reached. Come back tomorrow"
            + (" or claim your share bonus." if can_use_bonus else "."),
            context={"reset_at": reset_at, "can_use_bonus": can_use_bonus},
        )


# =============================================================================
# CAPTCHA Errors
# =============================================================================


class CaptchaError(ChromaGenError):
    """Base exception for CAPTCHA verification errors."""

    error_code = "CAPTCHA_ERROR"
    status_code = 403


class CaptchaRequiredError(CaptchaError):
    """Raised when a request arrives without a Turnstile token."""

    error_code = "CAPTCHA_REQUIRED"
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Turnstile token is required")


class CaptchaVerificationError(CaptchaError):
    """Raised when Turnstile rejects a token."""

    error_code = "CAPTCHA_FAILED"

    def __init__(self, error_codes: list[str]) -> None:
        joined = ", ".join(error_codes) or "unknown"
        super().__init__(
            f"Turnstile validation failed: {joined}",
            context={"error_codes": list(error_codes)},
        )


# =============================================================================
# Color Scheme (AI) Errors
# =============================================================================


class ColorSchemeError(ChromaGenError):
    """Base exception for AI color scheme generation errors."""

    error_code = "COLOR_SCHEME_ERROR"
    status_code = 502


class AIClientNotConfiguredError(ColorSchemeError):
    """Raised when no AI credentials are configured."""

    error_code = "AI_NOT_CONFIGURED"
    status_code = 503

    def __init__(self) -> None:
        super().__init__("AI client is not configured (set CHROMAGEN_AI_API_KEY)")


class EmptyAIResponseError(ColorSchemeError):
    """Raised when the model returns no content."""

    error_code = "AI_EMPTY_RESPONSE"

    def __init__(self) -> None:
        super().__init__("No content received from AI model.")


class InvalidAIResponseError(ColorSchemeError):
    """Raised when the model output is not a valid color scheme."""

    error_code = "AI_INVALID_RESPONSE"

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"AI response could not be used: {reason}",
            context={"reason": reason},
        )


class ColorSchemeGenerationError(ColorSchemeError):
    """Raised when the AI provider call itself fails."""

    error_code = "AI_REQUEST_FAILED"

    def __init__(self, message: str) -> None:
        super().__init__(f"Color scheme generation failed: {message}")


# =============================================================================
# Palette Errors
# =============================================================================


class PaletteError(ChromaGenError):
    """Base exception for palette editing errors."""

    error_code = "PALETTE_ERROR"
    status_code = 400


class ColorTokenNotFoundError(PaletteError):
    """Raised when a palette has no token with the given id."""

    error_code = "COLOR_TOKEN_NOT_FOUND"
    status_code = 404

    def __init__(self, token_id: str) -> None:
        super().__init__(
            f"Color token not found: {token_id}",
            context={"token_id": token_id},
        )
