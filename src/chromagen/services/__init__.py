from chromagen.services.color_scheme import OpenAIColorSchemeGenerator
from chromagen.services.palette import PaletteServiceImpl
from chromagen.services.turnstile import TurnstileVerifier
from chromagen.services.usage import UsageServiceImpl

__all__ = [
    "OpenAIColorSchemeGenerator",
    "PaletteServiceImpl",
    "TurnstileVerifier",
    "UsageServiceImpl",
]
