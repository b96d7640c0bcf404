from chromagen.domain.colors import (
    ColorToken,
    ContrastRating,
    ExportFormat,
    GenerationResult,
    Palette,
    RoleCategory,
)
from chromagen.domain.usage import (
    BonusClaimResult,
    ConsumeResult,
    UsageLimits,
    UsageRecord,
    UsageStatus,
)

__all__ = [
    "BonusClaimResult",
    "ColorToken",
    "ConsumeResult",
    "ContrastRating",
    "ExportFormat",
    "GenerationResult",
    "Palette",
    "RoleCategory",
    "UsageLimits",
    "UsageRecord",
    "UsageStatus",
]

__version__ = "0.1.0"
