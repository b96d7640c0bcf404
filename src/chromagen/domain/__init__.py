from chromagen.domain.colors import (
    SCHEME_ROLES,
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
    "SCHEME_ROLES",
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
