from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UsageLimits:
    daily_free: int = 3
    share_bonus: int = 1
    record_ttl_seconds: int = 60 * 60 * 24 * 7


@dataclass
class UsageRecord:
    """Quota bookkeeping for one identifier on one UTC calendar day."""

    date: str
    used: int = 0
    bonus_used: bool = False

    def total_available(self, limits: UsageLimits) -> int:
        return limits.daily_free + (limits.share_bonus if self.bonus_used else 0)

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "used": self.used, "bonusUsed": self.bonus_used}

    @classmethod
    def from_dict(cls, data: Any) -> "UsageRecord | None":
        """Rebuild a record from its stored JSON form.

        Anything that does not look like a stored record yields None, which
        callers treat the same as a missing record.
        """
        if not isinstance(data, dict):
            return None
        record_date = data.get("date")
        used = data.get("used", 0)
        if not isinstance(record_date, str) or not isinstance(used, int):
            return None
        return cls(
            date=record_date,
            used=max(0, used),
            bonus_used=bool(data.get("bonusUsed", False)),
        )


@dataclass(frozen=True)
class UsageStatus:
    remaining: int
    total: int
    can_use_bonus: bool
    reset_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "remaining": self.remaining,
            "total": self.total,
            "canUseBonus": self.can_use_bonus,
            "resetAt": self.reset_at,
        }


@dataclass(frozen=True)
class ConsumeResult:
    success: bool
    remaining: int

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "remaining": self.remaining}


@dataclass(frozen=True)
class BonusClaimResult:
    success: bool
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success, "message": self.message}


__all__ = [
    "BonusClaimResult",
    "ConsumeResult",
    "UsageLimits",
    "UsageRecord",
    "UsageStatus",
]
