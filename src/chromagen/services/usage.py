"""Daily usage quota tracking.

Each identifier (the caller's IP address) gets DAILY_FREE generations per
UTC day plus a one-time share bonus. One record per identifier holds the
day it belongs to; a record from any other day counts as no record at all.

When the key-value store is missing or unreachable every operation fails
open and reports the default quota. The quota is a soft, advisory limit:
concurrent requests for one identifier can race past it, and no locking is
attempted because the store offers no transactional primitive.
"""

from __future__ import annotations

from datetime import UTC, datetime, time, timedelta

from chromagen.domain.usage import (
    BonusClaimResult,
    ConsumeResult,
    UsageLimits,
    UsageRecord,
    UsageStatus,
)
from chromagen.exceptions import InvalidIdentifierError, StoreUnavailableError
from chromagen.logging_config import get_logger
from chromagen.repositories.interfaces import KeyValueStore
from chromagen.services.interfaces import UsageService

logger = get_logger(__name__)

BONUS_CLAIMED_MESSAGE = "Successfully claimed +1 quota!"
BONUS_FALLBACK_MESSAGE = "Successfully claimed +1 quota! (Fallback)"
BONUS_ALREADY_CLAIMED_MESSAGE = "Share bonus already claimed today"


def _as_utc(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(UTC)
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now.astimezone(UTC)


def get_today_utc(now: datetime | None = None) -> str:
    """UTC calendar date of now as YYYY-MM-DD."""
    return _as_utc(now).date().isoformat()


def get_next_reset_time(now: datetime | None = None) -> str:
    """Next UTC midnight after now, e.g. '2026-10-20T00:00:00.000Z'."""
    tomorrow = _as_utc(now).date() + timedelta(days=1)
    reset = datetime.combine(tomorrow, time.min, tzinfo=UTC)
    return reset.strftime("%Y-%m-%dT%H:%M:%S.000Z")


class UsageServiceImpl(UsageService):
    def __init__(
        self,
        store: KeyValueStore | None,
        limits: UsageLimits | None = None,
        key_prefix: str = "ip:",
    ) -> None:
        self._store = store
        self._limits = limits or UsageLimits()
        self._key_prefix = key_prefix

    @property
    def limits(self) -> UsageLimits:
        return self._limits

    def _key(self, identifier: str) -> str:
        if not identifier:
            raise InvalidIdentifierError()
        return f"{self._key_prefix}{identifier}"

    def _default_status(self, now: datetime) -> UsageStatus:
        return UsageStatus(
            remaining=self._limits.daily_free,
            total=self._limits.daily_free,
            can_use_bonus=True,
            reset_at=get_next_reset_time(now),
        )

    def _load_today(
        self, store: KeyValueStore, key: str, today: str
    ) -> UsageRecord | None:
        """Stored record for today, or None when absent or from another day."""
        record = UsageRecord.from_dict(store.get(key))
        if record is None or record.date != today:
            return None
        return record

    def _save(self, store: KeyValueStore, key: str, record: UsageRecord) -> None:
        store.put(key, record.to_dict(), ttl_seconds=self._limits.record_ttl_seconds)

    def _store_unavailable(self, operation: str, identifier: str, reason: str) -> None:
        logger.warning(
            "usage_store_unavailable",
            operation=operation,
            identifier=identifier,
            reason=reason,
        )

    def check(self, identifier: str, now: datetime | None = None) -> UsageStatus:
        key = self._key(identifier)
        now = _as_utc(now)

        if self._store is None:
            self._store_unavailable("check", identifier, "no store configured")
            return self._default_status(now)

        try:
            record = self._load_today(self._store, key, get_today_utc(now))
        except StoreUnavailableError as e:
            self._store_unavailable("check", identifier, e.message)
            return self._default_status(now)

        if record is None:
            return self._default_status(now)

        total = record.total_available(self._limits)
        return UsageStatus(
            remaining=max(0, total - record.used),
            total=total,
            can_use_bonus=not record.bonus_used,
            reset_at=get_next_reset_time(now),
        )

    def consume(self, identifier: str, now: datetime | None = None) -> ConsumeResult:
        key = self._key(identifier)
        now = _as_utc(now)
        fallback = ConsumeResult(success=True, remaining=self._limits.daily_free - 1)

        if self._store is None:
            self._store_unavailable("consume", identifier, "no store configured")
            return fallback

        today = get_today_utc(now)
        try:
            record = self._load_today(self._store, key, today) or UsageRecord(date=today)

            total = record.total_available(self._limits)
            if record.used >= total:
                logger.info("usage_exhausted", identifier=identifier, used=record.used)
                return ConsumeResult(success=False, remaining=0)

            record.used += 1
            self._save(self._store, key, record)
        except StoreUnavailableError as e:
            self._store_unavailable("consume", identifier, e.message)
            return fallback

        remaining = max(0, total - record.used)
        logger.info("usage_consumed", identifier=identifier, remaining=remaining)
        return ConsumeResult(success=True, remaining=remaining)

    def claim_bonus(
        self, identifier: str, now: datetime | None = None
    ) -> BonusClaimResult:
        key = self._key(identifier)
        now = _as_utc(now)
        fallback = BonusClaimResult(success=True, message=BONUS_FALLBACK_MESSAGE)

        if self._store is None:
            self._store_unavailable("claim_bonus", identifier, "no store configured")
            return fallback

        today = get_today_utc(now)
        try:
            record = self._load_today(self._store, key, today) or UsageRecord(date=today)

            if record.bonus_used:
                return BonusClaimResult(
                    success=False, message=BONUS_ALREADY_CLAIMED_MESSAGE
                )

            record.bonus_used = True
            self._save(self._store, key, record)
        except StoreUnavailableError as e:
            self._store_unavailable("claim_bonus", identifier, e.message)
            return fallback

        logger.info("bonus_claimed", identifier=identifier)
        return BonusClaimResult(success=True, message=BONUS_CLAIMED_MESSAGE)
