"""Daily AI usage ledger and rate limiting."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from mealer.domain.usage import (
    DailyUsage,
    RateLimitCheck,
    RateLimits,
    UsageCounter,
    UsageKind,
    UsageSnapshot,
)

DEFAULT_RATE_LIMITS = RateLimits(receipt_scans_per_day=5, substitutions_per_day=10)
RATE_LIMITS_CONFIG_KEY = "rate_limits"

_ZERO_USAGE = DailyUsage(receipt_scan_count=0, substitution_count=0)

_logger = logging.getLogger(__name__)


class UsageRepository(Protocol):
    """Persistence interface for per-user daily usage counters."""

    def get_daily_usage(self, user_id: UUID, day: date) -> DailyUsage | None:
        """Return stored counts for the day, or None when no row exists."""

    def increment_usage(self, user_id: UUID, day: date, kind: UsageKind) -> None:
        """Atomically add one to the counter for the day, creating the row."""


class ConfigRepository(Protocol):
    """Read access to system-wide configuration values."""

    def get_value(self, key: str) -> object | None:
        """Return the raw JSON value stored under a key."""


class UsageRecordingError(RuntimeError):
    """Raised when a usage increment could not be persisted."""


class DailyLimitExceededError(Exception):
    """Raised by callers of the ledger when the daily quota is used up."""

    def __init__(self, kind: UsageKind, check: RateLimitCheck) -> None:
        super().__init__(f"Daily {kind} limit exceeded")
        self.kind = kind
        self.check = check


def parse_rate_limits(raw: object) -> RateLimits:
    """Parse the rate_limits config value, defaulting each missing field."""
    if not isinstance(raw, dict):
        return DEFAULT_RATE_LIMITS
    return RateLimits(
        receipt_scans_per_day=_ensure_limit(
            raw.get("receipt_scans_per_day"),
            DEFAULT_RATE_LIMITS.receipt_scans_per_day,
        ),
        substitutions_per_day=_ensure_limit(
            raw.get("substitutions_per_day"),
            DEFAULT_RATE_LIMITS.substitutions_per_day,
        ),
    )


def evaluate_limit(used: int, limit: int) -> RateLimitCheck:
    """Compare a usage count with its limit."""
    return RateLimitCheck(
        allowed=used < limit,
        used=used,
        limit=limit,
        remaining=max(0, limit - used),
    )


def _ensure_limit(value: object, fallback: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return fallback
    if value < 0:
        return fallback
    return int(value)


def _utc_today() -> date:
    return datetime.now(tz=UTC).date()


@dataclass
class UsageLedger:
    """Tracks metered AI operations per user and UTC calendar day.

    Rows are keyed by (user, day); a new day simply starts from zero. Limits
    are re-read from configuration on every call unless passed explicitly.
    """

    repository: UsageRepository
    config_repository: ConfigRepository
    today: Callable[[], date] = _utc_today

    def load_rate_limits(self) -> RateLimits:
        """Return configured limits, or the defaults when unreadable."""
        try:
            raw = self.config_repository.get_value(RATE_LIMITS_CONFIG_KEY)
        except Exception:
            _logger.warning("Rate limit config unreadable, using defaults", exc_info=True)
            return DEFAULT_RATE_LIMITS
        return parse_rate_limits(raw)

    def check_limit(
        self, user_id: UUID, kind: UsageKind, limits: RateLimits | None = None
    ) -> RateLimitCheck:
        """Return whether the user may run one more operation of this kind today."""
        resolved = limits or self.load_rate_limits()
        usage = self._usage_for(user_id, self.today())
        return evaluate_limit(usage.for_kind(kind), resolved.for_kind(kind))

    def record_usage(self, user_id: UUID, kind: UsageKind) -> None:
        """Count one successful operation for today."""
        day = self.today()
        try:
            self.repository.increment_usage(user_id, day, kind)
        except Exception as exc:
            _logger.exception(
                "Failed to record AI usage",
                extra={"user_id": str(user_id), "kind": kind},
            )
            raise UsageRecordingError(f"Failed to record {kind} usage") from exc

    def get_usage_snapshot(
        self, user_id: UUID, limits: RateLimits | None = None
    ) -> UsageSnapshot:
        """Return today's counters for both operation kinds."""
        resolved = limits or self.load_rate_limits()
        day = self.today()
        usage = self._usage_for(user_id, day)
        return UsageSnapshot(
            day=day,
            receipt_scans=_counter(usage, resolved, "receipt_scans"),
            substitutions=_counter(usage, resolved, "substitutions"),
        )

    def _usage_for(self, user_id: UUID, day: date) -> DailyUsage:
        try:
            usage = self.repository.get_daily_usage(user_id, day)
        except Exception:
            _logger.warning(
                "Usage lookup failed, treating as zero",
                exc_info=True,
                extra={"user_id": str(user_id)},
            )
            return _ZERO_USAGE
        return usage or _ZERO_USAGE


def _counter(usage: DailyUsage, limits: RateLimits, kind: UsageKind) -> UsageCounter:
    check = evaluate_limit(usage.for_kind(kind), limits.for_kind(kind))
    return UsageCounter(used=check.used, limit=check.limit, remaining=check.remaining)
