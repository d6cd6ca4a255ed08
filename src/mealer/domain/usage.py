"""Domain models for AI usage metering."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

UsageKind = Literal["receipt_scans", "substitutions"]


@dataclass(frozen=True)
class RateLimits:
    """Daily per-user limits for metered operations."""

    receipt_scans_per_day: int
    substitutions_per_day: int

    def for_kind(self, kind: UsageKind) -> int:
        """Return the daily limit for an operation kind."""
        if kind == "receipt_scans":
            return self.receipt_scans_per_day
        return self.substitutions_per_day


@dataclass(frozen=True)
class DailyUsage:
    """Stored usage counts for one user and day."""

    receipt_scan_count: int
    substitution_count: int

    def for_kind(self, kind: UsageKind) -> int:
        """Return the stored count for an operation kind."""
        if kind == "receipt_scans":
            return self.receipt_scan_count
        return self.substitution_count


@dataclass(frozen=True)
class UsageCounter:
    """Used, limit and remaining values for one operation kind."""

    used: int
    limit: int
    remaining: int


@dataclass(frozen=True)
class RateLimitCheck:
    """Result of a rate limit check."""

    allowed: bool
    used: int
    limit: int
    remaining: int


@dataclass(frozen=True)
class UsageSnapshot:
    """Combined daily usage view for display."""

    day: date
    receipt_scans: UsageCounter
    substitutions: UsageCounter
