"""Approximate name matching for ingredients and pantry items."""

from dataclasses import dataclass
from typing import Protocol

from rapidfuzz.distance import Levenshtein

# Tuned by hand against Polish pantry names; not derived from data.
DEFAULT_MATCH_THRESHOLD = 0.6


class NameMatcher(Protocol):
    """Interface for deciding whether two product names refer to the same thing."""

    def similarity(self, a: str, b: str) -> float:
        """Return a similarity score in [0, 1]."""

    def is_match(self, a: str, b: str) -> bool:
        """Return True when the names should be treated as the same product."""


def normalize_name(value: str) -> str:
    """Case-fold and trim a product name for comparison."""
    return value.strip().casefold()


def similarity(a: str, b: str) -> float:
    """Return 1 - levenshtein / max length over normalized names."""
    left = normalize_name(a)
    right = normalize_name(b)
    if not left or not right:
        return 0.0
    distance = Levenshtein.distance(left, right)
    return 1 - distance / max(len(left), len(right))


def is_match(a: str, b: str, threshold: float = DEFAULT_MATCH_THRESHOLD) -> bool:
    """Return True on containment either way or a score at the threshold."""
    left = normalize_name(a)
    right = normalize_name(b)
    if not left or not right:
        return False
    if left in right or right in left:
        return True
    return similarity(left, right) >= threshold


@dataclass
class LevenshteinMatcher(NameMatcher):
    """Edit-distance matcher with substring containment shortcut."""

    threshold: float = DEFAULT_MATCH_THRESHOLD

    def similarity(self, a: str, b: str) -> float:
        """Return the normalized edit-distance similarity."""
        return similarity(a, b)

    def is_match(self, a: str, b: str) -> bool:
        """Return True when the names match at the configured threshold."""
        return is_match(a, b, self.threshold)
