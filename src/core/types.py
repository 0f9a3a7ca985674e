"""Shared dataclasses and type helpers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


@dataclass(slots=True, frozen=True)
class RewardEntry:
    """One line of the invite schedule: an address and the reward it earned."""

    address: str
    amount: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {"address": self.address, "amount": self.amount}


@dataclass(slots=True, frozen=True)
class DuplicateGroup:
    """
    Referrer addresses that cannot be trusted as distinct.

    Exact groups hold one representative member and the true repeat count.
    Pattern groups hold every distinct member sharing a fingerprint, and
    their count is the number of members.
    """

    pattern: str
    key: str
    members: Tuple[str, ...]
    count: int
    is_exact: bool
    normalized_members: FrozenSet[str] = field(default_factory=frozenset)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "members": list(self.members),
            "count": self.count,
            "is_exact": self.is_exact,
        }


@dataclass(slots=True, frozen=True)
class AnalysisReport:
    """Snapshot of one analysis run: buckets, duplicates and summary counts."""

    total_referrers: int
    amount_buckets: Dict[int, List[str]]
    bucket_hits: Dict[int, int]
    duplicate_groups: List[DuplicateGroup]
    match_count: int
    mismatch_count: int
    final_address_counts: Dict[int, int]
    non_duplicate_total: int
    invalid_referrers: List[str] = field(default_factory=list)
    duplicate_normalized: FrozenSet[str] = field(default_factory=frozenset)
    normalized_lookup: Dict[str, str] = field(default_factory=dict)

    @property
    def duplicate_count(self) -> int:
        """Every occurrence that sits in a duplicate group."""
        return sum(group.count for group in self.duplicate_groups)

    @property
    def unique_pattern_count(self) -> int:
        return len(self.duplicate_groups) + (self.total_referrers - self.duplicate_count)

    @property
    def exact_groups(self) -> List[DuplicateGroup]:
        return [group for group in self.duplicate_groups if group.is_exact]

    @property
    def pattern_groups(self) -> List[DuplicateGroup]:
        return [group for group in self.duplicate_groups if not group.is_exact]

    def is_duplicate(self, address: str) -> bool:
        """Return True when the address' normalized form belongs to any duplicate group."""
        normalized = self.normalized_lookup.get(address)
        return normalized is not None and normalized in self.duplicate_normalized

    def amount_for(self, address: str) -> Optional[int]:
        """Return the bucket an address landed in, or None if it was never analyzed."""
        for amount, addresses in self.amount_buckets.items():
            if address in addresses:
                return amount
        return None

    def as_dict(self) -> Dict[str, Any]:
        """JSON-friendly view; bucket keys become strings."""
        return {
            "total_referrers": self.total_referrers,
            "match_count": self.match_count,
            "mismatch_count": self.mismatch_count,
            "duplicate_count": self.duplicate_count,
            "unique_pattern_count": self.unique_pattern_count,
            "non_duplicate_total": self.non_duplicate_total,
            "amount_buckets": {str(k): list(v) for k, v in self.amount_buckets.items()},
            "bucket_hits": {str(k): v for k, v in self.bucket_hits.items()},
            "final_address_counts": {str(k): v for k, v in self.final_address_counts.items()},
            "duplicate_groups": [group.as_dict() for group in self.duplicate_groups],
            "invalid_referrers": list(self.invalid_referrers),
        }

    def summary(self) -> str:
        """Return a compact human-readable summary for logging/CLI output."""
        tiers = ", ".join(
            f"{amount}={count}" for amount, count in self.final_address_counts.items()
        )
        return (
            f"referrers={self.total_referrers} matched={self.match_count} "
            f"mismatched={self.mismatch_count} duplicate_groups={len(self.duplicate_groups)} "
            f"final({tiers or 'no-tiers'})"
        )

    def __str__(self) -> str:  # pragma: no cover - convenience for logging
        return self.summary()


__all__ = ["RewardEntry", "DuplicateGroup", "AnalysisReport"]
