"""Reward matching: place referrer addresses into reward-amount buckets."""
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, Sequence, Set

from core.config import DEFAULT_REWARD_TIERS
from core.logging_config import get_logger
from core.types import AnalysisReport, RewardEntry
from matching.dedupe import duplicate_normalized_values, find_duplicates
from matching.fingerprint import address_fingerprint
from matching.normalizer import normalize_address
from matching.rules import DEFAULT_RULES, MatchingRules

LOGGER = get_logger(__name__)

UNMATCHED_AMOUNT = 0


def bucket_amounts(entries: Iterable[RewardEntry], tiers: Iterable[int] = DEFAULT_REWARD_TIERS) -> List[int]:
    """
    Return the bucket keys for an analysis.

    Configured tiers are always present, amounts only found in the invite
    schedule are added so unexpected tiers still surface.
    """
    return sorted(set(tiers) | {UNMATCHED_AMOUNT} | {entry.amount for entry in entries})


def build_entry_index(
    entries: Iterable[RewardEntry], rules: MatchingRules = DEFAULT_RULES
) -> Dict[str, int]:
    """
    Map fingerprint -> reward amount.

    The first entry carrying a fingerprint wins; later entries with the
    same key are ignored. Entries that cannot be fingerprinted are skipped.
    """
    index: Dict[str, int] = {}
    for entry in entries:
        fingerprint = address_fingerprint(entry.address, rules)
        if fingerprint is None:
            continue
        index.setdefault(fingerprint, entry.amount)
    return index


def count_final_addresses(
    addresses: Iterable[str],
    duplicates: FrozenSet[str],
    rules: MatchingRules = DEFAULT_RULES,
) -> int:
    """Count distinct fingerprints among addresses that are not duplicates."""
    keys: Set[str] = set()
    for raw in addresses:
        if normalize_address(raw, rules) in duplicates:
            continue
        fingerprint = address_fingerprint(raw, rules)
        if fingerprint is not None:
            keys.add(fingerprint)
    return len(keys)


def analyze(
    entries: Sequence[RewardEntry],
    referrers: Sequence[str],
    rules: MatchingRules = DEFAULT_RULES,
    tiers: Iterable[int] = DEFAULT_REWARD_TIERS,
) -> AnalysisReport:
    """
    Cross-reference referrer addresses against the invite schedule.

    Each referrer goes to the bucket of the first entry sharing its
    fingerprint, or to bucket 0 when nothing matches or it cannot be
    fingerprinted. A bucket lists each raw address once; every occurrence
    is still tallied in ``bucket_hits`` so repeats count as matches.

    Args:
        entries: Parsed invite schedule, in input order.
        referrers: Raw referrer addresses, in input order.
        rules: Matching rules.
        tiers: Reward amounts that always get a bucket.

    Returns:
        A fresh AnalysisReport.
    """
    amounts = bucket_amounts(entries, tiers)
    buckets: Dict[int, List[str]] = {amount: [] for amount in amounts}
    placed: Dict[int, Set[str]] = {amount: set() for amount in amounts}
    hits: Dict[int, int] = {amount: 0 for amount in amounts}
    index = build_entry_index(entries, rules)

    invalid: List[str] = []
    normalized_lookup: Dict[str, str] = {}
    for raw in referrers:
        normalized_lookup[raw] = normalize_address(raw, rules)
        fingerprint = address_fingerprint(raw, rules)
        if fingerprint is None:
            invalid.append(raw)
            amount = UNMATCHED_AMOUNT
        else:
            amount = index.get(fingerprint, UNMATCHED_AMOUNT)

        hits[amount] += 1
        if raw not in placed[amount]:
            placed[amount].add(raw)
            buckets[amount].append(raw)

    groups = find_duplicates(referrers, rules)
    duplicates = duplicate_normalized_values(groups)

    match_count = sum(count for amount, count in hits.items() if amount != UNMATCHED_AMOUNT)
    final_counts = {
        amount: count_final_addresses(buckets[amount], duplicates, rules)
        for amount in amounts
        if amount != UNMATCHED_AMOUNT
    }
    non_duplicate_total = sum(1 for raw in referrers if normalized_lookup[raw] not in duplicates)

    LOGGER.debug(
        f"Matched {match_count}/{len(referrers)} referrers against {len(index)} invite keys "
        f"({len(invalid)} unfingerprintable)"
    )

    return AnalysisReport(
        total_referrers=len(referrers),
        amount_buckets=buckets,
        bucket_hits=hits,
        duplicate_groups=groups,
        match_count=match_count,
        mismatch_count=len(referrers) - match_count,
        final_address_counts=final_counts,
        non_duplicate_total=non_duplicate_total,
        invalid_referrers=invalid,
        duplicate_normalized=duplicates,
        normalized_lookup=normalized_lookup,
    )


__all__ = [
    "UNMATCHED_AMOUNT",
    "analyze",
    "bucket_amounts",
    "build_entry_index",
    "count_final_addresses",
]
