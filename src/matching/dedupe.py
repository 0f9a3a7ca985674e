"""Utilities for deduplicating referrer addresses."""
from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List, NamedTuple, Sequence, Set

from core.logging_config import get_logger
from core.types import DuplicateGroup
from matching.fingerprint import address_fingerprint
from matching.normalizer import mask_address, normalize_address
from matching.rules import DEFAULT_RULES, MatchingRules

LOGGER = get_logger(__name__)


class IndexedAddress(NamedTuple):
    """A raw address with its derived comparison keys."""

    raw: str
    normalized: str
    fingerprint: str


def index_addresses(
    addresses: Iterable[str], rules: MatchingRules = DEFAULT_RULES
) -> List[IndexedAddress]:
    """
    Pair every fingerprintable address with its normalized form and key.

    Addresses too short to fingerprint are dropped; they never take part
    in deduplication.
    """
    indexed: List[IndexedAddress] = []
    for raw in addresses:
        fingerprint = address_fingerprint(raw, rules)
        if fingerprint is None:
            continue
        indexed.append(IndexedAddress(raw, normalize_address(raw, rules), fingerprint))
    return indexed


def find_exact_duplicates(
    indexed: Sequence[IndexedAddress], rules: MatchingRules = DEFAULT_RULES
) -> List[DuplicateGroup]:
    """
    Group addresses whose normalized forms are identical.

    Args:
        indexed: Output of :func:`index_addresses`.
        rules: Matching rules used for the display pattern.

    Returns:
        One group per normalized value seen at least twice, in first-seen
        order. Each group keeps a single representative and the true count.
    """
    counts: Dict[str, int] = {}
    representatives: Dict[str, str] = {}
    for item in indexed:
        counts[item.normalized] = counts.get(item.normalized, 0) + 1
        representatives.setdefault(item.normalized, item.raw)

    return [
        DuplicateGroup(
            pattern=mask_address(normalized, rules),
            key=normalized,
            members=(representatives[normalized],),
            count=count,
            is_exact=True,
            normalized_members=frozenset({normalized}),
        )
        for normalized, count in counts.items()
        if count > 1
    ]


def find_pattern_duplicates(
    indexed: Sequence[IndexedAddress],
    claimed: Set[str] | FrozenSet[str] = frozenset(),
    rules: MatchingRules = DEFAULT_RULES,
) -> List[DuplicateGroup]:
    """
    Group distinct addresses that share a fingerprint.

    Args:
        indexed: Output of :func:`index_addresses`.
        claimed: Normalized values already reported as exact duplicates;
            they are left out so no address lands in two groups.
        rules: Matching rules used for the display pattern.

    Returns:
        One group per fingerprint carrying at least two distinct normalized
        values, ordered by first occurrence of the fingerprint.
    """
    by_fingerprint: Dict[str, Dict[str, str]] = {}
    for item in indexed:
        if item.normalized in claimed:
            continue
        by_fingerprint.setdefault(item.fingerprint, {}).setdefault(item.normalized, item.raw)

    groups: List[DuplicateGroup] = []
    for fingerprint, members in by_fingerprint.items():
        if len(members) < 2:
            continue
        groups.append(
            DuplicateGroup(
                pattern=mask_address(fingerprint, rules),
                key=fingerprint,
                members=tuple(members.values()),
                count=len(members),
                is_exact=False,
                normalized_members=frozenset(members.keys()),
            )
        )
    return groups


def find_duplicates(
    addresses: Sequence[str], rules: MatchingRules = DEFAULT_RULES
) -> List[DuplicateGroup]:
    """
    Classify repeated referrer addresses.

    Exact duplicates (same normalized value) are resolved first and take
    precedence; pattern duplicates are looked for among what is left.

    Args:
        addresses: Raw referrer addresses in input order.
        rules: Matching rules.

    Returns:
        Exact groups followed by pattern groups.
    """
    indexed = index_addresses(addresses, rules)
    exact = find_exact_duplicates(indexed, rules)
    claimed = {group.key for group in exact}
    pattern = find_pattern_duplicates(indexed, claimed, rules)
    LOGGER.debug(
        f"Deduplicated {len(addresses)} addresses: "
        f"{len(exact)} exact groups, {len(pattern)} pattern groups"
    )
    return exact + pattern


def duplicate_normalized_values(groups: Iterable[DuplicateGroup]) -> FrozenSet[str]:
    """Return every normalized address that belongs to a duplicate group."""
    values: Set[str] = set()
    for group in groups:
        values.update(group.normalized_members)
    return frozenset(values)


__all__ = [
    "IndexedAddress",
    "index_addresses",
    "find_exact_duplicates",
    "find_pattern_duplicates",
    "find_duplicates",
    "duplicate_normalized_values",
]
