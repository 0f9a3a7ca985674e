"""Fingerprints: the partial match key used for every address comparison."""
from __future__ import annotations

from typing import Optional

from matching.normalizer import normalize_address
from matching.rules import DEFAULT_RULES, MatchingRules


def address_fingerprint(raw: Optional[str], rules: MatchingRules = DEFAULT_RULES) -> Optional[str]:
    """
    Build the match key ``first5 + last4`` of the normalized address.

    The key deliberately ignores the middle of the address, so a full
    address matches its masked forms (``0x11E******393F``, ``0x11E**393F``)
    and masked forms with differing mask lengths match each other.

    Args:
        raw: Address in any supported format.
        rules: Prefix/suffix lengths and normalization mode.

    Returns:
        The fingerprint, or None when the normalized address is shorter than
        prefix + suffix and therefore cannot take part in matching.
    """
    normalized = normalize_address(raw, rules)
    if not normalized or len(normalized) < rules.minimum_length:
        return None
    return normalized[:rules.prefix_length] + normalized[-rules.suffix_length:]


def is_fingerprintable(raw: Optional[str], rules: MatchingRules = DEFAULT_RULES) -> bool:
    return address_fingerprint(raw, rules) is not None


def addresses_match(first: Optional[str], second: Optional[str], rules: MatchingRules = DEFAULT_RULES) -> bool:
    """Return True when both addresses are valid and share a fingerprint."""
    first_key = address_fingerprint(first, rules)
    if first_key is None:
        return False
    return first_key == address_fingerprint(second, rules)


__all__ = ["address_fingerprint", "is_fingerprintable", "addresses_match"]
