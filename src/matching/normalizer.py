"""Address canonicalization and display masking."""
from __future__ import annotations

import re
from typing import Optional

from matching.rules import DEFAULT_RULES, MatchingRules

HEX_PREFIX = "0x"
FULL_HEX_BODY = re.compile(r"[0-9a-f]{40}")
NON_HEX = re.compile(r"[^0-9a-f]")
MASK_CHARACTERS = ("*", "&")


def normalize_address(raw: Optional[str], rules: MatchingRules = DEFAULT_RULES) -> Optional[str]:
    """
    Canonicalize an address so equal addresses compare equal as strings.

    Surrounding whitespace is trimmed and the value lower-cased. A bare
    40-hex-digit address gains a ``0x`` prefix; anything else without the
    prefix (masked or partial input) is left unprefixed. Interior ``*`` and
    ``&`` survive, they mark masked input.

    Args:
        raw: Address as typed or pasted by a user.
        rules: Matching rules; ``rules.strict`` also drops non-hex characters.

    Returns:
        Normalized address. Empty or None input is returned unchanged.
    """
    if not raw:
        return raw
    normalized = str(raw).strip().lower()
    if rules.strict:
        return _normalize_strict(normalized)
    if normalized.startswith(HEX_PREFIX):
        return normalized
    if FULL_HEX_BODY.fullmatch(normalized):
        return HEX_PREFIX + normalized
    return normalized


def _normalize_strict(normalized: str) -> str:
    has_prefix = normalized.startswith(HEX_PREFIX)
    body = normalized[len(HEX_PREFIX):] if has_prefix else normalized
    body = NON_HEX.sub("", body)
    if body or has_prefix:
        return HEX_PREFIX + body
    return ""


def mask_address(raw: Optional[str], rules: MatchingRules = DEFAULT_RULES) -> str:
    """
    Return the display form ``first5 + ****** + last4`` of an address.

    The original casing is kept; only surrounding whitespace goes. The
    separator has a fixed width no matter how long the hidden middle is.
    Strings too short to fingerprint are returned as-is.
    """
    cleaned = str(raw).strip() if raw else ""
    if len(cleaned) < rules.minimum_length:
        return cleaned
    return f"{cleaned[:rules.prefix_length]}{rules.mask_fill}{cleaned[-rules.suffix_length:]}"


def is_masked_address(raw: Optional[str]) -> bool:
    """Return True if the address carries a masking character."""
    if not raw:
        return False
    return any(ch in raw for ch in MASK_CHARACTERS)


__all__ = ["normalize_address", "mask_address", "is_masked_address", "HEX_PREFIX"]
