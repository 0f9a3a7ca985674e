"""Test fingerprint extraction and fingerprint-based matching."""
from __future__ import annotations

import pytest

from conftest import (
    ADDR_A,
    ADDR_B,
    INVITE_FULL,
    MASKED_LONG,
    MASKED_SHORT,
    MASKED_STARS,
    MASKED_SYMBOLS,
)
from core.exceptions import ConfigurationError
from matching.fingerprint import address_fingerprint, addresses_match, is_fingerprintable
from matching.normalizer import normalize_address
from matching.rules import MatchingRules


def test_fingerprint_of_full_address():
    assert address_fingerprint(INVITE_FULL) == "0x11e393f"
    assert address_fingerprint(ADDR_A) == "0xaaa5555"


def test_fingerprint_of_bare_address_includes_prefix():
    """Bare addresses are prefixed before the first five characters are taken."""
    assert address_fingerprint(ADDR_A[2:]) == "0xaaa5555"


@pytest.mark.parametrize("masked", [MASKED_SHORT, MASKED_STARS, MASKED_LONG, MASKED_SYMBOLS])
def test_masked_forms_share_fingerprint(masked):
    """Every masked variant matches the full address."""
    assert address_fingerprint(masked) == address_fingerprint(INVITE_FULL)
    assert addresses_match(masked, INVITE_FULL)


def test_fingerprint_minimum_length():
    """Nine characters is the shortest fingerprintable value."""
    assert address_fingerprint("0x1234567") == "0x1234567"
    assert address_fingerprint("0x123456") is None
    assert address_fingerprint("0x12") is None
    assert address_fingerprint("") is None
    assert address_fingerprint(None) is None
    assert is_fingerprintable("0x123456") is False
    assert is_fingerprintable(ADDR_A) is True


@pytest.mark.parametrize("raw", [ADDR_A, ADDR_A[2:], MASKED_STARS, "  0XABCDEF0123  ", "0x12"])
def test_fingerprint_stable_under_normalization(raw):
    assert address_fingerprint(raw) == address_fingerprint(normalize_address(raw))


def test_addresses_match_is_symmetric():
    pairs = [
        (INVITE_FULL, MASKED_STARS),
        (ADDR_A, ADDR_B),
        (ADDR_A, ADDR_A.lower()),
        ("0x12", "0x12"),
        (ADDR_A, ""),
    ]
    for first, second in pairs:
        assert addresses_match(first, second) == addresses_match(second, first)


def test_invalid_addresses_never_match():
    """Two identical but too-short strings are not a match."""
    assert addresses_match("0x12", "0x12") is False
    assert addresses_match(None, None) is False


def test_different_addresses_do_not_match():
    assert addresses_match(ADDR_A, ADDR_B) is False


def test_coincidental_edge_collision_is_a_match():
    """Same first five and last four characters match even with different middles."""
    assert addresses_match("0xAAA000000005555", ADDR_A)


def test_custom_fingerprint_lengths():
    rules = MatchingRules(prefix_length=6, suffix_length=6)
    assert address_fingerprint(ADDR_A, rules) == "0xaaaaee5555"
    assert address_fingerprint("0x123456789", rules) is None


def test_rules_reject_non_positive_lengths():
    with pytest.raises(ConfigurationError):
        MatchingRules(prefix_length=0)
    with pytest.raises(ConfigurationError):
        MatchingRules(suffix_length=-1)
