"""Test address normalization and display masking."""
from __future__ import annotations

import pytest

from conftest import ADDR_A, INVITE_FULL, MASKED_STARS, MASKED_SYMBOLS
from matching.normalizer import is_masked_address, mask_address, normalize_address
from matching.rules import MatchingRules

STRICT = MatchingRules(strict=True)

SAMPLES = [
    ADDR_A,
    ADDR_A.lower(),
    ADDR_A[2:],
    "  0XaBc  ",
    MASKED_STARS,
    MASKED_SYMBOLS,
    "11E******393F",
    "abc",
    "   ",
    "",
    "zz-not-an-address",
]


def test_normalize_trims_and_lowercases():
    """Test whitespace and case canonicalization."""
    assert normalize_address("  0xABCdef  ") == "0xabcdef"
    assert normalize_address(ADDR_A) == ADDR_A.lower()


def test_normalize_prefixes_bare_full_address():
    """A bare 40-hex address gains the 0x prefix."""
    bare = ADDR_A[2:]
    assert len(bare) == 40
    assert normalize_address(bare) == "0x" + bare.lower()
    assert normalize_address(f"  {bare.upper()} ") == "0x" + bare.lower()


def test_normalize_leaves_partial_addresses_unprefixed():
    """Masked or partial strings without 0x are not prefixed."""
    assert normalize_address("11E******393F") == "11e******393f"
    assert normalize_address("abc123") == "abc123"
    assert normalize_address(ADDR_A[2:-1]) == ADDR_A[2:-1].lower()


def test_normalize_keeps_mask_characters():
    """Interior * and & are preserved in lenient mode."""
    assert normalize_address(MASKED_STARS) == "0x11e******393f"
    assert normalize_address(MASKED_SYMBOLS) == MASKED_SYMBOLS.lower()


def test_normalize_empty_values():
    """Empty and None inputs come back unchanged."""
    assert normalize_address("") == ""
    assert normalize_address(None) is None
    assert normalize_address("   ") == ""


@pytest.mark.parametrize("raw", SAMPLES)
def test_normalize_is_idempotent(raw):
    once = normalize_address(raw)
    assert normalize_address(once) == once


@pytest.mark.parametrize("raw", SAMPLES)
def test_strict_normalize_is_idempotent(raw):
    once = normalize_address(raw, STRICT)
    assert normalize_address(once, STRICT) == once


def test_strict_mode_drops_non_hex():
    """Strict mode strips mask characters and always prefixes."""
    assert normalize_address(MASKED_STARS, STRICT) == "0x11e393f"
    assert normalize_address("11E**393F", STRICT) == "0x11e393f"
    assert normalize_address(INVITE_FULL, STRICT) == INVITE_FULL.lower()
    assert normalize_address("zz", STRICT) == ""
    assert normalize_address("0x", STRICT) == "0x"


def test_mask_address():
    """Display form is first5 + fixed ****** + last4, case preserved."""
    assert mask_address(ADDR_A) == "0xAAA******5555"
    assert mask_address(f"  {INVITE_FULL} ") == "0x11E******393F"
    assert mask_address("0x11E**393F") == "0x11E******393F"


def test_mask_address_short_values():
    """Strings too short to fingerprint are returned trimmed, unmasked."""
    assert mask_address(" 0x1234 ") == "0x1234"
    assert mask_address("") == ""
    assert mask_address(None) == ""


def test_mask_address_custom_fill():
    rules = MatchingRules(mask_fill="...")
    assert mask_address(ADDR_A, rules) == "0xAAA...5555"


def test_is_masked_address():
    assert is_masked_address(MASKED_STARS) is True
    assert is_masked_address(MASKED_SYMBOLS) is True
    assert is_masked_address(ADDR_A) is False
    assert is_masked_address("") is False
    assert is_masked_address(None) is False
