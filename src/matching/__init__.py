"""Address normalization, fingerprinting, deduplication and reward matching."""
from .rules import DEFAULT_RULES, MatchingRules
from .normalizer import is_masked_address, mask_address, normalize_address
from .fingerprint import address_fingerprint, addresses_match, is_fingerprintable
from .dedupe import find_duplicates
from .matcher import UNMATCHED_AMOUNT, analyze

__all__ = [
    "DEFAULT_RULES",
    "MatchingRules",
    "normalize_address",
    "mask_address",
    "is_masked_address",
    "address_fingerprint",
    "addresses_match",
    "is_fingerprintable",
    "find_duplicates",
    "analyze",
    "UNMATCHED_AMOUNT",
]
