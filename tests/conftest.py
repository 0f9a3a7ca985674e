"""Pytest configuration and fixtures."""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import List

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

# Set test environment
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from core.types import RewardEntry


# Full addresses with pairwise distinct fingerprints
ADDR_A = "0xAAAA1111BBBB2222CCCC3333DDDD4444EEEE5555"
ADDR_B = "0xBBBB2222CCCC3333DDDD4444EEEE5555FFFF6666"
ADDR_C = "0xCCCC3333DDDD4444EEEE5555FFFF666600007777"

# Invite address and masked forms that share its fingerprint (0x11e393f)
INVITE_FULL = "0x11E00000000000000000000000000000000393F"
MASKED_SHORT = "0x11E**393F"
MASKED_STARS = "0x11E******393F"
MASKED_LONG = "0x11E******************393F"
MASKED_SYMBOLS = "0x11EbhdhG&TfvgbFVVtfBF393F"


@pytest.fixture
def invite_entries() -> List[RewardEntry]:
    """A small invite schedule covering three tiers."""
    return [
        RewardEntry(address=INVITE_FULL, amount=10),
        RewardEntry(address=ADDR_A, amount=20),
        RewardEntry(address=ADDR_B, amount=30),
    ]


@pytest.fixture
def invite_text() -> str:
    return "\n".join(
        [
            f"{INVITE_FULL} 10UXUY",
            f"{ADDR_A}\t20 UXUY",
            "",
            f"{ADDR_B} 30",
        ]
    )
