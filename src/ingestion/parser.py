"""Parsing of the pasted invite schedule and referrer list."""
from __future__ import annotations

import re
from typing import List, Optional

from core.logging_config import get_logger
from core.types import RewardEntry

LOGGER = get_logger(__name__)

DIGITS = re.compile(r"\d+")


def _content_lines(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_amount(raw_amount: Optional[str]) -> int:
    """
    Extract the reward amount from the text following an address.

    The first run of digits wins, so token suffixes such as ``10UXUY`` or
    ``10 UXUY`` parse to 10. Anything without digits parses to 0.
    """
    if not raw_amount:
        return 0
    match = DIGITS.search(raw_amount)
    return int(match.group(0)) if match else 0


def parse_invite_text(text: Optional[str]) -> List[RewardEntry]:
    """
    Parse ``<address> <amount>[TOKEN]`` lines into reward entries.

    Args:
        text: Invite schedule, one entry per line.

    Returns:
        Entries in input order. Blank lines are skipped and a missing or
        unreadable amount defaults to 0.
    """
    entries: List[RewardEntry] = []
    for line in _content_lines(text):
        parts = line.split(None, 1)
        remainder = parts[1] if len(parts) > 1 else ""
        entries.append(RewardEntry(address=parts[0], amount=parse_amount(remainder)))
    LOGGER.debug(f"Parsed {len(entries)} invite entries")
    return entries


def parse_referrer_text(text: Optional[str]) -> List[str]:
    """Return the non-blank, trimmed lines of the referrer list."""
    return _content_lines(text)


__all__ = ["parse_amount", "parse_invite_text", "parse_referrer_text"]
