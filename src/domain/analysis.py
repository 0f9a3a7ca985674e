"""Analysis domain service - runs one referral check end to end."""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from core.config import Settings, get_settings
from core.exceptions import InvalidInputError
from core.logging_config import get_context_logger, log_timed_operation
from core.types import AnalysisReport, RewardEntry
from ingestion.parser import parse_invite_text, parse_referrer_text
from matching.fingerprint import address_fingerprint
from matching.matcher import analyze
from matching.normalizer import is_masked_address, mask_address, normalize_address
from matching.rules import MatchingRules


@dataclass
class AddressInspection:
    """How the engine sees one address."""

    raw: str
    normalized: Optional[str]
    fingerprint: Optional[str]
    display: str
    is_masked: bool

    @property
    def is_valid(self) -> bool:
        return self.fingerprint is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "raw": self.raw,
            "normalized": self.normalized,
            "fingerprint": self.fingerprint,
            "display": self.display,
            "is_masked": self.is_masked,
            "is_valid": self.is_valid,
        }


class AnalysisService:
    """Service that parses the two text inputs and produces a report."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize the service; settings default to the cached environment settings."""
        self.settings = settings or get_settings()
        self.rules = MatchingRules.from_settings(self.settings)

    @property
    def tiers(self) -> List[int]:
        return list(self.settings.reward_tiers)

    def analyze_entries(
        self, entries: List[RewardEntry], referrers: List[str]
    ) -> AnalysisReport:
        """Analyze already parsed inputs with the configured rules."""
        return analyze(entries, referrers, rules=self.rules, tiers=self.tiers)

    def analyze_text(self, invite_text: str, referrer_text: str) -> AnalysisReport:
        """
        Parse both pasted texts and run the analysis.

        Args:
            invite_text: ``<address> <amount>`` lines.
            referrer_text: One referrer address per line.

        Returns:
            AnalysisReport for this invocation.

        Raises:
            InvalidInputError: If either input is not a string.
        """
        for name, value in (("invite_text", invite_text), ("referrer_text", referrer_text)):
            if not isinstance(value, str):
                raise InvalidInputError(f"{name} must be text, got {type(value).__name__}")

        logger = get_context_logger(__name__, analysis_id=uuid.uuid4().hex[:12])
        started = time.perf_counter()

        entries = parse_invite_text(invite_text)
        referrers = parse_referrer_text(referrer_text)
        report = self.analyze_entries(entries, referrers)

        log_timed_operation(
            logger,
            "analyze",
            (time.perf_counter() - started) * 1000,
            invite_entries=len(entries),
            referrers=report.total_referrers,
            matched=report.match_count,
            mismatched=report.mismatch_count,
            duplicate_groups=len(report.duplicate_groups),
            unfingerprintable=len(report.invalid_referrers),
        )
        return report

    def inspect_address(self, raw: str) -> AddressInspection:
        """Show normalization, fingerprint and display form for one address."""
        return AddressInspection(
            raw=raw,
            normalized=normalize_address(raw, self.rules),
            fingerprint=address_fingerprint(raw, self.rules),
            display=mask_address(raw, self.rules),
            is_masked=is_masked_address(raw),
        )


__all__ = ["AnalysisService", "AddressInspection"]
