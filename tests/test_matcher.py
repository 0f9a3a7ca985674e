"""Test reward matching and report derivation."""
from __future__ import annotations

from conftest import ADDR_A, ADDR_B, ADDR_C, INVITE_FULL, MASKED_SHORT, MASKED_STARS
from core.types import RewardEntry
from ingestion.parser import parse_invite_text
from matching.matcher import (
    UNMATCHED_AMOUNT,
    analyze,
    bucket_amounts,
    build_entry_index,
)


def _conserved(report) -> bool:
    matched = sum(hits for amount, hits in report.bucket_hits.items() if amount != UNMATCHED_AMOUNT)
    return report.mismatch_count + matched == report.total_referrers


class TestBuckets:
    """Bucket layout and placement."""

    def test_default_bucket_keys(self):
        report = analyze([], [])
        assert list(report.amount_buckets) == [0, 10, 15, 20, 30, 50]

    def test_unexpected_amount_gets_a_bucket(self):
        entries = [RewardEntry(ADDR_A, 25), RewardEntry(ADDR_B, 100)]
        assert bucket_amounts(entries) == [0, 10, 15, 20, 25, 30, 50, 100]

        report = analyze(entries, [ADDR_A])
        assert report.amount_buckets[25] == [ADDR_A]
        assert report.amount_buckets[100] == []

    def test_custom_tiers_always_include_zero(self):
        report = analyze([], [], tiers=[5])
        assert list(report.amount_buckets) == [0, 5]

    def test_masked_referrer_matches_full_invite(self):
        """A masked referrer lands in the tier of the full invite address."""
        entries = parse_invite_text(f"{INVITE_FULL} 10")
        report = analyze(entries, [MASKED_STARS])

        assert report.amount_buckets[10] == [MASKED_STARS]
        assert report.amount_buckets[0] == []
        assert report.match_count == 1
        assert report.mismatch_count == 0

    def test_first_matching_entry_wins(self):
        entries = [RewardEntry(INVITE_FULL, 10), RewardEntry(MASKED_SHORT, 30)]
        assert build_entry_index(entries) == {"0x11e393f": 10}

        report = analyze(entries, [MASKED_STARS])
        assert report.amount_buckets[10] == [MASKED_STARS]
        assert report.amount_buckets[30] == []

    def test_unmatched_referrer_goes_to_zero(self, invite_entries):
        report = analyze(invite_entries, [ADDR_C])

        assert report.amount_buckets[0] == [ADDR_C]
        assert report.match_count == 0
        assert report.mismatch_count == 1

    def test_short_referrer_is_mismatch(self):
        """Unfingerprintable referrers count toward totals but never match."""
        entries = [RewardEntry("0x1234", 10)]
        report = analyze(entries, ["0x1234", ADDR_A])

        assert report.total_referrers == 2
        assert report.amount_buckets[0] == ["0x1234", ADDR_A]
        assert report.amount_buckets[10] == []
        assert report.invalid_referrers == ["0x1234"]
        assert report.match_count == 0
        assert report.mismatch_count == 2

    def test_empty_invite_sends_everyone_to_zero(self):
        referrers = [ADDR_A, ADDR_B, MASKED_STARS]
        report = analyze([], referrers)

        assert report.amount_buckets[0] == referrers
        assert report.match_count == 0
        assert report.mismatch_count == report.total_referrers == 3

    def test_empty_inputs(self):
        report = analyze([], [])

        assert report.total_referrers == 0
        assert all(addresses == [] for addresses in report.amount_buckets.values())
        assert report.duplicate_groups == []
        assert report.match_count == 0
        assert report.mismatch_count == 0


class TestCounts:
    """Summary counts derived from the buckets."""

    def test_repeats_listed_once_but_counted_each_time(self):
        entries = [RewardEntry(INVITE_FULL, 10)]
        report = analyze(entries, [MASKED_STARS, MASKED_STARS])

        assert report.total_referrers == 2
        assert report.amount_buckets[10] == [MASKED_STARS]
        assert report.bucket_hits[10] == 2
        assert report.match_count == 2
        assert report.mismatch_count == 0
        assert _conserved(report)

    def test_case_variants_are_one_exact_group(self):
        referrers = [ADDR_A, ADDR_A.lower()]
        report = analyze([], referrers)

        assert report.total_referrers == 2
        assert len(report.duplicate_groups) == 1
        assert report.duplicate_groups[0].is_exact
        assert report.duplicate_groups[0].count == 2

    def test_count_conservation(self, invite_entries):
        referrers = [
            MASKED_STARS,
            MASKED_STARS,
            ADDR_A,
            ADDR_A.lower(),
            ADDR_B,
            ADDR_C,
            "0x12",
            "",
        ]
        report = analyze(invite_entries, referrers)

        assert report.total_referrers == len(referrers)
        assert report.match_count == 5
        assert report.mismatch_count == 3
        assert _conserved(report)

    def test_final_counts_exclude_duplicates(self, invite_entries):
        """Only distinct, non-duplicate addresses count toward a tier."""
        referrers = [
            "0x11Eaaa393F",
            "0x11Ebbb393F",  # pattern duplicate of the above, both tier 10
            ADDR_A,
            ADDR_A,  # exact duplicate, tier 20
            ADDR_B,  # tier 30
        ]
        report = analyze(invite_entries, referrers)

        assert report.amount_buckets[10] == ["0x11Eaaa393F", "0x11Ebbb393F"]
        assert report.final_address_counts[10] == 0
        assert report.final_address_counts[20] == 0
        assert report.final_address_counts[30] == 1
        assert report.final_address_counts[50] == 0
        assert UNMATCHED_AMOUNT not in report.final_address_counts
        assert report.non_duplicate_total == 1
        assert report.match_count == 5

    def test_duplicate_lookup_helpers(self, invite_entries):
        report = analyze(invite_entries, [ADDR_A, ADDR_A.lower(), ADDR_B])

        assert report.is_duplicate(ADDR_A) is True
        assert report.is_duplicate(ADDR_A.lower()) is True
        assert report.is_duplicate(ADDR_B) is False
        assert report.is_duplicate("never-seen") is False
        assert report.amount_for(ADDR_B) == 30
        assert report.amount_for("never-seen") is None
        assert report.duplicate_count == 2
        assert report.unique_pattern_count == 2

    def test_analysis_is_deterministic(self, invite_entries):
        referrers = [MASKED_STARS, ADDR_A, ADDR_C, ADDR_A, "0x12"]
        first = analyze(invite_entries, referrers)
        second = analyze(invite_entries, list(referrers))

        assert first.as_dict() == second.as_dict()

    def test_as_dict_is_json_friendly(self, invite_entries):
        data = analyze(invite_entries, [MASKED_STARS]).as_dict()

        assert data["amount_buckets"]["10"] == [MASKED_STARS]
        assert data["final_address_counts"]["10"] == 1
        assert data["total_referrers"] == 1
        assert "0" not in data["final_address_counts"]
