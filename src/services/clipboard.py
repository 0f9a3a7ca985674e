"""Plain-text summary meant to be pasted into chat or a spreadsheet cell."""
from __future__ import annotations

from typing import List, Optional

from core.types import AnalysisReport
from matching.normalizer import mask_address
from matching.rules import DEFAULT_RULES, MatchingRules

DUPLICATE_MARK = "⛔"
OK_MARK = "✓"


def unique_referrer_count(report: AnalysisReport) -> int:
    """Referrers left after collapsing every duplicate group to one address."""
    return report.total_referrers - sum(group.count - 1 for group in report.duplicate_groups)


def format_clipboard_summary(
    report: AnalysisReport,
    token: str = "UXUY",
    selected_amount: Optional[int] = None,
    rules: MatchingRules = DEFAULT_RULES,
) -> str:
    """
    Build the copy-to-clipboard text for a report.

    Args:
        report: Analysis output.
        token: Reward token label.
        selected_amount: When set, the amounts section only lists that bucket.
        rules: Rules used to mask addresses for display.

    Returns:
        Multi-line text with Summary, Duplicate Addresses, Amounts and
        Final Unique Addresses sections.
    """
    lines: List[str] = [
        "=== Summary ===",
        f"Total Referrers: {report.total_referrers} ({unique_referrer_count(report)} unique)",
        f"Matched: {report.match_count}",
        f"Mismatch: {report.mismatch_count}",
        "",
    ]

    if report.duplicate_groups:
        lines.append("=== Duplicate Addresses ===")
        for number, group in enumerate(report.duplicate_groups, start=1):
            lines.append("")
            lines.append(f"Duplicate Group #{number}:")
            if group.is_exact:
                lines.append(
                    f"{mask_address(group.members[0], rules)} {DUPLICATE_MARK} "
                    f"({group.count}x exact duplicates)"
                )
                continue
            lines.append(f"Pattern match (first {rules.prefix_length} + last {rules.suffix_length}): {group.pattern}")
            for address in group.members:
                lines.append(f"{mask_address(address, rules)} {DUPLICATE_MARK} (pattern match)")
        lines.append("")

    lines.append(f"=== {token} Amounts ===")
    for amount, addresses in report.amount_buckets.items():
        if selected_amount is not None and amount != selected_amount:
            continue
        for address in addresses:
            mark = DUPLICATE_MARK if report.is_duplicate(address) else OK_MARK
            lines.append(f"{mask_address(address, rules)} {mark} ({amount} {token})")

    lines.append("")
    lines.append("=== Final Unique Addresses ===")
    seen = set()
    for amount, addresses in report.amount_buckets.items():
        if amount <= 0:
            continue
        for address in addresses:
            if address in seen or report.is_duplicate(address):
                continue
            seen.add(address)
            lines.append(f"{mask_address(address, rules)} {OK_MARK}")

    return "\n".join(lines) + "\n"


__all__ = ["format_clipboard_summary", "unique_referrer_count"]
