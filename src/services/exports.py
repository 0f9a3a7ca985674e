"""
Report exports - flat transaction rows (CSV/XLSX) and the summary CSV.

Everything here reads an AnalysisReport; no matching logic is
re-derived, duplicate and bucket membership come from the report.
"""
from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Any, Dict, List, Union

import pandas as pd

from core.exceptions import ExportError
from core.logging_config import get_logger
from core.types import AnalysisReport
from matching.matcher import UNMATCHED_AMOUNT
from matching.normalizer import is_masked_address

LOGGER = get_logger(__name__)

ROW_COLUMNS = ["Address", "Value", "Token", "Status", "Duplicate", "Masked"]
XLSX_COLUMN_WIDTHS = {"A": 45, "B": 10, "C": 10, "D": 15, "E": 12, "F": 10}
XLSX_SHEET_NAME = "Transactions"

STATUS_SUCCESS = "SUCCESS"
STATUS_FAILURE = "FAILURE"


@dataclass
class ExportFormat:
    """Wire details for one export format."""

    name: str
    media_type: str
    filename: str


EXPORT_FORMATS: Dict[str, ExportFormat] = {
    "csv": ExportFormat("csv", "text/csv", "referral_transactions.csv"),
    "xlsx": ExportFormat(
        "xlsx",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "referral_transactions.xlsx",
    ),
    "summary-csv": ExportFormat("summary-csv", "text/csv", "data_analysis_report.csv"),
}


@dataclass
class ExportRow:
    """One placed referrer address, flattened for spreadsheets."""

    address: str
    value: int
    token: str
    status: str
    is_duplicate: bool
    is_masked: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Address": self.address,
            "Value": self.value,
            "Token": self.token,
            "Status": self.status,
            "Duplicate": "yes" if self.is_duplicate else "no",
            "Masked": "yes" if self.is_masked else "no",
        }


def build_rows(report: AnalysisReport, token: str = "UXUY") -> List[ExportRow]:
    """
    Flatten the amount buckets into table rows.

    A row fails when its address is a duplicate or it earned nothing.
    """
    rows: List[ExportRow] = []
    for amount, addresses in report.amount_buckets.items():
        for address in addresses:
            duplicate = report.is_duplicate(address)
            failed = duplicate or amount == UNMATCHED_AMOUNT
            rows.append(
                ExportRow(
                    address=address,
                    value=amount,
                    token=token,
                    status=STATUS_FAILURE if failed else STATUS_SUCCESS,
                    is_duplicate=duplicate,
                    is_masked=is_masked_address(address),
                )
            )
    return rows


def rows_to_csv(rows: List[ExportRow]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=ROW_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row.to_dict())
    return buffer.getvalue()


def rows_to_xlsx(rows: List[ExportRow]) -> bytes:
    """Render rows as a single-sheet workbook with fixed column widths."""
    frame = pd.DataFrame([row.to_dict() for row in rows], columns=ROW_COLUMNS)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        frame.to_excel(writer, sheet_name=XLSX_SHEET_NAME, index=False)
        worksheet = writer.sheets[XLSX_SHEET_NAME]
        for column, width in XLSX_COLUMN_WIDTHS.items():
            worksheet.column_dimensions[column].width = width
    return buffer.getvalue()


def summary_to_csv(report: AnalysisReport, token: str = "UXUY") -> str:
    """
    Render the sectioned data analysis report.

    Sections: Summary, Duplicate Addresses, one address list per bucket,
    and Final Address Count.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(["Summary"])
    writer.writerow(["Total Records", report.total_referrers])
    writer.writerow(["Unique Patterns", report.unique_pattern_count])
    writer.writerow(["Match Count (including duplicates)", report.match_count])
    writer.writerow(["Mismatch Count", report.mismatch_count])
    writer.writerow(["Duplicate Count", report.duplicate_count])
    writer.writerow([])

    writer.writerow(["Duplicate Addresses"])
    writer.writerow(["Pattern", "Count", "Type"])
    for group in report.duplicate_groups:
        writer.writerow([group.pattern, group.count, "exact" if group.is_exact else "pattern"])

    for amount, addresses in report.amount_buckets.items():
        writer.writerow([])
        writer.writerow([f"{amount} {token} Addresses"])
        writer.writerow(["Address"])
        for address in addresses:
            writer.writerow([address])

    writer.writerow([])
    writer.writerow(["Final Address Count"])
    writer.writerow(["Total", report.non_duplicate_total])
    for amount, count in report.final_address_counts.items():
        writer.writerow([f"{amount} {token}", count])

    return buffer.getvalue()


def export_report(report: AnalysisReport, fmt: str, token: str = "UXUY") -> Union[str, bytes]:
    """
    Render a report in one of the EXPORT_FORMATS.

    Raises:
        ExportError: If the format is unknown.
    """
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise ExportError(f"Unknown export format '{fmt}'. Choose one of: {', '.join(EXPORT_FORMATS)}")

    if fmt == "summary-csv":
        return summary_to_csv(report, token)

    rows = build_rows(report, token)
    LOGGER.debug(f"Exporting {len(rows)} rows as {fmt}")
    if fmt == "xlsx":
        return rows_to_xlsx(rows)
    return rows_to_csv(rows)


__all__ = [
    "EXPORT_FORMATS",
    "ExportFormat",
    "ExportRow",
    "build_rows",
    "rows_to_csv",
    "rows_to_xlsx",
    "summary_to_csv",
    "export_report",
]
