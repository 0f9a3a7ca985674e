"""Presentation services for analysis reports.

This module provides:
- Flat transaction rows exported as CSV or XLSX
- The sectioned data analysis summary CSV
- The copy-to-clipboard text summary

All services read a finished AnalysisReport and never re-run matching.
"""
from .clipboard import format_clipboard_summary, unique_referrer_count
from .exports import (
    EXPORT_FORMATS,
    ExportFormat,
    ExportRow,
    build_rows,
    export_report,
    rows_to_csv,
    rows_to_xlsx,
    summary_to_csv,
)

__all__ = [
    "EXPORT_FORMATS",
    "ExportFormat",
    "ExportRow",
    "build_rows",
    "export_report",
    "rows_to_csv",
    "rows_to_xlsx",
    "summary_to_csv",
    "format_clipboard_summary",
    "unique_referrer_count",
]
