"""Reporting for deduplication runs."""

from .report import DedupReport, build_report, write_report_json, load_report_json

__all__ = [
    "DedupReport",
    "build_report",
    "write_report_json",
    "load_report_json",
]
